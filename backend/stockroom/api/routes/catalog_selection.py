"""Catalog Selection — edit target and delete confirmation workflow.

Invariants:
    - Opening an edit or a delete targets an item currently in the mirror (404 otherwise)
    - Edit and delete slots are independent: touching one never clears the other
    - Submit/confirm settle via the orchestrator; errors via the global handler

Design Decisions:
    - Two-step delete (request, then confirm) keeps the pending-delete slot
      observable between requests, same as the confirmation dialog it models
"""

from fastapi import APIRouter, Depends

from stockroom.api.dependencies import get_orchestrator, settle
from stockroom.schemas.catalog import (
    EditTargetResponse, ItemRevision, ItemSelect, OperationResponse,
    SelectionResponse,
)
from stockroom.services.catalog_orchestrator import CatalogOrchestrator

router = APIRouter(prefix="/api/v1/selection", tags=["selection"])


def build_selection(orchestrator: CatalogOrchestrator) -> SelectionResponse:
    selection = orchestrator.selection
    target = selection.editing_target
    return SelectionResponse(
        editing_target=EditTargetResponse.from_target(target) if target else None,
        pending_delete_id=selection.pending_delete_id,
    )


@router.get("", response_model=SelectionResponse)
async def get_selection(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    return build_selection(orchestrator)


# ─── Edit ────────────────────────────────────────────────────────

@router.post("/edit", response_model=SelectionResponse)
async def open_edit(
    body: ItemSelect,
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    """Open the edit slot on a mirror item (id resolved now, not at submit)."""
    orchestrator.begin_edit(orchestrator.find_item(body.item_id))
    return build_selection(orchestrator)


@router.patch("/edit", response_model=SelectionResponse)
async def revise_edit(
    body: ItemRevision,
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    orchestrator.revise_edit(**body.changed_fields())
    return build_selection(orchestrator)


@router.post("/edit/submit", response_model=OperationResponse)
async def submit_edit(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    """Send the edit; the slot clears only on success."""
    return settle(await orchestrator.submit_edit())


@router.delete("/edit", response_model=SelectionResponse)
async def cancel_edit(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    orchestrator.cancel_edit()
    return build_selection(orchestrator)


# ─── Delete ──────────────────────────────────────────────────────

@router.post("/delete", response_model=SelectionResponse)
async def request_delete(
    body: ItemSelect,
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    orchestrator.request_delete(orchestrator.find_item(body.item_id))
    return build_selection(orchestrator)


@router.post("/delete/confirm", response_model=OperationResponse)
async def confirm_delete(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    """Delete the pending target; the slot clears whatever the outcome."""
    return settle(await orchestrator.confirm_delete())


@router.delete("/delete", response_model=SelectionResponse)
async def cancel_delete(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    orchestrator.cancel_delete()
    return build_selection(orchestrator)
