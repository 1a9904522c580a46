"""Catalog Items — derived view, full fetch, create, and view parameters.

Invariants:
    - GET never triggers a remote call: it reads the last derived view
    - Every view-param change recomputes the view before responding
    - Create responds 201 only on success; validation -> 400, busy -> 409

Design Decisions:
    - View params are session state on the orchestrator, not query params:
      the view persists between requests like a UI filter bar
"""

from fastapi import APIRouter, Depends, status

from stockroom.api.dependencies import get_orchestrator, settle
from stockroom.schemas.catalog import (
    ItemPayload, ItemResponse, ViewUpdate, ViewResponse, InFlightResponse,
    OperationResponse,
)
from stockroom.services.catalog_orchestrator import CatalogOrchestrator

router = APIRouter(prefix="/api/v1/items", tags=["items"])


def build_view(orchestrator: CatalogOrchestrator) -> ViewResponse:
    params = orchestrator.view_params
    in_flight = orchestrator.in_flight
    return ViewResponse(
        items=[ItemResponse.from_item(item) for item in orchestrator.visible],
        visible_count=len(orchestrator.visible),
        mirror_size=len(orchestrator.mirror),
        search_term=params.search_term,
        sort_by=params.sort_by,
        sort_order=params.sort_order,
        loading=orchestrator.loading,
        submitting=orchestrator.submitting,
        in_flight=(
            InFlightResponse(kind=in_flight.kind.value, target_id=in_flight.target_id)
            if in_flight else None
        ),
        empty_state=orchestrator.empty_state,
    )


@router.get("", response_model=ViewResponse)
async def get_view(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    """Current filtered + sorted view of the mirror."""
    return build_view(orchestrator)


@router.post("/refresh", response_model=OperationResponse)
async def refresh_items(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    """Full fetch from the remote collection; replaces the mirror on success."""
    return settle(await orchestrator.fetch_items())


@router.post(
    "", response_model=OperationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    body: ItemPayload,
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    """Validate and create an item; appended with the remote-assigned id."""
    return settle(await orchestrator.create_item(body.to_draft()))


@router.put("/view", response_model=ViewResponse)
async def update_view(
    body: ViewUpdate,
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    """Change search term / sort key / sort order (any subset)."""
    orchestrator.set_view_params(
        search_term=body.search_term,
        sort_by=body.sort_by,
        sort_order=body.sort_order,
    )
    return build_view(orchestrator)


@router.post("/view/toggle-order", response_model=ViewResponse)
async def toggle_order(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    orchestrator.toggle_sort_order()
    return build_view(orchestrator)


@router.delete("/view/search", response_model=ViewResponse)
async def clear_search(
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    orchestrator.clear_search()
    return build_view(orchestrator)
