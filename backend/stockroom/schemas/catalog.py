"""Catalog Schemas — Pydantic models for the catalog API boundary.

Invariants:
    - Request models only shape input; item-field rules (non-empty, price > 0)
      are enforced by core/enforce_item.py so API and core reject identically
    - Response models are built from core values via from_* classmethods
    - Raw `_id` never appears in responses — only the canonical `id`

Design Decisions:
    - Loose request types (price: float, name: str with no min_length): a
      blank name reaches the orchestrator and fails as a validation outcome
      with the same message the notification log records
    - Literal status strings mirror OperationStatus values
"""

from datetime import datetime

from pydantic import BaseModel, Field

from stockroom.core.catalog_item import Item, ItemDraft
from stockroom.core.domain_types import SortKey, SortOrder, EmptyState
from stockroom.core.operation_result import OperationResult
from stockroom.core.selection_state import EditTarget
from stockroom.services.notification_log import Notification


class ItemPayload(BaseModel):
    """Create body — the editable fields of an item."""
    name: str = ""
    description: str = ""
    price: float = 0.0

    def to_draft(self) -> ItemDraft:
        return ItemDraft(
            name=self.name, description=self.description, price=self.price,
        )


class ItemRevision(BaseModel):
    """Partial edit — only the fields provided are changed on the draft."""
    name: str | None = None
    description: str | None = None
    price: float | None = None

    def changed_fields(self) -> dict:
        return self.model_dump(exclude_none=True)


class ViewUpdate(BaseModel):
    search_term: str | None = Field(None, max_length=200)
    sort_by: SortKey | None = None
    sort_order: SortOrder | None = None


class ItemSelect(BaseModel):
    """Target an item already in the mirror by canonical id."""
    item_id: str = Field(min_length=1)


class ItemResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(
            id=item.id, name=item.name,
            description=item.description, price=item.price,
        )


class InFlightResponse(BaseModel):
    kind: str
    target_id: str | None = None


class ViewResponse(BaseModel):
    """Derived view plus the state a presentation layer needs around it."""
    items: list[ItemResponse]
    visible_count: int
    mirror_size: int
    search_term: str
    sort_by: SortKey
    sort_order: SortOrder
    loading: bool
    submitting: bool
    in_flight: InFlightResponse | None = None
    empty_state: EmptyState | None = None


class EditTargetResponse(BaseModel):
    item_id: str | None
    name: str
    description: str
    price: float

    @classmethod
    def from_target(cls, target: EditTarget) -> "EditTargetResponse":
        return cls(
            item_id=target.item_id,
            name=target.draft.name,
            description=target.draft.description,
            price=target.draft.price,
        )


class SelectionResponse(BaseModel):
    editing_target: EditTargetResponse | None = None
    pending_delete_id: str | None = None


class OperationResponse(BaseModel):
    """Settled outcome for succeeded / no_op results (errors use the error envelope)."""
    operation: str
    status: str
    message: str
    item_id: str | None = None
    item: ItemResponse | None = None

    @classmethod
    def from_result(cls, result: OperationResult) -> "OperationResponse":
        return cls(
            operation=result.kind.value,
            status=result.status.value,
            message=result.message,
            item_id=result.item_id,
            item=ItemResponse.from_item(result.item) if result.item else None,
        )


class NotificationResponse(BaseModel):
    kind: str
    message: str
    operation: str
    created_at: datetime

    @classmethod
    def from_notification(cls, n: Notification) -> "NotificationResponse":
        return cls(
            kind=n.kind.value, message=n.message,
            operation=n.operation.value, created_at=n.created_at,
        )
