"""Operation Result — the settled outcome of one orchestrator operation.

Invariants:
    - Exactly one status per result; error is set iff status is
      validation_failed, failed, or busy
    - remote_called is False for validation_failed and busy

Design Decisions:
    - Value object instead of exceptions: none of the taxonomy outcomes is
      fatal, and callers (API, tests) branch on status uniformly
"""

from dataclasses import dataclass

from stockroom.core.catalog_item import Item
from stockroom.core.domain_types import ItemId, OperationKind, OperationStatus
from stockroom.core.errors import CatalogError, OperationInProgressError


@dataclass(frozen=True)
class OperationResult:
    kind: OperationKind
    status: OperationStatus
    message: str
    item_id: ItemId | None = None
    item: Item | None = None
    error: CatalogError | None = None
    remote_called: bool = True

    @property
    def ok(self) -> bool:
        return self.status == OperationStatus.SUCCEEDED

    @classmethod
    def succeeded(
        cls, kind: OperationKind, message: str,
        item_id: ItemId | None = None, item: Item | None = None,
    ) -> "OperationResult":
        return cls(kind, OperationStatus.SUCCEEDED, message, item_id, item)

    @classmethod
    def no_op(
        cls, kind: OperationKind, message: str, item_id: ItemId | None = None,
    ) -> "OperationResult":
        return cls(kind, OperationStatus.NO_OP, message, item_id)

    @classmethod
    def rejected(
        cls, kind: OperationKind, error: CatalogError, item_id: ItemId | None = None,
    ) -> "OperationResult":
        """Blocked before any remote call (validation or busy slot)."""
        status = (
            OperationStatus.BUSY
            if isinstance(error, OperationInProgressError)
            else OperationStatus.VALIDATION_FAILED
        )
        return cls(
            kind, status, error.context.user_message or error.message,
            item_id, error=error, remote_called=False,
        )

    @classmethod
    def failed(
        cls, kind: OperationKind, message: str, error: CatalogError,
        item_id: ItemId | None = None,
    ) -> "OperationResult":
        return cls(kind, OperationStatus.FAILED, message, item_id, error=error)
