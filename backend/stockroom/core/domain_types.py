"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ItemId is the canonical identifier — never carry raw `_id`/`id` fields past ingestion
    - All valid states encoded as Enums — no raw string matching
    - APP_ID_FIELD wins over NATIVE_ID_FIELD when both are present

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (ADR: REST responses are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ItemId = NewType("ItemId", str)
CollectionName = NewType("CollectionName", str)

# Field names a raw remote record may carry its identifier under
NATIVE_ID_FIELD = "_id"   # assigned by the remote store
APP_ID_FIELD = "id"       # assigned by this application

DEFAULT_COLLECTION = CollectionName("items")


# ─── Enums ───────────────────────────────────────────────────────

class SortKey(str, Enum):
    """Display sort key for the derived view."""
    NAME = "name"
    PRICE = "price"


class SortOrder(str, Enum):
    """Display sort direction — applied to the comparator, not the sequence."""
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class OperationKind(str, Enum):
    """Remote operation kinds issued by the orchestrator."""
    FETCH = "fetch"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class OperationStatus(str, Enum):
    """How a settled operation ended — maps 1:1 to the error taxonomy."""
    SUCCEEDED = "succeeded"
    NO_OP = "no_op"                       # remote matched nothing
    VALIDATION_FAILED = "validation_failed"  # blocked before any remote call
    FAILED = "failed"                     # remote raised / rejected
    BUSY = "busy"                         # another operation holds the slot


class NotificationKind(str, Enum):
    """One-shot user notification flavours."""
    SUCCESS = "success"
    NO_OP = "no_op"
    ERROR = "error"


class EmptyState(str, Enum):
    """Why the derived view is empty, when it is."""
    EMPTY_INVENTORY = "empty_inventory"
    NO_MATCH = "no_match"
