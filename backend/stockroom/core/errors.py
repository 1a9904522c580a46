"""Error Hierarchy — typed, categorized exceptions for all Stockroom failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) never reach the remote store
    - Remote/infrastructure errors (500-level) leave the mirror untouched
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with CatalogError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Logical no-ops are NOT errors: they are an OperationStatus, never raised
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    DATA_INTEGRITY = "data_integrity"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    EXTERNAL_API = "external_api"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    item_id: str | None = None
    operation: str | None = None
    collection: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class CatalogError(Exception):
    """Base exception for all Stockroom errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "item_id": self.context.item_id,
                    "operation": self.context.operation,
                    "collection": self.context.collection,
                },
            }
        }


# ─── Validation Errors (400-level) ──────────────────────────────

class ItemValidationError(CatalogError):
    """Item fields failed pre-flight validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [
            {"field": self.field, "message": self.message},
        ]
        return response


class IdentifierUnresolvedError(CatalogError):
    """Target item carries neither identifier field."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Cannot {operation}: item has no ID",
            "IDENTIFIER_UNRESOLVED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )


class ItemNotFoundError(CatalogError):
    """No item with this canonical identifier in the mirror."""
    def __init__(self, item_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_id = item_id
        super().__init__(
            f"Item '{item_id}' not found",
            "ITEM_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class DuplicateItemError(CatalogError):
    """Canonical identifier already present in the mirror."""
    def __init__(self, item_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_id = item_id
        super().__init__(
            f"Item '{item_id}' already exists",
            "DUPLICATE_ITEM", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class OperationInProgressError(CatalogError):
    """The single in-flight slot is occupied by another operation."""
    def __init__(
        self, requested: str, in_flight: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = requested
        super().__init__(
            f"Cannot start {requested}: {in_flight} is still in progress",
            "OPERATION_IN_PROGRESS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.in_flight = in_flight


# ─── Data Integrity / Remote Errors (500-level) ─────────────────

class MalformedRecordError(CatalogError):
    """A fetched record cannot be normalized into an Item."""
    def __init__(
        self, message: str, index: int | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "MALFORMED_RECORD", ErrorCategory.DATA_INTEGRITY,
            ErrorSeverity.ERROR, context, 502,
        )
        self.index = index


class RemoteCommandError(CatalogError):
    """Remote command bridge rejected or failed a call."""
    def __init__(
        self,
        message: str,
        command: str,
        code: str = "REMOTE_COMMAND_FAILED",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Remote {command} failed: {message}",
            code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.command = command


class InvalidIdentifierError(RemoteCommandError):
    """Remote store cannot parse the identifier it was given."""
    def __init__(self, item_id: str, command: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_id = item_id
        super().__init__(
            f"invalid identifier '{item_id}'", command,
            "INVALID_IDENTIFIER", ctx,
        )


class DatabaseError(CatalogError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
