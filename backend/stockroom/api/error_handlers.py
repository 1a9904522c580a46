"""Error Handlers — map catalog errors and request errors to the JSON error envelope.

Invariants:
    - CatalogError → its own http_status and to_response() body; the message is
      the user-facing one (e.g. "Failed to add item to database") when set
    - RequestValidationError → 400 VALIDATION_ERROR with field-level details,
      the same code item-field validation uses
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Outcome errors (validation, not found, busy) are expected traffic: logged
      at WARNING; remote/database failures (>= 500) at ERROR
    - The error's ErrorContext (operation, item_id, collection) is copied into
      the log record, so a failed request and the orchestrator's own log line
      for the same operation carry the same fields
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from stockroom.core.errors import CatalogError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level, f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "operation": exc.context.operation,
            "item_id": exc.context.item_id,
            "collection": exc.context.collection,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            # drop the leading "body"/"query" segment: clients know where they sent it
            "field": ".".join(str(loc) for loc in e["loc"][1:]) or str(e["loc"][0]),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request body on {request.url.path}: {details}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.WARNING.value,
                "details": details,
            },
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        extra={"path": request.url.path},
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
