"""API Dependencies — per-app singletons and result settlement shared by routes.

Invariants:
    - One CatalogOrchestrator per app (single-client, single-session model)
    - settle() raises the attached CatalogError for every non-success outcome
      except no_op, so the global handler owns all error responses

Design Decisions:
    - app.state over module globals: tests swap instances via dependency_overrides
"""

from fastapi import Request

from stockroom.core.domain_types import OperationStatus
from stockroom.core.operation_result import OperationResult
from stockroom.schemas.catalog import OperationResponse
from stockroom.services.catalog_orchestrator import CatalogOrchestrator
from stockroom.services.notification_log import NotificationLog


def get_orchestrator(request: Request) -> CatalogOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise RuntimeError("Catalog orchestrator not initialized")
    return orchestrator


def get_notification_log(request: Request) -> NotificationLog:
    notifications = getattr(request.app.state, "notifications", None)
    if notifications is None:
        raise RuntimeError("Notification log not initialized")
    return notifications


def settle(result: OperationResult) -> OperationResponse:
    """Turn a settled result into a response body, or raise its error."""
    if result.status in (OperationStatus.SUCCEEDED, OperationStatus.NO_OP):
        return OperationResponse.from_result(result)
    if result.error is None:
        raise RuntimeError(f"{result.kind.value} settled as {result.status.value} without error")
    raise result.error
