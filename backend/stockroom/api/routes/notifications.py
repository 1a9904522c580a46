"""Notifications — drain one-shot success/no-op/error messages.

Invariants:
    - GET drains: each notification is delivered at most once, oldest first
"""

from fastapi import APIRouter, Depends

from stockroom.api.dependencies import get_notification_log
from stockroom.schemas.catalog import NotificationResponse
from stockroom.services.notification_log import NotificationLog

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def drain_notifications(
    notifications: NotificationLog = Depends(get_notification_log),
):
    return [
        NotificationResponse.from_notification(n) for n in notifications.drain()
    ]
