"""Notification Log — bounded in-memory Notifier for one-shot user messages.

Invariants:
    - Notifications carry no state: they are informational only
    - drain() returns pending notifications oldest-first and empties the log
    - Capacity is bounded; oldest entries are dropped first

Design Decisions:
    - deque(maxlen) over a list: bounded without manual trimming
    - Every notification is also logged, so nothing is lost if never drained
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockroom.core.domain_types import NotificationKind, OperationKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    message: str
    operation: OperationKind
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class NotificationLog:
    """Notifier implementation backed by a bounded deque."""

    def __init__(self, max_size: int = 50):
        self._pending: deque[Notification] = deque(maxlen=max_size)

    def notify(
        self, kind: NotificationKind, message: str, operation: OperationKind,
    ) -> None:
        self._pending.append(Notification(kind, message, operation))
        level = logging.WARNING if kind == NotificationKind.ERROR else logging.INFO
        logger.log(
            level, f"Notification ({kind.value}): {message}",
            extra={"operation": operation.value},
        )

    @property
    def pending(self) -> tuple[Notification, ...]:
        return tuple(self._pending)

    def drain(self) -> list[Notification]:
        drained = list(self._pending)
        self._pending.clear()
        return drained
