"""In-Flight Slot — single-slot mutual exclusion token for remote operations.

Invariants:
    - At most one InFlightOperation held at a time, across ALL operation kinds
    - acquire() on an occupied slot raises OperationInProgressError (never queues)
    - hold() always releases, whatever way the body exits
    - No timeout: a hung remote call keeps the slot until it resolves

Design Decisions:
    - Token tagged with kind + target id instead of a bare `submitting` bool:
      the exclusion scope is explicit and assertable in tests
    - Advisory, not a lock: single-threaded asyncio means check-and-set is atomic
      between awaits, so no asyncio.Lock is needed
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from stockroom.core.domain_types import ItemId, OperationKind
from stockroom.core.errors import OperationInProgressError


@dataclass(frozen=True)
class InFlightOperation:
    kind: OperationKind
    target_id: ItemId | None = None

    def describe(self) -> str:
        if self.target_id:
            return f"{self.kind.value} of '{self.target_id}'"
        return self.kind.value


class InFlightSlot:
    """Holds the single outstanding mutating operation, if any."""

    def __init__(self) -> None:
        self._current: InFlightOperation | None = None

    @property
    def current(self) -> InFlightOperation | None:
        return self._current

    @property
    def busy(self) -> bool:
        return self._current is not None

    def acquire(
        self, kind: OperationKind, target_id: ItemId | None = None,
    ) -> InFlightOperation:
        requested = InFlightOperation(kind, target_id)
        if self._current is not None:
            raise OperationInProgressError(
                requested.describe(), self._current.describe(),
            )
        self._current = requested
        return requested

    def release(self, token: InFlightOperation) -> None:
        # Only the holder may release
        if self._current is token:
            self._current = None

    @contextmanager
    def hold(
        self, kind: OperationKind, target_id: ItemId | None = None,
    ) -> Iterator[InFlightOperation]:
        token = self.acquire(kind, target_id)
        try:
            yield token
        finally:
            self.release(token)
