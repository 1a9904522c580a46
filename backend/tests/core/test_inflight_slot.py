"""In-Flight Slot — tests for single-slot mutual exclusion.

Tests cover:
    - acquire on an occupied slot raises (never queues), whatever the kind
    - hold() releases on normal exit and on exception
    - Only the holding token can release
"""

import pytest

from stockroom.core.domain_types import OperationKind
from stockroom.core.errors import OperationInProgressError
from stockroom.core.inflight_slot import InFlightSlot, InFlightOperation


def test_new_slot_is_free():
    slot = InFlightSlot()
    assert not slot.busy
    assert slot.current is None


def test_acquire_occupies_slot_with_tagged_token():
    slot = InFlightSlot()
    token = slot.acquire(OperationKind.UPDATE, "i1")
    assert slot.busy
    assert slot.current == InFlightOperation(OperationKind.UPDATE, "i1")
    assert token.describe() == "update of 'i1'"


def test_second_acquire_of_other_kind_is_rejected():
    slot = InFlightSlot()
    slot.acquire(OperationKind.CREATE)
    with pytest.raises(OperationInProgressError) as exc_info:
        slot.acquire(OperationKind.DELETE, "i1")
    assert exc_info.value.in_flight == "create"
    assert exc_info.value.http_status == 409


def test_hold_releases_on_exit():
    slot = InFlightSlot()
    with slot.hold(OperationKind.DELETE, "i1"):
        assert slot.busy
    assert not slot.busy


def test_hold_releases_on_exception():
    slot = InFlightSlot()
    with pytest.raises(RuntimeError):
        with slot.hold(OperationKind.CREATE):
            raise RuntimeError("remote exploded")
    assert not slot.busy


def test_stale_token_cannot_release_current_holder():
    slot = InFlightSlot()
    first = slot.acquire(OperationKind.CREATE)
    slot.release(first)
    second = slot.acquire(OperationKind.UPDATE, "i1")
    slot.release(first)
    assert slot.current is second
