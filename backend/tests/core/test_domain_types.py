"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and serialize to string
    - SortOrder toggles between its two members
"""

import json

from stockroom.core.domain_types import (
    ItemId, CollectionName, APP_ID_FIELD, NATIVE_ID_FIELD, DEFAULT_COLLECTION,
    SortKey, SortOrder, OperationKind, OperationStatus, NotificationKind,
    EmptyState,
)


def test_identity_types_wrap_str():
    assert ItemId("abc") == "abc"
    assert CollectionName("items") == DEFAULT_COLLECTION


def test_identifier_field_names():
    assert APP_ID_FIELD == "id"
    assert NATIVE_ID_FIELD == "_id"


def test_sort_order_toggles():
    assert SortOrder.ASC.toggled() == SortOrder.DESC
    assert SortOrder.DESC.toggled() == SortOrder.ASC


def test_sort_key_has_name_and_price():
    assert set(SortKey) == {SortKey.NAME, SortKey.PRICE}


def test_operation_kinds_cover_the_four_remote_commands():
    assert {k.value for k in OperationKind} == {"fetch", "create", "update", "delete"}


def test_operation_status_has_five_outcomes():
    assert {s.value for s in OperationStatus} == {
        "succeeded", "no_op", "validation_failed", "failed", "busy",
    }


def test_enums_serialize_to_json_strings():
    payload = {
        "kind": NotificationKind.NO_OP,
        "empty": EmptyState.NO_MATCH,
        "order": SortOrder.DESC,
    }
    assert json.loads(json.dumps(payload)) == {
        "kind": "no_op", "empty": "no_match", "order": "desc",
    }
