"""Identifier Normalizer — reconciles the remote-native and application id fields.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Canonical id = application id if present, else remote-native id, else None
    - Empty strings count as absent; {"$oid": hex} is unwrapped to hex
    - normalize_record(normalize_record(r)) == normalize_record(r)
    - A record with no identifier NEVER becomes an Item (MalformedRecordError)

Design Decisions:
    - Resolve once at ingestion (ADR: never carry both id fields past this module)
    - resolve_identifier returns None instead of raising: selection/edit paths
      need "unresolved" as a value; only normalize_record treats it as an error
"""

from collections.abc import Iterable, Mapping
from typing import Any

from stockroom.core.catalog_item import Item
from stockroom.core.domain_types import ItemId, APP_ID_FIELD, NATIVE_ID_FIELD
from stockroom.core.errors import MalformedRecordError


def _coerce_identifier(value: Any) -> ItemId | None:
    """Turn one raw id field value into an ItemId, or None if absent/empty."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        # Extended JSON form of a remote-native ObjectId
        return _coerce_identifier(value.get("$oid"))
    text = str(value).strip()
    return ItemId(text) if text else None


def resolve_identifier(record: Mapping[str, Any] | Item) -> ItemId | None:
    """Canonical id for a raw record or Item. Application id wins over native id."""
    if isinstance(record, Item):
        return record.id
    return (
        _coerce_identifier(record.get(APP_ID_FIELD))
        or _coerce_identifier(record.get(NATIVE_ID_FIELD))
    )


def _require_text(record: Mapping[str, Any], field: str, item_id: str) -> str:
    value = record.get(field)
    if not isinstance(value, str):
        raise MalformedRecordError(
            f"Record '{item_id}' has no text field '{field}'",
        )
    return value


def _require_price(record: Mapping[str, Any], item_id: str) -> float:
    value = record.get("price")
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRecordError(
            f"Record '{item_id}' has no numeric field 'price'",
        )
    return float(value)


def normalize_record(record: Mapping[str, Any] | Item) -> Item:
    """Normalize one raw record into an Item. Raises MalformedRecordError."""
    if isinstance(record, Item):
        return record
    if not isinstance(record, Mapping):
        raise MalformedRecordError(
            f"Record must be a mapping, got {type(record).__name__}",
        )
    item_id = resolve_identifier(record)
    if item_id is None:
        raise MalformedRecordError(
            f"Record has neither '{APP_ID_FIELD}' nor '{NATIVE_ID_FIELD}'",
        )
    return Item(
        id=item_id,
        name=_require_text(record, "name", item_id),
        description=_require_text(record, "description", item_id),
        price=_require_price(record, item_id),
    )


def normalize_records(records: Iterable[Mapping[str, Any]]) -> list[Item]:
    """Normalize a fetched batch. First malformed record aborts the whole batch."""
    items = []
    for index, record in enumerate(records):
        try:
            items.append(normalize_record(record))
        except MalformedRecordError as e:
            raise MalformedRecordError(
                f"Record #{index}: {e.message}", index=index,
            ) from e
    return items
