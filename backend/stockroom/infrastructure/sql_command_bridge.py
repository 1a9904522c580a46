"""SQL Command Bridge — CommandBridge implementation over async SQLAlchemy.

Invariants:
    - fetch_all returns raw records keyed by the remote-native "_id", in insertion order
    - create ignores any incoming identifier and returns a fresh 32-hex record id
    - update/delete raise InvalidIdentifierError for ids that are not 32-hex
    - update returns True only if a stored field actually changed
      (matched-but-identical is False — the caller's logical no-op)
    - delete returns True iff a row was removed
    - Driver errors surface as DatabaseError (via DatabaseSessionManager)

Design Decisions:
    - Bridge never normalizes: it speaks the store's native shape, ingestion
      (core/resolve_identifier.py) owns the id reconciliation
    - "modified" semantics over "matched": mirrors document-store update
      results, so an edit that changes nothing is reported as such
"""

import logging
import re
import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select, delete as sql_delete

from stockroom.core.errors import InvalidIdentifierError
from stockroom.infrastructure.database import DatabaseSessionManager
from stockroom.models.catalog_record import CatalogRecord

logger = logging.getLogger(__name__)

_RECORD_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")

EDITABLE_FIELDS = ("name", "description", "price")


def new_record_id() -> str:
    return uuid.uuid4().hex


def parse_record_id(item_id: str, command: str) -> str:
    """Validate a record id, lowercasing hex. Raises InvalidIdentifierError."""
    candidate = str(item_id).strip().lower()
    if not _RECORD_ID_PATTERN.match(candidate):
        logger.warning(
            f"Invalid record id '{item_id}'",
            extra={"operation": command, "item_id": str(item_id)},
        )
        raise InvalidIdentifierError(str(item_id), command)
    return candidate


class SqlCommandBridge:
    """Remote command interface backed by the catalog_records table."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def fetch_all(self, collection: str) -> list[dict]:
        async with self._manager.session() as db:
            result = await db.execute(
                select(CatalogRecord)
                .where(CatalogRecord.collection == collection)
                .order_by(CatalogRecord.seq),
            )
            records = [row.to_raw() for row in result.scalars()]
        logger.debug(
            f"Found {len(records)} records",
            extra={"collection": collection, "item_count": len(records)},
        )
        return records

    async def create(self, collection: str, item: Mapping[str, Any]) -> str:
        record_id = new_record_id()
        async with self._manager.session() as db:
            db.add(CatalogRecord(
                record_id=record_id,
                collection=collection,
                name=item["name"],
                description=item["description"],
                price=float(item["price"]),
            ))
            await db.commit()
        logger.info(
            f"Record added with id {record_id}",
            extra={"collection": collection, "item_id": record_id},
        )
        return record_id

    async def update(
        self, collection: str, item_id: str, item: Mapping[str, Any],
    ) -> bool:
        record_id = parse_record_id(item_id, "update")
        async with self._manager.session() as db:
            result = await db.execute(
                select(CatalogRecord).where(
                    CatalogRecord.collection == collection,
                    CatalogRecord.record_id == record_id,
                ),
            )
            record = result.scalar_one_or_none()
            if record is None:
                return False
            changes = {
                field: item[field] for field in EDITABLE_FIELDS
                if field in item and getattr(record, field) != item[field]
            }
            if not changes:
                return False
            for field, value in changes.items():
                setattr(record, field, value)
            await db.commit()
        logger.info(
            f"Record {record_id} updated: {sorted(changes)}",
            extra={"collection": collection, "item_id": record_id},
        )
        return True

    async def delete(self, collection: str, item_id: str) -> bool:
        record_id = parse_record_id(item_id, "delete")
        async with self._manager.session() as db:
            result = await db.execute(
                sql_delete(CatalogRecord).where(
                    CatalogRecord.collection == collection,
                    CatalogRecord.record_id == record_id,
                ),
            )
            await db.commit()
            removed = result.rowcount > 0
        logger.info(
            f"Delete {record_id}: removed={removed}",
            extra={"collection": collection, "item_id": record_id},
        )
        return removed
