"""CatalogRecord ORM — backing rows of the SQL command bridge.

Invariants:
    - seq gives insertion order; fetch_all returns rows ordered by seq
    - record_id is the remote-native identifier (32 lowercase hex chars), unique
    - Rows are scoped by collection name

Design Decisions:
    - Integer surrogate key + separate record_id: insertion order survives on
      every backend without relying on timestamps
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Float, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.db.base import Base


class CatalogRecord(Base):
    """One stored inventory item."""
    __tablename__ = "catalog_records"
    __table_args__ = (
        Index("ix_catalog_records_collection_seq", "collection", "seq"),
    )

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_raw(self) -> dict:
        """Raw record shape, keyed by the remote-native id field."""
        return {
            "_id": self.record_id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
        }
