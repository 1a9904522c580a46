"""ORM Models — SQLAlchemy declarative models backing the command bridge.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from stockroom.models.catalog_record import CatalogRecord  # noqa: F401
