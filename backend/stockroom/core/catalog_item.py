"""Catalog Item — normalized inventory entity and its identifier-free draft.

Invariants:
    - Item always carries exactly one canonical identifier (ItemId)
    - ItemDraft never carries an identifier — it is what gets sent to the remote store
    - Both are frozen: the mirror replaces whole records, it never mutates them

Design Decisions:
    - Frozen dataclasses over Pydantic: core stays free of framework imports
      (ADR: ExMA functional core); schemas/ converts at the API boundary
"""

from dataclasses import dataclass, replace

from stockroom.core.domain_types import ItemId, APP_ID_FIELD


@dataclass(frozen=True)
class ItemDraft:
    """Editable item fields, without identity."""
    name: str = ""
    description: str = ""
    price: float = 0.0

    def revised(self, **fields: object) -> "ItemDraft":
        """Return a copy with the given fields replaced. Unknown keys raise TypeError."""
        return replace(self, **fields)

    def as_payload(self) -> dict:
        """Remote-call payload: {name, description, price}."""
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
        }

    def with_id(self, item_id: ItemId) -> "Item":
        return Item(
            id=item_id, name=self.name,
            description=self.description, price=self.price,
        )


@dataclass(frozen=True)
class Item:
    """Normalized catalog item — the only shape stored in the mirror."""
    id: ItemId
    name: str
    description: str
    price: float

    def draft(self) -> ItemDraft:
        return ItemDraft(
            name=self.name, description=self.description, price=self.price,
        )

    def to_record(self) -> dict:
        """Record form keyed by the application id field (re-normalizable)."""
        return {APP_ID_FIELD: self.id, **self.draft().as_payload()}
