"""Item Mirror — ordered, duplicate-free local copy of the remote collection.

Invariants:
    - At most one item per canonical ItemId
    - Only normalized Items are stored (raw records never enter)
    - Order is insertion order; display sorting never touches it
    - replace_one/remove_one return False on "not found" (no-op, never raise)
    - Mutators are called only by the CRUD orchestrator, after a remote outcome

Design Decisions:
    - Plain list + id index: O(1) membership, order preserved for free
    - items exposed as a tuple: callers can read but not mutate in place
"""

from collections.abc import Iterable

from stockroom.core.catalog_item import Item
from stockroom.core.domain_types import ItemId
from stockroom.core.errors import DuplicateItemError


class ItemMirror:
    """Session-local authoritative copy of the remote collection."""

    def __init__(self, items: Iterable[Item] = ()):
        self._items: list[Item] = []
        self._ids: set[ItemId] = set()
        self.replace_all(items)

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def get(self, item_id: ItemId) -> Item | None:
        if item_id not in self._ids:
            return None
        return next(item for item in self._items if item.id == item_id)

    def replace_all(self, items: Iterable[Item]) -> None:
        """Discard contents and install items in the given order.

        Raises DuplicateItemError (mirror left unchanged) if the batch
        repeats a canonical id.
        """
        incoming = list(items)
        ids: set[ItemId] = set()
        for item in incoming:
            if item.id in ids:
                raise DuplicateItemError(item.id)
            ids.add(item.id)
        self._items = incoming
        self._ids = ids

    def append(self, item: Item) -> None:
        """Insert at the end. Raises DuplicateItemError if the id exists."""
        if item.id in self._ids:
            raise DuplicateItemError(item.id)
        self._items.append(item)
        self._ids.add(item.id)

    def replace_one(self, item_id: ItemId, new_item: Item) -> bool:
        """Replace the entry matching item_id in place. False if absent."""
        if item_id not in self._ids:
            return False
        if new_item.id != item_id and new_item.id in self._ids:
            raise DuplicateItemError(new_item.id)
        for index, item in enumerate(self._items):
            if item.id == item_id:
                self._items[index] = new_item
                break
        self._ids.discard(item_id)
        self._ids.add(new_item.id)
        return True

    def remove_one(self, item_id: ItemId) -> bool:
        """Delete the entry matching item_id. False if absent."""
        if item_id not in self._ids:
            return False
        self._items = [item for item in self._items if item.id != item_id]
        self._ids.discard(item_id)
        return True
