"""Selection State — at most one edit target and at most one pending delete.

Invariants:
    - Two independent slots: setting one never clears the other
    - edit target's id is resolved when the edit opens (never re-derived later)
    - Slots clear on explicit cancel, or when the matching operation settles
    - clear_* with an expected id only clears if the slot still holds that id

Design Decisions:
    - Dataclass with methods: pure, deterministic, testable without mocks
    - EditTarget.item_id may be None: an unresolvable target can be opened,
      and the update guard rejects it at submit (validation error, no remote call)
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from stockroom.core.catalog_item import Item, ItemDraft
from stockroom.core.domain_types import ItemId
from stockroom.core.resolve_identifier import resolve_identifier


@dataclass(frozen=True)
class EditTarget:
    """The item being edited: resolved id + working copy of its fields."""
    item_id: ItemId | None
    draft: ItemDraft


def edit_target_from(target: Item | Mapping[str, Any]) -> EditTarget:
    """Build an EditTarget, resolving the id across both id fields."""
    if isinstance(target, Item):
        return EditTarget(item_id=target.id, draft=target.draft())
    return EditTarget(
        item_id=resolve_identifier(target),
        draft=ItemDraft(
            name=target.get("name", ""),
            description=target.get("description", ""),
            price=target.get("price", 0.0),
        ),
    )


@dataclass
class SelectionState:
    """Per-session UI selection — pure dataclass, no IO."""

    editing_target: EditTarget | None = None
    pending_delete_id: ItemId | None = None

    def open_edit(self, target: Item | Mapping[str, Any]) -> EditTarget:
        self.editing_target = edit_target_from(target)
        return self.editing_target

    def revise_edit(self, **fields: object) -> EditTarget | None:
        """Replace draft fields on the open edit target. None if no edit is open."""
        if self.editing_target is None:
            return None
        self.editing_target = EditTarget(
            item_id=self.editing_target.item_id,
            draft=self.editing_target.draft.revised(**fields),
        )
        return self.editing_target

    def clear_edit(self, expected_id: ItemId | None = None) -> bool:
        """Clear the edit slot. With expected_id, only if it still targets that id."""
        if self.editing_target is None:
            return False
        if expected_id is not None and self.editing_target.item_id != expected_id:
            return False
        self.editing_target = None
        return True

    def request_delete(self, target: Item | Mapping[str, Any] | ItemId) -> ItemId | None:
        """Resolve target's id into the pending-delete slot. None leaves it untouched."""
        if isinstance(target, str):
            item_id = ItemId(target) if target.strip() else None
        else:
            item_id = resolve_identifier(target)
        if item_id is not None:
            self.pending_delete_id = item_id
        return item_id

    def clear_delete(self, expected_id: ItemId | None = None) -> bool:
        if self.pending_delete_id is None:
            return False
        if expected_id is not None and self.pending_delete_id != expected_id:
            return False
        self.pending_delete_id = None
        return True
