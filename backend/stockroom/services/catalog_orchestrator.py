"""Catalog Orchestrator — issues remote CRUD commands and applies outcomes to the mirror.

Invariants:
    - The mirror is mutated ONLY here, and only after a resolved remote outcome
    - Validation runs before any remote call; a rejected operation makes zero calls
    - One InFlightSlot for create/update/delete: a second mutation while one is
      outstanding is rejected as busy (never queued)
    - Fetch has its own loading flag; a fetch while loading is rejected as busy
    - Every operation settles into an OperationResult and never raises for
      validation, logical no-op, or remote failure
    - View is recomputed explicitly after every mirror mutation and param change
    - Settling handlers re-check the mirror before applying: a created id already
      present, or an updated/deleted id already gone, is skipped with a warning

Design Decisions:
    - Optimistic apply: the mirror trusts the remote success signal and does NOT
      re-read (ADR: last local write wins until next full fetch); opt-in
      refetch_after_mutation runs a full fetch after each successful mutation
    - Remote exceptions of any type map to FAILED: the bridge is opaque, so a
      bare Exception is as much a transport failure as a RemoteCommandError
    - No cancellation, no timeout: a hung remote call holds the slot until it resolves
"""

import logging
from collections.abc import Mapping
from typing import Any

from stockroom.core.catalog_item import Item, ItemDraft
from stockroom.core.derive_view import ViewParams, derive_view_for, empty_state
from stockroom.core.domain_types import (
    ItemId, SortKey, SortOrder, OperationKind, NotificationKind,
    EmptyState, DEFAULT_COLLECTION,
)
from stockroom.core.enforce_item import validate_draft
from stockroom.core.errors import (
    CatalogError, RemoteCommandError, IdentifierUnresolvedError,
    ItemNotFoundError, ItemValidationError, OperationInProgressError,
)
from stockroom.core.inflight_slot import InFlightSlot, InFlightOperation
from stockroom.core.item_mirror import ItemMirror
from stockroom.core.operation_result import OperationResult
from stockroom.core.repository_protocols import CommandBridge, Notifier
from stockroom.core.resolve_identifier import normalize_records
from stockroom.core.selection_state import SelectionState, EditTarget

logger = logging.getLogger(__name__)

# User-facing messages, one per settled outcome
MSG_FETCHED = "Loaded {count} items"
MSG_FETCH_FAILED = "Failed to load items from database"
MSG_CREATED = "Item added successfully"
MSG_CREATE_FAILED = "Failed to add item to database"
MSG_UPDATED = "Item updated successfully"
MSG_UPDATE_NO_OP = "No changes were made"
MSG_UPDATE_FAILED = "Failed to update item in database"
MSG_DELETED = "Item deleted successfully"
MSG_DELETE_NO_OP = "Failed to delete item"
MSG_DELETE_FAILED = "Failed to delete item from database"
MSG_NO_ID = "Cannot {operation}: Item has no ID"


class CatalogOrchestrator:
    """Single-session CRUD engine: bridge -> mirror -> derived view."""

    def __init__(
        self,
        bridge: CommandBridge,
        notifier: Notifier,
        collection: str = DEFAULT_COLLECTION,
        refetch_after_mutation: bool = False,
    ):
        self._bridge = bridge
        self._notifier = notifier
        self.collection = collection
        self.refetch_after_mutation = refetch_after_mutation
        self.mirror = ItemMirror()
        self.selection = SelectionState()
        self.inflight = InFlightSlot()
        self._params = ViewParams()
        self._visible: tuple[Item, ...] = ()
        self._loading = False

    # ─── Read side ──────────────────────────────────────────────

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def submitting(self) -> bool:
        return self.inflight.busy

    @property
    def in_flight(self) -> InFlightOperation | None:
        return self.inflight.current

    @property
    def view_params(self) -> ViewParams:
        return self._params

    @property
    def visible(self) -> tuple[Item, ...]:
        return self._visible

    @property
    def empty_state(self) -> EmptyState | None:
        return empty_state(len(self.mirror), len(self._visible))

    def find_item(self, item_id: str) -> Item:
        """Mirror lookup by canonical id. Raises ItemNotFoundError."""
        item = self.mirror.get(ItemId(item_id))
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def recompute_view(self) -> tuple[Item, ...]:
        self._visible = tuple(derive_view_for(self.mirror.items, self._params))
        return self._visible

    # ─── View parameters ────────────────────────────────────────

    def set_view_params(
        self,
        search_term: str | None = None,
        sort_by: SortKey | None = None,
        sort_order: SortOrder | None = None,
    ) -> tuple[Item, ...]:
        """Change any subset of view params, then recompute."""
        self._params = ViewParams(
            search_term=self._params.search_term if search_term is None else search_term,
            sort_by=self._params.sort_by if sort_by is None else SortKey(sort_by),
            sort_order=(
                self._params.sort_order if sort_order is None else SortOrder(sort_order)
            ),
        )
        return self.recompute_view()

    def toggle_sort_order(self) -> tuple[Item, ...]:
        return self.set_view_params(sort_order=self._params.sort_order.toggled())

    def clear_search(self) -> tuple[Item, ...]:
        return self.set_view_params(search_term="")

    # ─── Fetch ──────────────────────────────────────────────────

    async def fetch_items(self) -> OperationResult:
        """Full fetch: normalize every record, then replace the mirror wholesale."""
        kind = OperationKind.FETCH
        if self._loading:
            return self._reject(kind, OperationInProgressError("fetch", "fetch"))

        self._loading = True
        logger.info(
            f"Fetching collection '{self.collection}'",
            extra={"operation": kind.value, "collection": self.collection},
        )
        try:
            records = await self._bridge.fetch_all(self.collection)
            items = normalize_records(records)
            self.mirror.replace_all(items)
        except Exception as e:
            return self._settle_failure(kind, MSG_FETCH_FAILED, e)
        finally:
            self._loading = False

        self.recompute_view()
        logger.info(
            f"Fetched {len(items)} items",
            extra={"operation": kind.value, "item_count": len(items)},
        )
        message = MSG_FETCHED.format(count=len(items))
        self._notifier.notify(NotificationKind.SUCCESS, message, kind)
        return OperationResult.succeeded(kind, message)

    # ─── Create ─────────────────────────────────────────────────

    async def create_item(self, draft: ItemDraft) -> OperationResult:
        """Validate, create remotely, append with the remote-assigned id."""
        kind = OperationKind.CREATE
        error = validate_draft(draft)
        if error:
            return self._reject(kind, error)
        busy = self._check_slot(kind)
        if busy:
            return busy

        try:
            with self.inflight.hold(kind):
                logger.info(
                    f"Creating item in '{self.collection}'",
                    extra={"operation": kind.value, "collection": self.collection},
                )
                new_id = await self._bridge.create(self.collection, draft.as_payload())
                if new_id is None or not str(new_id).strip():
                    raise RemoteCommandError("no identifier returned", kind.value)
        except Exception as e:
            return self._settle_failure(kind, MSG_CREATE_FAILED, e)

        item = draft.with_id(ItemId(str(new_id).strip()))
        if item.id in self.mirror:
            # a fetch settled while the create was outstanding
            logger.warning(
                f"Created item '{item.id}' already in mirror; skipping local apply",
                extra={"operation": kind.value, "item_id": item.id},
            )
        else:
            self.mirror.append(item)
        self.recompute_view()
        logger.info(
            f"Created item '{item.id}'",
            extra={"operation": kind.value, "item_id": item.id},
        )
        self._notifier.notify(NotificationKind.SUCCESS, MSG_CREATED, kind)
        await self._refetch_if_configured()
        return OperationResult.succeeded(kind, MSG_CREATED, item.id, item)

    # ─── Update ─────────────────────────────────────────────────

    def begin_edit(self, target: Item | Mapping[str, Any]) -> EditTarget:
        """Open the edit slot, resolving the target id across both id fields."""
        edit = self.selection.open_edit(target)
        if edit.item_id is None:
            logger.warning(
                "Edit opened on item without identifier",
                extra={"operation": OperationKind.UPDATE.value},
            )
        return edit

    def revise_edit(self, **fields: object) -> EditTarget:
        """Change draft fields of the open edit. Raises if no edit is open."""
        edit = self.selection.revise_edit(**fields)
        if edit is None:
            raise ItemValidationError("No item is open for editing", "editing_target")
        return edit

    def cancel_edit(self) -> bool:
        return self.selection.clear_edit()

    async def submit_edit(self) -> OperationResult:
        """Send the open edit to the remote store and apply a confirmed change."""
        kind = OperationKind.UPDATE
        edit = self.selection.editing_target
        if edit is None:
            return self._reject(
                kind, ItemValidationError("No item is open for editing", "editing_target"),
            )
        if edit.item_id is None:
            return self._reject(kind, self._unresolved(kind))
        error = validate_draft(edit.draft)
        if error:
            return self._reject(kind, error, edit.item_id)
        item_id = edit.item_id
        busy = self._check_slot(kind, item_id)
        if busy:
            return busy

        try:
            with self.inflight.hold(kind, item_id):
                logger.info(
                    f"Updating item '{item_id}'",
                    extra={"operation": kind.value, "item_id": item_id},
                )
                changed = await self._bridge.update(
                    self.collection, item_id, edit.draft.as_payload(),
                )
        except Exception as e:
            return self._settle_failure(kind, MSG_UPDATE_FAILED, e, item_id)

        if not changed:
            logger.info(
                f"Update of '{item_id}' changed nothing",
                extra={"operation": kind.value, "item_id": item_id},
            )
            self._notifier.notify(NotificationKind.NO_OP, MSG_UPDATE_NO_OP, kind)
            return OperationResult.no_op(kind, MSG_UPDATE_NO_OP, item_id)

        item = edit.draft.with_id(item_id)
        if not self.mirror.replace_one(item_id, item):
            logger.warning(
                f"Updated item '{item_id}' no longer in mirror; skipping local apply",
                extra={"operation": kind.value, "item_id": item_id},
            )
        self.selection.clear_edit(expected_id=item_id)
        self.recompute_view()
        self._notifier.notify(NotificationKind.SUCCESS, MSG_UPDATED, kind)
        await self._refetch_if_configured()
        return OperationResult.succeeded(kind, MSG_UPDATED, item_id, item)

    # ─── Delete ─────────────────────────────────────────────────

    def request_delete(self, target: Item | Mapping[str, Any] | str) -> ItemId | None:
        """Fill the pending-delete slot. Unresolvable targets notify and return None."""
        item_id = self.selection.request_delete(target)
        if item_id is None:
            logger.warning(
                "Delete requested for item without identifier",
                extra={"operation": OperationKind.DELETE.value},
            )
            self._notifier.notify(
                NotificationKind.ERROR,
                MSG_NO_ID.format(operation="delete"),
                OperationKind.DELETE,
            )
        return item_id

    def cancel_delete(self) -> bool:
        return self.selection.clear_delete()

    async def confirm_delete(self) -> OperationResult:
        """Delete the pending target. The slot clears once the call settles."""
        kind = OperationKind.DELETE
        item_id = self.selection.pending_delete_id
        if item_id is None:
            return self._reject(kind, self._unresolved(kind))
        busy = self._check_slot(kind, item_id)
        if busy:
            return busy

        try:
            with self.inflight.hold(kind, item_id):
                logger.info(
                    f"Deleting item '{item_id}'",
                    extra={"operation": kind.value, "item_id": item_id},
                )
                removed = await self._bridge.delete(self.collection, item_id)
        except Exception as e:
            return self._settle_failure(kind, MSG_DELETE_FAILED, e, item_id)
        finally:
            self.selection.clear_delete(expected_id=item_id)

        if not removed:
            logger.info(
                f"Delete of '{item_id}' matched nothing",
                extra={"operation": kind.value, "item_id": item_id},
            )
            self._notifier.notify(NotificationKind.NO_OP, MSG_DELETE_NO_OP, kind)
            return OperationResult.no_op(kind, MSG_DELETE_NO_OP, item_id)

        if not self.mirror.remove_one(item_id):
            logger.warning(
                f"Deleted item '{item_id}' no longer in mirror; skipping local apply",
                extra={"operation": kind.value, "item_id": item_id},
            )
        self.recompute_view()
        self._notifier.notify(NotificationKind.SUCCESS, MSG_DELETED, kind)
        await self._refetch_if_configured()
        return OperationResult.succeeded(kind, MSG_DELETED, item_id)

    # ─── Helpers ────────────────────────────────────────────────

    def _unresolved(self, kind: OperationKind) -> IdentifierUnresolvedError:
        error = IdentifierUnresolvedError(kind.value)
        error.context.user_message = MSG_NO_ID.format(operation=kind.value)
        return error

    def _check_slot(
        self, kind: OperationKind, item_id: ItemId | None = None,
    ) -> OperationResult | None:
        """Busy result if another mutation holds the slot, else None.

        No await between this check and inflight.hold(), so the pair is atomic.
        """
        current = self.inflight.current
        if current is None:
            return None
        error = OperationInProgressError(
            kind.value if item_id is None else f"{kind.value} of '{item_id}'",
            current.describe(),
        )
        return self._reject(kind, error, item_id)

    def _reject(
        self, kind: OperationKind, error: CatalogError, item_id: ItemId | None = None,
    ) -> OperationResult:
        """Settle without a remote call (validation failure or busy slot)."""
        error.context.operation = kind.value
        error.context.collection = self.collection
        error.context.item_id = item_id
        result = OperationResult.rejected(kind, error, item_id)
        logger.warning(
            f"{kind.value} rejected: {error.message}",
            extra={
                "operation": kind.value, "item_id": item_id,
                "error_code": error.code,
            },
        )
        if not isinstance(error, OperationInProgressError):
            self._notifier.notify(NotificationKind.ERROR, result.message, kind)
        return result

    def _settle_failure(
        self,
        kind: OperationKind,
        message: str,
        exc: Exception,
        item_id: ItemId | None = None,
    ) -> OperationResult:
        """Remote call raised: mirror untouched, report, never re-raise."""
        if isinstance(exc, CatalogError):
            error = exc
            logger.error(
                f"{kind.value} failed: {error.message}",
                extra={
                    "operation": kind.value, "item_id": item_id,
                    "error_code": error.code,
                },
            )
        else:
            error = RemoteCommandError(str(exc) or type(exc).__name__, kind.value)
            logger.error(
                f"{kind.value} failed with unexpected error: {exc}",
                extra={"operation": kind.value, "item_id": item_id},
                exc_info=True,
            )
        error.context.operation = kind.value
        error.context.collection = self.collection
        error.context.item_id = item_id or error.context.item_id
        error.context.user_message = message
        self._notifier.notify(NotificationKind.ERROR, message, kind)
        return OperationResult.failed(kind, message, error, item_id)

    async def _refetch_if_configured(self) -> None:
        if self.refetch_after_mutation:
            await self.fetch_items()
