"""Item Field Enforcement — pre-flight validation before any remote mutation.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Return an error on violation, None on success
    - validate_draft chains all field checks — first error wins
    - Accepted items always satisfy: name non-empty, description non-empty, price > 0

Design Decisions:
    - Return errors (not raise): the orchestrator turns them into a
      validation_failed OperationResult, keeping the error path identical
      to the success path (ADR: uniform operation outcome shape)
    - Whitespace-only text counts as empty
"""

import math

from stockroom.core.catalog_item import ItemDraft
from stockroom.core.errors import ItemValidationError

INVALID_FIELDS_MESSAGE = "Please fill all fields with valid values"


def check_name(draft: ItemDraft) -> ItemValidationError | None:
    if not draft.name or not draft.name.strip():
        return ItemValidationError("Item name must not be empty", "name")
    return None


def check_description(draft: ItemDraft) -> ItemValidationError | None:
    if not draft.description or not draft.description.strip():
        return ItemValidationError("Item description must not be empty", "description")
    return None


def check_price(draft: ItemDraft) -> ItemValidationError | None:
    price = draft.price
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return ItemValidationError("Item price must be a number", "price")
    if math.isnan(price) or math.isinf(price) or price <= 0:
        return ItemValidationError("Item price must be greater than zero", "price")
    return None


def validate_draft(draft: ItemDraft) -> ItemValidationError | None:
    """Chain all field checks. Returns first error or None."""
    error = check_name(draft) or check_description(draft) or check_price(draft)
    if error:
        error.context.user_message = INVALID_FIELDS_MESSAGE
    return error
