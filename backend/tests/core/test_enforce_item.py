"""Item Field Enforcement — tests for pre-flight draft validation.

Tests cover:
    - Each field check in isolation (name, description, price)
    - validate_draft: first error wins, user-facing message attached
    - Accepted drafts satisfy all three field rules
"""

import math

import pytest

from stockroom.core.catalog_item import ItemDraft
from stockroom.core.enforce_item import (
    INVALID_FIELDS_MESSAGE, check_name, check_description, check_price,
    validate_draft,
)
from stockroom.core.errors import ItemValidationError

VALID = ItemDraft(name="Lamp", description="Desk lamp", price=19.99)


def test_valid_draft_passes():
    assert validate_draft(VALID) is None


def test_empty_name_rejected():
    error = check_name(VALID.revised(name=""))
    assert isinstance(error, ItemValidationError)
    assert error.field == "name"


def test_whitespace_name_rejected():
    assert check_name(VALID.revised(name="   ")) is not None


def test_empty_description_rejected():
    error = check_description(VALID.revised(description=""))
    assert error.field == "description"


@pytest.mark.parametrize("price", [0, 0.0, -1, -0.01, math.nan, math.inf])
def test_non_positive_or_non_finite_price_rejected(price):
    error = check_price(VALID.revised(price=price))
    assert error is not None
    assert error.field == "price"


@pytest.mark.parametrize("price", ["5", None, True])
def test_non_numeric_price_rejected(price):
    assert check_price(VALID.revised(price=price)) is not None


def test_integer_price_accepted():
    assert check_price(VALID.revised(price=3)) is None


def test_first_error_wins():
    error = validate_draft(ItemDraft(name="", description="", price=0))
    assert error.field == "name"


def test_validation_error_carries_user_message():
    error = validate_draft(VALID.revised(price=0))
    assert error.context.user_message == INVALID_FIELDS_MESSAGE
    assert error.to_response()["error"]["message"] == INVALID_FIELDS_MESSAGE
    assert error.http_status == 400
