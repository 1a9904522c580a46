"""View Deriver — tests for the pure filter + sort projection.

Tests cover:
    - Reference scenario: search, price sort, direction toggle
    - Case-insensitive substring match on name or description
    - Name collation ignores case and accents; price sorts numerically
    - Purity: input order untouched, repeated calls equal
    - Filter keeps exactly the items whose name or description contains the term
    - Sorted output is monotonic for both keys and both orders; ties keep mirror order
    - Empty-state classification
"""

from stockroom.core.catalog_item import Item
from stockroom.core.derive_view import (
    ViewParams, collation_key, derive_view, derive_view_for, empty_state,
    matches_search,
)
from stockroom.core.domain_types import SortKey, SortOrder, EmptyState


def _item(item_id, name, description, price):
    return Item(id=item_id, name=name, description=description, price=price)


CATALOG = [
    _item("1", "Banana", "yellow fruit", 0.5),
    _item("2", "apple", "red fruit", 1.2),
    _item("3", "Carrot", "orange vegetable", 0.3),
]


def _names(items):
    return [i.name for i in items]


def test_search_then_price_ascending():
    view = derive_view(CATALOG, "fruit", SortKey.PRICE, SortOrder.ASC)
    assert _names(view) == ["Banana", "apple"]


def test_search_then_price_descending():
    view = derive_view(CATALOG, "fruit", SortKey.PRICE, SortOrder.DESC)
    assert _names(view) == ["apple", "Banana"]


def test_empty_search_name_ascending_is_case_insensitive():
    assert _names(derive_view(CATALOG)) == ["apple", "Banana", "Carrot"]


def test_name_descending():
    view = derive_view(CATALOG, sort_order=SortOrder.DESC)
    assert _names(view) == ["Carrot", "Banana", "apple"]


def test_search_matches_description_case_insensitively():
    assert _names(derive_view(CATALOG, "VEGETABLE")) == ["Carrot"]


def test_search_matches_name_substring():
    assert _names(derive_view(CATALOG, "nan")) == ["Banana"]


def test_search_with_no_match_is_empty():
    assert derive_view(CATALOG, "zzz") == []


def test_accented_names_collate_next_to_plain_letters():
    items = [
        _item("a", "Zebra", "d", 1.0),
        _item("b", "Éclair", "d", 1.0),
        _item("c", "apple", "d", 1.0),
    ]
    assert _names(derive_view(items)) == ["apple", "Éclair", "Zebra"]


def test_collation_key_breaks_ties_by_original_text():
    assert collation_key("abc")[0] == collation_key("ABC")[0]
    assert collation_key("abc") != collation_key("ABC")


def test_price_sort_is_numeric_not_lexical():
    items = [
        _item("a", "A", "d", 10.0),
        _item("b", "B", "d", 9.0),
        _item("c", "C", "d", 100.0),
    ]
    view = derive_view(items, sort_by=SortKey.PRICE)
    assert [i.price for i in view] == [9.0, 10.0, 100.0]


def test_input_sequence_is_not_reordered():
    items = list(CATALOG)
    derive_view(items, sort_by=SortKey.PRICE, sort_order=SortOrder.DESC)
    assert items == CATALOG


def test_repeated_calls_are_equal():
    first = derive_view(CATALOG, "fruit", SortKey.PRICE, SortOrder.DESC)
    second = derive_view(CATALOG, "fruit", SortKey.PRICE, SortOrder.DESC)
    assert first == second


MIXED = [
    _item("m1", "Ziggurat lamp", "Brass desk light", 45.0),
    _item("m2", "anchor bolt", "Zinc plated", 0.75),
    _item("m3", "Écrou", "Nut, stainless", 0.2),
    _item("m4", "Bolt", "hex head, zinc", 0.75),
    _item("m5", "carpet tack", "Brass", 0.05),
    _item("m6", "Drill", "Cordless 18V", 129.0),
    _item("m7", "bolt", "Coach BOLT", 1.1),
]


def _contains(item, term):
    needle = term.casefold()
    return needle in item.name.casefold() or needle in item.description.casefold()


def test_filter_keeps_exactly_the_matching_items():
    for term in ("", "zinc", "BRASS", "bolt", "o", "zzz"):
        view = derive_view(MIXED, term, SortKey.PRICE)
        assert all(_contains(i, term) for i in view)
        excluded = [i for i in MIXED if i not in view]
        assert not any(_contains(i, term) for i in excluded)
        assert len(view) + len(excluded) == len(MIXED)


def test_sorted_view_is_monotonic_for_every_key_and_order():
    keys = {
        SortKey.NAME: lambda i: collation_key(i.name),
        SortKey.PRICE: lambda i: i.price,
    }
    for sort_by, key in keys.items():
        for sort_order in SortOrder:
            view = derive_view(MIXED, "", sort_by, sort_order)
            assert {i.id for i in view} == {i.id for i in MIXED}
            pairs = list(zip(view, view[1:]))
            if sort_order == SortOrder.ASC:
                assert all(key(a) <= key(b) for a, b in pairs)
            else:
                assert all(key(a) >= key(b) for a, b in pairs)


def test_equal_prices_keep_mirror_order_in_both_directions():
    for sort_order in SortOrder:
        view = derive_view(MIXED, "", SortKey.PRICE, sort_order)
        tied = [i.id for i in view if i.price == 0.75]
        assert tied == ["m2", "m4"]



def test_string_params_are_coerced_to_enums():
    view = derive_view(CATALOG, "", "price", "desc")
    assert _names(view) == ["apple", "Banana", "Carrot"]


def test_derive_view_for_uses_params():
    params = ViewParams(search_term="fruit", sort_by=SortKey.PRICE)
    assert _names(derive_view_for(CATALOG, params)) == ["Banana", "apple"]


def test_empty_state_classification():
    assert empty_state(0, 0) == EmptyState.EMPTY_INVENTORY
    assert empty_state(3, 0) == EmptyState.NO_MATCH
    assert empty_state(3, 2) is None


def test_price_ascending_on_unfiltered_mirror():
    mirror = [_item("1", "Bolt", "", 2.0), _item("2", "Nut", "", 1.0)]
    view = derive_view(mirror, "", SortKey.PRICE, SortOrder.ASC)
    assert [(i.id, i.price) for i in view] == [("2", 1.0), ("1", 2.0)]


def test_matches_search_agrees_with_casefold_substring():
    for term in ("", "ZINC", "écrou", "nut,", "18v"):
        for item in MIXED:
            assert matches_search(item, term) == _contains(item, term)
