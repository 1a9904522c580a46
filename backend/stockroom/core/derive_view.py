"""View Deriver — pure filter + sort from mirror contents to the presented sequence.

Invariants:
    - PURE: same (items, search_term, sort_by, sort_order) -> equal output, no side effects
    - Filter: case-insensitive substring of search_term in name OR description;
      empty search_term matches everything
    - Sort by name (locale-aware collation key) or price (numeric)
    - Descending flips the comparator sign, not the filtered sequence
    - The input sequence is never reordered (mirror insertion order survives)

Design Decisions:
    - Collation key = accent-stripped casefold, original text as tie-break:
      deterministic across hosts, unlike locale.strxfrm (ADR: testable ordering)
    - sorted(reverse=True) keeps equal keys in input order, which is what a
      sign-flipped comparator under a stable sort produces
"""

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass

from stockroom.core.catalog_item import Item
from stockroom.core.domain_types import SortKey, SortOrder, EmptyState


@dataclass(frozen=True)
class ViewParams:
    """The three presentation inputs besides the mirror itself."""
    search_term: str = ""
    sort_by: SortKey = SortKey.NAME
    sort_order: SortOrder = SortOrder.ASC


def collation_key(text: str) -> tuple[str, str]:
    """Locale-style ordering: accents and case only break ties."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), text)


def matches_search(item: Item, search_term: str) -> bool:
    if not search_term:
        return True
    term = search_term.casefold()
    return term in item.name.casefold() or term in item.description.casefold()


def _sort_key(sort_by: SortKey):
    if sort_by == SortKey.PRICE:
        return lambda item: item.price
    return lambda item: collation_key(item.name)


def derive_view(
    items: Iterable[Item],
    search_term: str = "",
    sort_by: SortKey = SortKey.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Item]:
    """Filtered, sorted presentation sequence. Returns a new list."""
    sort_by = SortKey(sort_by)
    sort_order = SortOrder(sort_order)
    visible = [item for item in items if matches_search(item, search_term)]
    return sorted(
        visible,
        key=_sort_key(sort_by),
        reverse=sort_order == SortOrder.DESC,
    )


def derive_view_for(items: Iterable[Item], params: ViewParams) -> list[Item]:
    return derive_view(items, params.search_term, params.sort_by, params.sort_order)


def empty_state(mirror_size: int, visible_size: int) -> EmptyState | None:
    """Why nothing is shown: empty inventory vs. search filtered everything out."""
    if visible_size:
        return None
    return EmptyState.EMPTY_INVENTORY if mirror_size == 0 else EmptyState.NO_MATCH
