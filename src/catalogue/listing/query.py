"""Query composer: turns a FilterSortSpec and a cursor into one catalog query.

``compose`` is a pure function: the same spec, cursor and page size always
yield an equal ``QueryDescriptor``. The descriptor is collaborator-agnostic;
catalog adapters translate it into their own query language.

Known limitations, kept visible rather than corrected:

- Categories and brands each become a membership predicate. Some document
  stores only serve one membership predicate per query efficiently; both are
  still emitted when both are selected.
- The price range is always emitted on ``fullBottlePrice``. When the listing
  is ordered by another field, whether the store can serve the combination is
  up to the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from catalogue.listing.filters import FilterSortSpec, SortKey, TypeFilter
from shared.config import get_settings

PRICE_FIELD = "fullBottlePrice"


class Direction(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class Predicate:
    """Equality (``==``), membership (``in``) or ``array-contains`` test."""

    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class RangePredicate:
    """Inclusive range test on a single field."""

    field: str
    lower: int
    upper: int


@dataclass(frozen=True)
class Ordering:
    field: str
    direction: Direction


@dataclass(frozen=True)
class PageCursor:
    """Position of the last item of a page: its ordering value plus id tiebreak."""

    value: Any
    doc_id: str


SORT_TABLE: dict[SortKey, Ordering] = {
    SortKey.NAME_ASC: Ordering("name", Direction.ASCENDING),
    SortKey.NAME_DESC: Ordering("name", Direction.DESCENDING),
    SortKey.PRICE_ASC: Ordering(PRICE_FIELD, Direction.ASCENDING),
    SortKey.PRICE_DESC: Ordering(PRICE_FIELD, Direction.DESCENDING),
    SortKey.NEWEST: Ordering("createdAt", Direction.DESCENDING),
    SortKey.BESTSELLING: Ordering("soldCount", Direction.DESCENDING),
    SortKey.RATING: Ordering("rating", Direction.DESCENDING),
}

DEFAULT_SORT_KEY = SortKey.NEWEST


@dataclass(frozen=True)
class QueryDescriptor:
    predicates: tuple[Predicate, ...]
    price_range: RangePredicate
    ordering: Ordering
    limit: int
    start_after: PageCursor | None = None

    @property
    def membership_predicate_count(self) -> int:
        return sum(1 for p in self.predicates if p.op == "in")

    @property
    def range_on_non_ordering_field(self) -> bool:
        return self.price_range.field != self.ordering.field


def ordering_for(sort_key: SortKey | None) -> Ordering:
    return SORT_TABLE[sort_key or DEFAULT_SORT_KEY]


def compose(spec: FilterSortSpec, cursor: PageCursor | None = None, page_size: int | None = None) -> QueryDescriptor:
    """Build the catalog query for one page of ``spec``, resuming after ``cursor``."""
    limit = get_settings().page_size if page_size is None else page_size
    if limit < 1:
        raise ValueError("page_size must be at least 1")

    predicates: list[Predicate] = []
    if spec.search_term:
        predicates.append(Predicate("searchKeywords", "array-contains", spec.search_term.lower()))
    if spec.categories:
        predicates.append(Predicate("category", "in", tuple(sorted(spec.categories))))
    if spec.brands:
        predicates.append(Predicate("brand", "in", tuple(sorted(spec.brands))))
    if spec.featured:
        predicates.append(Predicate("featured", "==", True))
    if spec.type_filter is TypeFilter.DECANT:
        predicates.append(Predicate("hasDecant", "==", True))
    elif spec.type_filter is TypeFilter.FULLBOTTLE:
        predicates.append(Predicate("hasFullBottle", "==", True))

    lower = 0 if spec.price_min is None else spec.price_min
    upper = get_settings().price_ceiling if spec.price_max is None else spec.price_max
    if lower > upper:
        raise ValueError(f"Empty price range: {lower} > {upper}")

    return QueryDescriptor(
        predicates=tuple(predicates),
        price_range=RangePredicate(PRICE_FIELD, lower, upper),
        ordering=ordering_for(spec.sort_key),
        limit=limit,
        start_after=cursor,
    )
