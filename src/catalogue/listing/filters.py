"""Filter/sort specification for catalog listings.

A ``FilterSortSpec`` is an immutable, fully enumerated description of what
the shopper asked to see. Any change to the filters produces a new spec,
which is how the page accumulator knows to start over.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Mapping


class SortKey(Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NEWEST = "newest"
    BESTSELLING = "bestselling"
    RATING = "rating"

    @classmethod
    def parse(cls, value: str | SortKey | None) -> SortKey | None:
        """Read a sort key from a URL value, accepting legacy spellings."""
        if value is None or isinstance(value, SortKey):
            return value
        value = value.strip()
        if not value:
            return None
        value = _LEGACY_SORT_KEYS.get(value, value)
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown sort key: {value!r}") from None


_LEGACY_SORT_KEYS = {
    "priceAsc": SortKey.PRICE_ASC.value,
    "priceDesc": SortKey.PRICE_DESC.value,
}


class TypeFilter(Enum):
    FULLBOTTLE = "fullbottle"
    DECANT = "decant"
    NONE = "none"

    @classmethod
    def parse(cls, value: str | TypeFilter | None) -> TypeFilter:
        if isinstance(value, TypeFilter):
            return value
        if value is None or not value.strip() or value.strip().lower() == "all":
            return cls.NONE
        return cls(value.strip().lower())


def _clean(values: Iterable[str] | None) -> frozenset[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(v.strip() for v in values if v and v.strip() and v.strip().lower() != "all")


def _lenient(parse, value, default):
    """Parse a URL value, falling back to ``default`` when it is not recognized."""
    try:
        return parse(value)
    except ValueError:
        return default


def _optional_int(value) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return int(value)


@dataclass(frozen=True)
class FilterSortSpec:
    categories: frozenset[str] = field(default_factory=frozenset)
    brands: frozenset[str] = field(default_factory=frozenset)
    price_min: int | None = None
    price_max: int | None = None
    search_term: str | None = None
    sort_key: SortKey | None = None
    type_filter: TypeFilter = TypeFilter.NONE
    featured: bool = False

    def __post_init__(self) -> None:
        # Normalize so that equal selections always compare equal
        object.__setattr__(self, "categories", _clean(self.categories))
        object.__setattr__(self, "brands", _clean(self.brands))
        term = (self.search_term or "").strip()
        object.__setattr__(self, "search_term", term or None)
        object.__setattr__(self, "sort_key", SortKey.parse(self.sort_key))
        object.__setattr__(self, "type_filter", TypeFilter.parse(self.type_filter))

        if self.price_min is not None and self.price_min < 0:
            raise ValueError("price_min must not be negative")
        if self.price_min is not None and self.price_max is not None and self.price_min > self.price_max:
            raise ValueError("price_min must not exceed price_max")

    # -------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------
    def with_categories(self, categories: Iterable[str]) -> FilterSortSpec:
        return replace(self, categories=_clean(categories))

    def toggle_category(self, category: str) -> FilterSortSpec:
        return replace(self, categories=self.categories ^ {category})

    def with_brands(self, brands: Iterable[str]) -> FilterSortSpec:
        return replace(self, brands=_clean(brands))

    def toggle_brand(self, brand: str) -> FilterSortSpec:
        return replace(self, brands=self.brands ^ {brand})

    def with_price_range(self, price_min: int | None, price_max: int | None) -> FilterSortSpec:
        return replace(self, price_min=price_min, price_max=price_max)

    def with_sort(self, sort_key: str | SortKey | None) -> FilterSortSpec:
        return replace(self, sort_key=sort_key)

    def with_search(self, search_term: str | None) -> FilterSortSpec:
        return replace(self, search_term=search_term)

    def with_type(self, type_filter: str | TypeFilter | None) -> FilterSortSpec:
        return replace(self, type_filter=type_filter)

    def reset(self) -> FilterSortSpec:
        """Drop every selection except the search term."""
        return FilterSortSpec(search_term=self.search_term)

    # -------------------------------------------------------------------
    # URL parameters
    # -------------------------------------------------------------------
    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> FilterSortSpec:
        """Build a spec from listing URL parameters.

        Recognized keys: ``search``, ``category``, ``brand``, ``type``,
        ``sort``, ``featured``, ``minPrice`` and ``maxPrice``. Unrecognized
        ``sort`` or ``type`` values fall back to newest-first and no type filter.
        """
        return cls(
            categories=_clean(params.get("category")),
            brands=_clean(params.get("brand")),
            price_min=_optional_int(params.get("minPrice")),
            price_max=_optional_int(params.get("maxPrice")),
            search_term=params.get("search"),
            sort_key=_lenient(SortKey.parse, params.get("sort"), None),
            type_filter=_lenient(TypeFilter.parse, params.get("type"), TypeFilter.NONE),
            featured=str(params.get("featured", "")).lower() == "true",
        )
