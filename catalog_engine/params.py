"""Query parameter parsing.

Turns raw string parameters (an HTTP query string, a CLI mapping) into a
FilterSpec. Unparseable values are dropped rather than rejected, so a bad
`minPrice` means "no minimum", never "minimum of zero".
"""

import re
from typing import Mapping

from catalog_engine.models import FilterSpec
from catalog_engine.pagination import MAX_PAGE_SIZE

TRUE_VALUES = {"true", "1"}

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Wire name -> accepted aliases
PARAM_ALIASES = {
    "category": ("category",),
    "minPrice": ("minPrice", "min_price"),
    "maxPrice": ("maxPrice", "max_price"),
    "inStock": ("inStock", "in_stock"),
    "tags": ("tags",),
    "search": ("search", "q"),
    "sortBy": ("sortBy", "sort_by"),
    "page": ("page",),
    "limit": ("limit",),
}


def _get(params: Mapping[str, str], name: str) -> str | None:
    for alias in PARAM_ALIASES[name]:
        value = params.get(alias)
        if value is not None and value.strip():
            return value.strip()
    return None


def parse_int(value: str | None) -> int | None:
    """Parse a base-10 integer of ASCII digits, returning None when invalid.

    Stricter than int(): digit separators ("1_000") and non-ASCII digits
    are rejected.
    """
    if value is None:
        return None
    value = value.strip()
    if not INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def parse_positive_int(value: str | None) -> int | None:
    """Parse an integer > 0, returning None otherwise."""
    parsed = parse_int(value)
    return parsed if parsed is not None and parsed > 0 else None


def parse_bool(value: str | None) -> bool | None:
    """Parse "true"/"1" as True and any other value as False."""
    if value is None:
        return None
    return value.lower() in TRUE_VALUES


def parse_tags(value: str | None) -> frozenset[str] | None:
    """Split a comma-separated tag list, dropping blanks."""
    if value is None:
        return None
    tags = frozenset(t.strip() for t in value.split(",") if t.strip())
    return tags or None


def parse_filter_params(params: Mapping[str, str]) -> FilterSpec:
    """Build a FilterSpec from raw query parameters.

    Args:
        params: Raw parameters keyed by wire name (camelCase) or snake_case alias.

    Returns:
        FilterSpec with only the valid, present fields set.
    """
    limit = parse_positive_int(_get(params, "limit"))

    return FilterSpec(
        category=_get(params, "category"),
        min_price=parse_int(_get(params, "minPrice")),
        max_price=parse_int(_get(params, "maxPrice")),
        in_stock=parse_bool(_get(params, "inStock")),
        tags=parse_tags(_get(params, "tags")),
        search=_get(params, "search"),
        sort_by=_get(params, "sortBy"),
        page=parse_positive_int(_get(params, "page")),
        limit=min(limit, MAX_PAGE_SIZE) if limit is not None else None,
    )
