"""Sort stage.

Orders products by one of the recognized sort keys. Python's sort is
stable, so products that compare equal keep their incoming order.
"""

import unicodedata
from typing import Any, Callable, Iterable

from catalog_engine.models import Product, SortKey


def collation_key(text: str) -> tuple[str, str]:
    """Locale-style collation key for display strings.

    Compares accent- and case-insensitively first ("Éclair" sorts with
    "eclair", before "Fudge"), then falls back to the raw string so the
    order is total.

    Args:
        text: String to collate.

    Returns:
        Sort key tuple.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


# key function, descending
_SORTS: dict[SortKey, tuple[Callable[[Product], Any], bool]] = {
    SortKey.PRICE_ASC: (lambda p: p.price, False),
    SortKey.PRICE_DESC: (lambda p: p.price, True),
    SortKey.NAME: (lambda p: collation_key(p.name), False),
    SortKey.NEWEST: (lambda p: p.created_at, True),
    SortKey.RATING: (lambda p: p.rating.average if p.rating else 0.0, True),
}


def sort_products(
    products: Iterable[Product],
    sort_by: SortKey | str | None = None,
) -> list[Product]:
    """Sort products by a sort key.

    Absent or unrecognized keys leave the order unchanged.

    Args:
        products: Products to sort.
        sort_by: Sort key or its wire string.

    Returns:
        New sorted list; the input is never modified.
    """
    key = SortKey.parse(sort_by)
    if key is None:
        return list(products)

    key_func, descending = _SORTS[key]
    return sorted(products, key=key_func, reverse=descending)
