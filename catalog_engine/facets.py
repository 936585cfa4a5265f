"""Facet summary: filter options available within a result set."""

from typing import Sequence

from catalog_engine.models import EMPTY_PRICE_RANGE, FacetSummary, PriceRange, Product


def build_facets(products: Sequence[Product]) -> FacetSummary:
    """Collect categories, tags and the price range of a product set.

    Categories and tags are deduplicated and sorted by code point. An empty
    set reports EMPTY_PRICE_RANGE (0, 0) since min/max are undefined there.

    Args:
        products: Products to summarize (normally the full pre-pagination result).

    Returns:
        Facet summary.
    """
    if not products:
        return FacetSummary(categories=(), tags=(), price_range=EMPTY_PRICE_RANGE)

    prices = [p.price for p in products]
    return FacetSummary(
        categories=tuple(sorted({p.category for p in products})),
        tags=tuple(sorted({tag for p in products for tag in p.tags})),
        price_range=PriceRange(min=min(prices), max=max(prices)),
    )
