"""Filter stage.

Narrows a product sequence to the products matching a FilterSpec. Fields
combine with AND; the tags field matches any of its values.
"""

from typing import Iterable

from catalog_engine.models import FilterSpec, Product


def matches_filter(product: Product, spec: FilterSpec) -> bool:
    """Check a single product against every supplied constraint.

    Args:
        product: Product to test.
        spec: Query constraints.

    Returns:
        True if the product passes all constraints.
    """
    if spec.category and product.category != spec.category:
        return False

    if spec.min_price is not None and product.price < spec.min_price:
        return False

    if spec.max_price is not None and product.price > spec.max_price:
        return False

    # in_stock=False means "no constraint", not "only out of stock"
    if spec.in_stock and not product.inventory.in_stock:
        return False

    if spec.tags and spec.tags.isdisjoint(product.tags):
        return False

    return True


def filter_products(products: Iterable[Product], spec: FilterSpec) -> list[Product]:
    """Filter products by category, price range, stock and tags.

    The input is never modified and matches keep their relative order.

    Args:
        products: Products to filter.
        spec: Query constraints.

    Returns:
        New list of matching products.
    """
    return [p for p in products if matches_filter(p, spec)]
