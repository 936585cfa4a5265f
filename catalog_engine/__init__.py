"""Catalog Query Engine.

Turns loosely-typed query parameters into a filtered, searched, sorted and
paginated slice of a product catalog, with facet options for filter UIs.
"""

from catalog_engine.facets import build_facets
from catalog_engine.filtering import filter_products
from catalog_engine.models import (
    EMPTY_PRICE_RANGE,
    FacetSummary,
    FilterSpec,
    Inventory,
    PageResult,
    PriceRange,
    Product,
    ProductImage,
    QueryResult,
    Rating,
    SortKey,
)
from catalog_engine.pagination import paginate
from catalog_engine.params import parse_filter_params
from catalog_engine.search import score_product, search_products
from catalog_engine.service import CatalogQueryService
from catalog_engine.sorting import sort_products
from catalog_engine.store import ProductStore, get_product_store

__all__ = [
    # Models
    "EMPTY_PRICE_RANGE",
    "FacetSummary",
    "FilterSpec",
    "Inventory",
    "PageResult",
    "PriceRange",
    "Product",
    "ProductImage",
    "QueryResult",
    "Rating",
    "SortKey",
    # Stages
    "build_facets",
    "filter_products",
    "paginate",
    "score_product",
    "search_products",
    "sort_products",
    # Wire mapping
    "parse_filter_params",
    # Store
    "ProductStore",
    "get_product_store",
    # Service
    "CatalogQueryService",
]
