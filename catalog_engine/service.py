"""Catalog query service.

Composes the query pipeline over a catalog snapshot:

    filter -> search (when a query is present) -> sort -> facets -> paginate

and provides the catalog-wide helpers built on the same stages (featured
products, new arrivals, stock reports, related products, statistics).
"""

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

import structlog

from catalog_engine.config import settings
from catalog_engine.facets import build_facets
from catalog_engine.filtering import filter_products
from catalog_engine.models import (
    CatalogStats,
    FilterSpec,
    InventoryStatus,
    Product,
    QueryResult,
    SearchResult,
    SortKey,
    StockStatus,
)
from catalog_engine.pagination import MAX_PAGE_SIZE, paginate
from catalog_engine.search import search_products
from catalog_engine.sorting import sort_products
from catalog_engine.store import ProductStore

logger = structlog.get_logger()


class CatalogQueryService:
    """Service for catalog queries.

    Each call reads one snapshot from the store and runs pure stages over
    it, so concurrent requests need no coordination.

    Example usage:
        service = CatalogQueryService(get_product_store())
        result = service.query(
            FilterSpec(category="electronics", in_stock=True, sort_by="price-asc")
        )
        result.page.data        # products on the page
        result.facets.tags      # tags available within the result
    """

    def __init__(
        self,
        store: ProductStore,
        default_limit: int | None = None,
    ) -> None:
        """Initialize service with a catalog store.

        Args:
            store: Product collection to query.
            default_limit: Page size when a query does not give one.
        """
        self.store = store
        self.default_limit = default_limit or settings.default_page_size

    # ------------------------------------------------------------------
    # Query pipeline
    # ------------------------------------------------------------------

    def query(self, spec: FilterSpec | None = None) -> QueryResult:
        """Filter, search, sort and paginate the catalog.

        Facets are computed over the full result before pagination, so
        they describe everything the current filters can reach.

        Args:
            spec: Query constraints; None means the whole catalog.

        Returns:
            Page of products with facets and the applied constraints.
        """
        spec = spec or FilterSpec()
        results = self.run(self.store.all(), spec)

        facets = build_facets(results)
        page = paginate(
            results,
            page=spec.page if spec.page is not None else 1,
            limit=spec.limit if spec.limit is not None else self.default_limit,
        )

        logger.info(
            "Catalog query executed",
            filters=spec.applied(),
            total=page.total,
            page=page.page,
            returned=len(page.data),
        )

        return QueryResult(page=page, facets=facets, applied=spec)

    @staticmethod
    def run(products: Sequence[Product], spec: FilterSpec) -> list[Product]:
        """Run the filter, search and sort stages without paginating.

        An explicit sort key overrides search relevance order.

        Args:
            products: Catalog snapshot.
            spec: Query constraints.

        Returns:
            Ordered result set.
        """
        results = filter_products(products, spec)
        if spec.query:
            results = search_products(results, spec.query)
        return sort_products(results, spec.sort_by)

    def products_by_category(
        self,
        category: str,
        spec: FilterSpec | None = None,
    ) -> QueryResult:
        """Query one category, keeping the other constraints.

        Args:
            category: Category slug.
            spec: Other query constraints.

        Returns:
            Query result scoped to the category.
        """
        return self.query(replace(spec or FilterSpec(), category=category))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_product(self, product_id: str) -> Product | None:
        """Get product by ID."""
        return self.store.by_id(product_id)

    def get_product_by_slug(self, slug: str) -> Product | None:
        """Get product by slug."""
        return self.store.by_slug(slug)

    def perform_search(self, query: str, limit: int | None = None) -> SearchResult:
        """Relevance search over the whole catalog.

        Args:
            query: Search query.
            limit: Maximum results (clamped to 1..100).

        Returns:
            Ranked results with the echoed query.
        """
        limit = min(max(1, limit or settings.search_default_limit), MAX_PAGE_SIZE)
        ranked = search_products(self.store.all(), query) if query.strip() else []

        logger.info("Catalog search executed", query=query, matches=len(ranked))

        return SearchResult(results=tuple(ranked[:limit]), query=query)

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def featured_products(self, limit: int = 8) -> list[Product]:
        """Products flagged as featured, in catalog order."""
        return [p for p in self.store.all() if p.featured][:limit]

    def new_arrivals(self, limit: int = 12) -> list[Product]:
        """Products flagged as new, newest first."""
        fresh = [p for p in self.store.all() if p.is_new]
        return sort_products(fresh, SortKey.NEWEST)[:limit]

    def products_on_sale(self, limit: int = 12) -> list[Product]:
        """Products priced below their original price."""
        return [p for p in self.store.all() if p.is_discounted][:limit]

    def low_stock_products(self) -> list[Product]:
        """In-stock products at or below their low-stock threshold."""
        return [
            p
            for p in self.store.all()
            if p.inventory.in_stock
            and p.inventory.quantity <= p.inventory.low_stock_threshold
        ]

    def out_of_stock_products(self) -> list[Product]:
        """Products that cannot be ordered."""
        return [
            p
            for p in self.store.all()
            if not p.inventory.in_stock or p.inventory.quantity == 0
        ]

    def related_products(self, product: Product, limit: int = 4) -> list[Product]:
        """Products sharing the category or at least one tag.

        Args:
            product: Product to find relatives for (excluded from results).
            limit: Maximum results.

        Returns:
            Related products in catalog order.
        """
        tags = set(product.tags)
        return [
            p
            for p in self.store.all()
            if p.id != product.id
            and (p.category == product.category or not tags.isdisjoint(p.tags))
        ][:limit]

    def stats(self) -> CatalogStats:
        """Aggregate catalog statistics.

        Returns:
            Product counts, average price and inventory value (cents).
        """
        products = self.store.all()
        total = len(products)
        average = (
            int(
                (Decimal(sum(p.price for p in products)) / total).quantize(
                    Decimal("1"), rounding=ROUND_HALF_UP
                )
            )
            if total
            else 0
        )

        return CatalogStats(
            total_products=total,
            total_categories=len({p.category for p in products}),
            in_stock=sum(1 for p in products if p.inventory.in_stock),
            out_of_stock=sum(1 for p in products if not p.inventory.in_stock),
            low_stock=len(self.low_stock_products()),
            featured=sum(1 for p in products if p.featured),
            average_price=average,
            inventory_value=sum(p.price * p.inventory.quantity for p in products),
        )


# ============================================================================
# Product helpers
# ============================================================================


def inventory_status(product: Product) -> InventoryStatus:
    """Derive the availability shown to shoppers.

    Args:
        product: Product to describe.

    Returns:
        Stock status with display message.
    """
    inventory = product.inventory

    if not inventory.in_stock or inventory.quantity == 0:
        return InventoryStatus(
            status=StockStatus.OUT_OF_STOCK,
            message="Out of Stock",
            can_order=False,
        )

    if inventory.quantity <= inventory.low_stock_threshold:
        return InventoryStatus(
            status=StockStatus.LOW_STOCK,
            message=f"Only {inventory.quantity} left in stock",
            can_order=True,
            urgency="high",
        )

    return InventoryStatus(status=StockStatus.IN_STOCK, message="In Stock", can_order=True)


def discount_percentage(product: Product) -> int | None:
    """Whole-number discount off the original price, or None."""
    if not product.is_discounted:
        return None
    discount = Decimal(product.original_price - product.price) * 100 / product.original_price
    return int(discount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def format_price(amount_cents: int, currency: str = "USD") -> str:
    """Format a cent amount for display.

    Args:
        amount_cents: Amount in cents.
        currency: ISO currency code.

    Returns:
        Formatted price, e.g. "$1,299.99".
    """
    amount = Decimal(amount_cents) / 100
    sign = "-" if amount < 0 else ""
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    prefix = symbol if symbol else f"{currency.upper()} "
    return f"{sign}{prefix}{abs(amount):,.2f}"
