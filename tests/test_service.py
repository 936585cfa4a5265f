"""Tests for the catalog query service."""

from catalog_engine.models import (
    FilterSpec,
    Inventory,
    PriceRange,
    StockStatus,
)
from catalog_engine.service import (
    CatalogQueryService,
    discount_percentage,
    format_price,
    inventory_status,
)
from catalog_engine.store import ProductStore


class TestQuery:
    """Tests for the query pipeline."""

    def test_no_filter_returns_first_page(self, service: CatalogQueryService) -> None:
        """With no constraints the whole catalog is paged in catalog order."""
        result = service.query()

        assert result.page.total == 6
        assert result.page.page == 1
        assert result.page.limit == 12
        assert list(result.page.data) == list(service.store.all())

    def test_filter_sort_paginate(self, service: CatalogQueryService) -> None:
        """Stages compose: filter, then sort, then page."""
        spec = FilterSpec(in_stock=True, sort_by="price-asc", page=2, limit=2)

        result = service.query(spec)

        assert result.page.total == 5
        assert result.page.total_pages == 3
        assert [p.name for p in result.page.data] == ["Wireless Earbuds", "Leather Jacket"]

    def test_search_orders_by_relevance(self, service: CatalogQueryService) -> None:
        """Without a sort key, search results come back ranked."""
        result = service.query(FilterSpec(search="office"))

        # Both match on the "office" tag; the chair also matches by name
        assert [p.name for p in result.page.data] == ["Office Chair", "Desk Lamp"]

    def test_sort_overrides_relevance(self, service: CatalogQueryService) -> None:
        """An explicit sort key wins over relevance order."""
        result = service.query(FilterSpec(search="office", sort_by="price-asc"))

        assert [p.name for p in result.page.data] == ["Desk Lamp", "Office Chair"]

    def test_blank_search_is_skipped(self, service: CatalogQueryService) -> None:
        """Whitespace-only search text does not filter anything."""
        assert service.query(FilterSpec(search="   ")).page.total == 6

    def test_total_counts_filter_and_search(self, service: CatalogQueryService) -> None:
        """total counts results after filtering and searching, before paging."""
        result = service.query(FilterSpec(category="electronics", search="wireless", limit=1))

        assert result.page.total == 1
        assert result.page.data[0].name == "Wireless Earbuds"

    def test_facets_cover_pre_pagination_result(
        self, service: CatalogQueryService
    ) -> None:
        """Facets describe every result, not just the current page."""
        result = service.query(FilterSpec(category="fashion", limit=1))

        assert len(result.page.data) == 1
        assert result.facets.price_range == PriceRange(min=1999, max=19999)
        assert result.facets.tags == ("cotton", "leather", "summer", "winter")
        assert result.facets.categories == ("fashion",)

    def test_empty_result(self, service: CatalogQueryService) -> None:
        """No matches is a normal result with sentinel facets."""
        result = service.query(FilterSpec(category="toys"))

        assert result.page.data == ()
        assert result.page.total == 0
        assert result.page.total_pages == 0
        assert result.facets.price_range == PriceRange(min=0, max=0)

    def test_applied_filters_echoed(self, service: CatalogQueryService) -> None:
        """The applied filter is returned with the result."""
        spec = FilterSpec(category="fashion", tags={"winter"})

        result = service.query(spec)

        assert result.applied is spec
        assert result.applied.applied() == {"category": "fashion", "tags": ["winter"]}

    def test_zero_limit_is_clamped_not_defaulted(
        self, service: CatalogQueryService
    ) -> None:
        """A supplied limit of 0 is normalized to 1."""
        assert service.query(FilterSpec(limit=0)).page.limit == 1

    def test_default_limit_from_service(self, product_store: ProductStore) -> None:
        """The service default applies when no limit is given."""
        service = CatalogQueryService(product_store, default_limit=4)

        assert service.query().page.limit == 4

    def test_store_snapshot_not_mutated(self, service: CatalogQueryService) -> None:
        """Queries never reorder the store's collection."""
        before = service.store.all()

        service.query(FilterSpec(sort_by="price-desc", search="a"))

        assert service.store.all() == before

    def test_products_by_category(self, service: CatalogQueryService) -> None:
        """Category scoping keeps the other constraints."""
        result = service.products_by_category(
            "home-living", FilterSpec(category="fashion", sort_by="price-desc")
        )

        assert [p.name for p in result.page.data] == ["Office Chair", "Desk Lamp"]


class TestLookupsAndSearch:
    """Tests for lookups and catalog-wide search."""

    def test_get_product(self, service: CatalogQueryService) -> None:
        """Products can be found by ID and slug."""
        first = service.store.all()[0]

        assert service.get_product(first.id) is first
        assert service.get_product_by_slug(first.slug) is first
        assert service.get_product("missing") is None
        assert service.get_product_by_slug("missing") is None

    def test_perform_search(self, service: CatalogQueryService) -> None:
        """Search echoes the query and counts results."""
        result = service.perform_search("office")

        assert result.query == "office"
        assert result.count == 2

    def test_perform_search_limit(self, service: CatalogQueryService) -> None:
        """Results are cut to the limit."""
        assert service.perform_search("o", limit=1).count == 1

    def test_perform_search_blank_query(self, service: CatalogQueryService) -> None:
        """A blank query returns nothing rather than the whole catalog."""
        assert service.perform_search("  ").count == 0


class TestCollections:
    """Tests for catalog collections."""

    def test_featured(self, service: CatalogQueryService) -> None:
        """Featured products only."""
        assert [p.name for p in service.featured_products()] == ["Wireless Earbuds"]

    def test_new_arrivals_newest_first(self, service: CatalogQueryService) -> None:
        """New products sorted by creation date, newest first."""
        names = [p.name for p in service.new_arrivals()]

        assert names == ["Office Chair", "USB-C Charger"]

    def test_on_sale(self, service: CatalogQueryService) -> None:
        """Only products priced below their original price."""
        assert [p.name for p in service.products_on_sale()] == ["Leather Jacket"]

    def test_low_stock(self, service: CatalogQueryService) -> None:
        """In-stock products at or below their threshold."""
        assert [p.name for p in service.low_stock_products()] == ["Desk Lamp"]

    def test_out_of_stock(self, service: CatalogQueryService) -> None:
        """Products that cannot be ordered."""
        assert [p.name for p in service.out_of_stock_products()] == ["Cotton T-Shirt"]

    def test_related_products(self, service: CatalogQueryService) -> None:
        """Same category or shared tag, excluding the product itself."""
        lamp = next(p for p in service.store.all() if p.name == "Desk Lamp")

        related = [p.name for p in service.related_products(lamp)]

        assert related == ["Office Chair"]

    def test_stats(self, service: CatalogQueryService) -> None:
        """Aggregates over the whole catalog."""
        stats = service.stats()

        assert stats.total_products == 6
        assert stats.total_categories == 3
        assert stats.in_stock == 5
        assert stats.out_of_stock == 1
        assert stats.low_stock == 1
        assert stats.featured == 1
        assert stats.average_price == round((4999 + 19999 + 1999 + 3999 + 1999 + 29999) / 6)

    def test_stats_empty_catalog(self) -> None:
        """An empty catalog reports zeros."""
        stats = CatalogQueryService(ProductStore()).stats()

        assert stats.total_products == 0
        assert stats.average_price == 0


class TestProductHelpers:
    """Tests for inventory status, discounts and price formatting."""

    def test_inventory_in_stock(self, make_product) -> None:
        """Plenty of stock."""
        status = inventory_status(make_product(quantity=50))

        assert status.status == StockStatus.IN_STOCK
        assert status.message == "In Stock"
        assert status.can_order is True

    def test_inventory_low_stock(self, make_product) -> None:
        """At or below the threshold."""
        status = inventory_status(
            make_product(inventory=Inventory(in_stock=True, quantity=3, low_stock_threshold=5))
        )

        assert status.status == StockStatus.LOW_STOCK
        assert status.message == "Only 3 left in stock"
        assert status.urgency == "high"

    def test_inventory_out_of_stock(self, make_product) -> None:
        """Zero quantity is out of stock even when flagged in stock."""
        status = inventory_status(
            make_product(inventory=Inventory(in_stock=True, quantity=0))
        )

        assert status.status == StockStatus.OUT_OF_STOCK
        assert status.can_order is False

    def test_discount_percentage(self, make_product) -> None:
        """Discount is rounded to the nearest whole percent."""
        assert discount_percentage(make_product(price=2999, original_price=3999)) == 25
        assert discount_percentage(make_product(price=1000, original_price=1000)) is None
        assert discount_percentage(make_product(price=1000, original_price=900)) is None
        assert discount_percentage(make_product(price=1000)) is None

    def test_format_price(self) -> None:
        """Cents are formatted with symbol and separators."""
        assert format_price(2999) == "$29.99"
        assert format_price(129999) == "$1,299.99"
        assert format_price(500, "eur") == "€5.00"
        assert format_price(1234, "JPY") == "JPY 12.34"
