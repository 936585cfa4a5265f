"""Tests for the filter stage."""

from catalog_engine.filtering import filter_products, matches_filter
from catalog_engine.models import FilterSpec, Product


class TestFilterProducts:
    """Tests for filter_products."""

    def test_empty_filter_keeps_everything(self, catalog: list[Product]) -> None:
        """A filter with no fields is no constraint."""
        assert filter_products(catalog, FilterSpec()) == catalog

    def test_category_exact_match(self, catalog: list[Product]) -> None:
        """Every result has the requested category."""
        result = filter_products(catalog, FilterSpec(category="fashion"))

        assert [p.name for p in result] == ["Leather Jacket", "Cotton T-Shirt"]
        assert all(p.category == "fashion" for p in result)

    def test_category_is_case_sensitive(self, catalog: list[Product]) -> None:
        """Category matching does not fold case."""
        assert filter_products(catalog, FilterSpec(category="Fashion")) == []

    def test_price_range_is_inclusive(self, catalog: list[Product]) -> None:
        """Both price bounds are inclusive."""
        result = filter_products(catalog, FilterSpec(min_price=1999, max_price=3999))

        assert sorted(p.price for p in result) == [1999, 1999, 3999]

    def test_price_range_scenario(self, headphones: Product, mouse: Product) -> None:
        """The $9.99 mouse falls below a $10-$30 range, the headphones fit."""
        result = filter_products(
            [headphones, mouse], FilterSpec(min_price=1000, max_price=3000)
        )

        assert result == [headphones]

    def test_in_stock_true_excludes_out_of_stock(self, catalog: list[Product]) -> None:
        """in_stock=True drops unavailable products."""
        result = filter_products(catalog, FilterSpec(in_stock=True))

        assert "Cotton T-Shirt" not in [p.name for p in result]
        assert all(p.inventory.in_stock for p in result)

    def test_in_stock_false_is_no_constraint(self, catalog: list[Product]) -> None:
        """in_stock=False does not mean "only out of stock"."""
        assert filter_products(catalog, FilterSpec(in_stock=False)) == catalog

    def test_tags_match_any(self, catalog: list[Product]) -> None:
        """A product passes when it carries any requested tag."""
        result = filter_products(catalog, FilterSpec(tags={"office", "wireless"}))

        assert [p.name for p in result] == ["Wireless Earbuds", "Desk Lamp", "Office Chair"]

    def test_single_tag_string(self, make_product) -> None:
        """A tag given as a plain string matches whole tags only."""
        audio = make_product(tags=("audio",))
        letter = make_product(tags=("a",))

        assert filter_products([audio, letter], FilterSpec(tags="audio")) == [audio]

    def test_empty_tags_is_no_constraint(self, catalog: list[Product]) -> None:
        """An empty tag set does not exclude everything."""
        assert filter_products(catalog, FilterSpec(tags=frozenset())) == catalog

    def test_fields_combine_with_and(self, catalog: list[Product]) -> None:
        """All supplied constraints must hold at once."""
        spec = FilterSpec(category="home-living", tags={"office"}, max_price=5000)

        result = filter_products(catalog, spec)

        assert [p.name for p in result] == ["Desk Lamp"]

    def test_search_field_is_ignored(self, catalog: list[Product]) -> None:
        """Free-text search is a separate stage."""
        assert filter_products(catalog, FilterSpec(search="nothing-matches")) == catalog

    def test_idempotent(self, catalog: list[Product]) -> None:
        """Filtering a filtered result changes nothing."""
        spec = FilterSpec(min_price=2000, in_stock=True)

        once = filter_products(catalog, spec)

        assert filter_products(once, spec) == once

    def test_does_not_mutate_input(self, catalog: list[Product]) -> None:
        """The input list is left untouched."""
        before = list(catalog)

        result = filter_products(catalog, FilterSpec(category="fashion"))

        assert catalog == before
        assert result is not catalog
        assert len(result) <= len(catalog)

    def test_accepts_any_iterable(self, catalog: list[Product]) -> None:
        """Tuples and generators are accepted."""
        assert filter_products(tuple(catalog), FilterSpec()) == catalog
        assert filter_products(iter(catalog), FilterSpec()) == catalog


class TestMatchesFilter:
    """Tests for the per-product predicate."""

    def test_single_product(self, headphones: Product) -> None:
        """The predicate applies each field independently."""
        assert matches_filter(headphones, FilterSpec(tags={"audio"}))
        assert not matches_filter(headphones, FilterSpec(tags={"video"}))
        assert not matches_filter(headphones, FilterSpec(max_price=2998))
