"""Value objects for the catalog query engine.

Every type here is immutable and built fresh per request. Prices are
integers in minor currency units (cents) to avoid floating-point rounding.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Mapping, TypeVar

from catalog_engine.exceptions import InvalidProductError

T = TypeVar("T")

AttributeValue = str | int | float | bool


# ============================================================================
# Product
# ============================================================================


@dataclass(frozen=True)
class Inventory:
    """Stock information for a product.

    Attributes:
        in_stock: Quick availability flag.
        quantity: Units on hand.
        low_stock_threshold: Quantity at or below which stock counts as low.
        reserved_quantity: Units held in carts but not yet purchased.
    """

    in_stock: bool = True
    quantity: int = 0
    low_stock_threshold: int = 10
    reserved_quantity: int = 0

    @property
    def available_quantity(self) -> int:
        """Units that can still be ordered."""
        return max(0, self.quantity - self.reserved_quantity)


@dataclass(frozen=True)
class Rating:
    """Aggregate review rating."""

    average: float
    count: int = 0


@dataclass(frozen=True)
class ProductImage:
    """Product image reference."""

    url: str
    alt: str = ""
    is_primary: bool = False


@dataclass(frozen=True)
class Product:
    """Product record as supplied by the catalog store.

    Attributes:
        id: Unique product identifier.
        slug: URL-friendly identifier.
        sku: Stock Keeping Unit.
        name: Display name.
        description: Short description for listings.
        long_description: Detailed description for the product page.
        price: Current price in cents.
        original_price: Price before discount, in cents.
        currency: ISO currency code.
        category: Primary category slug.
        subcategory: Optional subcategory slug.
        tags: Tags in display order.
        inventory: Stock information.
        images: Product images.
        featured: Shown on the home page.
        is_new: Carries the "new" badge.
        rating: Review rating, if the product has reviews.
        attributes: Free-form product properties (read-only mapping).
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
        published_at: Publication timestamp.
    """

    id: str
    slug: str
    sku: str
    name: str
    description: str
    price: int
    category: str
    long_description: str | None = None
    original_price: int | None = None
    currency: str = "USD"
    subcategory: str | None = None
    tags: tuple[str, ...] = ()
    inventory: Inventory = field(default_factory=Inventory)
    images: tuple[ProductImage, ...] = ()
    featured: bool = False
    is_new: bool = False
    rating: Rating | None = None
    attributes: Mapping[str, AttributeValue] = field(default_factory=dict, hash=False)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    published_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants and freeze sequence fields."""
        if self.price < 0:
            raise InvalidProductError(self.id, f"price must be >= 0, got {self.price}")
        inventory = self.inventory
        for name in ("quantity", "low_stock_threshold", "reserved_quantity"):
            value = getattr(inventory, name)
            if value < 0:
                raise InvalidProductError(self.id, f"{name} must be >= 0, got {value}")
        if self.rating is not None:
            if not 0 <= self.rating.average <= 5:
                raise InvalidProductError(
                    self.id, f"rating average must be within 0-5, got {self.rating.average}"
                )
            if self.rating.count < 0:
                raise InvalidProductError(
                    self.id, f"rating count must be >= 0, got {self.rating.count}"
                )
        # Callers may pass lists or dicts; freeze them so the record stays immutable.
        tags = (self.tags,) if isinstance(self.tags, str) else tuple(self.tags)
        object.__setattr__(self, "tags", tags)
        object.__setattr__(self, "images", tuple(self.images))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug}, price={self.price})>"

    @property
    def is_discounted(self) -> bool:
        """Whether the product sells below its original price."""
        return self.original_price is not None and self.original_price > self.price

    @property
    def primary_image(self) -> ProductImage | None:
        """Primary image, falling back to the first one."""
        for image in self.images:
            if image.is_primary:
                return image
        return self.images[0] if self.images else None


# ============================================================================
# Query Input
# ============================================================================


class SortKey(str, Enum):
    """Recognized sort orders."""

    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NAME = "name"
    NEWEST = "newest"
    RATING = "rating"

    @classmethod
    def parse(cls, value: "SortKey | str | None") -> "SortKey | None":
        """Resolve a raw sort value, returning None when unrecognized.

        Args:
            value: Sort key or its wire string.

        Returns:
            Matching SortKey, or None.
        """
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class FilterSpec:
    """Structured product query.

    Every field is optional; an absent field is no constraint.

    Attributes:
        category: Exact category slug.
        min_price: Inclusive lower price bound in cents.
        max_price: Inclusive upper price bound in cents.
        in_stock: When True, only in-stock products.
        tags: Match products carrying any of these tags.
        search: Free-text relevance query.
        sort_by: Requested sort order (raw strings allowed).
        page: Requested page number (1-indexed).
        limit: Requested page size.
    """

    category: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    in_stock: bool | None = None
    tags: frozenset[str] | None = None
    search: str | None = None
    sort_by: SortKey | str | None = None
    page: int | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        """Normalize tags to a frozenset; a bare string is a single tag."""
        if isinstance(self.tags, str):
            object.__setattr__(self, "tags", frozenset({self.tags}))
        elif self.tags is not None and not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))

    @property
    def query(self) -> str:
        """Search text with surrounding whitespace removed."""
        return (self.search or "").strip()

    def applied(self) -> dict[str, Any]:
        """Present fields keyed by wire name, for echoing back to callers.

        Returns:
            Dictionary of the constraints that were supplied.
        """
        wire_names = {
            "category": "category",
            "min_price": "minPrice",
            "max_price": "maxPrice",
            "in_stock": "inStock",
            "tags": "tags",
            "search": "search",
            "sort_by": "sortBy",
            "page": "page",
            "limit": "limit",
        }
        applied: dict[str, Any] = {}
        for name, wire_name in wire_names.items():
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, frozenset):
                value = sorted(value)
            elif isinstance(value, SortKey):
                value = value.value
            applied[wire_name] = value
        return applied


# ============================================================================
# Query Output
# ============================================================================


@dataclass(frozen=True)
class PaginationMeta:
    """Pagination metadata for building page controls."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of an ordered result set.

    Attributes:
        data: Items on this page.
        page: Normalized page number.
        limit: Normalized page size.
        total: Item count before pagination.
        total_pages: Number of pages (0 for an empty result).
        has_next: Whether a later page exists.
        has_prev: Whether an earlier page exists.
    """

    data: tuple[T, ...]
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @property
    def pagination(self) -> PaginationMeta:
        """Metadata without the data slice."""
        return PaginationMeta(
            page=self.page,
            limit=self.limit,
            total=self.total,
            total_pages=self.total_pages,
            has_next=self.has_next,
            has_prev=self.has_prev,
        )


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price range in cents."""

    min: int
    max: int


# Range reported for an empty product set.
EMPTY_PRICE_RANGE = PriceRange(min=0, max=0)


@dataclass(frozen=True)
class FacetSummary:
    """Filter options available within a result set."""

    categories: tuple[str, ...]
    tags: tuple[str, ...]
    price_range: PriceRange


@dataclass(frozen=True)
class QueryResult:
    """Response of the query pipeline."""

    page: PageResult[Product]
    facets: FacetSummary
    applied: FilterSpec


@dataclass(frozen=True)
class SearchResult:
    """Relevance-ranked search over the whole catalog."""

    results: tuple[Product, ...]
    query: str

    @property
    def count(self) -> int:
        """Number of returned results."""
        return len(self.results)


# ============================================================================
# Catalog Insights
# ============================================================================


class StockStatus(str, Enum):
    """Inventory display status."""

    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


@dataclass(frozen=True)
class InventoryStatus:
    """User-facing availability derived from inventory data."""

    status: StockStatus
    message: str
    can_order: bool
    urgency: str = "none"


@dataclass(frozen=True)
class CatalogStats:
    """Aggregate numbers over the whole catalog."""

    total_products: int
    total_categories: int
    in_stock: int
    out_of_stock: int
    low_stock: int
    featured: int
    average_price: int
    inventory_value: int
