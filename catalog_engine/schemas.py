"""Pydantic schemas for the catalog API.

Response envelopes use camelCase field names on the wire.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog_engine.models import (
    CatalogStats,
    FacetSummary,
    PaginationMeta,
    Product,
    QueryResult,
    SearchResult,
)
from catalog_engine.store import CategoryInfo


def utc_timestamp() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# Product Schemas
# ============================================================================


class InventorySchema(CamelModel):
    """Product inventory."""

    in_stock: bool
    quantity: int = Field(..., ge=0)
    low_stock_threshold: int = Field(..., ge=0)
    reserved_quantity: int = Field(..., ge=0)


class RatingSchema(CamelModel):
    """Product rating."""

    average: float = Field(..., ge=0, le=5)
    count: int = Field(..., ge=0)


class ProductImageSchema(CamelModel):
    """Product image."""

    url: str
    alt: str
    is_primary: bool


class ProductSchema(CamelModel):
    """Product details."""

    id: str = Field(..., description="Product ID")
    slug: str = Field(..., description="URL-friendly identifier")
    sku: str = Field(..., description="Stock Keeping Unit")
    name: str = Field(..., description="Product name")
    description: str = Field(..., description="Short description")
    long_description: str | None = Field(None, description="Detailed description")
    price: int = Field(..., ge=0, description="Price in cents")
    original_price: int | None = Field(None, description="Original price in cents")
    currency: str = Field(default="USD", description="Currency code")
    category: str = Field(..., description="Category slug")
    subcategory: str | None = Field(None, description="Subcategory slug")
    tags: list[str] = Field(default_factory=list, description="Product tags")
    inventory: InventorySchema
    images: list[ProductImageSchema] = Field(default_factory=list)
    featured: bool = False
    is_new: bool = False
    rating: RatingSchema | None = None
    attributes: dict[str, str | int | float | bool] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductSchema":
        """Build schema from a product record."""
        return cls.model_validate(product)


# ============================================================================
# Listing Schemas
# ============================================================================


class PaginationSchema(CamelModel):
    """Pagination metadata."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_meta(cls, meta: PaginationMeta) -> "PaginationSchema":
        """Build schema from pagination metadata."""
        return cls.model_validate(meta)


class PriceRangeSchema(BaseModel):
    """Price range in cents."""

    min: int
    max: int


class AvailableFiltersSchema(CamelModel):
    """Filter options available within the result."""

    price_range: PriceRangeSchema
    categories: list[str]
    tags: list[str]

    @classmethod
    def from_facets(cls, facets: FacetSummary) -> "AvailableFiltersSchema":
        """Build schema from a facet summary."""
        return cls(
            price_range=PriceRangeSchema(
                min=facets.price_range.min, max=facets.price_range.max
            ),
            categories=list(facets.categories),
            tags=list(facets.tags),
        )


class FiltersSchema(BaseModel):
    """Applied and available filters."""

    applied: dict[str, Any]
    available: AvailableFiltersSchema


class ProductListResponse(BaseModel):
    """Paginated product list response."""

    success: bool = True
    data: list[ProductSchema]
    pagination: PaginationSchema
    filters: FiltersSchema
    timestamp: datetime = Field(default_factory=utc_timestamp)

    @classmethod
    def from_result(cls, result: QueryResult) -> "ProductListResponse":
        """Build response from a query result."""
        return cls(
            data=[ProductSchema.from_product(p) for p in result.page.data],
            pagination=PaginationSchema.from_meta(result.page.pagination),
            filters=FiltersSchema(
                applied=result.applied.applied(),
                available=AvailableFiltersSchema.from_facets(result.facets),
            ),
        )


class SearchDataSchema(BaseModel):
    """Search results with the echoed query."""

    results: list[ProductSchema]
    query: str
    count: int


class SearchResponse(BaseModel):
    """Search endpoint response."""

    success: bool = True
    data: SearchDataSchema
    timestamp: datetime = Field(default_factory=utc_timestamp)

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResponse":
        """Build response from a search result."""
        return cls(
            data=SearchDataSchema(
                results=[ProductSchema.from_product(p) for p in result.results],
                query=result.query,
                count=result.count,
            )
        )


class ProductResponse(BaseModel):
    """Single product response."""

    success: bool = True
    data: ProductSchema
    timestamp: datetime = Field(default_factory=utc_timestamp)


# ============================================================================
# Catalog Schemas
# ============================================================================


class CategorySchema(CamelModel):
    """Category with product count."""

    slug: str
    name: str
    description: str
    product_count: int

    @classmethod
    def from_info(cls, info: CategoryInfo) -> "CategorySchema":
        """Build schema from a category record."""
        return cls.model_validate(info)


class CategoryListResponse(BaseModel):
    """Category listing response."""

    success: bool = True
    data: list[CategorySchema]
    count: int
    timestamp: datetime = Field(default_factory=utc_timestamp)


class StatsSchema(CamelModel):
    """Catalog statistics."""

    total_products: int
    total_categories: int
    in_stock: int
    out_of_stock: int
    low_stock: int
    featured: int
    average_price: int
    inventory_value: int

    @classmethod
    def from_stats(cls, stats: CatalogStats) -> "StatsSchema":
        """Build schema from catalog statistics."""
        return cls.model_validate(stats)


class StatsResponse(BaseModel):
    """Catalog statistics response."""

    success: bool = True
    data: StatsSchema
    timestamp: datetime = Field(default_factory=utc_timestamp)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Error body."""

    message: str
    code: str
    details: Any = None


class ErrorResponse(CamelModel):
    """Error response envelope."""

    success: bool = False
    error: ErrorDetail
    request_id: str | None = None
    timestamp: datetime = Field(default_factory=utc_timestamp)
