"""Catalog API main application.

Thin HTTP adapter over the catalog query engine: parses query parameters,
runs the query service and wraps results in response envelopes.
"""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncGenerator

import structlog
from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from catalog_engine.config import settings
from catalog_engine.exceptions import CatalogError, ProductNotFoundError
from catalog_engine.logging import configure_logging
from catalog_engine.middleware import get_request_id, setup_middleware
from catalog_engine.params import parse_filter_params, parse_positive_int
from catalog_engine.schemas import (
    CategoryListResponse,
    CategorySchema,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    SearchResponse,
    StatsResponse,
    StatsSchema,
)
from catalog_engine.service import CatalogQueryService
from catalog_engine.store import get_product_store

configure_logging(settings.log_level, json=settings.log_json)
logger = structlog.get_logger()


# ============================================================================
# Application Lifecycle
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    store = get_product_store(
        seed=settings.random_seed,
        products_per_category=settings.products_per_category,
    )
    logger.info("Catalog loaded", product_count=len(store))

    yield

    logger.info("Shutting down catalog API")


app = FastAPI(
    title="Catalog API",
    description="Product catalog filtering, search, sorting and pagination",
    version=settings.api_version,
    lifespan=lifespan,
)

setup_middleware(app)


# ============================================================================
# Dependencies
# ============================================================================


def get_service() -> CatalogQueryService:
    """Get catalog query service dependency."""
    store = get_product_store(
        seed=settings.random_seed,
        products_per_category=settings.products_per_category,
    )
    return CatalogQueryService(store)


# ============================================================================
# Health Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.api_version,
    )


# ============================================================================
# Product Endpoints
# ============================================================================


@app.get("/products", response_model=ProductListResponse, tags=["Products"])
async def list_products(
    request: Request,
    service: Annotated[CatalogQueryService, Depends(get_service)],
) -> ProductListResponse:
    """List products with filtering, search, sorting and pagination.

    Query parameters: category, minPrice, maxPrice, inStock, tags
    (comma-separated), search, sortBy (price-asc, price-desc, name, newest,
    rating), page, limit. Invalid values are ignored.

    Returns:
        Paginated product list with applied and available filters.
    """
    spec = parse_filter_params(request.query_params)
    return ProductListResponse.from_result(service.query(spec))


@app.get(
    "/products/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Products"],
)
async def search_products(
    service: Annotated[CatalogQueryService, Depends(get_service)],
    q: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> SearchResponse:
    """Search products with relevance ranking.

    Args:
        q: Search query (required).
        limit: Maximum results (default 20, capped at 100).

    Returns:
        Ranked search results.

    Raises:
        HTTPException: If the query is missing or blank.
    """
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "MISSING_QUERY",
                "message": "Search query (q) is required",
                "details": 'Provide a search query using the "q" parameter',
            },
        )

    return SearchResponse.from_result(
        service.perform_search(q, parse_positive_int(limit))
    )


@app.get(
    "/products/slug/{slug}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Products"],
)
async def get_product_by_slug(
    slug: str,
    service: Annotated[CatalogQueryService, Depends(get_service)],
) -> ProductResponse:
    """Get product details by slug.

    Raises:
        ProductNotFoundError: If no product has the slug.
    """
    product = service.get_product_by_slug(slug)
    if product is None:
        raise ProductNotFoundError("slug", slug)
    return ProductResponse(data=ProductSchema.from_product(product))


@app.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Products"],
)
async def get_product(
    product_id: str,
    service: Annotated[CatalogQueryService, Depends(get_service)],
) -> ProductResponse:
    """Get product details by ID.

    Raises:
        ProductNotFoundError: If no product has the ID.
    """
    product = service.get_product(product_id)
    if product is None:
        raise ProductNotFoundError("ID", product_id)
    return ProductResponse(data=ProductSchema.from_product(product))


# ============================================================================
# Catalog Endpoints
# ============================================================================


@app.get("/categories", response_model=CategoryListResponse, tags=["Catalog"])
async def list_categories(
    service: Annotated[CatalogQueryService, Depends(get_service)],
) -> CategoryListResponse:
    """List categories with product counts."""
    categories = [CategorySchema.from_info(c) for c in service.store.categories()]
    return CategoryListResponse(data=categories, count=len(categories))


@app.get("/stats", response_model=StatsResponse, tags=["Catalog"])
async def get_stats(
    service: Annotated[CatalogQueryService, Depends(get_service)],
) -> StatsResponse:
    """Get catalog statistics."""
    return StatsResponse(data=StatsSchema.from_stats(service.stats()))


# ============================================================================
# Error Handlers
# ============================================================================


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: object = None,
) -> JSONResponse:
    """Build an error envelope response."""
    body = ErrorResponse(
        error=ErrorDetail(message=message, code=code, details=details),
        request_id=get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(ProductNotFoundError)
async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
    """Map missing products to 404."""
    return error_response(request, status.HTTP_404_NOT_FOUND, "NOT_FOUND", exc.message)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    """Map other catalog errors to 400."""
    logger.warning("Catalog error", path=request.url.path, error=exc.message)
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "CATALOG_ERROR",
        exc.message,
        exc.details,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        return error_response(
            request,
            exc.status_code,
            detail.get("code", "ERROR"),
            detail.get("message", str(detail)),
            detail.get("details"),
        )
    return error_response(request, exc.status_code, "ERROR", str(detail))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )
