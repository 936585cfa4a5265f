"""Catalog exceptions.

The query pipeline itself never raises: every FilterSpec is valid and empty
results are normal. These errors cover the edges around it, namely lookups
by identifier and malformed catalog data handed in by the store.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors should inherit from this class to allow
    catching them at the API layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProductNotFoundError(CatalogError):
    """Raised when a product lookup by id or slug finds nothing."""

    def __init__(self, key: str, value: str) -> None:
        """Initialize product not found error.

        Args:
            key: Lookup field ("id" or "slug").
            value: Value that was looked up.
        """
        super().__init__(
            f'Product with {key} "{value}" not found',
            details={"key": key, "value": value},
        )


class DuplicateProductError(CatalogError):
    """Raised when a store is built from products sharing an id or slug."""

    def __init__(self, key: str, value: str) -> None:
        """Initialize duplicate product error.

        Args:
            key: Field that collided ("id" or "slug").
            value: Colliding value.
        """
        super().__init__(
            f"Duplicate product {key}: {value}",
            details={"key": key, "value": value},
        )


class InvalidProductError(CatalogError, ValueError):
    """Raised when a product record violates its own invariants."""

    def __init__(self, product_id: str, reason: str) -> None:
        """Initialize invalid product error.

        Args:
            product_id: ID of the offending product.
            reason: Explanation of the violated invariant.
        """
        super().__init__(
            f"Invalid product {product_id}: {reason}",
            details={"product_id": product_id, "reason": reason},
        )
