"""Shared fixtures for catalog engine tests."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

import catalog_engine.store as store_module
from catalog_engine.models import Inventory, Product, Rating
from catalog_engine.service import CatalogQueryService
from catalog_engine.store import ProductStore

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)

ProductFactory = Callable[..., Product]


@pytest.fixture(autouse=True)
def reset_store():
    """Reset the process-wide product store before each test."""
    store_module._product_store = None
    yield
    store_module._product_store = None


@pytest.fixture
def make_product() -> ProductFactory:
    """Factory for products with sensible defaults."""
    counter = {"n": 0}

    def factory(**overrides: Any) -> Product:
        counter["n"] += 1
        n = counter["n"]
        in_stock = overrides.pop("in_stock", True)
        quantity = overrides.pop("quantity", 50 if in_stock else 0)
        fields: dict[str, Any] = {
            "id": f"prod_{n:03d}",
            "slug": f"product-{n}",
            "sku": f"SKU-{n:03d}",
            "name": f"Product {n}",
            "description": "A product.",
            "price": 1000,
            "category": "electronics",
            "inventory": Inventory(in_stock=in_stock, quantity=quantity),
            "created_at": BASE_TIME + timedelta(days=n),
            "updated_at": BASE_TIME + timedelta(days=n),
        }
        fields.update(overrides)
        return Product(**fields)

    return factory


@pytest.fixture
def headphones(make_product: ProductFactory) -> Product:
    """Featured, in-stock wireless headphones ($29.99)."""
    return make_product(
        id="prod_headphones",
        slug="wireless-headphones",
        name="Wireless Headphones",
        description="Over-ear sound with long battery life.",
        price=2999,
        tags=("wireless", "audio"),
        featured=True,
        in_stock=True,
    )


@pytest.fixture
def mouse(make_product: ProductFactory) -> Product:
    """In-stock wired mouse ($9.99)."""
    return make_product(
        id="prod_mouse",
        slug="wired-mouse",
        name="Wired Mouse",
        description="Three-button optical mouse.",
        price=999,
        tags=("wired",),
        in_stock=True,
    )


@pytest.fixture
def catalog(make_product: ProductFactory) -> list[Product]:
    """Small mixed catalog across three categories."""
    return [
        make_product(
            name="Wireless Earbuds",
            price=4999,
            tags=("wireless", "audio"),
            rating=Rating(average=4.5, count=120),
            featured=True,
        ),
        make_product(
            name="Leather Jacket",
            category="fashion",
            price=19999,
            original_price=24999,
            tags=("leather", "winter"),
            rating=Rating(average=4.8, count=40),
        ),
        make_product(
            name="Cotton T-Shirt",
            category="fashion",
            price=1999,
            tags=("cotton", "summer"),
            in_stock=False,
        ),
        make_product(
            name="Desk Lamp",
            category="home-living",
            price=3999,
            tags=("lighting", "office"),
            quantity=5,
            rating=Rating(average=3.9, count=12),
        ),
        make_product(
            name="USB-C Charger",
            price=1999,
            tags=("charging", "accessories"),
            is_new=True,
        ),
        make_product(
            name="Office Chair",
            category="home-living",
            price=29999,
            tags=("furniture", "office"),
            is_new=True,
            rating=Rating(average=4.5, count=8),
        ),
    ]


@pytest.fixture
def product_store(catalog: list[Product]) -> ProductStore:
    """Store holding the mixed catalog."""
    return ProductStore(catalog)


@pytest.fixture
def service(product_store: ProductStore) -> CatalogQueryService:
    """Query service over the mixed catalog."""
    return CatalogQueryService(product_store, default_limit=12)


@pytest.fixture
def client() -> TestClient:
    """Create test client over a generated catalog."""
    from catalog_engine.main import app

    with TestClient(app) as client:
        yield client
