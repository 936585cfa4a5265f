"""In-memory catalog store.

Holds the product collection the query engine reads from. Catalogs can be
built from explicit products or generated deterministically from a seed.
"""

import hashlib
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

import structlog

from catalog_engine.exceptions import DuplicateProductError
from catalog_engine.models import Inventory, Product, ProductImage, Rating

logger = structlog.get_logger()


# ============================================================================
# Constants
# ============================================================================

BRANDS = [
    "Acme",
    "Contoso",
    "Northwind",
    "Fabrikam",
    "Tailwind",
    "Globex",
    "Initech",
    "Umbrella",
]

ADJECTIVES = [
    "Premium",
    "Classic",
    "Essential",
    "Smart",
    "Ultra",
    "Eco",
    "Pro",
    "Compact",
    "Deluxe",
]

# Category slugs with display data, price ranges (cents) and product templates
CATEGORIES = [
    {
        "slug": "electronics",
        "name": "Electronics",
        "description": "Cutting-edge electronic devices, gadgets, and accessories",
        "price_range": (1999, 49999),
        "templates": [
            ("{adj} Wireless Headphones", ["wireless", "audio", "bluetooth"]),
            ("{adj} Smart Watch", ["wearable", "fitness", "bluetooth"]),
            ("{adj} Portable Speaker", ["audio", "wireless", "outdoor"]),
            ("{adj} USB-C Charger", ["charging", "accessories"]),
        ],
    },
    {
        "slug": "fashion",
        "name": "Fashion & Apparel",
        "description": "Trendy clothing, shoes, and accessories for all occasions",
        "price_range": (1499, 19999),
        "templates": [
            ("{adj} Leather Jacket", ["leather", "outerwear", "winter"]),
            ("{adj} Cotton T-Shirt", ["cotton", "casual", "summer"]),
            ("{adj} Running Sneakers", ["shoes", "running", "casual"]),
            ("{adj} Wool Scarf", ["wool", "winter", "accessories"]),
        ],
    },
    {
        "slug": "home-living",
        "name": "Home & Living",
        "description": "Furniture, decor, and essentials for your living space",
        "price_range": (999, 89999),
        "templates": [
            ("{adj} Desk Lamp", ["lighting", "office", "led"]),
            ("{adj} Coffee Maker", ["kitchen", "coffee"]),
            ("{adj} Throw Blanket", ["decor", "cotton", "bedroom"]),
            ("{adj} Office Chair", ["furniture", "office", "ergonomic"]),
        ],
    },
    {
        "slug": "sports-outdoors",
        "name": "Sports & Outdoors",
        "description": "Equipment and gear for active lifestyles",
        "price_range": (1999, 29999),
        "templates": [
            ("{adj} Yoga Mat", ["yoga", "fitness", "eco-friendly"]),
            ("{adj} Hiking Backpack", ["hiking", "outdoor", "travel"]),
            ("{adj} Water Bottle", ["hydration", "outdoor", "eco-friendly"]),
            ("{adj} Camping Tent", ["camping", "outdoor"]),
        ],
    },
    {
        "slug": "beauty-health",
        "name": "Beauty & Health",
        "description": "Personal care, cosmetics, and wellness products",
        "price_range": (599, 9999),
        "templates": [
            ("{adj} Face Serum", ["skincare", "organic"]),
            ("{adj} Electric Toothbrush", ["dental", "rechargeable"]),
            ("{adj} Essential Oil Set", ["aromatherapy", "organic", "wellness"]),
            ("{adj} Hair Dryer", ["haircare", "styling"]),
        ],
    },
]

# Catalog "now" for generated timestamps, fixed so seeds reproduce exactly
CATALOG_EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class CategoryInfo:
    """Category record with a product count derived from the catalog."""

    slug: str
    name: str
    description: str
    product_count: int


# ============================================================================
# Product Store
# ============================================================================


class ProductStore:
    """Read-only product collection.

    Lookups by id and slug are indexed. `all()` returns a tuple snapshot,
    so a query never sees a collection that changes underneath it.
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        """Initialize store.

        Args:
            products: Products in catalog order.

        Raises:
            DuplicateProductError: If two products share an id or slug.
        """
        self._products: tuple[Product, ...] = tuple(products)
        self._by_id: dict[str, Product] = {}
        self._by_slug: dict[str, Product] = {}

        for product in self._products:
            if product.id in self._by_id:
                raise DuplicateProductError("id", product.id)
            if product.slug in self._by_slug:
                raise DuplicateProductError("slug", product.slug)
            self._by_id[product.id] = product
            self._by_slug[product.slug] = product

    def __len__(self) -> int:
        return len(self._products)

    def all(self) -> tuple[Product, ...]:
        """Snapshot of every product in catalog order."""
        return self._products

    def by_id(self, product_id: str) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product or None if not found.
        """
        return self._by_id.get(product_id)

    def by_slug(self, slug: str) -> Product | None:
        """Get product by slug.

        Args:
            slug: Product slug.

        Returns:
            Product or None if not found.
        """
        return self._by_slug.get(slug)

    def categories(self) -> list[CategoryInfo]:
        """Known categories with live product counts.

        Categories from the seed table come first in their listed order,
        followed by any other category slugs found in the data.

        Returns:
            Category records.
        """
        counts: dict[str, int] = {}
        for product in self._products:
            counts[product.category] = counts.get(product.category, 0) + 1

        known = {c["slug"] for c in CATEGORIES}
        result = [
            CategoryInfo(
                slug=c["slug"],
                name=c["name"],
                description=c["description"],
                product_count=counts.get(c["slug"], 0),
            )
            for c in CATEGORIES
        ]
        result.extend(
            CategoryInfo(slug=slug, name=slug, description="", product_count=count)
            for slug, count in counts.items()
            if slug not in known
        )
        return result

    # ------------------------------------------------------------------
    # Deterministic generation
    # ------------------------------------------------------------------

    @classmethod
    def generate(cls, seed: int = 42, products_per_category: int = 5) -> "ProductStore":
        """Generate a reproducible catalog.

        The same seed and size always produce the same products.

        Args:
            seed: Random seed.
            products_per_category: Products per category.

        Returns:
            Populated store.
        """
        products = [
            _generate_product(seed, category, index)
            for category in CATEGORIES
            for index in range(products_per_category)
        ]
        logger.info(
            "Catalog generated",
            seed=seed,
            product_count=len(products),
            category_count=len(CATEGORIES),
        )
        return cls(products)


def _deterministic_seed(*args: str | int) -> int:
    """Create deterministic seed from arguments."""
    data = "|".join(str(a) for a in args)
    hash_bytes = hashlib.md5(data.encode()).digest()
    return int.from_bytes(hash_bytes[:4], "big")


def _slugify(text: str) -> str:
    return "-".join("".join(ch if ch.isalnum() else " " for ch in text.lower()).split())


def _generate_product(seed: int, category: dict, index: int) -> Product:
    """Generate one product of a category."""
    rng = random.Random(_deterministic_seed(seed, category["slug"], index))

    brand = rng.choice(BRANDS)
    adj = rng.choice(ADJECTIVES)
    template, tags = category["templates"][index % len(category["templates"])]
    name = f"{brand} {template.format(adj=adj)}"

    product_id = hashlib.md5(f"{category['slug']}:{index}:{seed}".encode()).hexdigest()[:12]
    sku = f"{category['slug'][:3].upper()}-{index:04d}"

    low, high = category["price_range"]
    price = (rng.randint(low, high) // 100) * 100 + 99  # Round to .99
    original_price = None
    if rng.random() < 0.3:
        original_price = price + rng.randint(5, 40) * 100

    quantity = rng.choice([0, rng.randint(1, 10), rng.randint(11, 200)])
    inventory = Inventory(
        in_stock=quantity > 0,
        quantity=quantity,
        low_stock_threshold=10,
        reserved_quantity=rng.randint(0, min(quantity, 5)),
    )

    rating = None
    if rng.random() < 0.85:
        rating = Rating(average=round(rng.uniform(3.0, 5.0), 1), count=rng.randint(1, 500))

    created_at = CATALOG_EPOCH - timedelta(days=rng.randint(0, 365), minutes=index)
    item_label = template.format(adj="").strip().lower()

    return Product(
        id=f"prod_{product_id}",
        slug=f"{_slugify(name)}-{index}",
        sku=sku,
        name=name,
        description=f"{adj} {item_label} from {brand}.",
        long_description=(
            f"The {name} is part of our {adj.lower()} {category['name'].lower()} "
            f"range. Tagged: {', '.join(tags)}."
        ),
        price=price,
        original_price=original_price,
        currency="USD",
        category=category["slug"],
        tags=tuple(tags),
        inventory=inventory,
        images=(
            ProductImage(
                url=f"https://picsum.photos/seed/{product_id[:8]}/400/400",
                alt=name,
                is_primary=True,
            ),
        ),
        featured=rng.random() < 0.2,
        is_new=(CATALOG_EPOCH - created_at).days <= 30,
        rating=rating,
        attributes={"brand": brand},
        created_at=created_at,
        updated_at=created_at,
        published_at=created_at,
    )


# Global product store instance
_product_store: ProductStore | None = None


def get_product_store(seed: int = 42, products_per_category: int = 5) -> ProductStore:
    """Get or create the process-wide product store.

    Args:
        seed: Random seed.
        products_per_category: Products per category.

    Returns:
        ProductStore instance.
    """
    global _product_store
    if _product_store is None:
        _product_store = ProductStore.generate(seed, products_per_category)
    return _product_store
