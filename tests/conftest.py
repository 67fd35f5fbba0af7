"""Shared fixtures for catalog tests.

Builds a small category tree and product set used across store, engine
and API tests:

    Electronics (A)
      Computers (B)
        Laptops (C)
      Audio (D)
    Toys (E)
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ecomm.catalog.entities import Category, Product
from ecomm.catalog.memory import InMemoryCategoryStore, InMemoryProductStore
from ecomm.catalog.service import CatalogQueryEngine


def oid(n: int) -> str:
    """Build a well-formed 24-hex identifier from an integer."""
    return f"{n:024x}"


ELECTRONICS = oid(0xA)
COMPUTERS = oid(0xB)
LAPTOPS = oid(0xC)
AUDIO = oid(0xD)
TOYS = oid(0xE)
MISSING = oid(0xFFFF)

UPDATED = datetime(2026, 1, 19, 12, 0, tzinfo=timezone.utc)


def make_categories() -> list[Category]:
    """Build the sample category tree."""
    return [
        Category(
            id=ELECTRONICS,
            name="Electronics",
            slug="electronics",
            children=[COMPUTERS, AUDIO],
            last_updated=UPDATED,
        ),
        Category(
            id=COMPUTERS,
            name="Computers",
            slug="computers",
            ancestors=[ELECTRONICS],
            children=[LAPTOPS],
            last_updated=UPDATED,
        ),
        Category(
            id=LAPTOPS,
            name="Laptops",
            slug="laptops",
            ancestors=[COMPUTERS, ELECTRONICS],
            last_updated=UPDATED,
        ),
        Category(
            id=AUDIO,
            name="Audio",
            slug="audio",
            ancestors=[ELECTRONICS],
            last_updated=UPDATED,
        ),
        Category(
            id=TOYS,
            name="Toys",
            slug="toys",
            last_updated=UPDATED,
        ),
    ]


def make_widgets(count: int = 12, category_id: str = LAPTOPS) -> list[Product]:
    """Build products named Widget-1 .. Widget-<count>."""
    return [
        Product(
            id=oid(0x1000 + i),
            name=f"Widget-{i}",
            slug=f"widget-{i}",
            quantity=i,
            value=Decimal("10.00") + i,
            category_id=category_id,
            last_updated=UPDATED,
        )
        for i in range(1, count + 1)
    ]


def make_named_products() -> list[Product]:
    """Build products for search tests, spread over two categories."""
    names = ["Dragonfly", "dragnet", "DRAGON", "Teddy Bear", "Headphones"]
    categories = [TOYS, TOYS, TOYS, TOYS, AUDIO]
    return [
        Product(
            id=oid(0x2000 + i),
            name=name,
            slug=name.lower().replace(" ", "-"),
            quantity=5,
            value=Decimal("19.995"),
            category_id=category_id,
            last_updated=UPDATED,
        )
        for i, (name, category_id) in enumerate(zip(names, categories))
    ]


@pytest.fixture
def categories() -> list[Category]:
    """Sample category tree."""
    return make_categories()


@pytest.fixture
def category_store(categories: list[Category]) -> InMemoryCategoryStore:
    """In-memory category store over the sample tree."""
    return InMemoryCategoryStore(categories)


@pytest.fixture
def products() -> list[Product]:
    """Twelve widgets plus the search products."""
    return make_widgets() + make_named_products()


@pytest.fixture
def product_store(
    products: list[Product],
    category_store: InMemoryCategoryStore,
) -> InMemoryProductStore:
    """In-memory product store joined to the sample tree."""
    return InMemoryProductStore(products, categories=category_store)


@pytest.fixture
def query_engine(
    category_store: InMemoryCategoryStore,
    product_store: InMemoryProductStore,
) -> CatalogQueryEngine:
    """Query engine over the in-memory stores."""
    return CatalogQueryEngine(category_store, product_store, timeout_seconds=5.0)
