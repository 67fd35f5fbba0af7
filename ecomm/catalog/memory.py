"""In-memory catalog stores.

Holds the category graph as an adjacency map keyed by identifier and the
products as a plain list. Used by the ``memory`` backend and as test fakes.
"""

import json
from collections.abc import Callable, Iterable
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ecomm.catalog.entities import (
    Category,
    CategoryNode,
    CategorySnippet,
    Page,
    Product,
    ProductView,
)
from ecomm.catalog.stores import (
    CategoryStore,
    ProductStore,
    compile_name_pattern,
    parse_id,
    validate_window,
)
from ecomm.domain.exceptions import (
    CategoryIntegrityError,
    CategoryNotFoundError,
    InternalError,
)

logger = structlog.get_logger()


# ============================================================================
# Category Store
# ============================================================================


class InMemoryCategoryStore(CategoryStore):
    """Category store backed by a dict from ID to category.

    Example usage:
        store = InMemoryCategoryStore([electronics, laptops])
        node = await store.ancestor_chain(laptops.id)
    """

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        """Initialize store.

        Args:
            categories: Categories to index by ID.
        """
        self._categories: dict[str, Category] = {}
        for category in categories:
            self._categories[category.id.lower()] = category

    def __len__(self) -> int:
        return len(self._categories)

    def get(self, category_id: str) -> Category | None:
        """Get category by normalized ID."""
        return self._categories.get(category_id)

    def _resolve(self, owner: Category, ids: list[str], edge: str) -> list[CategorySnippet]:
        """Look up every ID of an edge list, keeping list order.

        IDs without a stored category are skipped.
        """
        snippets = []
        for related_id in ids:
            related = self._categories.get(related_id.lower())
            if related is None:
                logger.warning(
                    "Dangling category reference",
                    category_id=owner.id,
                    edge=edge,
                    missing_id=related_id,
                )
                continue
            snippets.append(related.snippet())
        return snippets

    def _require(self, category_id: str) -> Category:
        oid = parse_id(category_id)
        category = self._categories.get(oid)
        if category is None:
            raise CategoryNotFoundError(oid)
        return category

    async def top_level_categories_with_children(self) -> list[CategoryNode]:
        roots = sorted(
            (c for c in self._categories.values() if c.is_root),
            key=lambda c: (c.name, c.id),
        )
        return [
            CategoryNode(
                category=root,
                children=self._resolve(root, root.children, "children"),
            )
            for root in roots
        ]

    async def ancestor_chain(self, category_id: str) -> CategoryNode:
        category = self._require(category_id)
        return CategoryNode(
            category=category,
            ancestors=self._resolve(category, category.ancestors, "ancestors"),
        )

    async def direct_children(self, category_id: str) -> CategoryNode:
        category = self._require(category_id)
        return CategoryNode(
            category=category,
            children=self._resolve(category, category.children, "children"),
        )


# ============================================================================
# Product Store
# ============================================================================


class InMemoryProductStore(ProductStore):
    """Product store backed by a list, joined against a category store.

    Example usage:
        products = InMemoryProductStore(items, categories=category_store)
        page = await products.list_products(start=0, qty=20)
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        categories: InMemoryCategoryStore | None = None,
    ) -> None:
        """Initialize store.

        Args:
            products: Products to hold.
            categories: Store used for the category join.
        """
        self._products: list[Product] = list(products)
        self._categories = categories if categories is not None else InMemoryCategoryStore()

    def __len__(self) -> int:
        return len(self._products)

    def _page(
        self,
        predicate: Callable[[Product], bool],
        start: int,
        qty: int,
    ) -> Page[ProductView]:
        """Filter, sort, count, window, then join."""
        validate_window(start, qty)
        matches = sorted(
            (p for p in self._products if predicate(p)),
            key=lambda p: p.sort_key,
        )
        total = len(matches)
        data = [self._join(p) for p in matches[start:start + qty]]
        return Page(total=total, data=data)

    def _join(self, product: Product) -> ProductView:
        category = self._categories.get(product.category_id.lower())
        if category is None:
            raise CategoryIntegrityError(product.id, product.category_id)
        return ProductView(product=product, category=category.snippet())

    async def list_products(self, start: int, qty: int) -> Page[ProductView]:
        return self._page(lambda p: True, start, qty)

    async def list_products_by_category(
        self,
        category_id: str,
        start: int,
        qty: int,
    ) -> Page[ProductView]:
        oid = parse_id(category_id, field="category_id")
        return self._page(lambda p: p.category_id.lower() == oid, start, qty)

    async def search_products(
        self,
        name_pattern: str,
        start: int,
        qty: int,
    ) -> Page[ProductView]:
        pattern = compile_name_pattern(name_pattern)
        return self._page(lambda p: pattern.search(p.name) is not None, start, qty)


# ============================================================================
# Snapshot Loading
# ============================================================================


class _SnapshotRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryRecord(_SnapshotRecord):
    """Category as stored in a catalog snapshot."""

    id: str = Field(..., pattern=r"^[0-9a-fA-F]{24}$")
    name: str
    slug: str
    ancestors: list[str] = Field(default_factory=list)
    children: list[str] = Field(default_factory=list)
    last_updated: datetime | None = None

    def to_entity(self) -> Category:
        return Category(
            id=self.id.lower(),
            name=self.name,
            slug=self.slug,
            ancestors=[a.lower() for a in self.ancestors],
            children=[c.lower() for c in self.children],
            last_updated=self.last_updated,
        )


class ProductRecord(_SnapshotRecord):
    """Product as stored in a catalog snapshot."""

    id: str = Field(..., pattern=r"^[0-9a-fA-F]{24}$")
    name: str
    slug: str
    quantity: int = 0
    value: Decimal
    category_id: str
    last_updated: datetime | None = None

    def to_entity(self) -> Product:
        return Product(
            id=self.id.lower(),
            name=self.name,
            slug=self.slug,
            quantity=self.quantity,
            value=self.value,
            category_id=self.category_id.lower(),
            last_updated=self.last_updated,
        )


class CatalogSnapshot(BaseModel):
    """A full catalog export: both collections."""

    categories: list[CategoryRecord] = Field(default_factory=list)
    products: list[ProductRecord] = Field(default_factory=list)


def load_snapshot(path: str | Path) -> tuple[InMemoryCategoryStore, InMemoryProductStore]:
    """Build in-memory stores from a JSON catalog snapshot.

    Args:
        path: Path to a JSON file with ``categories`` and ``products``.

    Returns:
        Category store and product store joined to it.

    Raises:
        InternalError: If the file cannot be read or decoded.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        snapshot = CatalogSnapshot.model_validate(raw)
    except (OSError, ValueError) as e:
        raise InternalError(
            f"Cannot load catalog snapshot: {e}",
            details={"path": str(path)},
        ) from e

    categories = InMemoryCategoryStore(r.to_entity() for r in snapshot.categories)
    products = InMemoryProductStore(
        (r.to_entity() for r in snapshot.products),
        categories=categories,
    )

    logger.info(
        "Catalog snapshot loaded",
        path=str(path),
        category_count=len(categories),
        product_count=len(products),
    )
    return categories, products
