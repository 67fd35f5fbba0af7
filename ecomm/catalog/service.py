"""Catalog query engine.

Composes the category and product stores into the six read operations
the API exposes: categories menu, category breadcrumb, categories side
menu, products, products from category, and product search.

Every operation is a single stateless round trip: validate the input
shape, delegate to a store, map records to response schemas. Store
failures propagate unchanged; anything outside the catalog error
taxonomy is reported as an internal error.
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from ecomm.catalog.entities import CategoryNode, CategorySnippet, Page, ProductView
from ecomm.catalog.schemas import (
    CategoriesResponse,
    CategorySchema,
    CategorySnippetSchema,
    ProductSchema,
    ProductsResponse,
)
from ecomm.catalog.stores import (
    CategoryStore,
    ProductStore,
    compile_name_pattern,
    parse_id,
    validate_window,
)
from ecomm.domain.exceptions import CatalogError, DeadlineExceededError, InternalError
from ecomm.domain.value_objects import round_up_to_cents

T = TypeVar("T")

logger = structlog.get_logger()


# ============================================================================
# Converters
# ============================================================================


def snippet_to_schema(snippet: CategorySnippet) -> CategorySnippetSchema:
    """Convert a category snippet to its response schema."""
    return CategorySnippetSchema(id=snippet.id, name=snippet.name, slug=snippet.slug)


def node_to_schema(node: CategoryNode) -> CategorySchema:
    """Convert a resolved category node to its response schema."""
    category = node.category
    return CategorySchema(
        id=category.id,
        name=category.name,
        slug=category.slug,
        children=(
            [snippet_to_schema(c) for c in node.children]
            if node.children is not None
            else None
        ),
        ancestors=(
            [snippet_to_schema(a) for a in node.ancestors]
            if node.ancestors is not None
            else None
        ),
        last_updated=category.last_updated,
    )


def product_to_schema(view: ProductView) -> ProductSchema:
    """Convert a joined product to its response schema.

    The stored value is rounded up to cents here, at emission time.
    """
    product = view.product
    return ProductSchema(
        id=product.id,
        name=product.name,
        slug=product.slug,
        quantity=product.quantity,
        value=float(round_up_to_cents(product.value)),
        category=snippet_to_schema(view.category),
        last_updated=product.last_updated,
    )


def page_to_response(page: Page[ProductView]) -> ProductsResponse:
    """Convert a product page to its response schema."""
    return ProductsResponse(
        total=page.total,
        data=[product_to_schema(view) for view in page.data],
    )


# ============================================================================
# Query Engine
# ============================================================================


class CatalogQueryEngine:
    """Read-only query engine over injected stores.

    Example usage:
        engine = CatalogQueryEngine(category_store, product_store)
        menu = await engine.categories_menu()
        page = await engine.search_products("drag", start=0, qty=20)
    """

    def __init__(
        self,
        categories: CategoryStore,
        products: ProductStore,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            categories: Category store.
            products: Product store.
            timeout_seconds: Deadline applied to every store call.
                None disables the deadline.
        """
        self.category_store = categories
        self.product_store = products
        self.timeout_seconds = timeout_seconds

    async def _call(self, operation: str, call: Awaitable[T]) -> T:
        """Await a store call under the deadline.

        Cancellation of the calling task propagates as
        ``asyncio.CancelledError``.

        Args:
            operation: Operation name for errors and logs.
            call: The pending store call.

        Returns:
            The store result.

        Raises:
            DeadlineExceededError: If the deadline expires first.
            CatalogError: Store failures, unchanged.
            InternalError: Any other store exception.
        """
        deadline = asyncio.timeout(self.timeout_seconds)
        try:
            async with deadline:
                return await call
        except TimeoutError as e:
            # A TimeoutError raised by the store itself is not our deadline
            if not deadline.expired():
                logger.exception("Unexpected store failure", operation=operation, error=str(e))
                raise InternalError(f"Unknown Internal Error: {e}") from e
            logger.warning(
                "Store call exceeded deadline",
                operation=operation,
                timeout_seconds=self.timeout_seconds,
            )
            raise DeadlineExceededError(operation, self.timeout_seconds or 0.0) from e
        except CatalogError:
            raise
        except Exception as e:
            logger.exception("Unexpected store failure", operation=operation, error=str(e))
            raise InternalError(f"Unknown Internal Error: {e}") from e

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def categories_menu(self) -> CategoriesResponse:
        """Get root categories with their direct children.

        Returns:
            Root categories, children populated.
        """
        logger.info("CategoriesMenu called")
        nodes = await self._call(
            "CategoriesMenu",
            self.category_store.top_level_categories_with_children(),
        )
        return CategoriesResponse(categories=[node_to_schema(n) for n in nodes])

    async def category_breadcrumb(self, category_id: str) -> CategoriesResponse:
        """Get a category with its ancestor chain.

        Args:
            category_id: Target category ID.

        Returns:
            The single target category, ancestors populated.

        Raises:
            InvalidIdentifierError: If the ID is malformed.
            CategoryNotFoundError: If no category has the ID.
        """
        logger.info("CategoryBreadcrumb called", category_id=category_id)
        oid = parse_id(category_id)
        node = await self._call("CategoryBreadcrumb", self.category_store.ancestor_chain(oid))
        return CategoriesResponse(categories=[node_to_schema(node)])

    async def categories_side_menu(self, category_id: str) -> CategoriesResponse:
        """Get a category with its direct children.

        Args:
            category_id: Target category ID.

        Returns:
            The single target category, children populated.

        Raises:
            InvalidIdentifierError: If the ID is malformed.
            CategoryNotFoundError: If no category has the ID.
        """
        logger.info("CategoriesSideMenu called", category_id=category_id)
        oid = parse_id(category_id)
        node = await self._call("CategoriesSideMenu", self.category_store.direct_children(oid))
        return CategoriesResponse(categories=[node_to_schema(node)])

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def products(self, start: int, qty: int) -> ProductsResponse:
        """Get one page of all products, sorted by name.

        Args:
            start: Zero-based offset.
            qty: Page size.

        Returns:
            Page of products and the total product count.
        """
        logger.info("Products called", start=start, qty=qty)
        validate_window(start, qty)
        page = await self._call("Products", self.product_store.list_products(start, qty))
        return page_to_response(page)

    async def products_from_category(
        self,
        category_id: str,
        start: int,
        qty: int,
    ) -> ProductsResponse:
        """Get one page of a category's products, sorted by name.

        An unknown category yields an empty page, not an error.

        Args:
            category_id: Category to filter on.
            start: Zero-based offset.
            qty: Page size.

        Returns:
            Page of products and the filtered count.

        Raises:
            InvalidIdentifierError: If the ID is malformed.
        """
        logger.info(
            "ProductsFromCategory called",
            category_id=category_id,
            start=start,
            qty=qty,
        )
        oid = parse_id(category_id, field="category_id")
        validate_window(start, qty)
        page = await self._call(
            "ProductsFromCategory",
            self.product_store.list_products_by_category(oid, start, qty),
        )
        return page_to_response(page)

    async def search_products(self, name: str, start: int, qty: int) -> ProductsResponse:
        """Get one page of products whose name matches ``name``.

        Matching ignores case. An empty name matches every product.

        Args:
            name: Regular expression searched for anywhere in the name.
            start: Zero-based offset.
            qty: Page size.

        Returns:
            Page of matching products and the match count.

        Raises:
            InvalidArgumentError: If ``name`` is not a valid expression.
        """
        logger.info("SearchProducts called", name=name, start=start, qty=qty)
        compile_name_pattern(name)
        validate_window(start, qty)
        page = await self._call(
            "SearchProducts",
            self.product_store.search_products(name, start, qty),
        )
        return page_to_response(page)
