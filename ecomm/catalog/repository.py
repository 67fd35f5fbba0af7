"""SQL-backed catalog stores.

Implements the category and product stores on top of async SQLAlchemy.
Each operation opens its own session from the shared factory; nothing is
written.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ecomm.catalog.entities import CategoryNode, CategorySnippet, Page, ProductView
from ecomm.catalog.models import CategoryModel, ProductModel
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
    StorageError,
)

logger = structlog.get_logger()


@asynccontextmanager
async def _read_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Open a read-only session, translating driver failures.

    Yields:
        AsyncSession for the duration of one store operation.

    Raises:
        StorageError: If the database raises.
    """
    try:
        async with session_factory() as session:
            yield session
    except SQLAlchemyError as e:
        logger.error("Storage backend failure", error=str(e))
        raise StorageError(f"Unknown Internal Error: {e}") from e


class SqlCategoryStore(CategoryStore):
    """Category store over the ``categories`` table.

    Edge lists are resolved with a single ``id IN (...)`` lookup per
    request, never by walking parent pointers.

    Example usage:
        store = SqlCategoryStore(get_session_factory())
        node = await store.ancestor_chain("5f1d7c2e9b1e8a3d4c6f0a12")
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: Factory shared across concurrent requests.
        """
        self.session_factory = session_factory

    async def top_level_categories_with_children(self) -> list[CategoryNode]:
        async with _read_session(self.session_factory) as session:
            query = (
                select(CategoryModel)
                .where(func.json_array_length(CategoryModel.ancestors) == 0)
                .order_by(CategoryModel.name.asc(), CategoryModel.id.asc())
            )
            roots = (await session.execute(query)).scalars().all()

            child_ids = {child_id for root in roots for child_id in root.children or []}
            by_id = await self._fetch_snippets(session, child_ids)

        return [
            CategoryNode(
                category=root.to_entity(),
                children=self._ordered(root, root.children, by_id, "children"),
            )
            for root in roots
        ]

    async def ancestor_chain(self, category_id: str) -> CategoryNode:
        oid = parse_id(category_id)
        async with _read_session(self.session_factory) as session:
            category = await self._get(session, oid)
            by_id = await self._fetch_snippets(session, set(category.ancestors or []))

        return CategoryNode(
            category=category.to_entity(),
            ancestors=self._ordered(category, category.ancestors, by_id, "ancestors"),
        )

    async def direct_children(self, category_id: str) -> CategoryNode:
        oid = parse_id(category_id)
        async with _read_session(self.session_factory) as session:
            category = await self._get(session, oid)
            by_id = await self._fetch_snippets(session, set(category.children or []))

        return CategoryNode(
            category=category.to_entity(),
            children=self._ordered(category, category.children, by_id, "children"),
        )

    async def _get(self, session: AsyncSession, category_id: str) -> CategoryModel:
        query = select(CategoryModel).where(CategoryModel.id == category_id)
        category = (await session.execute(query)).scalar_one_or_none()
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def _fetch_snippets(
        self,
        session: AsyncSession,
        ids: set[str],
    ) -> dict[str, CategorySnippet]:
        """Resolve a set of IDs to snippets in one query."""
        if not ids:
            return {}
        query = select(CategoryModel.id, CategoryModel.name, CategoryModel.slug).where(
            CategoryModel.id.in_(ids)
        )
        rows = (await session.execute(query)).all()
        return {row.id: CategorySnippet(id=row.id, name=row.name, slug=row.slug) for row in rows}

    def _ordered(
        self,
        owner: CategoryModel,
        ids: Sequence[str] | None,
        by_id: dict[str, CategorySnippet],
        edge: str,
    ) -> list[CategorySnippet]:
        """Arrange resolved snippets in stored edge order."""
        snippets = []
        for related_id in ids or []:
            snippet = by_id.get(related_id)
            if snippet is None:
                logger.warning(
                    "Dangling category reference",
                    category_id=owner.id,
                    edge=edge,
                    missing_id=related_id,
                )
                continue
            snippets.append(snippet)
        return snippets


class SqlProductStore(ProductStore):
    """Product store over the ``products`` table.

    Each listing issues a count over the filtered set, then a windowed
    query outer-joined to ``categories``. A missing category on any
    windowed row fails the request.

    Example usage:
        store = SqlProductStore(get_session_factory())
        page = await store.search_products("drag", start=0, qty=20)
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: Factory shared across concurrent requests.
        """
        self.session_factory = session_factory

    async def list_products(self, start: int, qty: int) -> Page[ProductView]:
        return await self._page([], start, qty)

    async def list_products_by_category(
        self,
        category_id: str,
        start: int,
        qty: int,
    ) -> Page[ProductView]:
        oid = parse_id(category_id, field="category_id")
        return await self._page([ProductModel.category_id == oid], start, qty)

    async def search_products(
        self,
        name_pattern: str,
        start: int,
        qty: int,
    ) -> Page[ProductView]:
        compile_name_pattern(name_pattern)
        conditions = []
        if name_pattern:
            # Inline flag: SQLite REGEXP takes no flags argument
            conditions.append(ProductModel.name.regexp_match(f"(?i){name_pattern}"))
        return await self._page(conditions, start, qty)

    async def _page(self, conditions: list[Any], start: int, qty: int) -> Page[ProductView]:
        """Filter, count, sort, window, then join.

        Args:
            conditions: WHERE clauses shared by the count and the window.
            start: Zero-based offset.
            qty: Page size.

        Returns:
            Page with the filtered total.
        """
        validate_window(start, qty)

        async with _read_session(self.session_factory) as session:
            count_query = select(func.count(ProductModel.id))
            if conditions:
                count_query = count_query.where(*conditions)
            total = (await session.execute(count_query)).scalar_one()

            if qty == 0 or start >= total:
                return Page(total=total, data=[])

            query = (
                select(ProductModel, CategoryModel)
                .outerjoin(CategoryModel, CategoryModel.id == ProductModel.category_id)
                .where(*conditions)
                .order_by(ProductModel.name.asc(), ProductModel.id.asc())
                .offset(start)
                .limit(qty)
            )
            rows = (await session.execute(query)).all()

        data = []
        for product, category in rows:
            if category is None:
                raise CategoryIntegrityError(product.id, product.category_id)
            data.append(
                ProductView(
                    product=product.to_entity(),
                    category=CategorySnippet(
                        id=category.id,
                        name=category.name,
                        slug=category.slug,
                    ),
                )
            )
        return Page(total=total, data=data)
