"""Store interfaces for the catalog.

The query engine depends only on these abstractions, so the SQL-backed
stores and the in-memory stores are interchangeable.
"""

import re
from abc import ABC, abstractmethod

from ecomm.catalog.entities import CategoryNode, Page, ProductView
from ecomm.domain.exceptions import InvalidArgumentError
from ecomm.domain.value_objects import CatalogId


def parse_id(value: str, field: str = "id") -> str:
    """Parse and normalize an identifier before any store access.

    Args:
        value: Raw identifier from the caller.
        field: Argument name reported on failure.

    Returns:
        Lowercase identifier.

    Raises:
        InvalidIdentifierError: If the identifier is malformed.
    """
    return str(CatalogId.from_string(value, field=field))


def validate_window(start: int, qty: int) -> None:
    """Validate a pagination window.

    Args:
        start: Zero-based offset.
        qty: Page size.

    Raises:
        InvalidArgumentError: If either bound is negative.
    """
    if start < 0 or qty < 0:
        raise InvalidArgumentError(
            "start and qty must be non-negative",
            details={"start": start, "qty": qty},
        )


def compile_name_pattern(name_pattern: str) -> re.Pattern[str]:
    """Compile a product name search pattern.

    Patterns are regular expressions matched anywhere in the name,
    ignoring case.

    Args:
        name_pattern: Raw pattern from the caller.

    Returns:
        Compiled case-insensitive pattern.

    Raises:
        InvalidArgumentError: If the pattern is not a valid expression.
    """
    try:
        return re.compile(name_pattern, re.IGNORECASE)
    except re.error as e:
        raise InvalidArgumentError(
            f"Cannot parse name pattern: {e}",
            details={"field": "name", "value": name_pattern},
        ) from e


class CategoryStore(ABC):
    """Read-only access to the category hierarchy."""

    @abstractmethod
    async def top_level_categories_with_children(self) -> list[CategoryNode]:
        """Get root categories, each with its direct children.

        Returns:
            Root categories ordered by name then ID.
        """

    @abstractmethod
    async def ancestor_chain(self, category_id: str) -> CategoryNode:
        """Get a category with its stored ancestor chain.

        Args:
            category_id: Target category ID.

        Returns:
            Node whose ``ancestors`` keep the stored order.

        Raises:
            InvalidIdentifierError: If the ID is malformed.
            CategoryNotFoundError: If no category has the ID.
        """

    @abstractmethod
    async def direct_children(self, category_id: str) -> CategoryNode:
        """Get a category with its direct children.

        Args:
            category_id: Target category ID.

        Returns:
            Node whose ``children`` keep the stored order.

        Raises:
            InvalidIdentifierError: If the ID is malformed.
            CategoryNotFoundError: If no category has the ID.
        """


class ProductStore(ABC):
    """Read-only paginated access to products.

    Every listing filters, sorts by name, counts, then windows, and joins
    each windowed product to its category snippet.
    """

    @abstractmethod
    async def list_products(self, start: int, qty: int) -> Page[ProductView]:
        """List all products.

        Args:
            start: Zero-based offset.
            qty: Page size.

        Returns:
            Page with the full product count.

        Raises:
            CategoryIntegrityError: If a windowed product's category is missing.
        """

    @abstractmethod
    async def list_products_by_category(
        self,
        category_id: str,
        start: int,
        qty: int,
    ) -> Page[ProductView]:
        """List products of one category.

        An unknown but well-formed ID yields an empty page.

        Args:
            category_id: Category to filter on.
            start: Zero-based offset.
            qty: Page size.

        Returns:
            Page with the filtered count.

        Raises:
            InvalidIdentifierError: If the ID is malformed.
            CategoryIntegrityError: If a windowed product's category is missing.
        """

    @abstractmethod
    async def search_products(
        self,
        name_pattern: str,
        start: int,
        qty: int,
    ) -> Page[ProductView]:
        """List products whose name matches a regular expression, ignoring case.

        Args:
            name_pattern: Expression searched for anywhere in the name.
                Empty matches everything.
            start: Zero-based offset.
            qty: Page size.

        Returns:
            Page with the matching count.

        Raises:
            InvalidArgumentError: If the pattern does not compile.
            CategoryIntegrityError: If a windowed product's category is missing.
        """
