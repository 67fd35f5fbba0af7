"""Catalog records.

Plain dataclasses shared by every store implementation and the query
engine. Stores build them; the engine maps them to response schemas.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CategorySnippet:
    """Denormalized category reference: display fields only."""

    id: str
    name: str
    slug: str


@dataclass
class Category:
    """A node of the category hierarchy.

    Attributes:
        id: Category identifier (24 hex characters).
        name: Display name.
        slug: URL slug.
        ancestors: Identifiers from immediate parent out to the root.
            Empty for root categories.
        children: Identifiers of direct children. Empty for leaves.
        last_updated: Last modification timestamp.
    """

    id: str
    name: str
    slug: str
    ancestors: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    last_updated: datetime | None = None

    @property
    def is_root(self) -> bool:
        """Check whether this category has no ancestors."""
        return not self.ancestors

    def snippet(self) -> CategorySnippet:
        """Reduce to the {id, name, slug} reference."""
        return CategorySnippet(id=self.id, name=self.name, slug=self.slug)


@dataclass
class CategoryNode:
    """A category resolved together with one level of its graph.

    Exactly one of ``children`` and ``ancestors`` is populated, depending
    on which edge set was traversed.
    """

    category: Category
    children: list[CategorySnippet] | None = None
    ancestors: list[CategorySnippet] | None = None


@dataclass
class Product:
    """A product record.

    Attributes:
        id: Product identifier (24 hex characters).
        name: Display name; listings sort on it.
        slug: URL slug.
        quantity: Stock count.
        value: Exact stored amount, rounded only on output.
        category_id: Identifier of exactly one category.
        last_updated: Last modification timestamp.
    """

    id: str
    name: str
    slug: str
    quantity: int
    value: Decimal
    category_id: str
    last_updated: datetime | None = None

    @property
    def sort_key(self) -> tuple[str, str]:
        """Listing order: name ascending, ID breaks ties."""
        return (self.name, self.id)


@dataclass
class ProductView:
    """A product joined to its category snippet."""

    product: Product
    category: CategorySnippet


@dataclass
class Page(Generic[T]):
    """One window of a listing.

    Attributes:
        total: Count of every match, regardless of the window.
        data: Items inside the requested window.
    """

    total: int
    data: list[T] = field(default_factory=list)
