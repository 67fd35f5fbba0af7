"""SQLAlchemy models for the product catalog.

Defines the categories and products tables. Category adjacency is stored
flat on each row: ``ancestors`` is precomputed from parent to root, and
``children`` lists direct children only.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ecomm.catalog.entities import Category, Product
from ecomm.domain.value_objects import CatalogId
from ecomm.infrastructure.database import Base


def code_point_name(length: int) -> String:
    """Name column type that sorts by code point.

    PostgreSQL gets the "C" collation; SQLite already compares bytes.
    """
    return String(length).with_variant(String(length, collation="C"), "postgresql")


class CategoryModel(Base):
    """Category row.

    Attributes:
        id: 24-hex-character identifier.
        name: Display name.
        slug: URL slug.
        ancestors: JSON array of IDs, immediate parent first.
        children: JSON array of direct child IDs.
        last_updated: Last modification timestamp.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=lambda: str(CatalogId.generate()),
    )
    name: Mapped[str] = mapped_column(code_point_name(200), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    ancestors: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    children: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<CategoryModel(id={self.id}, name={self.name})>"

    def to_entity(self) -> Category:
        """Convert to a catalog record."""
        return Category(
            id=self.id,
            name=self.name,
            slug=self.slug,
            ancestors=list(self.ancestors or []),
            children=list(self.children or []),
            last_updated=self.last_updated,
        )


class ProductModel(Base):
    """Product row.

    Attributes:
        id: 24-hex-character identifier.
        name: Display name.
        slug: URL slug.
        quantity: Stock count.
        value: Exact amount; rounding happens on output only.
        category_id: Referenced category ID.
        last_updated: Last modification timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=lambda: str(CatalogId.generate()),
    )
    name: Mapped[str] = mapped_column(code_point_name(500), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(500), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    value: Mapped[Decimal] = mapped_column(Numeric(), nullable=False)
    category_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductModel(id={self.id}, name={self.name[:30]})>"

    def to_entity(self) -> Product:
        """Convert to a catalog record."""
        return Product(
            id=self.id,
            name=self.name,
            slug=self.slug,
            quantity=self.quantity,
            value=self.value,
            category_id=self.category_id,
            last_updated=self.last_updated,
        )
