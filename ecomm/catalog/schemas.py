"""Catalog response schemas.

Pydantic models for the six query operations. Field names are snake_case
in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogSchema(BaseModel):
    """Base schema with camelCase serialization aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class CategorySnippetSchema(CatalogSchema):
    """Category reference embedded in other responses."""

    id: str = Field(..., description="Category identifier")
    name: str = Field(..., description="Category name")
    slug: str = Field(..., description="Category URL slug")


class CategorySchema(CatalogSchema):
    """A category with one level of its graph resolved.

    Menu and side-menu responses fill ``children``; breadcrumb responses
    fill ``ancestors``. The other list is omitted.
    """

    id: str = Field(..., description="Category identifier")
    name: str = Field(..., description="Category name")
    slug: str = Field(..., description="Category URL slug")
    children: list[CategorySnippetSchema] | None = Field(
        default=None, description="Direct child categories"
    )
    ancestors: list[CategorySnippetSchema] | None = Field(
        default=None, description="Ancestors from immediate parent to root"
    )
    last_updated: datetime | None = Field(default=None, description="Last modification time")


class CategoriesResponse(CatalogSchema):
    """Response for menu, breadcrumb and side-menu queries."""

    categories: list[CategorySchema] = Field(default_factory=list)


class ProductSchema(CatalogSchema):
    """A product with its denormalized category."""

    id: str = Field(..., description="Product identifier")
    name: str = Field(..., description="Product name")
    slug: str = Field(..., description="Product URL slug")
    quantity: int = Field(..., description="Units in stock")
    value: float = Field(..., description="Price, rounded up to cents")
    category: CategorySnippetSchema = Field(..., description="Product category")
    last_updated: datetime | None = Field(default=None, description="Last modification time")


class ProductsResponse(CatalogSchema):
    """One page of products plus the total match count."""

    total: int = Field(..., ge=0, description="Count of all matches")
    data: list[ProductSchema] = Field(default_factory=list)
