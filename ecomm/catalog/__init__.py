"""Product Catalog Service.

Provides the category graph, paginated product listings, and the query
engine that joins them into menu, breadcrumb, side-menu and product
responses.
"""

from ecomm.catalog.entities import Category, CategoryNode, CategorySnippet, Page, Product, ProductView
from ecomm.catalog.memory import InMemoryCategoryStore, InMemoryProductStore, load_snapshot
from ecomm.catalog.repository import SqlCategoryStore, SqlProductStore
from ecomm.catalog.schemas import CategoriesResponse, CategorySchema, ProductSchema, ProductsResponse
from ecomm.catalog.service import CatalogQueryEngine
from ecomm.catalog.stores import CategoryStore, ProductStore

__all__ = [
    # Records
    "Category",
    "CategoryNode",
    "CategorySnippet",
    "Page",
    "Product",
    "ProductView",
    # Stores
    "CategoryStore",
    "ProductStore",
    "InMemoryCategoryStore",
    "InMemoryProductStore",
    "SqlCategoryStore",
    "SqlProductStore",
    "load_snapshot",
    # Engine
    "CatalogQueryEngine",
    "CategoriesResponse",
    "CategorySchema",
    "ProductSchema",
    "ProductsResponse",
]
