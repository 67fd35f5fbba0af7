"""Category API endpoints.

Provides the top-level menu, breadcrumb, side-menu, and per-category
product listing.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from ecomm.api.dependencies import get_query_engine
from ecomm.api.schemas import ErrorResponse
from ecomm.catalog.schemas import CategoriesResponse, ProductsResponse
from ecomm.catalog.service import CatalogQueryEngine
from ecomm.infrastructure.config import settings

router = APIRouter(prefix="/categories", tags=["Categories"])


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/menu",
    response_model=CategoriesResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Categories menu",
    description="Get root categories with their direct children.",
)
async def categories_menu(
    engine: Annotated[CatalogQueryEngine, Depends(get_query_engine)],
) -> CategoriesResponse:
    """List root categories, each with one level of children."""
    return await engine.categories_menu()


@router.get(
    "/{category_id}/breadcrumb",
    response_model=CategoriesResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Category breadcrumb",
    description="Get a category with its ancestors, from parent to root.",
)
async def category_breadcrumb(
    category_id: str,
    engine: Annotated[CatalogQueryEngine, Depends(get_query_engine)],
) -> CategoriesResponse:
    """Get the ancestor chain of a category.

    Args:
        category_id: Category identifier.
        engine: Catalog query engine.

    Returns:
        The category with ancestors populated.
    """
    return await engine.category_breadcrumb(category_id)


@router.get(
    "/{category_id}/side-menu",
    response_model=CategoriesResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Category side menu",
    description="Get a category with its direct children.",
)
async def categories_side_menu(
    category_id: str,
    engine: Annotated[CatalogQueryEngine, Depends(get_query_engine)],
) -> CategoriesResponse:
    """Get the direct children of a category.

    Args:
        category_id: Category identifier.
        engine: Catalog query engine.

    Returns:
        The category with children populated.
    """
    return await engine.categories_side_menu(category_id)


@router.get(
    "/{category_id}/products",
    response_model=ProductsResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Products from category",
    description="Get one page of a category's products, sorted by name.",
)
async def products_from_category(
    category_id: str,
    engine: Annotated[CatalogQueryEngine, Depends(get_query_engine)],
    start: Annotated[int, Query(ge=0, description="Zero-based offset")] = 0,
    qty: Annotated[int | None, Query(ge=0, description="Page size")] = None,
) -> ProductsResponse:
    """List products of one category.

    Args:
        category_id: Category identifier.
        engine: Catalog query engine.
        start: Zero-based offset.
        qty: Page size, defaults to the configured page size.

    Returns:
        Page of products with the category's product count.
    """
    return await engine.products_from_category(
        category_id,
        start=start,
        qty=settings.default_page_size if qty is None else qty,
    )
