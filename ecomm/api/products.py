"""Product API endpoints.

Provides paginated product listing and name search.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ecomm.api.dependencies import get_query_engine
from ecomm.api.schemas import ErrorResponse
from ecomm.catalog.schemas import ProductsResponse
from ecomm.catalog.service import CatalogQueryEngine
from ecomm.infrastructure.config import settings

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=ProductsResponse,
    summary="List products",
    description="Get one page of all products, sorted by name.",
)
async def list_products(
    engine: Annotated[CatalogQueryEngine, Depends(get_query_engine)],
    start: Annotated[int, Query(ge=0, description="Zero-based offset")] = 0,
    qty: Annotated[int | None, Query(ge=0, description="Page size")] = None,
) -> ProductsResponse:
    """List all products.

    Args:
        engine: Catalog query engine.
        start: Zero-based offset.
        qty: Page size, defaults to the configured page size.

    Returns:
        Page of products with the total product count.
    """
    return await engine.products(
        start=start,
        qty=settings.default_page_size if qty is None else qty,
    )


@router.get(
    "/search",
    response_model=ProductsResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Search products",
    description="Get products whose name matches the given regular expression, ignoring case.",
)
async def search_products(
    engine: Annotated[CatalogQueryEngine, Depends(get_query_engine)],
    name: Annotated[str, Query(max_length=200, description="Pattern to look for")] = "",
    start: Annotated[int, Query(ge=0, description="Zero-based offset")] = 0,
    qty: Annotated[int | None, Query(ge=0, description="Page size")] = None,
) -> ProductsResponse:
    """Search products by name.

    Args:
        engine: Catalog query engine.
        name: Case-insensitive regular expression. Empty matches everything.
        start: Zero-based offset.
        qty: Page size, defaults to the configured page size.

    Returns:
        Page of matching products with the match count.
    """
    return await engine.search_products(
        name,
        start=start,
        qty=settings.default_page_size if qty is None else qty,
    )
