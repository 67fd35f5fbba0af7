"""Shared FastAPI dependencies."""

from fastapi import HTTPException, Request, status

from ecomm.catalog.service import CatalogQueryEngine


def get_query_engine(request: Request) -> CatalogQueryEngine:
    """Get the query engine built at startup.

    Raises:
        HTTPException: If the application has not finished starting.
    """
    engine = getattr(request.app.state, "catalog_engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error_code": "NOT_READY",
                "message": "Catalog is not initialized",
            },
        )
    return engine
