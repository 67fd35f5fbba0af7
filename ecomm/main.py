"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecomm.api.categories import router as categories_router
from ecomm.api.health import router as health_router
from ecomm.api.middleware import setup_middleware
from ecomm.api.products import router as products_router
from ecomm.catalog.memory import InMemoryCategoryStore, InMemoryProductStore, load_snapshot
from ecomm.catalog.repository import SqlCategoryStore, SqlProductStore
from ecomm.catalog.service import CatalogQueryEngine
from ecomm.catalog.stores import CategoryStore, ProductStore
from ecomm.infrastructure.config import Settings, settings
from ecomm.infrastructure.database import dispose_engine, get_session_factory
from ecomm.infrastructure.logging import configure_logging

configure_logging(settings.log_level)
logger = structlog.get_logger()


def build_stores(config: Settings) -> tuple[CategoryStore, ProductStore]:
    """Build the category and product stores for the configured backend.

    Args:
        config: Application settings.

    Returns:
        Category store and product store.
    """
    if config.catalog_backend == "memory":
        if config.catalog_snapshot_path:
            return load_snapshot(config.catalog_snapshot_path)
        categories = InMemoryCategoryStore()
        return categories, InMemoryProductStore(categories=categories)

    session_factory = get_session_factory()
    return SqlCategoryStore(session_factory), SqlProductStore(session_factory)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    logger.info(
        "Starting Catalog API",
        version=settings.api_version,
        debug=settings.debug,
        backend=settings.catalog_backend,
    )

    # A test may install its own engine before startup
    if getattr(app.state, "catalog_engine", None) is None:
        categories, products = build_stores(settings)
        app.state.catalog_engine = CatalogQueryEngine(
            categories,
            products,
            timeout_seconds=settings.query_timeout_seconds,
        )

    yield

    # Shutdown
    logger.info("Shutting down Catalog API")
    await dispose_engine()


app = FastAPI(
    title="Catalog API",
    description="Read-only product catalog: category menus, breadcrumbs and product listings",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(categories_router)
app.include_router(products_router)
