"""API layer module.

Contains FastAPI routers and the error envelope schema.
"""

from ecomm.api.categories import router as categories_router
from ecomm.api.health import router as health_router
from ecomm.api.products import router as products_router

__all__ = [
    "categories_router",
    "health_router",
    "products_router",
]
