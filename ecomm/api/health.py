"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    from ecomm.infrastructure.config import settings

    return HealthResponse(
        status="healthy",
        service="ecomm-catalog",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Check if service is ready to accept requests.

    Ready once startup has built the catalog query engine.

    Returns:
        Readiness status, 503 while not ready.
    """
    engine = getattr(request.app.state, "catalog_engine", None)
    if engine is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready"},
        )
    return JSONResponse(content={"status": "ready"})
