"""Tests for health check endpoints."""

import pytest
from fastapi.testclient import TestClient

from ecomm.catalog.service import CatalogQueryEngine
from ecomm.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "ecomm-catalog"
    assert "version" in data


def test_readiness_check(client: TestClient, query_engine: CatalogQueryEngine) -> None:
    """Test readiness endpoint returns ready once an engine is installed."""
    app.state.catalog_engine = query_engine
    try:
        response = client.get("/ready")
    finally:
        app.state.catalog_engine = None
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_readiness_check_before_startup(client: TestClient) -> None:
    """Test readiness endpoint reports not ready without an engine."""
    app.state.catalog_engine = None
    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
