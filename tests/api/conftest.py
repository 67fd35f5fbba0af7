"""Shared fixtures for API tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from ecomm.catalog.service import CatalogQueryEngine
from ecomm.main import app


@pytest.fixture
def client(query_engine: CatalogQueryEngine) -> Iterator[TestClient]:
    """Create test client over the in-memory sample catalog.

    The lifespan is not run, so no database is touched.
    """
    app.state.catalog_engine = query_engine
    yield TestClient(app)
    app.state.catalog_engine = None


@pytest.fixture
def unready_client() -> TestClient:
    """Create test client before any engine is installed."""
    app.state.catalog_engine = None
    return TestClient(app)
