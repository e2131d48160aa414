"""Shared fixtures for API tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from products_service.api.deps import get_catalog_service
from products_service.catalog.repository import InMemoryProductRepository
from products_service.catalog.service import CatalogService
from products_service.main import app


@pytest.fixture
def catalog_service() -> CatalogService:
    """Create a catalog service backed by a fresh in-memory store."""
    return CatalogService(InMemoryProductRepository())


@pytest.fixture
def client(catalog_service: CatalogService) -> Iterator[TestClient]:
    """Create test client with the catalog service overridden."""
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_product(client: TestClient):
    """Factory that creates a product through the API and returns its JSON."""

    def _create(name: str = "Widget", price: float = 9.99, **extra) -> dict:
        response = client.post("/products", json={"name": name, "price": price, **extra})
        assert response.status_code == 201
        return response.json()

    return _create
