"""Shared fixtures for products service tests."""

import pytest

from products_service.catalog.models import Product
from products_service.catalog.repository import InMemoryProductRepository
from products_service.catalog.service import CatalogService


@pytest.fixture
def repository() -> InMemoryProductRepository:
    """Create an empty in-memory product repository."""
    return InMemoryProductRepository()


@pytest.fixture
def service(repository: InMemoryProductRepository) -> CatalogService:
    """Create a catalog service over the in-memory repository."""
    return CatalogService(repository)


@pytest.fixture
def seed_products(service: CatalogService):
    """Factory creating ``count`` products named Product 1..N."""

    async def _seed(count: int) -> list[Product]:
        return [
            await service.create({"name": f"Product {i}", "price": float(i)})
            for i in range(1, count + 1)
        ]

    return _seed
