"""Product Catalog Service.

Provides the product model, the repository contract with its SQLAlchemy
and in-memory implementations, and the catalog service.
"""

from products_service.catalog.models import Product
from products_service.catalog.repository import (
    AVAILABLE_ONLY,
    NO_FILTER,
    InMemoryProductRepository,
    ProductFilter,
    ProductRepository,
    SqlAlchemyProductRepository,
)
from products_service.catalog.service import (
    CatalogService,
    PaginatedResult,
    PaginationMeta,
    PaginationParams,
)

__all__ = [
    # Models
    "Product",
    # Repository
    "AVAILABLE_ONLY",
    "NO_FILTER",
    "InMemoryProductRepository",
    "ProductFilter",
    "ProductRepository",
    "SqlAlchemyProductRepository",
    # Service
    "CatalogService",
    "PaginatedResult",
    "PaginationMeta",
    "PaginationParams",
]
