"""Domain layer module.

Contains the catalog error taxonomy shared by the service and transport.
"""

from products_service.domain.exceptions import (
    CatalogError,
    ProductNotFoundError,
    ProductsNotFoundError,
)

__all__ = [
    "CatalogError",
    "ProductNotFoundError",
    "ProductsNotFoundError",
]
