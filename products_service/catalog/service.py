"""Catalog service for product operations.

Applies the catalog's business rules on top of a ``ProductRepository``:
soft deletion, availability filtering, pagination and batch existence
checks. The service keeps no state between calls.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

from products_service.catalog.models import Product
from products_service.catalog.repository import AVAILABLE_ONLY, ProductRepository
from products_service.domain.exceptions import ProductNotFoundError, ProductsNotFoundError

T = TypeVar("T")

logger = structlog.get_logger()


@dataclass
class PaginationParams:
    """Pagination parameters.

    ``limit`` must be positive; the transport layer rejects zero.

    Attributes:
        limit: Items per page.
        page: Page number (1-indexed).
    """

    limit: int = 10
    page: int = 1

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return self.limit * (self.page - 1)


@dataclass(frozen=True)
class PaginationMeta:
    """Page metadata computed for a single list request."""

    limit: int
    page: int
    total_pages: int
    total: int


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        data: Items on the requested page.
        meta: Page metadata.
    """

    data: list[T]
    meta: PaginationMeta


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(SqlAlchemyProductRepository(session))
            page = await service.list_products(PaginationParams(limit=10, page=1))
    """

    def __init__(self, repository: ProductRepository) -> None:
        """Initialize service with a product repository.

        Args:
            repository: Product store.
        """
        self.repository = repository

    async def create(self, fields: Mapping[str, Any]) -> Product:
        """Create a product.

        Args:
            fields: Validated product fields. A supplied ``id`` is ignored.

        Returns:
            Created product with its store-assigned id.
        """
        product = await self.repository.insert(_without_id(fields))
        logger.info("Product created", product_id=product.id)
        return product

    async def list_products(self, pagination: PaginationParams) -> PaginatedResult[Product]:
        """List available products one page at a time.

        A page past the end returns no data but still reports totals.

        Args:
            pagination: Page size and page number.

        Returns:
            Products on the page with pagination metadata.
        """
        products = await self.repository.find_many(
            AVAILABLE_ONLY,
            limit=pagination.limit,
            offset=pagination.offset,
        )
        total = await self.repository.count(AVAILABLE_ONLY)

        return PaginatedResult(
            data=list(products),
            meta=PaginationMeta(
                limit=pagination.limit,
                page=pagination.page,
                total_pages=math.ceil(total / pagination.limit),
                total=total,
            ),
        )

    async def get_by_id(self, product_id: int) -> Product:
        """Get an available product by ID.

        Args:
            product_id: Product ID.

        Returns:
            The product.

        Raises:
            ProductNotFoundError: If no available product has this id.
        """
        product = await self.repository.find_unique(product_id, AVAILABLE_ONLY)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def update(self, product_id: int, patch: Mapping[str, Any]) -> Product:
        """Overwrite the given fields of an available product.

        Args:
            product_id: Product ID.
            patch: Fields to overwrite. ``id`` is never changed.

        Returns:
            Updated product.

        Raises:
            ProductNotFoundError: If no available product has this id.
        """
        product = await self.get_by_id(product_id)

        fields = _without_id(patch)
        if not fields:
            return product

        product = await self.repository.update(product_id, fields)
        logger.info("Product updated", product_id=product_id, fields=sorted(fields))
        return product

    async def update_from_payload(self, payload: Mapping[str, Any]) -> Product:
        """Update a product whose id is embedded in the payload.

        Args:
            payload: Fields to overwrite plus the target ``id``.

        Returns:
            Updated product.

        Raises:
            KeyError: If the payload carries no ``id``.
            ProductNotFoundError: If no available product has this id.
        """
        return await self.update(payload["id"], payload)

    async def remove(self, product_id: int) -> Product:
        """Soft-delete a product by marking it unavailable.

        The write only applies while the product is still available, so two
        concurrent removals cannot both succeed.

        Args:
            product_id: Product ID.

        Returns:
            The product, now with ``available=False``.

        Raises:
            ProductNotFoundError: If no available product has this id.
        """
        await self.get_by_id(product_id)

        product = await self.repository.update_where(
            product_id,
            {"available": False},
            AVAILABLE_ONLY,
        )
        if product is None:
            raise ProductNotFoundError(product_id)

        logger.info("Product removed", product_id=product_id)
        return product

    async def validate_products(self, ids: Iterable[int]) -> list[Product]:
        """Check that every id refers to an existing product.

        Availability is not checked: soft-deleted products still count as
        existing.

        Args:
            ids: Product IDs, duplicates allowed.

        Returns:
            One product per distinct id.

        Raises:
            ProductsNotFoundError: If any id matches no product.
        """
        unique_ids = set(ids)
        products = await self.repository.find_many_by_id(unique_ids)

        if len(products) != len(unique_ids):
            logger.info(
                "Product validation failed",
                requested=len(unique_ids),
                found=len(products),
            )
            raise ProductsNotFoundError(requested=len(unique_ids), found=len(products))

        return list(products)


def _without_id(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {name: value for name, value in fields.items() if name != "id"}
