"""FastAPI dependencies for the products service."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from products_service.catalog.repository import ProductRepository, SqlAlchemyProductRepository
from products_service.catalog.service import CatalogService
from products_service.infrastructure.database import get_session


def get_product_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProductRepository:
    """Get a product repository bound to the request's session."""
    return SqlAlchemyProductRepository(session)


def get_catalog_service(
    repository: Annotated[ProductRepository, Depends(get_product_repository)],
) -> CatalogService:
    """Get the catalog service for this request."""
    return CatalogService(repository)
