"""Product API endpoints.

Exposes the catalog service over HTTP. Catalog errors are translated into
HTTP errors using the status classification each error carries.
"""

from typing import Annotated, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from products_service.api.deps import get_catalog_service
from products_service.api.schemas import (
    MAX_PRODUCT_ID,
    ErrorResponse,
    PaginationMetaSchema,
    ProductCreateRequest,
    ProductListResponse,
    ProductPayloadUpdateRequest,
    ProductResponse,
    ProductUpdateRequest,
    ValidateProductsRequest,
)
from products_service.catalog.models import Product
from products_service.catalog.service import CatalogService, PaginationParams
from products_service.domain.exceptions import CatalogError
from products_service.infrastructure.config import settings

router = APIRouter(prefix="/products", tags=["Products"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}}

ProductIdPath = Annotated[
    int, Path(gt=0, le=MAX_PRODUCT_ID, description="Product identifier")
]


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: Product) -> ProductResponse:
    """Convert Product model to response schema."""
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        available=product.available,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def raise_http_error(error: CatalogError) -> NoReturn:
    """Re-raise a catalog error as an HTTP error."""
    raise HTTPException(
        status_code=int(error.status),
        detail={
            "error_code": error.error_code,
            "message": error.message,
            "details": error.details,
        },
    ) from error


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(
    request: ProductCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Create a new product.

    Args:
        request: Product fields.
        service: Catalog service.

    Returns:
        Created product.
    """
    product = await service.create(request.model_dump())
    return product_to_response(product)


@router.get(
    "",
    response_model=ProductListResponse,
    summary="List available products",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    limit: int = Query(
        default=settings.default_page_limit,
        ge=1,
        le=settings.max_page_limit,
        description="Items per page",
    ),
    page: int = Query(default=1, ge=1, description="Page number (1-based)"),
) -> ProductListResponse:
    """List available products with pagination.

    Args:
        service: Catalog service.
        limit: Items per page.
        page: Page number (1-based).

    Returns:
        Products on the page and pagination metadata.
    """
    result = await service.list_products(PaginationParams(limit=limit, page=page))

    return ProductListResponse(
        data=[product_to_response(p) for p in result.data],
        meta=PaginationMetaSchema(
            limit=result.meta.limit,
            page=result.meta.page,
            total_pages=result.meta.total_pages,
            total=result.meta.total,
        ),
    )


@router.post(
    "/validate",
    response_model=list[ProductResponse],
    responses=ERROR_RESPONSES,
    summary="Validate product ids",
    description="Check that every id refers to an existing product, available or not.",
)
async def validate_products(
    request: ValidateProductsRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[ProductResponse]:
    """Validate that a set of product ids exist.

    Args:
        request: Product ids.
        service: Catalog service.

    Returns:
        One product per distinct id.

    Raises:
        HTTPException: If any id matches no product.
    """
    try:
        products = await service.validate_products(request.ids)
    except CatalogError as e:
        raise_http_error(e)

    return [product_to_response(p) for p in products]


@router.patch(
    "",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Update product (id in body)",
)
async def update_product_from_payload(
    request: ProductPayloadUpdateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Update a product whose id is sent in the request body.

    Args:
        request: Target id and fields to change.
        service: Catalog service.

    Returns:
        Updated product.

    Raises:
        HTTPException: If the product is not available.
    """
    try:
        product = await service.update_from_payload(request.to_payload())
    except CatalogError as e:
        raise_http_error(e)

    return product_to_response(product)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Get product",
)
async def get_product(
    product_id: ProductIdPath,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Get an available product by ID.

    Args:
        product_id: Product identifier.
        service: Catalog service.

    Returns:
        Product details.

    Raises:
        HTTPException: If the product is not available.
    """
    try:
        product = await service.get_by_id(product_id)
    except CatalogError as e:
        raise_http_error(e)

    return product_to_response(product)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Update product",
)
async def update_product(
    product_id: ProductIdPath,
    request: ProductUpdateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Update the supplied fields of an available product.

    Args:
        product_id: Product identifier.
        request: Fields to change.
        service: Catalog service.

    Returns:
        Updated product.

    Raises:
        HTTPException: If the product is not available.
    """
    try:
        product = await service.update(product_id, request.to_patch())
    except CatalogError as e:
        raise_http_error(e)

    return product_to_response(product)


@router.delete(
    "/{product_id}",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Remove product",
    description="Soft-delete a product. The record is kept with available=false.",
)
async def remove_product(
    product_id: ProductIdPath,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Soft-delete a product.

    Args:
        product_id: Product identifier.
        service: Catalog service.

    Returns:
        The product as stored after removal.

    Raises:
        HTTPException: If the product is not available.
    """
    try:
        product = await service.remove(product_id)
    except CatalogError as e:
        raise_http_error(e)

    return product_to_response(product)
