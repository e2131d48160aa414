"""API schemas for the products service.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRICE_DECIMAL_PLACES = 4

# products.id is a 32-bit integer column
MAX_PRODUCT_ID = 2**31 - 1

ProductId = Annotated[int, Field(gt=0, le=MAX_PRODUCT_ID)]


def _check_price_precision(value: float | None) -> float | None:
    if value is not None and round(value, PRICE_DECIMAL_PLACES) != value:
        raise ValueError(f"Price must have at most {PRICE_DECIMAL_PLACES} decimal places")
    return value


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginationMetaSchema(BaseModel):
    """Pagination metadata."""

    model_config = ConfigDict(populate_by_name=True)

    limit: int = Field(..., description="Items per page")
    page: int = Field(..., description="Current page number")
    total_pages: int = Field(
        ..., alias="totalPages", description="Total number of pages"
    )
    total: int = Field(..., description="Total number of available products")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    price: float = Field(..., ge=0, description="Unit price")
    available: bool = Field(default=True, description="Whether the product is active")

    @field_validator("price")
    @classmethod
    def price_precision(cls, v: float | None) -> float | None:
        return _check_price_precision(v)


class ProductUpdateRequest(BaseModel):
    """Request to update a product. Only supplied fields are changed."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    price: float | None = Field(default=None, ge=0)
    available: bool | None = None

    @field_validator("price")
    @classmethod
    def price_precision(cls, v: float | None) -> float | None:
        return _check_price_precision(v)

    def to_patch(self) -> dict[str, Any]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProductPayloadUpdateRequest(ProductUpdateRequest):
    """Update request carrying the target product id in the body."""

    id: ProductId = Field(..., description="Product ID")

    def to_payload(self) -> dict[str, Any]:
        """Return the sent fields together with the id."""
        return {**self.to_patch(), "id": self.id}


class ValidateProductsRequest(BaseModel):
    """Request to check that a set of product ids exist."""

    ids: list[ProductId] = Field(..., description="Product IDs, duplicates allowed")


class ProductResponse(BaseModel):
    """Product representation."""

    id: int = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    price: float = Field(..., description="Unit price")
    available: bool = Field(..., description="Whether the product is active")
    created_at: datetime | None = Field(default=None, description="Creation time")
    updated_at: datetime | None = Field(default=None, description="Last update time")


class ProductListResponse(BaseModel):
    """A page of products."""

    data: list[ProductResponse] = Field(..., description="Products on this page")
    meta: PaginationMetaSchema = Field(..., description="Pagination metadata")
