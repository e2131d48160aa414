"""Domain exceptions.

All catalog-level errors that represent business rule violations.
Each error carries a machine-checkable ``error_code`` and a ``status``
classification so that a transport layer can translate it without
parsing the message.
"""

from http import HTTPStatus
from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors inherit from this class to allow catching
    domain-specific errors at the transport layer.
    """

    error_code: str = "CATALOG_ERROR"
    status: HTTPStatus = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a transport-neutral error payload."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "status": int(self.status),
            "details": self.details,
        }


class ProductNotFoundError(CatalogError):
    """Raised when an id does not match a currently available product."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int) -> None:
        """Initialize product not found error.

        Args:
            product_id: The id that was looked up.
        """
        super().__init__(
            f"Product with id {product_id} not found",
            details={"product_id": product_id},
        )
        self.product_id = product_id


class ProductsNotFoundError(CatalogError):
    """Raised when a batch existence check matches fewer products than requested.

    The error is batch-level and does not say which ids were missing.
    """

    error_code = "PRODUCTS_NOT_FOUND"

    def __init__(self, requested: int, found: int) -> None:
        """Initialize batch not found error.

        Args:
            requested: Number of distinct ids requested.
            found: Number of products that matched.
        """
        super().__init__(
            "Some products were not found",
            details={"requested": requested, "found": found},
        )
