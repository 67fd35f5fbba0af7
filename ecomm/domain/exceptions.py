"""Catalog exceptions.

All errors raised by the catalog stores and the query engine. Each class
carries a machine-readable error code and the HTTP status the API layer
translates it to.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors inherit from this class so the API layer can
    translate them with a single exception handler.
    """

    error_code: str = "CATALOG_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Client Errors
# ============================================================================


class InvalidArgumentError(CatalogError):
    """Raised when the caller supplies a malformed argument.

    Malformed identifiers are rejected before any store access.
    """

    error_code = "INVALID_ARGUMENT"
    status_code = 400


class InvalidIdentifierError(InvalidArgumentError):
    """Raised when an identifier cannot be parsed."""

    def __init__(self, value: str, field: str = "id") -> None:
        """Initialize invalid identifier error.

        Args:
            value: The rejected identifier.
            field: Name of the argument that carried it.
        """
        super().__init__(
            "Cannot parse ID",
            details={"field": field, "value": value},
        )


class NotFoundError(CatalogError):
    """Raised when an explicitly targeted record does not exist."""

    error_code = "NOT_FOUND"
    status_code = 404


class CategoryNotFoundError(NotFoundError):
    """Raised when a well-formed category ID matches no category."""

    error_code = "CATEGORY_NOT_FOUND"

    def __init__(self, category_id: str) -> None:
        """Initialize category not found error.

        Args:
            category_id: ID of the missing category.
        """
        super().__init__(
            f"Category not found: {category_id}",
            details={"category_id": category_id},
        )


# ============================================================================
# Server Errors
# ============================================================================


class InternalError(CatalogError):
    """Raised on storage, decode, or data-integrity failures.

    Never retried by the catalog itself.
    """

    error_code = "INTERNAL_ERROR"
    status_code = 500


class StorageError(InternalError):
    """Raised when the storage backend fails."""

    error_code = "STORAGE_ERROR"


class CategoryIntegrityError(InternalError):
    """Raised when a product's category reference does not resolve.

    The whole request fails; the product is never silently dropped.
    """

    error_code = "CATEGORY_INTEGRITY_ERROR"

    def __init__(self, product_id: str, category_id: str) -> None:
        """Initialize category integrity error.

        Args:
            product_id: ID of the product being materialized.
            category_id: The unresolved category reference.
        """
        super().__init__(
            f"Product {product_id} references missing category {category_id}",
            details={"product_id": product_id, "category_id": category_id},
        )


class DeadlineExceededError(CatalogError):
    """Raised when a store call outlives the operation deadline."""

    error_code = "DEADLINE_EXCEEDED"
    status_code = 504

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        """Initialize deadline exceeded error.

        Args:
            operation: Name of the engine operation.
            timeout_seconds: The deadline that expired.
        """
        super().__init__(
            f"Operation {operation} exceeded deadline of {timeout_seconds}s",
            details={"operation": operation, "timeout_seconds": timeout_seconds},
        )
