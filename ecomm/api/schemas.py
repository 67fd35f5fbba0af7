"""API schemas for the catalog service.

Error envelope shared by every endpoint. Catalog response bodies live in
``ecomm.catalog.schemas``.
"""

from typing import Any

from pydantic import BaseModel, Field


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
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )

    @classmethod
    def from_details(
        cls,
        error_code: str,
        message: str,
        details: dict[str, Any],
        request_id: str | None,
    ) -> "ErrorResponse":
        """Build a response from an exception's detail mapping."""
        return cls(
            error_code=error_code,
            message=message,
            details=[ErrorDetail(field=key, message=str(value)) for key, value in details.items()],
            request_id=request_id,
        )
