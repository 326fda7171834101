"""Error response body shared by every endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response wrapper.

    Attributes:
        success: Always False for error responses
        error: Human-readable error message
        error_code: Machine-readable error code for error handling
        details: Optional additional error details (e.g., missing fields)

    Example:
        >>> error = ErrorResponse(
        ...     error="Missing required fields: templateSlug, subject, body",
        ...     error_code="VALIDATION_ERROR",
        ...     details={"missing": ["templateSlug", "subject", "body"]},
        ... )
        >>> error.model_dump_json()
        '{"success":false,"error":"Missing required fields: ...",...'
    """

    success: bool = Field(default=False, description="Always False for error responses")
    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    details: dict[str, Any] | None = Field(
        default=None, description="Optional additional error details"
    )
