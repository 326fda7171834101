"""Infrastructure response models.

Exports:
    ErrorResponse: Standard error response with error details
"""

from infrastructure.models.responses import ErrorResponse

__all__ = [
    "ErrorResponse",
]
