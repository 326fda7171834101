"""OperationResult: the value returned by store and provider calls.

Expected failures (a gateway rejecting a number, a missing DynamoDB table,
an SMTP timeout) are reported through this type instead of exceptions so that
a single failed recipient never unwinds a whole dispatch.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Result of a store or provider call.

    Attributes:
        status: High-level outcome
        message: Human readable description, safe to log
        data: Payload on success (document, provider response fields)
        error_code: Machine readable code, e.g. ``HTTP_502`` or ``SMTP_AUTH``
        retry_after: Seconds suggested by the provider when throttled
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """True when the call succeeded."""
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Build a successful result carrying ``data``."""
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Build a failed result with an explicit status."""
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
            data=data,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Failure that could succeed later (timeouts, throttling, 5xx)."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR, message, error_code, retry_after
        )

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Failure that will not change by calling again (bad input, auth)."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)

    @classmethod
    def not_found(
        cls, message: str, error_code: Optional[str] = "NOT_FOUND"
    ) -> "OperationResult":
        """Missing document or resource."""
        return cls.error(OperationStatus.NOT_FOUND, message, error_code)
