"""Error classifiers for provider exceptions.

Turn the exceptions raised by each provider SDK into an ``OperationResult`` so
that channel senders can report failures without branching on provider
specific shapes.

Key Functions:
- classify_http_response(): non-2xx ``requests`` responses (gateway, Resend)
- classify_requests_error(): ``requests`` transport exceptions
- classify_smtp_error(): ``smtplib`` exceptions
- classify_google_api_error(): ``googleapiclient`` errors raised by FCM
- classify_aws_error(): ``botocore`` errors raised by DynamoDB

Usage:
    try:
        response = requests.post(url, data=payload, timeout=15)
    except requests.RequestException as exc:
        return classify_requests_error(exc)
    if not response.ok:
        return classify_http_response(response.status_code, response.text)
"""

import smtplib
from typing import Optional

import requests
from botocore.exceptions import ClientError
from googleapiclient.errors import HttpError

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus


def _parse_retry_after(value: Optional[str], default: int = 60) -> int:
    if not value:
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def classify_http_response(
    status_code: int,
    detail: str = "",
    retry_after: Optional[str] = None,
) -> OperationResult:
    """Classify a non-successful HTTP response from a provider API.

    Status Code Mapping:
    - 429: Rate limited → TRANSIENT_ERROR with retry_after
    - 401/403: Credentials rejected → UNAUTHORIZED
    - 404: Endpoint or resource missing → NOT_FOUND
    - 5xx: Provider failure → TRANSIENT_ERROR
    - Other 4xx: Request rejected → PERMANENT_ERROR

    Args:
        status_code: HTTP status returned by the provider
        detail: Response body excerpt included in the message
        retry_after: Raw ``Retry-After`` header, if any

    Returns:
        OperationResult with ``error_code`` ``HTTP_<status>``
    """
    error_code = f"HTTP_{status_code}"
    message = f"Provider returned HTTP {status_code}"
    if detail:
        message = f"{message}: {detail[:200]}"

    if status_code == 429:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            message,
            error_code=error_code,
            retry_after=_parse_retry_after(retry_after),
        )
    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED, message, error_code=error_code
        )
    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND, message, error_code=error_code
        )
    if 500 <= status_code < 600:
        return OperationResult.transient_error(message, error_code=error_code)
    return OperationResult.permanent_error(message, error_code=error_code)


def classify_requests_error(exc: Exception) -> OperationResult:
    """Classify a ``requests`` exception raised before a response arrived."""
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"Provider request timed out: {exc}", error_code="TIMEOUT"
        )
    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"Provider unreachable: {exc}", error_code="CONNECTION_ERROR"
        )
    return OperationResult.transient_error(
        f"Provider request failed: {type(exc).__name__}: {exc}",
        error_code="REQUEST_ERROR",
    )


def classify_smtp_error(exc: Exception) -> OperationResult:
    """Classify ``smtplib`` and socket errors.

    Authentication failures and refused recipients are permanent; dropped
    connections and timeouts are transient.
    """
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            "SMTP authentication failed",
            error_code="SMTP_AUTH",
        )
    if isinstance(exc, smtplib.SMTPRecipientsRefused):
        return OperationResult.permanent_error(
            "SMTP server refused the recipient", error_code="SMTP_RECIPIENT_REFUSED"
        )
    if isinstance(exc, smtplib.SMTPSenderRefused):
        return OperationResult.permanent_error(
            "SMTP server refused the sender", error_code="SMTP_SENDER_REFUSED"
        )
    if isinstance(exc, smtplib.SMTPResponseException):
        code = exc.smtp_code
        if 400 <= code < 500:
            return OperationResult.transient_error(
                f"SMTP temporary failure ({code})", error_code=f"SMTP_{code}"
            )
        return OperationResult.permanent_error(
            f"SMTP failure ({code})", error_code=f"SMTP_{code}"
        )
    if isinstance(exc, smtplib.SMTPServerDisconnected):
        return OperationResult.transient_error(
            f"SMTP connection error: {exc}", error_code="SMTP_CONNECTION"
        )
    if isinstance(exc, smtplib.SMTPException):
        return OperationResult.transient_error(
            f"SMTP error: {type(exc).__name__}: {exc}", error_code="SMTP_ERROR"
        )
    if isinstance(exc, OSError):
        return OperationResult.transient_error(
            f"SMTP connection error: {exc}", error_code="SMTP_CONNECTION"
        )
    return OperationResult.transient_error(
        f"SMTP error: {type(exc).__name__}: {exc}", error_code="SMTP_ERROR"
    )


def classify_google_api_error(exc: Exception) -> OperationResult:
    """Classify a Google API client error (FCM HTTP v1).

    An ``UNREGISTERED`` or ``INVALID_ARGUMENT`` token is reported with its own
    error code so callers can tell a stale device token from an outage.
    """
    if not isinstance(exc, HttpError):
        return OperationResult.transient_error(
            f"Connection error: {type(exc).__name__}: {exc}",
            error_code="CONNECTION_ERROR",
        )

    status_code: Optional[int] = None
    if getattr(exc, "resp", None) is not None:
        status_code = exc.resp.status

    content = exc.content.decode("utf-8", "replace") if exc.content else ""
    if "UNREGISTERED" in content:
        return OperationResult.permanent_error(
            "Device token is no longer registered", error_code="TOKEN_UNREGISTERED"
        )
    if status_code == 400:
        return OperationResult.permanent_error(
            "Push message rejected", error_code="INVALID_ARGUMENT"
        )

    retry_after = None
    if getattr(exc, "resp", None) is not None and hasattr(exc.resp, "get"):
        retry_after = exc.resp.get("retry-after")
    return classify_http_response(status_code or 0, content, retry_after)


def classify_aws_error(exc: Exception) -> OperationResult:
    """Classify AWS SDK errors raised by the document store.

    Error Code Mapping:
    - Throttling / ProvisionedThroughputExceeded: TRANSIENT_ERROR with retry_after
    - AccessDeniedException: UNAUTHORIZED
    - ResourceNotFoundException: NOT_FOUND (missing table)
    - ValidationException / ConditionalCheckFailedException: PERMANENT_ERROR
    - Other: TRANSIENT_ERROR
    """
    if not isinstance(exc, ClientError):
        return OperationResult.transient_error(
            f"AWS connection error: {type(exc).__name__}: {exc}",
            error_code="CONNECTION_ERROR",
        )

    error_code = exc.response.get("Error", {}).get("Code", "Unknown")

    if error_code in (
        "ThrottlingException",
        "ProvisionedThroughputExceededException",
        "RequestLimitExceeded",
    ):
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            "AWS API throttled",
            error_code="RATE_LIMITED",
            retry_after=60,
        )
    if error_code == "AccessDeniedException":
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            "AWS API access denied",
            error_code="FORBIDDEN",
        )
    if error_code == "ResourceNotFoundException":
        return OperationResult.not_found("AWS resource not found")
    if error_code in ("ValidationException", "ConditionalCheckFailedException"):
        return OperationResult.permanent_error(
            f"AWS validation error: {error_code}",
            error_code="INVALID_REQUEST",
        )
    return OperationResult.transient_error(
        f"AWS client error: {error_code}",
        error_code="AWS_CLIENT_ERROR",
    )
