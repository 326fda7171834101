"""Resend transactional email API client."""

import requests

from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_http_response,
    classify_requests_error,
)

logger = get_module_logger()


def send_email(
    api_url: str,
    api_key: str,
    sender: str,
    recipient: str,
    subject: str,
    html: str,
    timeout: int = 15,
) -> OperationResult:
    """Send one email through the ``POST /emails`` endpoint.

    Returns:
        OperationResult with ``message_id`` in data on success.
    """
    payload = {
        "from": sender,
        "to": [recipient],
        "subject": subject,
        "html": html,
    }
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    try:
        response = requests.post(
            f"{api_url.rstrip('/')}/emails",
            json=payload,
            headers=headers,
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error("resend_request_failed", recipient=recipient, error=str(e))
        return classify_requests_error(e)

    if not response.ok:
        logger.error(
            "resend_api_error",
            recipient=recipient,
            response_code=response.status_code,
        )
        return classify_http_response(
            response.status_code,
            response.text,
            response.headers.get("Retry-After"),
        )

    try:
        message_id = response.json().get("id")
    except ValueError:
        message_id = None
    return OperationResult.success(
        data={"message_id": message_id}, message="Email sent via Resend"
    )
