"""WhatsApp gateway client (BipSMS).

The gateway takes a multipart form with the account secret, the account id,
the recipient number (digits only), ``type=text`` and the message. A send
succeeded when the HTTP status is OK and the JSON ``status`` is ``200`` or
``"success"``.
"""

import requests

from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_http_response,
    classify_requests_error,
)

logger = get_module_logger()

SUCCESS_STATUSES = (200, "200", "success")


def send_whatsapp(
    url: str,
    secret: str,
    account: str,
    recipient: str,
    message: str,
    timeout: int = 15,
) -> OperationResult:
    """Send one text message.

    Args:
        url: Gateway send endpoint
        secret: Gateway API secret
        account: WhatsApp account unique id
        recipient: Destination number, digits only
        message: Message text

    Returns:
        OperationResult with ``message_id`` in data on success.
    """
    form = {
        "secret": (None, secret),
        "account": (None, account),
        "recipient": (None, recipient),
        "type": (None, "text"),
        "message": (None, message),
    }
    try:
        response = requests.post(url, files=form, timeout=timeout)
    except requests.RequestException as e:
        logger.error("whatsapp_gateway_request_failed", recipient=recipient, error=str(e))
        return classify_requests_error(e)

    if not response.ok:
        logger.error(
            "whatsapp_gateway_http_error",
            recipient=recipient,
            response_code=response.status_code,
        )
        return classify_http_response(response.status_code, response.text)

    try:
        body = response.json()
    except ValueError:
        return OperationResult.permanent_error(
            "Gateway returned a non-JSON response", error_code="INVALID_RESPONSE"
        )

    status = body.get("status") if isinstance(body, dict) else None
    if status not in SUCCESS_STATUSES:
        detail = body.get("message") if isinstance(body, dict) else None
        logger.warning(
            "whatsapp_gateway_rejected", recipient=recipient, status=status, detail=detail
        )
        return OperationResult.permanent_error(
            f"Gateway rejected message: {detail or status}",
            error_code="GATEWAY_REJECTED",
        )

    data = body.get("data") if isinstance(body.get("data"), dict) else {}
    return OperationResult.success(
        data={"message_id": data.get("messageId") or data.get("id")},
        message="WhatsApp message sent",
    )
