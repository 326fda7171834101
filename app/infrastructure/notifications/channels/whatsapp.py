"""WhatsApp channel using the BipSMS gateway."""

import re
from typing import Optional, Tuple

from infrastructure.configuration.integrations.notifications import (
    NotificationSettings,
)
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Channel, ProviderConfig, Recipient
from infrastructure.operations import OperationResult
from integrations.bipsms import client as bipsms_client

MIN_DIGITS = 8
MAX_DIGITS = 15
RULE = "-" * 40

_FORMATTING = re.compile(r"[\s\-().]")


def normalize_number(raw: str) -> str:
    """Strip formatting and a leading ``+``; the result may still be invalid."""
    number = _FORMATTING.sub("", raw.strip())
    return number[1:] if number.startswith("+") else number


class WhatsAppChannel(NotificationChannel):
    """WhatsApp notification channel.

    Numbers are checked locally (digits only, 8-15 long) and sent to the
    gateway without formatting.
    """

    def __init__(self, settings: NotificationSettings):
        self._settings = settings

    @property
    def channel(self) -> Channel:
        return Channel.WHATSAPP

    def validate_recipient(self, recipient: Recipient) -> OperationResult:
        if not recipient.address:
            return OperationResult.permanent_error(
                "Phone number required for WhatsApp", error_code="MISSING_PHONE"
            )
        number = normalize_number(recipient.address)
        if not number.isdigit():
            return OperationResult.permanent_error(
                f"Invalid phone number: {recipient.address}",
                error_code="INVALID_PHONE_FORMAT",
            )
        if not MIN_DIGITS <= len(number) <= MAX_DIGITS:
            return OperationResult.permanent_error(
                f"Phone number must have {MIN_DIGITS}-{MAX_DIGITS} digits",
                error_code="INVALID_PHONE_LENGTH",
            )
        return OperationResult.success(data={"address": number})

    def format_message(self, subject: str, body: str) -> Tuple[str, str]:
        """Frame templated content as a bold subject line over a rule."""
        if not subject:
            return subject, body
        return subject, f"*// {subject} //*\n{RULE}\n{body}"

    def _deliver(
        self,
        address: str,
        subject: str,
        body: str,
        config: ProviderConfig,
        url: Optional[str] = None,
    ) -> OperationResult:
        return bipsms_client.send_whatsapp(
            url=self._settings.WHATSAPP_GATEWAY_URL,
            secret=config.get("api_secret"),
            account=config.get("account_unique_id"),
            recipient=address,
            message=body,
            timeout=self._settings.PROVIDER_TIMEOUT_SECONDS,
        )

    def health_check(self, config: ProviderConfig) -> OperationResult:
        if not (config.get("api_secret") and config.get("account_unique_id")):
            return OperationResult.permanent_error(
                "Gateway secret or account id missing",
                error_code="MISSING_GATEWAY_CREDENTIALS",
            )
        return super().health_check(config)
