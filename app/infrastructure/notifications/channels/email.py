"""Email channel: SMTP or the Resend transactional API."""

from email.utils import formataddr
from typing import Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from infrastructure.configuration.integrations.notifications import (
    NotificationSettings,
)
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Channel, ProviderConfig, Recipient
from infrastructure.operations import OperationResult
from integrations.resend import client as resend_client
from integrations.smtp import client as smtp_client

_email_adapter = TypeAdapter(EmailStr)

RESEND_PROVIDER = "resend_api"


class EmailChannel(NotificationChannel):
    """Email notification channel.

    The active configuration selects the provider: ``resend_api`` posts to
    the Resend API, anything else is treated as an SMTP account.
    """

    def __init__(self, settings: NotificationSettings):
        self._settings = settings

    @property
    def channel(self) -> Channel:
        return Channel.EMAIL

    def validate_recipient(self, recipient: Recipient) -> OperationResult:
        if not recipient.address:
            return OperationResult.permanent_error(
                "Email address required", error_code="MISSING_EMAIL"
            )
        try:
            address = _email_adapter.validate_python(recipient.address.strip())
        except ValidationError:
            return OperationResult.permanent_error(
                f"Invalid email address: {recipient.address}",
                error_code="INVALID_EMAIL",
            )
        return OperationResult.success(data={"address": address})

    def _sender(self, config: ProviderConfig) -> str:
        from_email = config.get("from_email")
        from_name = config.get("from_name")
        return formataddr((from_name, from_email)) if from_name else from_email

    def _deliver(
        self,
        address: str,
        subject: str,
        body: str,
        config: ProviderConfig,
        url: Optional[str] = None,
    ) -> OperationResult:
        if config.provider == RESEND_PROVIDER:
            return resend_client.send_email(
                api_url=self._settings.RESEND_API_URL,
                api_key=config.get("resend_api_key"),
                sender=self._sender(config),
                recipient=address,
                subject=subject,
                html=body,
                timeout=self._settings.PROVIDER_TIMEOUT_SECONDS,
            )
        return smtp_client.send_email(
            host=config.get("host"),
            port=int(config.get("port") or 587),
            sender=self._sender(config),
            recipient=address,
            subject=subject,
            body=body,
            username=config.get("user"),
            password=config.get("password"),
            timeout=self._settings.SMTP_TIMEOUT_SECONDS,
        )

    def health_check(self, config: ProviderConfig) -> OperationResult:
        if not config.get("from_email"):
            return OperationResult.permanent_error(
                "Sender address is not configured", error_code="MISSING_FROM_EMAIL"
            )
        if config.provider == RESEND_PROVIDER:
            if not config.get("resend_api_key"):
                return OperationResult.permanent_error(
                    "Resend API key missing", error_code="MISSING_API_KEY"
                )
        elif not config.get("host"):
            return OperationResult.permanent_error(
                "SMTP host missing", error_code="MISSING_SMTP_HOST"
            )
        return super().health_check(config)
