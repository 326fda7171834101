"""Notification channel abstract base class.

Every channel (email, WhatsApp, push) implements this interface. A channel
holds no provider credentials of its own: the active ``ProviderConfig`` is
passed to each send so that one dispatch uses one configuration snapshot.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import structlog

from infrastructure.notifications.models import (
    Channel,
    ProviderConfig,
    Recipient,
    SendResult,
)
from infrastructure.operations import OperationResult

logger = structlog.get_logger()


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    ``send`` never raises: a malformed address is rejected locally before any
    network call, and provider failures (including unexpected exceptions)
    come back as ``SendResult(success=False)``.

    Example Implementation:
        class FaxChannel(NotificationChannel):

            @property
            def channel(self) -> Channel:
                return Channel.FAX

            def validate_recipient(self, recipient):
                return OperationResult.success(data={"address": recipient.address})

            def _deliver(self, address, subject, body, config, url=None):
                return fax_client.send(address, body)
    """

    @property
    @abstractmethod
    def channel(self) -> Channel:
        """Channel served by this sender."""

    @abstractmethod
    def validate_recipient(self, recipient: Recipient) -> OperationResult:
        """Check the recipient address without calling the provider.

        Returns:
            Success with the normalized address in ``data["address"]``, or a
            PERMANENT_ERROR explaining why the address cannot be used.
        """

    @abstractmethod
    def _deliver(
        self,
        address: str,
        subject: str,
        body: str,
        config: ProviderConfig,
        url: Optional[str] = None,
    ) -> OperationResult:
        """Perform the provider call for one normalized address."""

    def format_message(self, subject: str, body: str) -> Tuple[str, str]:
        """Adapt rendered template content to the channel. Identity by default."""
        return subject, body

    def send(
        self,
        recipient: Recipient,
        subject: str,
        body: str,
        config: ProviderConfig,
        url: Optional[str] = None,
    ) -> SendResult:
        """Send one message to one recipient.

        Args:
            recipient: Destination on this channel
            subject: Subject line (title for push)
            body: Message body
            config: Active provider configuration of this dispatch
            url: App path opened when the message is clicked, where the
                channel supports it

        Returns:
            SendResult, never an exception
        """
        validation = self.validate_recipient(recipient)
        if not validation.is_success:
            logger.info(
                "recipient_rejected",
                channel=self.channel.value,
                recipient=recipient.address,
                error_code=validation.error_code,
            )
            return SendResult.failed(validation.message, validation.error_code)

        address = validation.data["address"]
        try:
            result = self._deliver(address, subject, body, config, url)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "channel_send_exception",
                channel=self.channel.value,
                recipient=address,
                error=str(e),
                exc_info=True,
            )
            return SendResult.failed(f"Send error: {e}", "SEND_ERROR")

        if result.is_success:
            logger.info(
                "notification_sent",
                channel=self.channel.value,
                recipient=address,
                provider=config.provider,
            )
        else:
            logger.warning(
                "notification_send_failed",
                channel=self.channel.value,
                recipient=address,
                provider=config.provider,
                error=result.message,
                error_code=result.error_code,
            )
        return SendResult.from_operation(result)

    def health_check(self, config: ProviderConfig) -> OperationResult:
        """Check that ``config`` carries what the provider needs."""
        return OperationResult.success(
            data={"provider": config.provider}, message=f"{self.channel.value} ready"
        )
