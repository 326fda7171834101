"""Test fixtures for notification infrastructure tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.config_repository import ProviderConfigRepository
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.models import Channel, SendResult
from infrastructure.notifications.recipients import RecipientResolver
from infrastructure.notifications.templates import TemplateStore
from infrastructure.operations import OperationResult
from tests.factories import make_gateway_config, make_smtp_config
from tests.fixtures.channels import RecordingChannel


@pytest.fixture
def recording_channel_factory():
    """Factory for RecordingChannel instances.

    Example:
        email = recording_channel_factory(Channel.EMAIL)
        flaky = recording_channel_factory(
            Channel.EMAIL,
            outcome=lambda address: OperationResult.transient_error("down"),
        )
    """

    def _factory(channel: Channel = Channel.EMAIL, outcome=None) -> RecordingChannel:
        return RecordingChannel(channel, outcome)

    return _factory


@pytest.fixture
def template_store(document_store):
    return TemplateStore(document_store, company_name="Acme")


@pytest.fixture
def config_repository(document_store, notification_settings):
    return ProviderConfigRepository(document_store, notification_settings)


@pytest.fixture
def active_configs(document_store):
    """Seed one active email and one active WhatsApp configuration."""
    document_store.seed("smtp_settings", make_smtp_config())
    document_store.seed("whatsapp_gateways", make_gateway_config())
    return document_store


@pytest.fixture
def dispatcher_factory(document_store, template_store, config_repository):
    """Factory for NotificationDispatcher wired to the in-memory store.

    Example:
        dispatcher = dispatcher_factory({Channel.EMAIL: email_channel})
    """

    def _factory(channels, max_workers: int = 4) -> NotificationDispatcher:
        return NotificationDispatcher(
            channels=channels,
            resolver=RecipientResolver(document_store),
            templates=template_store,
            config_repository=config_repository,
            max_workers=max_workers,
        )

    return _factory


@pytest.fixture
def mock_notification_channel():
    """Mock NotificationChannel whose sends succeed."""
    channel = MagicMock(spec=NotificationChannel)
    channel.format_message.side_effect = lambda subject, body: (subject, body)
    channel.send.return_value = SendResult.ok("msg-1")
    channel.health_check.return_value = OperationResult.success()
    return channel
