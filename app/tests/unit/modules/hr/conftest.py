"""Fixtures for HR workflow tests."""

import pytest

from infrastructure.notifications import NotificationService
from infrastructure.notifications.models import Channel
from tests.factories import make_gateway_config, make_smtp_config, make_template
from tests.fixtures.channels import RecordingChannel


@pytest.fixture
def hr_channels():
    """Recording channels keyed by channel."""
    return {channel: RecordingChannel(channel) for channel in Channel}


@pytest.fixture
def hr_service(settings, document_store, hr_channels):
    """NotificationService over the in-memory store with active providers."""
    document_store.seed("smtp_settings", make_smtp_config())
    document_store.seed("whatsapp_gateways", make_gateway_config())
    return NotificationService(
        settings=settings, store=document_store, channels=hr_channels
    )


@pytest.fixture
def seed_template(document_store):
    """Seed a template on one or more channels.

    Example:
        seed_template("employee_monthly_payslip_summary", [Channel.EMAIL],
                      body="{{payslip_summary}}", variables=["payslip_summary"])
    """
    collections = {
        Channel.EMAIL: "email_templates",
        Channel.WHATSAPP: "whatsapp_templates",
        Channel.PUSH: "push_templates",
    }

    def _seed(slug, channels, **fields):
        for channel in channels:
            document_store.seed(collections[channel], make_template(slug=slug, **fields))

    return _seed
