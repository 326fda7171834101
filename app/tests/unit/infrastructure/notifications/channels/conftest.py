"""Fixtures for notification channel tests."""

import pytest

from infrastructure.notifications.models import Channel
from tests.factories import make_provider_config


@pytest.fixture
def smtp_config():
    return make_provider_config(
        Channel.EMAIL,
        "smtp",
        host="smtp.example.com",
        port=587,
        user="mailer",
        password="s3cret",
        from_email="noreply@example.com",
        from_name="Acme HR",
    )


@pytest.fixture
def resend_config():
    return make_provider_config(
        Channel.EMAIL,
        "resend_api",
        resend_api_key="re_test",
        from_email="noreply@example.com",
    )


@pytest.fixture
def gateway_config():
    return make_provider_config(
        Channel.WHATSAPP,
        "bipsms",
        api_secret="gw-secret",
        account_unique_id="acct-1",
    )


@pytest.fixture
def fcm_config():
    return make_provider_config(
        Channel.PUSH,
        "fcm",
        project_id="test-project",
        credentials_json='{"type": "service_account"}',
    )
