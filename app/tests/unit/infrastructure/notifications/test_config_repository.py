"""Unit tests for ProviderConfigRepository."""

import pytest

from infrastructure.configuration.integrations import NotificationSettings
from infrastructure.notifications.config_repository import ProviderConfigRepository
from infrastructure.notifications.errors import ConfigurationError, NoActiveConfigError
from infrastructure.notifications.models import Channel
from tests.factories import make_gateway_config, make_smtp_config


@pytest.mark.unit
class TestProviderConfigRepository:
    def test_active_email_config(self, config_repository, document_store):
        document_store.seed(
            "smtp_settings",
            make_smtp_config(id="smtp-old", is_active=False),
            make_smtp_config(id="smtp-new", provider="resend_api"),
        )

        config = config_repository.get_active(Channel.EMAIL)

        assert config.id == "smtp-new"
        assert config.provider == "resend_api"
        assert config.get("from_email") == "noreply@example.com"
        assert "is_active" not in config.secrets

    def test_whatsapp_defaults_to_bipsms(self, config_repository, document_store):
        document_store.seed("whatsapp_gateways", make_gateway_config())

        config = config_repository.get_active(Channel.WHATSAPP)

        assert config.provider == "bipsms"
        assert config.get("api_secret") == "gw-secret"

    def test_several_active_configs_pick_smallest_id(
        self, config_repository, document_store
    ):
        document_store.seed(
            "smtp_settings",
            make_smtp_config(id="smtp-b"),
            make_smtp_config(id="smtp-a", host="a.example.com"),
        )

        config = config_repository.get_active(Channel.EMAIL)

        assert config.id == "smtp-a"
        assert config.get("host") == "a.example.com"

    def test_no_active_config(self, config_repository, document_store):
        document_store.seed("smtp_settings", make_smtp_config(is_active=False))

        with pytest.raises(NoActiveConfigError) as exc_info:
            config_repository.get_active(Channel.EMAIL)

        assert exc_info.value.channel == "email"
        assert exc_info.value.error_code == "NO_ACTIVE_CONFIG"

    def test_store_failure_is_configuration_error(
        self, config_repository, document_store
    ):
        document_store.failing.add("whatsapp_gateways")

        with pytest.raises(ConfigurationError) as exc_info:
            config_repository.get_active(Channel.WHATSAPP)

        assert not isinstance(exc_info.value, NoActiveConfigError)

    def test_config_is_read_fresh_every_time(self, config_repository, document_store):
        document_store.seed("smtp_settings", make_smtp_config(id="smtp-1"))
        first = config_repository.get_active(Channel.EMAIL)

        document_store.set("smtp_settings", "smtp-1", {"is_active": False}, merge=True)
        document_store.seed("smtp_settings", make_smtp_config(id="smtp-2"))
        second = config_repository.get_active(Channel.EMAIL)

        assert first.id == "smtp-1"
        assert second.id == "smtp-2"

    def test_push_config_from_settings(self, config_repository):
        config = config_repository.get_active(Channel.PUSH)

        assert config.provider == "fcm"
        assert config.get("project_id") == "test-project"

    def test_push_without_credentials(self, document_store):
        repository = ProviderConfigRepository(
            document_store,
            NotificationSettings(FCM_PROJECT_ID=None, FCM_CREDENTIALS_JSON=None),
        )

        with pytest.raises(NoActiveConfigError) as exc_info:
            repository.get_active(Channel.PUSH)

        assert "FCM_PROJECT_ID" in exc_info.value.message
