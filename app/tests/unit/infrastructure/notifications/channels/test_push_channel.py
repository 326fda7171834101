"""Unit tests for PushChannel."""

from unittest.mock import MagicMock

import pytest

from infrastructure.notifications.channels.push import PushChannel
from infrastructure.notifications.models import Channel
from infrastructure.operations import OperationResult
from tests.factories import make_provider_config, make_recipient


@pytest.fixture
def fcm_client():
    client = MagicMock()
    client.send.return_value = OperationResult.success(
        data={"message_id": "projects/test-project/messages/1"}
    )
    return client


@pytest.fixture
def client_factory(fcm_client):
    return MagicMock(return_value=fcm_client)


@pytest.mark.unit
class TestPushChannel:
    def test_sends_to_token(self, client_factory, fcm_client, fcm_config):
        channel = PushChannel(app_url="https://app.example.com/", client_factory=client_factory)

        result = channel.send(
            make_recipient("token-1", channel=Channel.PUSH), "Title", "Body", fcm_config
        )

        assert result.success is True
        assert result.provider_message_id == "projects/test-project/messages/1"
        client_factory.assert_called_once_with('{"type": "service_account"}', "test-project")
        fcm_client.send.assert_called_once_with(
            token="token-1",
            title="Title",
            body="Body",
            data={"badgeCount": "1", "url": "/dashboard"},
            link="https://app.example.com/dashboard",
        )

    def test_missing_token_is_no_token(self, client_factory, fcm_config):
        channel = PushChannel(client_factory=client_factory)

        result = channel.send(
            make_recipient(None, channel=Channel.PUSH, user_id="u1"), "T", "B", fcm_config
        )

        assert result.success is False
        assert result.error == "no token"
        client_factory.assert_not_called()

    def test_no_link_without_app_url(self, client_factory, fcm_client, fcm_config):
        channel = PushChannel(client_factory=client_factory)

        channel.send(make_recipient("token-1", channel=Channel.PUSH), "T", "B", fcm_config)

        assert fcm_client.send.call_args.kwargs["link"] is None

    def test_provider_error_is_returned(self, client_factory, fcm_client, fcm_config):
        fcm_client.send.return_value = OperationResult.permanent_error(
            "unregistered", error_code="TOKEN_UNREGISTERED"
        )
        channel = PushChannel(client_factory=client_factory)

        result = channel.send(
            make_recipient("stale", channel=Channel.PUSH), "T", "B", fcm_config
        )

        assert result.error_code == "TOKEN_UNREGISTERED"

    def test_click_url_comes_from_the_notification(
        self, client_factory, fcm_client, fcm_config
    ):
        channel = PushChannel(app_url="https://app.example.com", client_factory=client_factory)

        channel.send(
            make_recipient("token-1", channel=Channel.PUSH),
            "T",
            "B",
            fcm_config,
            url="/mobile/dashboard",
        )

        kwargs = fcm_client.send.call_args.kwargs
        assert kwargs["data"]["url"] == "/mobile/dashboard"
        assert kwargs["link"] == "https://app.example.com/mobile/dashboard"

    def test_client_is_built_once_per_configuration(
        self, client_factory, fcm_config
    ):
        channel = PushChannel(client_factory=client_factory)

        for token in ["token-1", "token-2", "token-3"]:
            channel.send(make_recipient(token, channel=Channel.PUSH), "T", "B", fcm_config)

        client_factory.assert_called_once()

    def test_new_configuration_gets_a_new_client(self, client_factory, fcm_config):
        channel = PushChannel(client_factory=client_factory)
        rotated = make_provider_config(
            Channel.PUSH,
            "fcm",
            project_id="other-project",
            credentials_json='{"type": "service_account"}',
        )

        channel.send(make_recipient("token-1", channel=Channel.PUSH), "T", "B", fcm_config)
        channel.send(make_recipient("token-1", channel=Channel.PUSH), "T", "B", rotated)

        assert client_factory.call_count == 2
        assert client_factory.call_args.args == ('{"type": "service_account"}', "other-project")
