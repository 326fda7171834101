"""Push channel using Firebase Cloud Messaging."""

import threading
from typing import Callable, Dict, Optional, Tuple

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Channel, ProviderConfig, Recipient
from infrastructure.operations import OperationResult
from integrations.fcm.client import FcmClient

NO_TOKEN = "no token"
DEFAULT_CLICK_PATH = "/dashboard"


class PushChannel(NotificationChannel):
    """Push notification channel.

    Each recipient is one device token. A user without tokens reaches this
    channel as an address-less recipient and is reported as ``"no token"``.

    One FCM client is kept per (credentials, project) pair, so the tokens of
    a dispatch share credentials. A changed configuration gets a new client.

    Args:
        app_url: Web application URL; clicks open a page under it
        client_factory: Builds the FCM client from (credentials_json, project_id)
    """

    def __init__(
        self,
        app_url: Optional[str] = None,
        client_factory: Callable[[str, str], FcmClient] = FcmClient,
    ):
        self._app_url = app_url
        self._client_factory = client_factory
        self._clients: Dict[Tuple[str, str], FcmClient] = {}
        self._lock = threading.Lock()

    @property
    def channel(self) -> Channel:
        return Channel.PUSH

    def validate_recipient(self, recipient: Recipient) -> OperationResult:
        if not recipient.address:
            return OperationResult.permanent_error(NO_TOKEN, error_code="NO_TOKEN")
        return OperationResult.success(data={"address": recipient.address})

    def _client(self, config: ProviderConfig) -> FcmClient:
        key = (config.get("credentials_json"), config.get("project_id"))
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                client = self._client_factory(*key)
                # Only the current configuration is kept.
                self._clients = {key: client}
            return client

    def _deliver(
        self,
        address: str,
        subject: str,
        body: str,
        config: ProviderConfig,
        url: Optional[str] = None,
    ) -> OperationResult:
        path = url or DEFAULT_CLICK_PATH
        link = f"{self._app_url.rstrip('/')}{path}" if self._app_url else None
        return self._client(config).send(
            token=address,
            title=subject,
            body=body,
            data={"badgeCount": "1", "url": path},
            link=link,
        )
