"""Provider configuration repository.

Administrators manage provider credentials at runtime; dispatch reads the
active configuration of a channel once, at the start of each dispatch, and
uses that snapshot for every send of the dispatch.
"""

from typing import Any, Dict

import structlog

from infrastructure.configuration.integrations.notifications import (
    NotificationSettings,
)
from infrastructure.notifications.errors import ConfigurationError, NoActiveConfigError
from infrastructure.notifications.models import Channel, ProviderConfig
from infrastructure.persistence import DocumentStore, DocumentStoreError, QueryFilter

logger = structlog.get_logger()

CONFIG_COLLECTIONS = {
    Channel.EMAIL: "smtp_settings",
    Channel.WHATSAPP: "whatsapp_gateways",
}

DEFAULT_PROVIDERS = {
    Channel.EMAIL: "smtp",
    Channel.WHATSAPP: "bipsms",
    Channel.PUSH: "fcm",
}

_RESERVED_FIELDS = ("id", "provider", "is_active")


class ProviderConfigRepository:
    """Looks up the active provider configuration of a channel.

    Email and WhatsApp configurations are documents flagged ``is_active``.
    Push uses the FCM service account from the environment.

    Args:
        store: Document store holding the configuration collections
        settings: Notification settings (FCM credentials)
    """

    def __init__(self, store: DocumentStore, settings: NotificationSettings) -> None:
        self._store = store
        self._settings = settings

    def get_active(self, channel: Channel) -> ProviderConfig:
        """Return the active configuration for ``channel``.

        When several documents are active the one with the smallest id wins
        and a warning is logged.

        Raises:
            NoActiveConfigError: nothing is active for the channel
            ConfigurationError: the configuration could not be read
        """
        if channel == Channel.PUSH:
            return self._push_config()

        collection = CONFIG_COLLECTIONS[channel]
        try:
            docs = self._store.query(
                collection, [QueryFilter("is_active", "==", True)]
            )
        except DocumentStoreError as e:
            logger.error(
                "provider_config_load_failed", channel=channel.value, error=str(e)
            )
            raise ConfigurationError(
                f"Failed to load {channel.value} configuration: {e}"
            ) from e

        if not docs:
            raise NoActiveConfigError(channel.value)

        docs = sorted(docs, key=lambda d: str(d.get("id", "")))
        if len(docs) > 1:
            logger.warning(
                "multiple_active_provider_configs",
                channel=channel.value,
                config_ids=[d.get("id") for d in docs],
                selected=docs[0].get("id"),
            )
        return self._to_config(channel, docs[0])

    def _to_config(self, channel: Channel, doc: Dict[str, Any]) -> ProviderConfig:
        return ProviderConfig(
            id=str(doc.get("id", "")),
            channel=channel,
            provider=doc.get("provider") or DEFAULT_PROVIDERS[channel],
            is_active=True,
            secrets={k: v for k, v in doc.items() if k not in _RESERVED_FIELDS},
        )

    def _push_config(self) -> ProviderConfig:
        if not (self._settings.FCM_PROJECT_ID and self._settings.FCM_CREDENTIALS_JSON):
            raise NoActiveConfigError(
                Channel.PUSH.value,
                "Push notifications are not configured: "
                "FCM_PROJECT_ID and FCM_CREDENTIALS_JSON are required.",
            )
        return ProviderConfig(
            id="fcm",
            channel=Channel.PUSH,
            provider="fcm",
            secrets={
                "project_id": self._settings.FCM_PROJECT_ID,
                "credentials_json": self._settings.FCM_CREDENTIALS_JSON,
            },
        )
