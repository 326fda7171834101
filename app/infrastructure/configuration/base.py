"""Shared base classes for the settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class IntegrationSettings(BaseSettings):
    """Base class for settings of external services (AWS, email, WhatsApp, FCM).

    Values are read from the environment and from a local ``.env`` file.
    Names are case sensitive and unknown variables are ignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class InfrastructureSettings(BaseSettings):
    """Base class for settings that shape the runtime itself.

    Covers the HTTP server and the notification dispatch pool.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
