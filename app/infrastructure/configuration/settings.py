"""Notification service configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    AwsSettings,
    NotificationSettings,
)

# Infrastructure settings
from infrastructure.configuration.infrastructure import ServerSettings


class Settings(BaseSettings):
    """Notification service configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object:

    - **Integrations**: document store (AWS) and notification providers
    - **Infrastructure**: HTTP server

    Environment Variables:
        PREFIX: Environment prefix for multi-tenant deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking
        APP_NAME: Company name exposed to templates as ``company_name``

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        region = settings.aws.AWS_REGION
        workers = settings.notifications.DISPATCH_MAX_WORKERS

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"
    APP_NAME: str = "Business Admin"

    # Integration settings
    aws: AwsSettings
    notifications: NotificationSettings

    # Infrastructure settings
    server: ServerSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "aws": AwsSettings,
            "notifications": NotificationSettings,
            "server": ServerSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
