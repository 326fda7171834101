"""Infrastructure configuration module - public API.

Centralized configuration for the notification service using Pydantic
BaseSettings, organized by concern.

Exports:
    Settings: Main settings class (for testing/overrides)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    aws_region = settings.aws.AWS_REGION
    app_url = settings.server.APP_URL
    ```
"""

from infrastructure.configuration.settings import Settings

__all__ = ["Settings"]
