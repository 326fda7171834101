"""HTTP server settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """HTTP server configuration.

    Environment Variables:
        APP_URL: Public URL of the web application, used in notification links
        CORS_ALLOW_ORIGINS: Comma separated list of allowed origins

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        link = f"{settings.server.APP_URL}/dashboard/hr/payroll/advance-salary"
        origins = settings.server.cors_origins
        ```
    """

    APP_URL: str = Field(default="http://127.0.0.1:3000", alias="APP_URL")
    CORS_ALLOW_ORIGINS: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        alias="CORS_ALLOW_ORIGINS",
    )

    @property
    def cors_origins(self) -> List[str]:
        """Allowed origins as a list."""
        return [
            origin.strip()
            for origin in self.CORS_ALLOW_ORIGINS.split(",")
            if origin.strip()
        ]
