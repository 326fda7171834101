"""Notification dispatch and provider settings.

Provider credentials that an administrator edits at runtime (SMTP account,
Resend API key, WhatsApp gateway secret) live in the document store and are
loaded per dispatch. Only endpoints and deployment-level secrets are read
from the environment here.
"""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class NotificationSettings(IntegrationSettings):
    """Fan-out limits and provider endpoints for notifications.

    Environment Variables:
        DISPATCH_MAX_WORKERS: Upper bound of concurrent provider calls per dispatch
        WHATSAPP_GATEWAY_URL: Send endpoint of the WhatsApp gateway
        RESEND_API_URL: Base URL of the transactional email API
        SMTP_TIMEOUT_SECONDS: Socket timeout for SMTP sessions
        PROVIDER_TIMEOUT_SECONDS: HTTP timeout for gateway/API calls
        FCM_PROJECT_ID: Firebase project receiving push messages
        FCM_CREDENTIALS_JSON: Service account key (JSON string) for FCM

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        gateway_url = settings.notifications.WHATSAPP_GATEWAY_URL
        workers = settings.notifications.DISPATCH_MAX_WORKERS
        ```
    """

    DISPATCH_MAX_WORKERS: int = Field(default=8, alias="DISPATCH_MAX_WORKERS", ge=1)
    WHATSAPP_GATEWAY_URL: str = Field(
        default="https://app.bipsms.com/api/send/whatsapp",
        alias="WHATSAPP_GATEWAY_URL",
    )
    RESEND_API_URL: str = Field(
        default="https://api.resend.com", alias="RESEND_API_URL"
    )
    SMTP_TIMEOUT_SECONDS: int = Field(default=10, alias="SMTP_TIMEOUT_SECONDS")
    PROVIDER_TIMEOUT_SECONDS: int = Field(
        default=15, alias="PROVIDER_TIMEOUT_SECONDS"
    )
    FCM_PROJECT_ID: str | None = Field(default=None, alias="FCM_PROJECT_ID")
    FCM_CREDENTIALS_JSON: str | None = Field(
        default=None, alias="FCM_CREDENTIALS_JSON"
    )
