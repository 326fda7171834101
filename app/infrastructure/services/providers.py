"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.clients.aws import DynamoDBClient, SessionProvider
from infrastructure.configuration import Settings
from infrastructure.notifications.service import NotificationService
from infrastructure.persistence import DocumentStore, DynamoDBDocumentStore


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Infrastructure packages should use this directly to ensure singleton consistency:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/version")
        def get_version(settings: SettingsDep):
            return {"version": settings.GIT_SHA}

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_document_store() -> DocumentStore:
    """Provider for the DynamoDB-backed document store.

    Credentials are resolved per API call by the session provider, so caching
    the store does not hold stale credentials.

    Returns:
        DocumentStore: Cached store over one table per collection.
    """
    settings = get_settings()
    session_provider = SessionProvider(
        region=settings.aws.AWS_REGION,
        endpoint_url=settings.aws.DYNAMODB_ENDPOINT_URL,
        role_arn=settings.aws.DYNAMODB_ROLE_ARN,
    )
    return DynamoDBDocumentStore(DynamoDBClient(session_provider), settings.aws)


@lru_cache
def get_notification_service() -> NotificationService:
    """
    Get application-scoped notification service singleton.

    Provider configuration is not cached with the service: every dispatch
    reads the active configuration from the document store.

    Returns:
        NotificationService: Cached service with email, WhatsApp and push channels.

    Usage:
        @router.post("/email/send")
        def send_email(service: NotificationServiceDep, payload: EmailSendRequest):
            return service.send(payload.to_request())
    """
    return NotificationService(settings=get_settings(), store=get_document_store())
