"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    DocumentStoreDep,
    NotificationServiceDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_document_store,
    get_notification_service,
)

__all__ = [
    "SettingsDep",
    "DocumentStoreDep",
    "NotificationServiceDep",
    "get_settings",
    "get_document_store",
    "get_notification_service",
]
