"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.notifications.service import NotificationService
from infrastructure.persistence import DocumentStore
from infrastructure.services.providers import (
    get_settings,
    get_document_store,
    get_notification_service,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Document store dependency - users, employees, templates, HR records
DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]

# Notification service dependency
NotificationServiceDep = Annotated[
    NotificationService, Depends(get_notification_service)
]

__all__ = [
    "SettingsDep",
    "DocumentStoreDep",
    "NotificationServiceDep",
]
