"""Multi-channel notification dispatch.

Provides email, WhatsApp and push delivery with:
- Recipient resolution from roles, user ids, employee ids or literal addresses
- Per-channel templates with placeholder substitution
- Provider configuration read fresh for every dispatch
- Concurrent sends with per-recipient failure isolation

Usage:
    from infrastructure.notifications import (
        Channel,
        NotificationRequest,
        NotificationTarget,
    )
    from infrastructure.services import get_notification_service

    service = get_notification_service()
    result = service.send(
        NotificationRequest(
            to=NotificationTarget.from_to("Admin"),
            template_slug="admin_new_advance_salary_request",
            data={"employee_name": "Jane Doe"},
            channels=[Channel.EMAIL, Channel.PUSH],
        )
    )

    logger.info("sent", success=result.success, sent=result.success_count)
"""

# Models
from infrastructure.notifications.models import (
    Channel,
    DispatchResult,
    NotificationRequest,
    NotificationTarget,
    ProviderConfig,
    PushDispatchSummary,
    Recipient,
    RecipientResult,
    SendResult,
    Template,
)

# Errors
from infrastructure.notifications.errors import (
    ConfigurationError,
    NoActiveConfigError,
    NoMatchingRecipientsError,
    NotFoundError,
    NotificationError,
    TemplateInactiveError,
    TemplateNotFoundError,
    ValidationError,
)

# Building blocks
from infrastructure.notifications.config_repository import ProviderConfigRepository
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.history import PushHistory
from infrastructure.notifications.recipients import RecipientResolver
from infrastructure.notifications.templates import TemplateStore

# Channel interface
from infrastructure.notifications.channels.base import NotificationChannel

# Channel implementations
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.channels.push import PushChannel
from infrastructure.notifications.channels.whatsapp import WhatsAppChannel

# Service
from infrastructure.notifications.service import NotificationService

__all__ = [
    # Models
    "Channel",
    "DispatchResult",
    "NotificationRequest",
    "NotificationTarget",
    "ProviderConfig",
    "PushDispatchSummary",
    "Recipient",
    "RecipientResult",
    "SendResult",
    "Template",
    # Errors
    "ConfigurationError",
    "NoActiveConfigError",
    "NoMatchingRecipientsError",
    "NotFoundError",
    "NotificationError",
    "TemplateInactiveError",
    "TemplateNotFoundError",
    "ValidationError",
    # Building blocks
    "NotificationDispatcher",
    "ProviderConfigRepository",
    "PushHistory",
    "RecipientResolver",
    "TemplateStore",
    # Channels
    "NotificationChannel",
    "EmailChannel",
    "PushChannel",
    "WhatsAppChannel",
    # Service
    "NotificationService",
]
