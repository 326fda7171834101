"""Notification domain errors.

Each error carries the HTTP status and machine code the API layer answers
with. Provider failures are not in this hierarchy: senders fold them into
``SendResult`` and never raise them.
"""

from typing import Any, Dict, List, Optional


class NotificationError(Exception):
    """Base class for errors that abort a whole dispatch."""

    status_code = 500
    error_code = "NOTIFICATION_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(NotificationError):
    """Missing or malformed request fields."""

    status_code = 400
    error_code = "VALIDATION_ERROR"

    @classmethod
    def missing_fields(cls, fields: List[str], hint: str = "") -> "ValidationError":
        message = f"Missing required fields: {', '.join(fields)}"
        if hint:
            message = f"{message}. {hint}"
        return cls(message, details={"missing": fields})


class NotFoundError(NotificationError):
    status_code = 404
    error_code = "NOT_FOUND"


class NoMatchingRecipientsError(NotFoundError):
    """Recipient resolution produced nothing to send to."""

    error_code = "NO_MATCHING_RECIPIENTS"

    def __init__(self, message: str = "No matching recipients found", **kwargs):
        super().__init__(message, **kwargs)


class TemplateNotFoundError(NotFoundError):
    error_code = "TEMPLATE_NOT_FOUND"

    def __init__(self, slug: str, channel: str):
        super().__init__(
            f"Template '{slug}' not found for channel {channel}",
            details={"slug": slug, "channel": channel},
        )
        self.slug = slug
        self.channel = channel


class TemplateInactiveError(NotificationError):
    status_code = 400
    error_code = "TEMPLATE_INACTIVE"

    def __init__(self, slug: str, channel: str):
        super().__init__(
            f"Template '{slug}' is disabled for channel {channel}",
            details={"slug": slug, "channel": channel},
        )
        self.slug = slug
        self.channel = channel


class ConfigurationError(NotificationError):
    error_code = "CONFIGURATION_ERROR"


class NoActiveConfigError(ConfigurationError):
    """No provider configuration is enabled for a channel."""

    error_code = "NO_ACTIVE_CONFIG"

    def __init__(self, channel: str, message: Optional[str] = None):
        super().__init__(
            message
            or f"No active {channel} configuration found. "
            "Please configure and activate a provider in settings.",
            details={"channel": channel},
        )
        self.channel = channel
