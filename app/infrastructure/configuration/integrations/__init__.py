"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.aws import AwsSettings
from infrastructure.configuration.integrations.notifications import (
    NotificationSettings,
)

__all__ = [
    "AwsSettings",
    "NotificationSettings",
]
