"""Notification channels (email, WhatsApp, push)."""

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.channels.push import PushChannel
from infrastructure.notifications.channels.whatsapp import WhatsAppChannel

__all__ = [
    "NotificationChannel",
    "EmailChannel",
    "PushChannel",
    "WhatsAppChannel",
]
