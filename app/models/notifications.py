"""Request payloads of the notification endpoints.

Fields are optional at the schema level; the endpoints report missing fields
by name with a 400 instead of a generic schema error.
"""

from typing import Any, Dict, List, Optional, Union

from infrastructure.notifications.models import (
    CamelModel,
    Channel,
    NotificationRequest,
    NotificationTarget,
)


class EmailSendRequest(CamelModel):
    """Body of ``POST /api/email/send``."""

    to: Union[str, List[str], None] = None
    template_slug: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    data: Dict[str, Any] = {}

    def to_request(self) -> NotificationRequest:
        return NotificationRequest(
            to=NotificationTarget.from_to(self.to),
            template_slug=self.template_slug,
            subject=self.subject,
            body=self.body,
            data=self.data,
            channels=[Channel.EMAIL],
        )


class WhatsAppSendRequest(CamelModel):
    """Body of ``POST /api/whatsapp/send``.

    ``recipient`` is accepted as an alias of ``to``; ``message`` is the
    literal text sent when no template is given.
    """

    to: Union[str, List[str], None] = None
    recipient: Optional[str] = None
    message: Optional[str] = None
    template_slug: Optional[str] = None
    data: Dict[str, Any] = {}

    def missing_fields(self) -> List[str]:
        missing = []
        if not (self.to or self.recipient):
            missing.append("recipient")
        if not (self.message or self.template_slug):
            missing.append("message")
        return missing

    def to_request(self) -> NotificationRequest:
        return NotificationRequest(
            to=NotificationTarget.from_to(self.to or self.recipient),
            template_slug=self.template_slug,
            body=self.message,
            data=self.data,
            channels=[Channel.WHATSAPP],
        )


class PushSendRequest(CamelModel):
    """Body of ``POST /api/notifications/send``."""

    title: Optional[str] = None
    body: Optional[str] = None
    target_roles: Optional[List[str]] = None
    user_ids: Optional[List[str]] = None


class ReportsRequest(CamelModel):
    """Body of ``POST /api/notify/reports``."""

    type: Optional[str] = None
    month_year: Optional[str] = None
    target_email: Optional[str] = None


class RequestNotifyRequest(CamelModel):
    """Body of ``POST /api/notify/advance-salary``, ``/leave`` and ``/visit``."""

    type: Optional[str] = None
    request_id: Optional[str] = None
    status: Optional[str] = None
    rejection_reason: Optional[str] = None


class HolidayData(CamelModel):
    title: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None


class HolidayNotifyRequest(CamelModel):
    """Body of ``POST /api/notify/holiday``."""

    holiday_id: Optional[str] = None
    holiday_data: Optional[HolidayData] = None
