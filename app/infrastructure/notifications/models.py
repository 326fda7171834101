"""Notification dispatch models.

Requests describe who to notify (a ``NotificationTarget``), on which channels,
and with what content (a template slug or a literal subject/body). Results
report one entry per attempted send so callers can tell partial from total
failure.
"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from infrastructure.operations import OperationResult


class Channel(str, Enum):
    """Notification transports."""

    EMAIL = "email"
    WHATSAPP = "whatsapp"
    PUSH = "push"


class DispatchState(Enum):
    """Stages a dispatch goes through, in order."""

    VALIDATING = "validating"
    RESOLVING = "resolving"
    RENDERING = "rendering"
    SENDING = "sending"
    AGGREGATING = "aggregating"
    DONE = "done"


class CamelModel(BaseModel):
    """Base for models serialized to the web client in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


_PHONE_LIKE = re.compile(r"^\+?[\d\s\-().]+$")


class NotificationTarget(BaseModel):
    """Who should receive a notification.

    At least one of the fields must be set; the resolver expands each of them
    into concrete recipients per channel.

    Attributes:
        addresses: Literal email addresses or phone numbers
        roles: Role names matched against the users' role list
        user_ids: User document ids
        employee_id: Employee document id
    """

    addresses: List[str] = Field(default_factory=list)
    roles: List[str] = Field(default_factory=list)
    user_ids: List[str] = Field(default_factory=list)
    employee_id: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.addresses or self.roles or self.user_ids or self.employee_id)

    @classmethod
    def from_to(cls, to: Union[str, List[str], None]) -> "NotificationTarget":
        """Interpret a free-form ``to`` value.

        Entries containing ``@`` or made of digits and phone punctuation are
        addresses; anything else is a role name (``"Admin"``, ``"HR"``).

        Example:
            NotificationTarget.from_to(["Admin", "jane@example.com"])
            # roles=["Admin"], addresses=["jane@example.com"]
        """
        if to is None:
            return cls()
        entries = [to] if isinstance(to, str) else list(to)
        addresses: List[str] = []
        roles: List[str] = []
        for entry in entries:
            entry = (entry or "").strip()
            if not entry:
                continue
            if "@" in entry or _PHONE_LIKE.match(entry):
                addresses.append(entry)
            else:
                roles.append(entry)
        return cls(addresses=addresses, roles=roles)


class NotificationRequest(BaseModel):
    """A request to notify one or more recipients.

    Either ``template_slug`` is set, or both ``subject`` and ``body`` are
    (only ``body`` for WhatsApp-only requests).
    The check is done by the dispatcher so that the error names the missing
    fields.

    Attributes:
        to: Who to notify
        template_slug: Template rendered per channel
        subject: Literal subject, used when no template is given
        body: Literal body, used when no template is given
        data: Values for the template placeholders
        channels: Channels to send on
        url: App path opened when a push notification is clicked
    """

    to: NotificationTarget = Field(default_factory=NotificationTarget)
    template_slug: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    channels: List[Channel] = Field(default_factory=lambda: [Channel.EMAIL])
    url: Optional[str] = None

    @field_validator("channels")
    @classmethod
    def dedupe_channels(cls, v: List[Channel]) -> List[Channel]:
        """Keep the first occurrence of each channel."""
        return list(dict.fromkeys(v))

    def missing_content_fields(self) -> List[str]:
        """Names of the content fields that must still be provided.

        WhatsApp messages have no subject line, so a WhatsApp-only request
        only needs a body.
        """
        if self.template_slug:
            return []
        needs_subject = any(c != Channel.WHATSAPP for c in self.channels)
        missing = []
        if needs_subject and not self.subject:
            missing.append("subject")
        if not self.body:
            missing.append("body")
        if missing:
            return ["templateSlug"] + missing
        return []


class Recipient(CamelModel):
    """A concrete destination on one channel.

    ``address`` is an email, a phone number or a device token. It is ``None``
    for push recipients whose user has no registered device.
    """

    address: Optional[str] = None
    channel: Channel
    display_name: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def dedupe_key(self) -> str:
        """Identity used to send once per destination.

        Email addresses compare case-insensitively; phone numbers and device
        tokens compare exactly.
        """
        if self.address:
            address = self.address.strip()
            if self.channel == Channel.EMAIL:
                address = address.lower()
            return f"{self.channel.value}:{address}"
        return f"{self.channel.value}:user:{self.user_id}"


class RenderedMessage(BaseModel):
    """Subject and body ready to send."""

    subject: str = ""
    body: str = ""


class Template(CamelModel):
    """A named, per-channel message template.

    Placeholders use ``{{name}}``; only names listed in ``variables`` are
    substituted.
    """

    slug: str
    channel: Channel
    subject: str = ""
    body: str
    variables: List[str] = Field(default_factory=list)
    is_active: bool = True


class ProviderConfig(BaseModel):
    """Active provider credentials for one channel.

    Loaded fresh for every dispatch and never mutated afterwards.

    Attributes:
        id: Document id of the configuration
        channel: Channel the configuration serves
        provider: Provider kind (``smtp``, ``resend_api``, ``bipsms``, ``fcm``)
        is_active: Whether an administrator enabled it
        secrets: Provider specific values (host, port, api keys, ...)
    """

    model_config = ConfigDict(frozen=True)

    id: str
    channel: Channel
    provider: str
    is_active: bool = True
    secrets: Dict[str, Any] = Field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.secrets.get(key, default)


class SendResult(CamelModel):
    """Normalized outcome of one provider call."""

    success: bool
    provider_message_id: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, provider_message_id: Optional[str] = None) -> "SendResult":
        return cls(success=True, provider_message_id=provider_message_id)

    @classmethod
    def failed(cls, error: str, error_code: Optional[str] = None) -> "SendResult":
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def from_operation(
        cls, result: OperationResult, message_id_key: str = "message_id"
    ) -> "SendResult":
        """Translate a provider client's OperationResult."""
        if result.is_success:
            data = result.data if isinstance(result.data, dict) else {}
            message_id = data.get(message_id_key)
            return cls.ok(str(message_id) if message_id is not None else None)
        return cls.failed(result.message, result.error_code)


class RecipientResult(CamelModel):
    """Outcome of one (recipient, channel) send."""

    recipient: Optional[str] = None
    channel: Channel
    display_name: Optional[str] = None
    user_id: Optional[str] = None
    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    provider_message_id: Optional[str] = None

    @classmethod
    def from_send(cls, recipient: Recipient, result: SendResult) -> "RecipientResult":
        return cls(
            recipient=recipient.address,
            channel=recipient.channel,
            display_name=recipient.display_name,
            user_id=recipient.user_id,
            success=result.success,
            error=result.error,
            error_code=result.error_code,
            provider_message_id=result.provider_message_id,
        )


class DispatchResult(CamelModel):
    """Aggregated outcome of a dispatch.

    ``success`` is true when at least one send succeeded. Every attempt is
    listed in ``per_recipient_results`` in the order recipients were resolved.
    """

    success: bool
    per_recipient_results: List[RecipientResult] = Field(default_factory=list)
    skipped_channels: List[Channel] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.per_recipient_results if r.success)

    @property
    def failure_count(self) -> int:
        return len(self.per_recipient_results) - self.success_count

    @classmethod
    def aggregate(
        cls,
        results: List[RecipientResult],
        skipped_channels: Optional[List[Channel]] = None,
    ) -> "DispatchResult":
        return cls(
            success=any(r.success for r in results),
            per_recipient_results=results,
            skipped_channels=skipped_channels or [],
        )


class PushDispatchSummary(CamelModel):
    """Device-level outcome of a push broadcast, as stored in its history."""

    success: bool
    success_count: int = 0
    failure_count: int = 0
    total_tokens: int = 0
    status: str = "sent"
    per_recipient_results: List[RecipientResult] = Field(default_factory=list)
