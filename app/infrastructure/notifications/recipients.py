"""Recipient resolution.

Expands a ``NotificationTarget`` into concrete recipients for one channel by
reading the ``users`` and ``employees`` collections.

Lookups are best-effort: when a query fails, or a user/employee document is
missing, the original identifier is returned unresolved instead of aborting
the dispatch. The sender then reports that entry as a failed send. An email
address that matches no user has no phone number or device token, so it is
skipped on the WhatsApp and push channels.
"""

from typing import Any, Dict, Iterable, List, Optional

import structlog

from infrastructure.notifications.errors import ValidationError
from infrastructure.notifications.models import Channel, NotificationTarget, Recipient
from infrastructure.persistence import DocumentStore, DocumentStoreError, QueryFilter

logger = structlog.get_logger()

USERS_COLLECTION = "users"
EMPLOYEES_COLLECTION = "employees"


def _dedupe(recipients: Iterable[Recipient]) -> List[Recipient]:
    seen = set()
    unique = []
    for recipient in recipients:
        key = recipient.dedupe_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(recipient)
    return unique


def _is_user_active(user: Dict[str, Any]) -> bool:
    if user.get("is_active") is False:
        return False
    return str(user.get("status", "active")).lower() != "inactive"


def _user_phone(user: Dict[str, Any]) -> Optional[str]:
    return user.get("phone") or user.get("phone_number")


class RecipientResolver:
    """Resolves targets against the user directory.

    Args:
        store: Document store holding ``users`` and ``employees``
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def resolve(self, target: NotificationTarget, channel: Channel) -> List[Recipient]:
        """Return deduplicated recipients of ``target`` on ``channel``.

        Raises:
            ValidationError: the target names nobody
        """
        if target.is_empty:
            raise ValidationError.missing_fields(
                ["to"], "Provide addresses, roles, user ids or an employee id"
            )

        recipients: List[Recipient] = []
        recipients.extend(self._from_addresses(target.addresses, channel))
        if target.roles:
            recipients.extend(self._from_roles(target.roles, channel))
        for user_id in target.user_ids:
            recipients.extend(self._from_user_id(user_id, channel))
        if target.employee_id:
            recipients.extend(self._from_employee(target.employee_id, channel))

        unique = _dedupe(recipients)
        logger.info(
            "recipients_resolved",
            channel=channel.value,
            count=len(unique),
            roles=target.roles,
        )
        return unique

    def _unresolved(self, identifier: str, channel: Channel) -> List[Recipient]:
        if channel == Channel.PUSH:
            return [Recipient(channel=channel, user_id=identifier)]
        return [Recipient(address=identifier, channel=channel, display_name=identifier)]

    def _from_addresses(self, addresses: List[str], channel: Channel) -> List[Recipient]:
        recipients: List[Recipient] = []
        for address in addresses:
            is_email = "@" in address
            if channel == Channel.EMAIL:
                if is_email:
                    recipients.append(Recipient(address=address, channel=channel))
            elif channel == Channel.WHATSAPP and not is_email:
                recipients.append(Recipient(address=address, channel=channel))
            elif is_email:
                recipients.extend(self._from_user_email(address, channel))
        return recipients

    def _from_user_email(self, email: str, channel: Channel) -> List[Recipient]:
        try:
            users = self._store.query(
                USERS_COLLECTION, [QueryFilter("email", "==", email)]
            )
        except DocumentStoreError as e:
            logger.warning(
                "recipient_lookup_failed", identifier=email, error=str(e)
            )
            return self._unresolved(email, channel)
        if not users:
            logger.warning(
                "recipient_user_not_found", email=email, channel=channel.value
            )
            return []
        return self._contacts_for_user(users[0], channel)

    def _from_roles(self, roles: List[str], channel: Channel) -> List[Recipient]:
        try:
            users = self._store.query(
                USERS_COLLECTION, [QueryFilter("role", "array-contains-any", roles)]
            )
        except DocumentStoreError as e:
            logger.warning("recipient_lookup_failed", roles=roles, error=str(e))
            recipients: List[Recipient] = []
            for role in roles:
                recipients.extend(self._unresolved(role, channel))
            return recipients

        recipients = []
        for user in users:
            if _is_user_active(user):
                recipients.extend(self._contacts_for_user(user, channel))
        return recipients

    def _from_user_id(self, user_id: str, channel: Channel) -> List[Recipient]:
        try:
            user = self._store.get(USERS_COLLECTION, user_id)
        except DocumentStoreError as e:
            logger.warning("recipient_lookup_failed", identifier=user_id, error=str(e))
            return self._unresolved(user_id, channel)
        if user is None:
            logger.warning("recipient_user_not_found", user_id=user_id)
            return self._unresolved(user_id, channel)
        return self._contacts_for_user(user, channel)

    def _from_employee(self, employee_id: str, channel: Channel) -> List[Recipient]:
        try:
            employee = self._store.get(EMPLOYEES_COLLECTION, employee_id)
            if employee is None:
                logger.warning("recipient_employee_not_found", employee_id=employee_id)
                return self._unresolved(employee_id, channel)
            user_id = self._linked_user_id(employee) or employee_id
            user = self._store.get(USERS_COLLECTION, user_id)
        except DocumentStoreError as e:
            logger.warning(
                "recipient_lookup_failed", identifier=employee_id, error=str(e)
            )
            return self._unresolved(employee_id, channel)

        name = employee.get("full_name") or employee.get("name")
        if channel == Channel.PUSH:
            if user is None:
                return [Recipient(channel=channel, user_id=user_id, display_name=name)]
            return self._contacts_for_user(user, channel, employee=employee)

        if user is not None:
            return self._contacts_for_user(user, channel, employee=employee)
        address = (
            employee.get("email")
            if channel == Channel.EMAIL
            else employee.get("phone")
        )
        if not address:
            return []
        return [
            Recipient(address=address, channel=channel, display_name=name, user_id=user_id)
        ]

    def _linked_user_id(self, employee: Dict[str, Any]) -> Optional[str]:
        """Employee record → user id, through ``user_id`` or a matching email."""
        if employee.get("user_id"):
            return employee["user_id"]
        email = employee.get("email")
        if not email:
            return None
        users = self._store.query(USERS_COLLECTION, [QueryFilter("email", "==", email)])
        return users[0]["id"] if users else None

    def _employee_for_user(self, user: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        email = user.get("email")
        if not email:
            return None
        try:
            employees = self._store.query(
                EMPLOYEES_COLLECTION, [QueryFilter("email", "==", email)]
            )
        except DocumentStoreError as e:
            logger.warning("employee_lookup_failed", email=email, error=str(e))
            return None
        return employees[0] if employees else None

    def _contacts_for_user(
        self,
        user: Dict[str, Any],
        channel: Channel,
        employee: Optional[Dict[str, Any]] = None,
    ) -> List[Recipient]:
        user_id = user.get("id")
        name = user.get("display_name") or user.get("name") or user.get("email")

        if channel == Channel.PUSH:
            tokens = [t for t in user.get("fcm_tokens") or [] if t]
            if not tokens:
                return [Recipient(channel=channel, user_id=user_id, display_name=name)]
            return [
                Recipient(address=token, channel=channel, user_id=user_id, display_name=name)
                for token in tokens
            ]

        if channel == Channel.EMAIL:
            address = user.get("email")
            if not address:
                employee = employee or self._employee_for_user(user)
                address = employee.get("email") if employee else None
        else:
            address = _user_phone(user)
            if not address:
                employee = employee or self._employee_for_user(user)
                address = employee.get("phone") if employee else None

        if not address:
            logger.info(
                "recipient_has_no_contact", user_id=user_id, channel=channel.value
            )
            return []
        return [
            Recipient(address=address, channel=channel, display_name=name, user_id=user_id)
        ]
