"""Unit tests for RecipientResolver.

Tests cover:
- Literal addresses per channel
- Role, user id and employee id expansion
- Contact fallbacks through the linked employee record
- Best-effort behaviour when lookups fail
"""

import pytest

from infrastructure.notifications.errors import ValidationError
from infrastructure.notifications.models import Channel, NotificationTarget
from infrastructure.notifications.recipients import RecipientResolver
from tests.factories import make_employee, make_user, make_users


@pytest.fixture
def resolver(document_store):
    return RecipientResolver(document_store)


@pytest.mark.unit
class TestLiteralAddresses:
    def test_email_channel_keeps_emails_only(self, resolver):
        target = NotificationTarget(addresses=["a@example.com", "+15550100100"])

        recipients = resolver.resolve(target, Channel.EMAIL)

        assert [r.address for r in recipients] == ["a@example.com"]

    def test_whatsapp_channel_keeps_numbers_only(self, resolver):
        target = NotificationTarget(addresses=["a@example.com", "+15550100100"])

        recipients = resolver.resolve(target, Channel.WHATSAPP)

        assert [r.address for r in recipients] == ["+15550100100"]

    def test_whatsapp_email_address_uses_user_phone(self, resolver, document_store):
        document_store.seed(
            "users", make_user(id="u1", email="a@example.com", phone="+15550100101")
        )

        recipients = resolver.resolve(
            NotificationTarget(addresses=["a@example.com"]), Channel.WHATSAPP
        )

        assert [r.address for r in recipients] == ["+15550100101"]
        assert recipients[0].user_id == "u1"

    def test_push_email_address_uses_user_tokens(self, resolver, document_store):
        document_store.seed(
            "users", make_user(id="u1", email="a@example.com", fcm_tokens=["t1", "t2"])
        )

        recipients = resolver.resolve(
            NotificationTarget(addresses=["a@example.com"]), Channel.PUSH
        )

        assert [r.address for r in recipients] == ["t1", "t2"]

    def test_unknown_email_is_skipped_on_push(self, resolver):
        recipients = resolver.resolve(
            NotificationTarget(addresses=["ghost@example.com"]), Channel.PUSH
        )

        assert recipients == []

    def test_unknown_email_lookup_failure_is_unresolved(self, resolver, document_store):
        document_store.failing.add("users")

        recipients = resolver.resolve(
            NotificationTarget(addresses=["ghost@example.com"]), Channel.PUSH
        )

        assert [r.user_id for r in recipients] == ["ghost@example.com"]

    def test_empty_target_is_rejected(self, resolver):
        with pytest.raises(ValidationError):
            resolver.resolve(NotificationTarget(), Channel.EMAIL)


@pytest.mark.unit
class TestRoles:
    def test_roles_expand_to_active_users(self, resolver, document_store):
        document_store.seed("users", *make_users(2, role="Admin"))
        document_store.seed("users", *make_users(1, role="HR", prefix="hr"))
        document_store.seed(
            "users",
            make_user(id="off", email="off@example.com", role=["HR"], is_active=False),
        )

        recipients = resolver.resolve(
            NotificationTarget(roles=["Admin", "HR"]), Channel.EMAIL
        )

        assert [r.address for r in recipients] == [
            "admin1@example.com",
            "admin2@example.com",
            "hr1@example.com",
        ]

    def test_status_inactive_users_are_excluded(self, resolver, document_store):
        user = make_user(id="u1", role=["Admin"])
        user["status"] = "Inactive"
        document_store.seed("users", user)

        recipients = resolver.resolve(NotificationTarget(roles=["Admin"]), Channel.EMAIL)

        assert recipients == []

    def test_user_in_two_roles_is_listed_once(self, resolver, document_store):
        document_store.seed("users", make_user(id="u1", role=["Admin", "HR"]))

        recipients = resolver.resolve(
            NotificationTarget(roles=["Admin", "HR"]), Channel.EMAIL
        )

        assert len(recipients) == 1

    def test_push_user_without_token_is_kept(self, resolver, document_store):
        document_store.seed("users", make_user(id="u1", role=["Admin"]))

        recipients = resolver.resolve(NotificationTarget(roles=["Admin"]), Channel.PUSH)

        assert len(recipients) == 1
        assert recipients[0].address is None
        assert recipients[0].user_id == "u1"

    def test_whatsapp_phone_falls_back_to_employee(self, resolver, document_store):
        document_store.seed("users", make_user(id="u1", email="jane@example.com", role=["HR"]))
        document_store.seed("employees", make_employee(email="jane@example.com"))

        recipients = resolver.resolve(NotificationTarget(roles=["HR"]), Channel.WHATSAPP)

        assert [r.address for r in recipients] == ["+1 (555) 010-0100"]

    def test_user_without_contact_is_dropped(self, resolver, document_store):
        document_store.seed("users", make_user(id="u1", role=["HR"]))

        recipients = resolver.resolve(NotificationTarget(roles=["HR"]), Channel.WHATSAPP)

        assert recipients == []

    def test_failed_role_query_returns_roles_unresolved(self, resolver, document_store):
        document_store.failing.add("users")

        recipients = resolver.resolve(NotificationTarget(roles=["Admin"]), Channel.EMAIL)

        assert [r.address for r in recipients] == ["Admin"]


@pytest.mark.unit
class TestUserIds:
    def test_user_id_resolves_contact(self, resolver, document_store):
        document_store.seed("users", make_user(id="u1", email="u1@example.com"))

        recipients = resolver.resolve(NotificationTarget(user_ids=["u1"]), Channel.EMAIL)

        assert recipients[0].address == "u1@example.com"
        assert recipients[0].display_name == "User One"

    def test_missing_user_id_is_unresolved(self, resolver):
        recipients = resolver.resolve(NotificationTarget(user_ids=["nope"]), Channel.EMAIL)

        assert [r.address for r in recipients] == ["nope"]


@pytest.mark.unit
class TestEmployee:
    def test_employee_linked_user(self, resolver, document_store):
        document_store.seed("employees", make_employee(user_id="u1"))
        document_store.seed(
            "users", make_user(id="u1", email="jane.user@example.com", fcm_tokens=["t1"])
        )

        email = resolver.resolve(NotificationTarget(employee_id="emp-1"), Channel.EMAIL)
        push = resolver.resolve(NotificationTarget(employee_id="emp-1"), Channel.PUSH)

        assert [r.address for r in email] == ["jane.user@example.com"]
        assert [r.address for r in push] == ["t1"]

    def test_employee_linked_by_email(self, resolver, document_store):
        document_store.seed("employees", make_employee())
        document_store.seed(
            "users", make_user(id="u9", email="jane@example.com", fcm_tokens=["t9"])
        )

        recipients = resolver.resolve(NotificationTarget(employee_id="emp-1"), Channel.PUSH)

        assert recipients[0].user_id == "u9"
        assert recipients[0].address == "t9"

    def test_employee_without_user_uses_own_contacts(self, resolver, document_store):
        document_store.seed("employees", make_employee())

        email = resolver.resolve(NotificationTarget(employee_id="emp-1"), Channel.EMAIL)
        whatsapp = resolver.resolve(
            NotificationTarget(employee_id="emp-1"), Channel.WHATSAPP
        )
        push = resolver.resolve(NotificationTarget(employee_id="emp-1"), Channel.PUSH)

        assert email[0].address == "jane@example.com"
        assert email[0].display_name == "Jane Doe"
        assert whatsapp[0].address == "+1 (555) 010-0100"
        assert push[0].address is None

    def test_missing_employee_is_unresolved(self, resolver):
        recipients = resolver.resolve(NotificationTarget(employee_id="emp-x"), Channel.EMAIL)

        assert [r.address for r in recipients] == ["emp-x"]

    def test_failed_employee_lookup_is_unresolved(self, resolver, document_store):
        document_store.failing.add("employees")

        recipients = resolver.resolve(NotificationTarget(employee_id="emp-1"), Channel.PUSH)

        assert recipients[0].user_id == "emp-1"
        assert recipients[0].address is None
