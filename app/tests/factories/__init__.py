"""Test data factories for deterministic test data generation."""

from tests.factories.notifications import (
    make_employee,
    make_gateway_config,
    make_notification_request,
    make_provider_config,
    make_recipient,
    make_smtp_config,
    make_template,
    make_user,
    make_users,
)

__all__ = [
    "make_employee",
    "make_gateway_config",
    "make_notification_request",
    "make_provider_config",
    "make_recipient",
    "make_smtp_config",
    "make_template",
    "make_user",
    "make_users",
]
