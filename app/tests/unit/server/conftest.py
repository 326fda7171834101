"""Fixtures for server module unit tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.notifications import NotificationService


@pytest.fixture
def mock_notification_service():
    service = MagicMock(spec=NotificationService)
    service.list_channels.return_value = ["email", "whatsapp", "push"]
    return service
