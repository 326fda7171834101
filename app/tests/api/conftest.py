"""Fixtures for API route tests."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import get_limiter
from api.router import api_router
from infrastructure.notifications import NotificationService
from infrastructure.services import get_notification_service, get_settings
from utils.tests import create_test_app


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Rate limit counters are process wide; start every test from zero."""
    get_limiter().reset()
    yield


@pytest.fixture
def mock_notification_service():
    return MagicMock(spec=NotificationService)


@pytest.fixture
def app(settings, mock_notification_service):
    app = create_test_app(api_router)
    app.dependency_overrides[get_notification_service] = lambda: mock_notification_service
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
