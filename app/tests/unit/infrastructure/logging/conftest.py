"""Fixtures for infrastructure.logging tests."""

from unittest.mock import Mock

import pytest
import structlog

from infrastructure.configuration import Settings
from infrastructure.logging import configure_logging


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.APP_NAME = "Acme"
    settings.GIT_SHA = "abc123"
    settings.is_production = False
    return settings


@pytest.fixture
def restore_logging():
    """Reset structlog to the quiet test configuration after the test."""
    yield
    structlog.reset_defaults()
    configure_logging()
