"""Unit tests for infrastructure.logging.setup."""

import json
import logging
from unittest.mock import patch

import pytest
import structlog

from infrastructure.logging.setup import (
    _is_test_environment,
    configure_logging,
    get_module_logger,
)


@pytest.mark.unit
class TestConfigureLogging:
    def test_detects_pytest(self):
        assert _is_test_environment() is True

    def test_output_is_suppressed_under_pytest(self, mock_settings):
        logger = configure_logging(settings=mock_settings, log_level="DEBUG")

        assert logger is not None
        assert logging.root.level > logging.CRITICAL

    @pytest.mark.usefixtures("restore_logging")
    def test_production_renders_json(self, mock_settings, capsys):
        with patch("infrastructure.logging.setup._is_test_environment", return_value=False):
            logger = configure_logging(settings=mock_settings, is_production=True)

        logger.info("notification_dispatched", api_key="re_live", success_count=2)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "notification_dispatched"
        assert entry["api_key"] == "***REDACTED***"
        assert entry["success_count"] == 2
        assert entry["app_name"] == "Acme"
        assert entry["app_version"] == "abc123"

    @pytest.mark.usefixtures("restore_logging")
    def test_log_level_override(self, mock_settings):
        with patch("infrastructure.logging.setup._is_test_environment", return_value=False):
            configure_logging(settings=mock_settings, log_level="warning")

        assert logging.root.level == logging.WARNING

    @pytest.mark.usefixtures("restore_logging")
    def test_console_renderer_outside_production(self, mock_settings):
        with patch("infrastructure.logging.setup._is_test_environment", return_value=False):
            configure_logging(settings=mock_settings, is_production=False)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


@pytest.mark.unit
class TestGetModuleLogger:
    def test_binds_calling_module(self):
        logger = get_module_logger()

        context = logger._context  # pylint: disable=protected-access
        assert context["module_path"] == __name__
        assert context["component"] == __name__.split(".")[-1]
