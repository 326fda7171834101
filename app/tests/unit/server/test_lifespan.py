from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from server import lifespan


@pytest.mark.unit
class TestLifespan:
    @patch("server.lifespan.get_notification_service")
    @patch("server.lifespan.configure_logging")
    @patch("server.lifespan.get_settings")
    def test_startup_and_shutdown(
        self,
        mock_get_settings,
        mock_configure_logging,
        mock_get_service,
        settings,
        mock_notification_service,
    ):
        mock_get_settings.return_value = settings
        logger = MagicMock()
        mock_configure_logging.return_value = logger
        mock_get_service.return_value = mock_notification_service
        app = FastAPI(lifespan=lifespan.lifespan)

        with TestClient(app):
            assert app.state.settings is settings
            assert app.state.logger is logger

        mock_configure_logging.assert_called_once_with(settings=settings)
        logger.info.assert_any_call("application_startup")
        logger.info.assert_any_call(
            "notification_channels_registered", channels=["email", "whatsapp", "push"]
        )
        logger.info.assert_any_call("application_shutdown")

    def test_list_configs_logs_sections(self, settings):
        logger = MagicMock()

        lifespan._list_configs(settings, logger)  # pylint: disable=protected-access

        logged_sections = {
            c.kwargs["config_setting"]
            for c in logger.info.call_args_list
            if c.args == ("configuration_loaded",)
        }
        assert {"aws", "notifications", "server"} <= logged_sections
