import pytest

from infrastructure.operations import OperationResult


@pytest.mark.unit
class TestSystemRoutes:
    def test_get_version(self, client):
        response = client.get("/version")

        assert response.status_code == 200
        assert response.json() == {"version": "abc123"}

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_channels_health(self, client, mock_notification_service):
        mock_notification_service.health_check.return_value = {
            "email": OperationResult.success(message="smtp-1 ready"),
            "push": OperationResult.permanent_error(
                message="No active push configuration found",
                error_code="NO_ACTIVE_CONFIG",
            ),
        }

        response = client.get("/health/channels")

        assert response.status_code == 200
        assert response.json() == {
            "channels": {
                "email": {"healthy": True, "message": "smtp-1 ready", "errorCode": None},
                "push": {
                    "healthy": False,
                    "message": "No active push configuration found",
                    "errorCode": "NO_ACTIVE_CONFIG",
                },
            }
        }

    def test_unknown_route(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error_code"] == "HTTP_404"
