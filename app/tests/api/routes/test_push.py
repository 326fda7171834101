"""Tests for POST /api/notifications/send."""

import pytest

from infrastructure.notifications.models import PushDispatchSummary


@pytest.mark.unit
class TestSendPush:
    def test_broadcast(self, client, mock_notification_service):
        mock_notification_service.send_push.return_value = PushDispatchSummary(
            success=True, success_count=4, failure_count=1, total_tokens=5
        )

        response = client.post(
            "/api/notifications/send",
            json={"title": "Payroll", "body": "Payslips are out", "targetRoles": ["Admin"]},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "successCount": 4, "failureCount": 1}
        mock_notification_service.send_push.assert_called_once_with(
            title="Payroll", body="Payslips are out", roles=["Admin"], user_ids=None
        )

    def test_no_devices(self, client, mock_notification_service):
        mock_notification_service.send_push.return_value = PushDispatchSummary(
            success=False, status="no_targets"
        )

        response = client.post(
            "/api/notifications/send",
            json={"title": "T", "body": "B", "userIds": ["u1"]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "successCount": 0,
            "failureCount": 0,
            "message": "No devices to target",
            "count": 0,
        }

    def test_missing_title_and_body(self, client, mock_notification_service):
        response = client.post("/api/notifications/send", json={"targetRoles": ["Admin"]})

        assert response.status_code == 400
        assert response.json()["details"] == {"missing": ["title", "body"]}
        mock_notification_service.send_push.assert_not_called()
