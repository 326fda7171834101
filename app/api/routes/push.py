from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.notifications import ValidationError
from infrastructure.services import NotificationServiceDep
from models.notifications import PushSendRequest

logger = get_module_logger()

router = APIRouter(tags=["Push"])
limiter = get_limiter()


@router.post("/notifications/send")
@limiter.limit("30/minute")
def send_push_notification(
    request: Request,  # pylint: disable=unused-argument
    payload: PushSendRequest,
    notification_service: NotificationServiceDep,
):
    """Broadcast a push notification to users by role or id."""
    missing = [
        name for name, value in (("title", payload.title), ("body", payload.body)) if not value
    ]
    if missing:
        raise ValidationError.missing_fields(missing)

    summary = notification_service.send_push(
        title=payload.title,
        body=payload.body,
        roles=payload.target_roles,
        user_ids=payload.user_ids,
    )
    response = {
        "success": summary.success,
        "successCount": summary.success_count,
        "failureCount": summary.failure_count,
    }
    if not summary.total_tokens:
        response.update({"message": "No devices to target", "count": 0})
    return response
