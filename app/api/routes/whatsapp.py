from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.notifications import ValidationError
from infrastructure.services import NotificationServiceDep
from models.notifications import WhatsAppSendRequest

logger = get_module_logger()

router = APIRouter(tags=["WhatsApp"])
limiter = get_limiter()


@router.post("/whatsapp/send")
@limiter.limit("30/minute")
def send_whatsapp(
    request: Request,  # pylint: disable=unused-argument
    payload: WhatsAppSendRequest,
    notification_service: NotificationServiceDep,
):
    """Send a WhatsApp message, literal or from a template."""
    missing = payload.missing_fields()
    if missing:
        raise ValidationError.missing_fields(missing)

    result = notification_service.send(payload.to_request())
    logger.info(
        "whatsapp_send_completed",
        success=result.success,
        success_count=result.success_count,
        failure_count=result.failure_count,
    )
    return {
        "success": result.success,
        "results": [
            r.model_dump(by_alias=True, mode="json")
            for r in result.per_recipient_results
        ],
    }
