from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.services import NotificationServiceDep
from models.notifications import EmailSendRequest

logger = get_module_logger()

router = APIRouter(tags=["Email"])
limiter = get_limiter()


@router.post("/email/send")
@limiter.limit("30/minute")
def send_email(
    request: Request,  # pylint: disable=unused-argument
    payload: EmailSendRequest,
    notification_service: NotificationServiceDep,
):
    """Send an email to addresses or role members.

    ``to`` accepts email addresses and role names. Content is either a
    ``templateSlug`` with ``data``, or a literal ``subject`` and ``body``.

    Returns:
        dict: ``success`` (at least one email went out) and the per-recipient
        ``result``.
    """
    result = notification_service.send(payload.to_request())
    logger.info(
        "email_send_completed",
        success=result.success,
        success_count=result.success_count,
        failure_count=result.failure_count,
    )
    return {
        "success": result.success,
        "result": result.model_dump(by_alias=True, mode="json"),
    }
