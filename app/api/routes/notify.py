from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.notifications import (
    NoMatchingRecipientsError,
    NotificationError,
    TemplateNotFoundError,
)
from infrastructure.services import NotificationServiceDep, SettingsDep
from models.notifications import (
    HolidayNotifyRequest,
    ReportsRequest,
    RequestNotifyRequest,
)
from modules.hr import advance_salary, holiday, leave, reports, visit

logger = get_module_logger()

router = APIRouter(prefix="/notify", tags=["HR Notifications"])
limiter = get_limiter()


def _internal(e: NotificationError) -> NotificationError:
    """Lookups failing inside a workflow are server errors, not client 404s."""
    return NotificationError(e.message, details=e.details)


@router.post("/reports")
@limiter.limit("5/minute")
def send_reports(
    request: Request,  # pylint: disable=unused-argument
    payload: ReportsRequest,
    notification_service: NotificationServiceDep,
):
    """Send monthly attendance or payslip reports to active employees."""
    try:
        count = reports.send_monthly_reports(
            notification_service,
            report_type=payload.type,
            month_year=payload.month_year,
            target_email=payload.target_email,
        )
    except (TemplateNotFoundError, NoMatchingRecipientsError) as e:
        raise _internal(e) from e
    return {"success": True, "count": count}


@router.post("/advance-salary")
@limiter.limit("30/minute")
def notify_advance_salary(
    request: Request,  # pylint: disable=unused-argument
    payload: RequestNotifyRequest,
    notification_service: NotificationServiceDep,
    settings: SettingsDep,
):
    """Notify approvers of a new advance salary request, or the employee of
    the decision."""
    try:
        return advance_salary.notify_advance_salary(
            notification_service,
            app_url=settings.server.APP_URL,
            notify_type=payload.type,
            request_id=payload.request_id,
            status=payload.status,
            rejection_reason=payload.rejection_reason,
        )
    except (TemplateNotFoundError, NoMatchingRecipientsError) as e:
        raise _internal(e) from e


@router.post("/leave")
@limiter.limit("30/minute")
def notify_leave(
    request: Request,  # pylint: disable=unused-argument
    payload: RequestNotifyRequest,
    notification_service: NotificationServiceDep,
    settings: SettingsDep,
):
    """Notify approvers of a new leave application, or the employee of the
    decision."""
    try:
        return leave.notify_leave(
            notification_service,
            app_url=settings.server.APP_URL,
            notify_type=payload.type,
            request_id=payload.request_id,
            status=payload.status,
            rejection_reason=payload.rejection_reason,
        )
    except (TemplateNotFoundError, NoMatchingRecipientsError) as e:
        raise _internal(e) from e


@router.post("/visit")
@limiter.limit("30/minute")
def notify_visit(
    request: Request,  # pylint: disable=unused-argument
    payload: RequestNotifyRequest,
    notification_service: NotificationServiceDep,
    settings: SettingsDep,
):
    """Notify approvers of a new visit application, or the employee of the
    decision."""
    try:
        return visit.notify_visit(
            notification_service,
            app_url=settings.server.APP_URL,
            notify_type=payload.type,
            request_id=payload.request_id,
            status=payload.status,
            rejection_reason=payload.rejection_reason,
        )
    except (TemplateNotFoundError, NoMatchingRecipientsError) as e:
        raise _internal(e) from e


@router.post("/holiday")
@limiter.limit("5/minute")
def announce_holiday(
    request: Request,  # pylint: disable=unused-argument
    payload: HolidayNotifyRequest,
    notification_service: NotificationServiceDep,
):
    """Announce a holiday to every active employee by email, once."""
    holiday_data = payload.holiday_data.model_dump() if payload.holiday_data else None
    try:
        return holiday.announce_holiday(
            notification_service,
            holiday_id=payload.holiday_id,
            holiday=holiday_data,
        )
    except (TemplateNotFoundError, NoMatchingRecipientsError) as e:
        raise _internal(e) from e
