"""Holiday announcements to every active employee."""

from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from infrastructure.logging import get_module_logger
from infrastructure.notifications import (
    Channel,
    NotificationError,
    NotificationRequest,
    NotificationService,
    NotificationTarget,
    ValidationError,
)
from infrastructure.persistence import QueryFilter
from modules.hr.requests import EMPLOYEES_COLLECTION, parse_date

logger = get_module_logger()

HOLIDAYS_COLLECTION = "holidays"
HOLIDAY_TEMPLATE = "holiday_announcement"
NO_DESCRIPTION = "No additional details provided."

SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    return f"{day}{SUFFIXES.get(day % 10, 'th')}"


def long_date(value: date) -> str:
    """``Tuesday, March 5th, 2024``."""
    return f"{value:%A}, {value:%B} {ordinal(value.day)}, {value.year}"


def _format(value: Any) -> Optional[str]:
    parsed = parse_date(value)
    if parsed is None:
        return str(value) if value else None
    return long_date(parsed)


def announce_holiday(
    service: NotificationService,
    holiday_id: Optional[str],
    holiday: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    """Email the ``holiday_announcement`` template to each active employee.

    A holiday is announced once: the holiday record is marked ``email_sent``
    after a run in which at least one email went out.

    Args:
        service: Notification service; its store holds the HR collections
        holiday_id: Id of the ``holidays`` record
        holiday: Title, dates, type and description of the holiday

    Returns:
        ``{"success": True, "notifiedCount": n}``, or ``{"message": ...}``
        when there is nothing to send.

    Raises:
        ValidationError: holiday id or data missing
        NotificationError: every email failed
    """
    missing = [
        name
        for name, value in (("holidayId", holiday_id), ("holidayData", holiday))
        if not value
    ]
    if missing:
        raise ValidationError.missing_fields(missing)

    record = service.store.get(HOLIDAYS_COLLECTION, holiday_id)
    if record and record.get("email_sent"):
        return {"message": "Email already sent for this holiday"}

    employees = [
        employee
        for employee in service.store.query(
            EMPLOYEES_COLLECTION, [QueryFilter("is_active", "==", True)]
        )
        if employee.get("email")
    ]
    if not employees:
        return {"message": "No active employees with emails found"}

    start_date = _format(holiday.get("from_date")) or "N/A"
    data = {
        "holiday_title": holiday.get("title") or "",
        "holiday_date": start_date,
        "holiday_start_date": start_date,
        "holiday_end_date": _format(holiday.get("to_date")) or "N/A",
        "holiday_type": holiday.get("type") or "",
        "holiday_description": holiday.get("description") or NO_DESCRIPTION,
    }

    sent = 0
    for employee in employees:
        try:
            result = service.send(
                NotificationRequest(
                    to=NotificationTarget(addresses=[employee["email"]]),
                    template_slug=HOLIDAY_TEMPLATE,
                    data={
                        **data,
                        "employee_name": employee.get("full_name")
                        or employee.get("name")
                        or "Employee",
                    },
                    channels=[Channel.EMAIL],
                )
            )
        except NotificationError as e:
            logger.warning(
                "holiday_email_failed", employee_id=employee.get("id"), error=e.message
            )
            continue
        if result.success_count:
            sent += 1

    if not sent:
        raise NotificationError(
            "All email sending attempts failed. Please check the email provider "
            "configuration and the holiday_announcement template.",
            details={"holidayId": holiday_id},
        )

    service.store.set(
        HOLIDAYS_COLLECTION,
        holiday_id,
        {"email_sent": True, "email_sent_at": datetime.now(timezone.utc).isoformat()},
        merge=True,
    )
    logger.info(
        "holiday_announced",
        holiday_id=holiday_id,
        employees=len(employees),
        sent=sent,
    )
    return {"success": True, "notifiedCount": len(employees)}
