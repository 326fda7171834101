"""Monthly attendance and payslip reports.

Each active employee gets an email with the report rendered from a template
and, when a phone number is on file, a WhatsApp summary.
"""

import calendar
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.notifications import (
    Channel,
    NotificationError,
    NotificationRequest,
    NotificationService,
    NotificationTarget,
    NotFoundError,
    ValidationError,
)
from infrastructure.persistence import QueryFilter

logger = get_module_logger()

EMPLOYEES_COLLECTION = "employees"
ATTENDANCE_COLLECTION = "attendance_records"
PAYROLL_COLLECTION = "payroll_records"

ATTENDANCE_TEMPLATE = "employee_monthly_attendance_report"
PAYSLIP_TEMPLATE = "employee_monthly_payslip_summary"

REPORT_TYPES = ("attendance", "payslip")


def parse_month(month_year: str) -> date:
    """``YYYY-MM`` → first day of that month."""
    try:
        return datetime.strptime(month_year, "%Y-%m").date()
    except ValueError as e:
        raise ValidationError(
            f"Invalid monthYear '{month_year}', expected YYYY-MM",
            details={"monthYear": month_year},
        ) from e


def month_days(first_day: date) -> List[str]:
    """ISO dates of every day of the month."""
    _, last = calendar.monthrange(first_day.year, first_day.month)
    return [first_day.replace(day=day).isoformat() for day in range(1, last + 1)]


def count_attendance(records: List[Dict[str, Any]]) -> Dict[str, int]:
    """Tally attendance flags.

    ``D`` (delayed) and ``V`` (visit) also count as present. A record without
    a flag counts as present.
    """
    stats = {"present": 0, "absent": 0, "delayed": 0, "leave": 0, "visit": 0}
    for record in records:
        flag = str(record.get("flag") or "").upper()
        if flag == "P":
            stats["present"] += 1
        elif flag == "A":
            stats["absent"] += 1
        elif flag == "D":
            stats["delayed"] += 1
            stats["present"] += 1
        elif flag == "L":
            stats["leave"] += 1
        elif flag == "V":
            stats["visit"] += 1
            stats["present"] += 1
        elif not flag:
            stats["present"] += 1
    return stats


def attendance_summary_html(stats: Dict[str, int]) -> str:
    return (
        "<p><strong>Summary:</strong><br/>"
        f"Present: {stats['present']} | Absent: {stats['absent']} | "
        f"Delayed: {stats['delayed']} | Leave: {stats['leave']} | "
        f"Visit: {stats['visit']}</p>"
    )


def attendance_summary_text(stats: Dict[str, int], month_label: str) -> str:
    return (
        f"Attendance Report ({month_label}):\n"
        f"Present: {stats['present']}\n"
        f"Absent: {stats['absent']}\n"
        f"Delayed: {stats['delayed']}\n"
        f"Leave: {stats['leave']}\n"
        f"Visit: {stats['visit']}"
    )


def payslip_summary_html(record: Dict[str, Any]) -> str:
    return (
        f"<p><strong>Basic Salary:</strong> {record.get('basic_salary') or 0}</p>"
        f"<p><strong>Allowances:</strong> {record.get('total_allowances') or 0}</p>"
        f"<p><strong>Deductions:</strong> {record.get('total_deductions') or 0}</p>"
        f"<p><strong>Net Salary:</strong> {record.get('net_salary') or 0}</p>"
    )


def payslip_summary_text(record: Dict[str, Any]) -> str:
    return (
        f"Basic: {record.get('basic_salary') or 0}\n"
        f"Net Salary: {record.get('net_salary') or 0}"
    )


def _employee_name(employee: Dict[str, Any]) -> str:
    return employee.get("full_name") or employee.get("name") or "Employee"


def send_monthly_reports(
    service: NotificationService,
    report_type: Optional[str],
    month_year: Optional[str],
    target_email: Optional[str] = None,
) -> int:
    """Send the monthly ``attendance`` or ``payslip`` report.

    Args:
        service: Notification service; its store holds the HR collections
        report_type: ``attendance`` or ``payslip``
        month_year: Month in ``YYYY-MM`` format
        target_email: Restrict the run to the employee with this email

    Returns:
        Number of employees for whom a notification was attempted.

    Raises:
        ValidationError: type or month missing or invalid
        NotFoundError: no active employee matches
    """
    missing = [
        name
        for name, value in (("type", report_type), ("monthYear", month_year))
        if not value
    ]
    if missing:
        raise ValidationError.missing_fields(missing)
    if report_type not in REPORT_TYPES:
        raise ValidationError(
            f"Invalid report type '{report_type}'. Expected one of: "
            f"{', '.join(REPORT_TYPES)}",
            details={"type": report_type},
        )
    first_day = parse_month(month_year)

    filters = [QueryFilter("is_active", "==", True)]
    if target_email:
        filters.append(QueryFilter("email", "==", target_email))
    employees = service.store.query(EMPLOYEES_COLLECTION, filters)
    if not employees:
        raise NotFoundError("No matching employees found")

    logger.info(
        "monthly_reports_started",
        report_type=report_type,
        month_year=month_year,
        employees=len(employees),
    )
    if report_type == "attendance":
        count = _send_attendance_reports(service, employees, first_day)
    else:
        count = _send_payslip_reports(service, employees, first_day, month_year)

    logger.info(
        "monthly_reports_completed",
        report_type=report_type,
        month_year=month_year,
        count=count,
    )
    return count


def _send_attendance_reports(
    service: NotificationService, employees: List[Dict[str, Any]], first_day: date
) -> int:
    month_label = first_day.strftime("%B %Y")
    records = service.store.query(
        ATTENDANCE_COLLECTION, [QueryFilter("date", "in", month_days(first_day))]
    )

    count = 0
    for employee in employees:
        if not employee.get("email"):
            continue
        own_records = [r for r in records if r.get("employee_id") == employee["id"]]
        stats = count_attendance(own_records)
        data = {
            "employee_name": _employee_name(employee),
            "month_year": month_label,
        }

        service.send(
            NotificationRequest(
                to=NotificationTarget(addresses=[employee["email"]]),
                template_slug=ATTENDANCE_TEMPLATE,
                data={**data, "attendance_chart": attendance_summary_html(stats)},
                channels=[Channel.EMAIL],
            )
        )
        if employee.get("phone"):
            _send_whatsapp(
                service,
                employee,
                ATTENDANCE_TEMPLATE,
                {
                    **data,
                    "attendance_chart": attendance_summary_text(stats, month_label),
                },
            )
        count += 1
    return count


def _send_payslip_reports(
    service: NotificationService,
    employees: List[Dict[str, Any]],
    first_day: date,
    month_year: str,
) -> int:
    month_label = first_day.strftime("%B %Y")
    payroll = {
        record.get("employee_id"): record
        for record in service.store.query(
            PAYROLL_COLLECTION, [QueryFilter("month", "==", month_year)]
        )
    }

    count = 0
    for employee in employees:
        if not (employee.get("email") or employee.get("phone")):
            continue
        record = payroll.get(employee["id"])
        if record is None:
            continue
        data = {
            "employee_name": _employee_name(employee),
            "month_year": month_label,
        }

        if employee.get("email"):
            service.send(
                NotificationRequest(
                    to=NotificationTarget(addresses=[employee["email"]]),
                    template_slug=PAYSLIP_TEMPLATE,
                    data={**data, "payslip_summary": payslip_summary_html(record)},
                    channels=[Channel.EMAIL],
                )
            )
        if employee.get("phone"):
            _send_whatsapp(
                service,
                employee,
                PAYSLIP_TEMPLATE,
                {**data, "payslip_summary": payslip_summary_text(record)},
            )
        count += 1
    return count


def _send_whatsapp(
    service: NotificationService,
    employee: Dict[str, Any],
    template_slug: str,
    data: Dict[str, Any],
) -> None:
    """WhatsApp copy of a report; its failure does not stop the run."""
    try:
        service.send(
            NotificationRequest(
                to=NotificationTarget(addresses=[employee["phone"]]),
                template_slug=template_slug,
                data=data,
                channels=[Channel.WHATSAPP],
            )
        )
    except NotificationError as e:
        logger.warning(
            "report_whatsapp_failed",
            employee_id=employee.get("id"),
            template_slug=template_slug,
            error=e.message,
        )
