"""Leave application notifications."""

from typing import Any, Dict, Optional

from infrastructure.notifications import Channel, NotificationService
from modules.hr.requests import (
    NO_NOTIFICATION,
    app_link,
    employee_name,
    load_request,
    notify_approvers,
    notify_employee,
    parse_date,
)

LEAVE_COLLECTION = "leave_applications"
LEAVES_PATH = "/dashboard/hr/leaves"

NEW_REQUEST_TEMPLATE = "admin_new_leave_application"
DECISION_TEMPLATES = {
    "Approved": "employee_leave_application_approved",
    "Rejected": "employee_leave_application_rejected",
}

CHANNELS = [Channel.EMAIL, Channel.WHATSAPP]


def total_days(request: Dict[str, Any]) -> int:
    """Stored day count, or the inclusive span between the leave dates."""
    if request.get("total_days"):
        return int(request["total_days"])
    start = parse_date(request.get("from_date"))
    end = parse_date(request.get("to_date"))
    if start is None or end is None:
        return 0
    return abs((end - start).days) + 1


def notify_leave(
    service: NotificationService,
    app_url: str,
    notify_type: Optional[str],
    request_id: Optional[str],
    status: Optional[str] = None,
    rejection_reason: Optional[str] = None,
) -> Dict[str, Any]:
    """Notify approvers of a new leave application, or the employee of the
    decision, by email and WhatsApp.

    Raises:
        ValidationError: type or request id missing, or unknown type
        NotFoundError: the leave application does not exist
    """
    request = load_request(service, LEAVE_COLLECTION, notify_type, request_id)
    data = {
        "employee_name": employee_name(service, request),
        "leave_type": request.get("leave_type") or "N/A",
        "start_date": request.get("from_date") or "N/A",
        "end_date": request.get("to_date") or "N/A",
    }

    if notify_type == "new_request":
        data.update(
            {
                "days": str(total_days(request)),
                "reason": request.get("reason") or "N/A",
                "link": app_link(app_url, LEAVES_PATH),
            }
        )
        return notify_approvers(service, request, NEW_REQUEST_TEMPLATE, data, CHANNELS)

    template_slug = DECISION_TEMPLATES.get(status or "")
    if template_slug is None:
        return {"success": True, "message": NO_NOTIFICATION}
    data["rejection_reason"] = (
        rejection_reason or request.get("rejection_reason") or "No reason provided"
    )
    return notify_employee(service, request, template_slug, data, CHANNELS)
