"""Customer visit application notifications. Email only."""

from typing import Any, Dict, Optional

from infrastructure.notifications import Channel, NotificationService
from modules.hr.requests import (
    NO_NOTIFICATION,
    app_link,
    employee_name,
    load_request,
    notify_approvers,
    notify_employee,
)

VISIT_COLLECTION = "visit_applications"
VISITS_PATH = "/dashboard/hr/visit-applications"

NEW_REQUEST_TEMPLATE = "admin_new_visit_application"
DECISION_TEMPLATES = {
    "Approved": "employee_visit_application_approved",
    "Rejected": "employee_visit_application_rejected",
}

CHANNELS = [Channel.EMAIL]


def notify_visit(
    service: NotificationService,
    app_url: str,
    notify_type: Optional[str],
    request_id: Optional[str],
    status: Optional[str] = None,
    rejection_reason: Optional[str] = None,
) -> Dict[str, Any]:
    """Notify approvers of a new visit application, or the employee of the
    decision.

    A single-day visit stores only ``visit_date``; it is used for both ends
    of the visit.
    """
    request = load_request(service, VISIT_COLLECTION, notify_type, request_id)
    visit_date = request.get("visit_date")
    data = {
        "employee_name": employee_name(service, request),
        "customer_name": request.get("customer_name") or "N/A",
        "visit_date_start": request.get("from_date") or visit_date or "N/A",
        "visit_date_end": request.get("to_date") or visit_date or "N/A",
    }

    if notify_type == "new_request":
        data.update(
            {
                "location": request.get("location") or "N/A",
                "reason": request.get("reason") or "N/A",
                "link": app_link(app_url, VISITS_PATH),
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
