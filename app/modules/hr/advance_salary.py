"""Advance salary request notifications."""

from datetime import date
from typing import Any, Dict, Optional

from infrastructure.notifications import (
    Channel,
    NotificationService,
    NotificationTarget,
)
from modules.hr.requests import (
    APPROVER_ROLES,
    NO_NOTIFICATION,
    app_link,
    employee_name,
    load_request,
    notify_approvers,
    notify_employee,
    send_push,
)

ADVANCE_SALARY_COLLECTION = "advance_salary"

ADVANCE_SALARY_PATH = "/dashboard/hr/payroll/advance-salary"
EMPLOYEE_PUSH_PATH = "/mobile/dashboard"

NEW_REQUEST_TEMPLATE = "admin_new_advance_salary_request"
DECISION_TEMPLATES = {
    "Approved": "employee_advance_salary_approved",
    "Rejected": "employee_advance_salary_rejected",
}
DECISION_PUSH_TITLES = {
    "Approved": "Advance Salary Approved ✅",
    "Rejected": "Advance Salary Rejected ❌",
}
NEW_REQUEST_PUSH_TITLE = "New Advance Salary Request 💰"

TEMPLATE_CHANNELS = [Channel.EMAIL, Channel.WHATSAPP]


def notify_advance_salary(
    service: NotificationService,
    app_url: str,
    notify_type: Optional[str],
    request_id: Optional[str],
    status: Optional[str] = None,
    rejection_reason: Optional[str] = None,
) -> Dict[str, Any]:
    """Notify approvers of a new request, or the employee of a decision.

    Email and WhatsApp carry the templated message; a literal push
    notification follows on a best-effort basis.

    Returns:
        Response body: ``{"success": True, "notified": ...}`` or, for a
        decision that needs no notification, ``{"success": True, "message": ...}``

    Raises:
        ValidationError: type or request id missing, or unknown type
        NotFoundError: the advance salary request does not exist
    """
    request = load_request(service, ADVANCE_SALARY_COLLECTION, notify_type, request_id)
    name = employee_name(service, request)
    if notify_type == "new_request":
        return _notify_approvers(service, app_url, request, name)
    return _notify_decision(service, request, name, status, rejection_reason)


def _amount(request: Dict[str, Any]) -> str:
    return str(request.get("amount") or 0)


def _notify_approvers(
    service: NotificationService,
    app_url: str,
    request: Dict[str, Any],
    name: str,
) -> Dict[str, Any]:
    data = {
        "employee_name": name,
        "amount": _amount(request),
        "reason": request.get("reason") or "N/A",
        "date": request.get("date") or date.today().isoformat(),
        "link": app_link(app_url, ADVANCE_SALARY_PATH),
    }
    response = notify_approvers(
        service, request, NEW_REQUEST_TEMPLATE, data, TEMPLATE_CHANNELS
    )
    send_push(
        service,
        NotificationTarget(roles=APPROVER_ROLES),
        title=NEW_REQUEST_PUSH_TITLE,
        body=f"{name} requested an advance of {_amount(request)}.",
        url=ADVANCE_SALARY_PATH,
    )
    return response


def _notify_decision(
    service: NotificationService,
    request: Dict[str, Any],
    name: str,
    status: Optional[str],
    rejection_reason: Optional[str],
) -> Dict[str, Any]:
    template_slug = DECISION_TEMPLATES.get(status or "")
    if template_slug is None:
        return {"success": True, "message": NO_NOTIFICATION}

    amount = _amount(request)
    data = {
        "employee_name": name,
        "amount": amount,
        "requested_amount": str(request.get("advance_amount") or amount),
        "rejection_reason": rejection_reason
        or request.get("remarks")
        or "No reason provided",
    }
    response = notify_employee(service, request, template_slug, data, TEMPLATE_CHANNELS)
    if "notified" in response:
        send_push(
            service,
            NotificationTarget(employee_id=request["employee_id"]),
            title=DECISION_PUSH_TITLES[status],
            body=f"Your advance salary request for {amount} has been {status.lower()}.",
            url=EMPLOYEE_PUSH_PATH,
        )
    return response
