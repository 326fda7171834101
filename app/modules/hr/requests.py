"""Steps shared by the HR request workflows.

Advance salary, leave and visit requests follow the same flow: a
``new_request`` notifies the approvers, a ``decision`` notifies the employee
when the request was approved or rejected.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.notifications import (
    Channel,
    NoMatchingRecipientsError,
    NotificationError,
    NotificationRequest,
    NotificationService,
    NotificationTarget,
    NotFoundError,
    ValidationError,
)

logger = get_module_logger()

EMPLOYEES_COLLECTION = "employees"

APPROVER_ROLES = ["Admin", "HR", "Super Admin"]
NOTIFY_TYPES = ("new_request", "decision")
NO_NOTIFICATION = "Status requires no notification."
NO_EMPLOYEE = "No employee linked to the request."


def load_request(
    service: NotificationService,
    collection: str,
    notify_type: Optional[str],
    request_id: Optional[str],
) -> Dict[str, Any]:
    """Validate the notify call and load the request document.

    Raises:
        ValidationError: type or request id missing, or unknown type
        NotFoundError: no request with that id
    """
    missing = [
        name for name, value in (("type", notify_type), ("requestId", request_id)) if not value
    ]
    if missing:
        raise ValidationError.missing_fields(missing)
    if notify_type not in NOTIFY_TYPES:
        raise ValidationError(
            f"Invalid type '{notify_type}'. Expected one of: {', '.join(NOTIFY_TYPES)}",
            details={"type": notify_type},
        )

    request = service.store.get(collection, request_id)
    if request is None:
        raise NotFoundError("Request not found", details={"requestId": request_id})
    return request


def employee_name(service: NotificationService, request: Dict[str, Any]) -> str:
    """Name on the request, else the employee record's, else ``Employee``."""
    if request.get("employee_name"):
        return request["employee_name"]
    employee_id = request.get("employee_id")
    if employee_id:
        employee = service.store.get(EMPLOYEES_COLLECTION, employee_id)
        if employee:
            return employee.get("full_name") or employee.get("name") or "Employee"
    return "Employee"


def parse_date(value: Any) -> Optional[date]:
    """Date of an ISO date or timestamp value, or None when it is not one."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        return None


def app_link(app_url: str, path: str) -> str:
    return f"{app_url.rstrip('/')}{path}"


def notify_approvers(
    service: NotificationService,
    request: Dict[str, Any],
    template_slug: str,
    data: Dict[str, Any],
    channels: List[Channel],
) -> Dict[str, Any]:
    """Send ``template_slug`` to every approver on ``channels``."""
    try:
        result = service.send(
            NotificationRequest(
                to=NotificationTarget(roles=APPROVER_ROLES),
                template_slug=template_slug,
                data=data,
                channels=channels,
            )
        )
    except NoMatchingRecipientsError:
        logger.warning(
            "hr_request_no_approvers",
            request_id=request.get("id"),
            template_slug=template_slug,
        )
        return {"success": True, "notified": "none"}

    logger.info(
        "hr_request_notified",
        request_id=request.get("id"),
        template_slug=template_slug,
        success_count=result.success_count,
        failure_count=result.failure_count,
    )
    return {"success": True, "notified": "admins"}


def notify_employee(
    service: NotificationService,
    request: Dict[str, Any],
    template_slug: str,
    data: Dict[str, Any],
    channels: List[Channel],
) -> Dict[str, Any]:
    """Send the decision ``template_slug`` to the employee of the request."""
    employee_id = request.get("employee_id")
    if not employee_id:
        logger.warning("hr_request_without_employee", request_id=request.get("id"))
        return {"success": True, "message": NO_EMPLOYEE}

    result = service.send(
        NotificationRequest(
            to=NotificationTarget(employee_id=employee_id),
            template_slug=template_slug,
            data=data,
            channels=channels,
        )
    )
    logger.info(
        "hr_decision_notified",
        request_id=request.get("id"),
        template_slug=template_slug,
        success_count=result.success_count,
        failure_count=result.failure_count,
    )
    return {"success": True, "notified": "employee"}


def send_push(
    service: NotificationService,
    target: NotificationTarget,
    title: str,
    body: str,
    url: str,
) -> None:
    """Literal push notification; a failure is logged and does not stop the
    workflow."""
    try:
        service.send(
            NotificationRequest(
                to=target,
                subject=title,
                body=body,
                channels=[Channel.PUSH],
                url=url,
            )
        )
    except NotificationError as e:
        logger.warning("hr_push_failed", title=title, error=e.message)
