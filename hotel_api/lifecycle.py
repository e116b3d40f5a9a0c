# ============================================================
# lifecycle.py — Service request / staff request lifecycle
# ------------------------------------------------------------
#   ServiceRequest : pending → in-progress → completed
#   StaffRequest   : assigned → completed
#
# A staff member opens a staff request for a guest's service
# request (which moves it to in-progress). Completing the
# service request notifies the guest who asked for it.
# ============================================================
from hotel_api.errors import AlreadyCompleted, MissingFields, NotFound
from hotel_api.logging_config import get_logger
from hotel_api.models import (
    ServiceRequestComplete,
    StaffRequest,
    StaffRequestComplete,
    StaffRequestCreate,
    now_iso,
)
from hotel_api.notifications import publish_notification
from hotel_api.repository import Repository
from hotel_api.store import JsonStore

logger = get_logger(__name__)

COMPLETED = "completed"


def create_staff_request(store: JsonStore, service_request_id: int, body: StaffRequestCreate) -> dict:
    required = {
        "staffId": body.staff_id,
        "title": body.title,
        "description": body.description,
        "priority": body.priority,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise MissingFields(*missing)

    service_requests = Repository(store, "service-requests")
    if not service_requests.get(service_request_id):
        raise NotFound("Service request not found")

    staff_request = StaffRequest(
        service_request_id=service_request_id,
        title=body.title,
        description=body.description,
        priority=body.priority,
        handled_by_staff_id=body.staff_id,
        notes=body.notes or "",
    )
    created = Repository(store, "staff-requests").create(staff_request.to_record())
    service_requests.update_status(service_request_id, "in-progress", assignedStaffId=body.staff_id)

    logger.info(
        "staff_request.created",
        staff_request_id=created["id"],
        service_request_id=service_request_id,
        staff_id=body.staff_id,
    )
    return created


def complete_staff_request(store: JsonStore, staff_request_id: int, body: StaffRequestComplete) -> dict:
    staff_requests = Repository(store, "staff-requests")

    # status check + write must not interleave with another completion
    with store.locked("staff-requests", staff_request_id):
        staff_request = staff_requests.get(staff_request_id)
        if not staff_request:
            raise NotFound("Staff request not found")
        if staff_request.get("status") == COMPLETED:
            raise AlreadyCompleted("Staff request already completed")

        notes = staff_request.get("notes") or ""
        if body.notes:
            notes = f"{notes}\n{body.notes}" if notes else body.notes

        updated = staff_requests.update_status(staff_request_id, COMPLETED, completedAt=now_iso(), notes=notes)

    logger.info("staff_request.completed", staff_request_id=staff_request_id)
    return updated


def complete_service_request(store: JsonStore, service_request_id: int, body: ServiceRequestComplete) -> dict:
    if not body.staff_id:
        raise MissingFields("staffId")

    service_requests = Repository(store, "service-requests")

    # one completion, one notification
    with store.locked("service-requests", service_request_id):
        request = service_requests.get(service_request_id)
        if not request:
            raise NotFound("Service request not found")
        if request.get("status") == COMPLETED:
            raise AlreadyCompleted("Service request already completed")

        updated = service_requests.update_status(
            service_request_id,
            COMPLETED,
            assignedStaffId=body.staff_id,
            completedAt=now_iso(),
            completionNotes=body.notes or "",
        )
        notification = publish_notification(
            store,
            recipient_id=request.get("userId"),
            title="Request completed",
            message=f'Your "{request.get("requestType")}" request has been completed.',
        )

    logger.info("service_request.completed", service_request_id=service_request_id, staff_id=body.staff_id)
    return {"serviceRequest": updated, "notification": notification}
