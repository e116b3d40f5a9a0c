"""Tests for the service request / staff request workflow."""
import threading
import time

import pytest

from hotel_api.errors import AlreadyCompleted, MissingFields, NotFound
from hotel_api.lifecycle import (
    complete_service_request,
    complete_staff_request,
    create_staff_request,
)
from hotel_api.models import ServiceRequestComplete, StaffRequestComplete, StaffRequestCreate


def staff_request_body(**overrides):
    data = {"staffId": 2, "title": "Fix AC", "description": "AC is noisy", "priority": "high"}
    data.update(overrides)
    return StaffRequestCreate.model_validate(data)


class TestCreateStaffRequest:
    def test_creates_assigned_request_and_starts_service_request(self, store):
        created = create_staff_request(store, 1, staff_request_body(notes="Check filter"))

        assert created["status"] == "assigned"
        assert created["serviceRequestId"] == 1
        assert created["handledByStaffId"] == 2
        assert created["priority"] == "high"
        assert created["notes"] == "Check filter"
        assert created["completedAt"] is None
        assert created["assignedAt"]
        assert store.get("staff-requests", created["id"]) == created

        service_request = store.get("service-requests", 1)
        assert service_request["status"] == "in-progress"
        assert service_request["assignedStaffId"] == 2

    def test_notes_default_to_empty(self, store):
        assert create_staff_request(store, 1, staff_request_body())["notes"] == ""

    def test_missing_fields(self, store):
        with pytest.raises(MissingFields) as exc:
            create_staff_request(store, 1, staff_request_body(title="", priority=None))
        assert exc.value.fields == ["title", "priority"]
        assert store.get("service-requests", 1)["status"] == "pending"

    def test_unknown_service_request(self, store):
        with pytest.raises(NotFound):
            create_staff_request(store, 404, staff_request_body())
        assert len(store.filter("staff-requests")) == 2


class TestCompleteStaffRequest:
    def test_completes_and_appends_notes(self, store):
        updated = complete_staff_request(store, 1, StaffRequestComplete(notes="Towels delivered"))

        assert updated["status"] == "completed"
        assert updated["completedAt"]
        assert updated["notes"] == "Bring towels\nTowels delivered"

    def test_without_notes_keeps_existing(self, store):
        updated = complete_staff_request(store, 1, StaffRequestComplete())
        assert updated["notes"] == "Bring towels"

    def test_notes_on_empty_request(self, store):
        created = create_staff_request(store, 1, staff_request_body())
        updated = complete_staff_request(store, created["id"], StaffRequestComplete(notes="Done"))
        assert updated["notes"] == "Done"

    def test_not_found(self, store):
        with pytest.raises(NotFound):
            complete_staff_request(store, 404, StaffRequestComplete())

    def test_already_completed(self, store):
        before = store.get("staff-requests", 2)
        with pytest.raises(AlreadyCompleted):
            complete_staff_request(store, 2, StaffRequestComplete(notes="again"))
        assert store.get("staff-requests", 2) == before


class TestCompleteServiceRequest:
    def test_completes_and_notifies_requester(self, store):
        result = complete_service_request(store, 1, ServiceRequestComplete(staff_id=2, notes="Room cleaned"))

        request = result["serviceRequest"]
        assert request["status"] == "completed"
        assert request["assignedStaffId"] == 2
        assert request["completionNotes"] == "Room cleaned"
        assert request["completedAt"]

        notifications = store.filter("notifications")
        assert len(notifications) == 1
        assert notifications[0]["recipientId"] == 1
        assert notifications[0]["status"] == "unread"
        assert "housekeeping" in notifications[0]["message"]
        assert result["notification"] == notifications[0]

    def test_requires_staff_id(self, store):
        with pytest.raises(MissingFields) as exc:
            complete_service_request(store, 1, ServiceRequestComplete())
        assert exc.value.fields == ["staffId"]

    def test_not_found(self, store):
        with pytest.raises(NotFound):
            complete_service_request(store, 404, ServiceRequestComplete(staff_id=2))

    def test_second_completion_sends_no_notification(self, store):
        complete_service_request(store, 1, ServiceRequestComplete(staff_id=2))
        with pytest.raises(AlreadyCompleted):
            complete_service_request(store, 1, ServiceRequestComplete(staff_id=2))
        assert len(store.filter("notifications")) == 1

    def test_full_workflow(self, store):
        staff_request = create_staff_request(store, 3, staff_request_body())
        assert store.get("service-requests", 3)["status"] == "in-progress"

        complete_staff_request(store, staff_request["id"], StaffRequestComplete(notes="Replaced part"))
        complete_service_request(store, 3, ServiceRequestComplete(staff_id=2, notes="Fixed"))

        assert store.get("service-requests", 3)["status"] == "completed"
        assert store.filter("notifications")[0]["recipientId"] == 3


def run_concurrently(target, count=4):
    results = []

    def attempt():
        try:
            results.append(target())
        except AlreadyCompleted as e:
            results.append(e)

    threads = [threading.Thread(target=attempt) for _ in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results


@pytest.fixture
def slow_reads(store, monkeypatch):
    """Widen the gap between the status check and the write."""
    original_get = store.get

    def slow_get(name, record_id):
        record = original_get(name, record_id)
        time.sleep(0.05)
        return record

    monkeypatch.setattr(store, "get", slow_get)
    return store


class TestConcurrentCompletion:
    def test_service_request_completed_once(self, slow_reads):
        results = run_concurrently(
            lambda: complete_service_request(slow_reads, 1, ServiceRequestComplete(staff_id=2))
        )

        assert sum(isinstance(r, dict) for r in results) == 1
        assert sum(isinstance(r, AlreadyCompleted) for r in results) == 3
        assert len(slow_reads.filter("notifications")) == 1

    def test_staff_request_completed_once(self, slow_reads):
        results = run_concurrently(
            lambda: complete_staff_request(slow_reads, 1, StaffRequestComplete(notes="Done"))
        )

        assert sum(isinstance(r, dict) for r in results) == 1
        assert sum(isinstance(r, AlreadyCompleted) for r in results) == 3
        assert slow_reads.get("staff-requests", 1)["notes"] == "Bring towels\nDone"
