# ============================================================
# api.py — Hotel API Router
# ------------------------------------------------------------
# REST endpoints that go beyond plain CRUD: login, room
# availability, booking creation, the service/staff request
# workflow and guest preference application.
#
# Errors are raised as HotelError subclasses by the core logic
# and turned into JSON responses by the handlers in app.py.
# ============================================================
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from hotel_api import auth, bookings, lifecycle, preferences
from hotel_api.models import (
    BookingCreate,
    GuestPreferencesApply,
    LoginRequest,
    ServiceRequestComplete,
    StaffRequestComplete,
    StaffRequestCreate,
)
from hotel_api.store import JsonStore
from hotel_api.tenancy import get_hotel_id, tenant_for

router = APIRouter()


# FastAPI dependency: the store attached to the application
def get_store(request: Request) -> JsonStore:
    return request.app.state.store


# ------------------------------------------------------------
# POST /login — email + password → user profile
# ------------------------------------------------------------
@router.post("/login")
def login(body: Optional[LoginRequest] = None, store: JsonStore = Depends(get_store)):
    user = auth.login(store, body or LoginRequest())
    return {"success": True, "user": user}


# ------------------------------------------------------------
# GET /rooms/available — rooms free over [checkIn, checkOut)
# ------------------------------------------------------------
@router.get("/rooms/available")
def available_rooms(
    check_in: Optional[str] = Query(None, alias="checkIn"),
    check_out: Optional[str] = Query(None, alias="checkOut"),
    store: JsonStore = Depends(get_store),
    hotel_id: Optional[str] = Depends(get_hotel_id),
):
    tenant = tenant_for("GET", "rooms", hotel_id)
    return bookings.find_available_rooms(store, check_in, check_out, hotel_id=tenant)


# ------------------------------------------------------------
# POST /bookings/create — validated booking with pricing
# ------------------------------------------------------------
@router.post("/bookings/create", status_code=201)
def create_booking(body: Optional[BookingCreate] = None, store: JsonStore = Depends(get_store)):
    booking = bookings.create_booking(store, body or BookingCreate())
    return {"success": True, "message": "Booking created", "booking": booking}


# ------------------------------------------------------------
# PATCH /service-requests/{id}/complete — close + notify guest
# ------------------------------------------------------------
@router.patch("/service-requests/{request_id}/complete")
def complete_service_request(
    request_id: int,
    body: Optional[ServiceRequestComplete] = None,
    store: JsonStore = Depends(get_store),
):
    result = lifecycle.complete_service_request(store, request_id, body or ServiceRequestComplete())
    return {
        "success": True,
        "message": "Service request marked as completed",
        "serviceRequest": result["serviceRequest"],
        "notificationSent": True,
    }


# ------------------------------------------------------------
# PATCH /staff-requests/{id}/complete
# ------------------------------------------------------------
@router.patch("/staff-requests/{staff_request_id}/complete")
def complete_staff_request(
    staff_request_id: int,
    body: Optional[StaffRequestComplete] = None,
    store: JsonStore = Depends(get_store),
):
    updated = lifecycle.complete_staff_request(store, staff_request_id, body or StaffRequestComplete())
    return {"success": True, "message": "Staff request marked as completed", "staffRequest": updated}


# ------------------------------------------------------------
# POST /staff-requests/{serviceRequestId}/create — open + assign
# ------------------------------------------------------------
@router.post("/staff-requests/{service_request_id}/create", status_code=201)
def create_staff_request(
    service_request_id: int,
    body: Optional[StaffRequestCreate] = None,
    store: JsonStore = Depends(get_store),
):
    created = lifecycle.create_staff_request(store, service_request_id, body or StaffRequestCreate())
    return {"success": True, "message": "Staff request created and assigned", "staffRequest": created}


# ------------------------------------------------------------
# POST /apply-guest-preferences — guest prefs → room devices
# ------------------------------------------------------------
@router.post("/apply-guest-preferences")
def apply_guest_preferences(body: Optional[GuestPreferencesApply] = None, store: JsonStore = Depends(get_store)):
    devices = preferences.apply_guest_preferences(store, body or GuestPreferencesApply())
    return {"success": True, "message": "Preferences applied", "devices": devices}
