# ============================================================
# models.py — SQLModel schemas (records and request bodies)
# ------------------------------------------------------------
# Records live in the JSON document with camelCase keys, so
# every schema uses a camelCase alias generator: Python code
# works with snake_case attributes, the wire and the document
# see userId, checkInDate, ...
#
# Request bodies keep every field optional. Presence checks are
# done by the core logic so that a missing field is reported as
# MissingFields (400) like the rest of the API.
# ============================================================
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel

# Booking statuses that hold a room
ACTIVE_BOOKING_STATUSES = ("active", "confirmed")

ROOM_AVAILABLE = "available"
ROOM_OCCUPIED = "occupied"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class HotelModel(SQLModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


# ------------------------------------------------------------
# Records created by the API
# ------------------------------------------------------------
class Booking(HotelModel):
    id: Optional[int] = None
    user_id: int
    room_id: int
    check_in_date: str
    check_out_date: str
    status: str = "confirmed"
    total_price: int
    payment_status: str = "pending"
    special_requests: str = ""
    created_at: str = Field(default_factory=now_iso)


class StaffRequest(HotelModel):
    id: Optional[int] = None
    service_request_id: int
    title: str
    description: str
    status: str = "assigned"
    priority: str
    created_at: str = Field(default_factory=now_iso)
    handled_by_staff_id: int
    assigned_at: str = Field(default_factory=now_iso)
    completed_at: Optional[str] = None
    notes: str = ""


class Notification(HotelModel):
    id: Optional[int] = None
    recipient_id: Optional[Union[int, str]] = None
    title: str
    message: str
    status: str = "unread"
    created_at: str = Field(default_factory=now_iso)


# ------------------------------------------------------------
# Request bodies
# ------------------------------------------------------------
class LoginRequest(HotelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class BookingCreate(HotelModel):
    user_id: Optional[int] = None
    room_id: Optional[int] = None
    check_in_date: Optional[str] = None
    check_out_date: Optional[str] = None
    special_requests: Optional[str] = None


class StaffRequestCreate(HotelModel):
    staff_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    notes: Optional[str] = None


class StaffRequestComplete(HotelModel):
    notes: Optional[str] = None


class ServiceRequestComplete(HotelModel):
    staff_id: Optional[int] = None
    notes: Optional[str] = None


class GuestPreferencesApply(HotelModel):
    guest_id: Optional[int] = None
    room_id: Optional[int] = None
