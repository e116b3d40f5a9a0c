# ============================================================
# bookings.py — Availability and booking creation
# ------------------------------------------------------------
# Two bookings clash when their half-open date intervals
# [checkIn, checkOut) intersect. Only bookings that hold the
# room (active / confirmed) are taken into account.
# ============================================================
import math
from datetime import datetime, timezone
from typing import Optional

from hotel_api.errors import (
    BookingConflict,
    InvalidDate,
    InvalidRange,
    MissingFields,
    MissingParameter,
    RoomNotFound,
    RoomUnavailable,
)
from hotel_api.logging_config import get_logger
from hotel_api.models import ACTIVE_BOOKING_STATUSES, ROOM_AVAILABLE, Booking, BookingCreate
from hotel_api.repository import Repository
from hotel_api.store import JsonStore, same_value

logger = get_logger(__name__)

DAILY_RATES = {"suite": 150}
DEFAULT_DAILY_RATE = 100
SECONDS_PER_DAY = 24 * 60 * 60


def parse_date(value) -> Optional[datetime]:
    """Parse an ISO date or datetime; naive values are taken as UTC.

    Returns None when the value cannot be parsed.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    return start_a < end_b and end_a > start_b


def holds_room(booking: dict) -> bool:
    return booking.get("status") in ACTIVE_BOOKING_STATUSES


def clashes(booking: dict, start: datetime, end: datetime) -> bool:
    """True if an active/confirmed booking intersects [start, end).

    Bookings with unreadable dates never clash.
    """
    if not holds_room(booking):
        return False
    b_start = parse_date(booking.get("checkInDate"))
    b_end = parse_date(booking.get("checkOutDate"))
    if b_start is None or b_end is None:
        return False
    return overlaps(b_start, b_end, start, end)


def parse_range(check_in, check_out):
    start, end = parse_date(check_in), parse_date(check_out)
    if start is None or end is None:
        raise InvalidDate()
    if start >= end:
        raise InvalidRange()
    return start, end


def daily_rate(room: dict) -> int:
    return DAILY_RATES.get(room.get("type"), DEFAULT_DAILY_RATE)


def stay_price(room: dict, start: datetime, end: datetime) -> int:
    days = math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)
    return daily_rate(room) * days


# ------------------------------------------------------------
# GET /rooms/available
# ------------------------------------------------------------
def find_available_rooms(store: JsonStore, check_in, check_out, hotel_id: Optional[str] = None) -> list:
    missing = [name for name, value in (("checkIn", check_in), ("checkOut", check_out)) if not value]
    if missing:
        raise MissingParameter(*missing)
    start, end = parse_range(check_in, check_out)

    booked = Repository(store, "bookings").filter(lambda b: clashes(b, start, end))
    booked_room_ids = {b.get("roomId") for b in booked}

    rooms = Repository(store, "rooms").filter(
        lambda r: r.get("status") == ROOM_AVAILABLE
        and not any(same_value(r.get("id"), rid) for rid in booked_room_ids),
        hotel_id=hotel_id,
    )
    logger.info(
        "rooms.availability",
        check_in=check_in,
        check_out=check_out,
        available=len(rooms),
        hotel_id=hotel_id,
    )
    return rooms


# ------------------------------------------------------------
# POST /bookings/create
# ------------------------------------------------------------
def create_booking(store: JsonStore, body: BookingCreate) -> dict:
    required = {
        "userId": body.user_id,
        "roomId": body.room_id,
        "checkInDate": body.check_in_date,
        "checkOutDate": body.check_out_date,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise MissingFields(*missing)

    rooms = Repository(store, "rooms")
    bookings = Repository(store, "bookings")

    room = rooms.get(body.room_id)
    if not room:
        raise RoomNotFound()
    if room.get("status") != ROOM_AVAILABLE:
        raise RoomUnavailable()

    start, end = parse_range(body.check_in_date, body.check_out_date)

    # check + append must not interleave with another booking of the same room
    with store.locked("rooms", room["id"]):
        existing = bookings.filter(lambda b: same_value(b.get("roomId"), room["id"]) and clashes(b, start, end))
        if existing:
            logger.warning(
                "booking.conflict",
                room_id=room["id"],
                check_in=body.check_in_date,
                check_out=body.check_out_date,
                conflicting=[b.get("id") for b in existing],
            )
            raise BookingConflict()

        booking = Booking(
            user_id=body.user_id,
            room_id=body.room_id,
            check_in_date=body.check_in_date,
            check_out_date=body.check_out_date,
            total_price=stay_price(room, start, end),
            special_requests=body.special_requests or "",
        )
        created = bookings.create(booking.to_record())

    logger.info(
        "booking.created",
        booking_id=created["id"],
        room_id=created["roomId"],
        user_id=created["userId"],
        total_price=created["totalPrice"],
    )
    return created
