# ============================================================
# errors.py — Error kinds of the hotel API
# ------------------------------------------------------------
# Core logic raises these; a single exception handler in app.py
# turns them into {"success": false, "error", "message"} bodies
# with the status code carried by the class.
# ============================================================


class HotelError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {"success": False, "error": self.kind, "message": self.message}


# 400 — the request itself is unusable
class MissingFields(HotelError):
    status_code = 400
    default_message = "Missing required fields"

    def __init__(self, *fields: str):
        self.fields = list(fields)
        super().__init__(f"Missing required fields ({', '.join(fields)})" if fields else None)


class MissingParameter(HotelError):
    status_code = 400
    default_message = "Missing required query parameters"

    def __init__(self, *params: str):
        self.fields = list(params)
        super().__init__(f"Missing required query parameters ({', '.join(params)})" if params else None)


class InvalidRequest(HotelError):
    status_code = 400
    default_message = "Invalid request body"


class InvalidDate(HotelError):
    status_code = 400
    default_message = "Invalid date format"


class InvalidRange(HotelError):
    status_code = 400
    default_message = "Check-out date must be after check-in date"


class RoomUnavailable(HotelError):
    status_code = 400
    default_message = "Room is not available"


class AlreadyCompleted(HotelError):
    status_code = 400
    default_message = "Request is already completed"


# 401
class Unauthorized(HotelError):
    status_code = 401
    default_message = "Invalid credentials"


# 404
class NotFound(HotelError):
    status_code = 404
    default_message = "Not found"


class RoomNotFound(NotFound):
    default_message = "Room not found"


class GuestNotFound(NotFound):
    default_message = "Guest not found"


class NoDevicesInRoom(NotFound):
    default_message = "No devices in that room"


# 409
class BookingConflict(HotelError):
    status_code = 409
    default_message = "Room is already booked for that date range"
