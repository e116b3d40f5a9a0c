# ============================================================
# tenancy.py — Hotel (tenant) filtering
# ------------------------------------------------------------
# The SPA sends the hotel id of the logged-in user in a header
# (X-Hotel-Id by default). On GET requests for a whole
# collection of a tenant-scoped resource, only the records of
# that hotel are returned. Writes and single-record reads are
# never filtered, and a request without the header sees the
# full collection.
#
# The header is trusted as-is: nothing ties it to an
# authenticated identity, so it partitions data but is not an
# authorization boundary.
# ============================================================
from typing import Optional

from fastapi import Request

from hotel_api import config
from hotel_api.logging_config import get_logger

logger = get_logger(__name__)

TENANT_SCOPED = (
    "users",
    "rooms",
    "bookings",
    "iot-devices",
    "service-requests",
    "staff-requests",
    "preferences",
)


def get_hotel_id(request: Request) -> Optional[str]:
    """FastAPI dependency: the hotel id sent by the client, if any."""
    value = request.headers.get(config.TENANT_HEADER)
    if value is None:
        return None
    value = value.strip()
    return value or None


def tenant_for(method: str, resource: str, hotel_id: Optional[str], item_id=None) -> Optional[str]:
    """Return the hotel id to constrain a read with, or None for no filtering."""
    if method.upper() != "GET" or not hotel_id:
        return None
    if resource not in TENANT_SCOPED or item_id is not None:
        return None
    logger.debug("tenant.filter_applied", resource=resource, hotel_id=hotel_id)
    return hotel_id
