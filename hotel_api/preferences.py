# ============================================================
# preferences.py — Push guest preferences to in-room devices
# ------------------------------------------------------------
# Each device type takes its own slice of user.preferences:
#   thermostat ← temperature
#   light      ← lighting.brightness / lighting.color, switched on
#   curtains   ← curtains (position)
#   tv         ← tvVolume
# Every device gets a fresh lastUpdated, matched or not, and the
# room is marked occupied by the guest.
# ============================================================
from hotel_api.errors import GuestNotFound, MissingFields, NoDevicesInRoom
from hotel_api.logging_config import get_logger
from hotel_api.models import ROOM_OCCUPIED, GuestPreferencesApply, now_iso
from hotel_api.repository import Repository
from hotel_api.store import JsonStore

logger = get_logger(__name__)


def _thermostat(prefs: dict):
    if prefs.get("temperature"):
        return {"temperature": prefs["temperature"]}


def _light(prefs: dict):
    lighting = prefs.get("lighting")
    if isinstance(lighting, dict) and lighting:
        return {"brightness": lighting.get("brightness"), "color": lighting.get("color"), "isOn": True}


def _curtains(prefs: dict):
    if prefs.get("curtains"):
        return {"position": prefs["curtains"]}


def _tv(prefs: dict):
    if prefs.get("tvVolume"):
        return {"volume": prefs["tvVolume"]}


DEVICE_RULES = {
    "thermostat": _thermostat,
    "light": _light,
    "curtains": _curtains,
    "tv": _tv,
}


def device_changes(device: dict, prefs: dict) -> dict:
    """Fields to write on the device for the given guest preferences."""
    changes = {}
    rule = DEVICE_RULES.get(device.get("deviceType"))
    state = rule(prefs) if rule else None
    if state:
        current = device.get("currentState")
        changes["currentState"] = {**(current if isinstance(current, dict) else {}), **state}
    changes["lastUpdated"] = now_iso()
    return changes


def apply_guest_preferences(store: JsonStore, body: GuestPreferencesApply) -> list:
    missing = [name for name, value in (("guestId", body.guest_id), ("roomId", body.room_id)) if not value]
    if missing:
        raise MissingFields(*missing)

    guest = Repository(store, "users").get(body.guest_id)
    if not guest:
        raise GuestNotFound()

    devices = Repository(store, "iot-devices")
    room_devices = devices.filter(roomId=body.room_id)
    if not room_devices:
        raise NoDevicesInRoom()

    prefs = guest.get("preferences")
    if not isinstance(prefs, dict):
        prefs = {}
    updated = [devices.update(device["id"], device_changes(device, prefs)) for device in room_devices]

    Repository(store, "rooms").update(body.room_id, {"status": ROOM_OCCUPIED, "currentUserId": body.guest_id})
    logger.info(
        "preferences.applied",
        guest_id=body.guest_id,
        room_id=body.room_id,
        devices=len(updated),
    )
    return updated
