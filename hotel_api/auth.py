# ============================================================
# auth.py — Login and password handling
# ------------------------------------------------------------
# Passwords are stored as werkzeug hashes. A record holding a
# plaintext password never authenticates.
# ============================================================
from werkzeug.security import check_password_hash, generate_password_hash

from hotel_api.errors import Unauthorized
from hotel_api.logging_config import get_logger
from hotel_api.models import LoginRequest
from hotel_api.repository import Repository
from hotel_api.store import JsonStore

logger = get_logger(__name__)

PROFILE_FIELDS = ("id", "hotelId", "firstName", "lastName", "role")


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def public_user(user: dict) -> dict:
    """User record as exposed over HTTP (no password hash)."""
    return {k: v for k, v in user.items() if k != "password"}


def login(store: JsonStore, body: LoginRequest) -> dict:
    if not body.email or not body.password:
        raise Unauthorized()

    user = Repository(store, "users").find(email=body.email)
    if not user or not check_password_hash(user.get("password") or "", body.password):
        logger.warning("auth.login_failed", email=body.email)
        raise Unauthorized()

    logger.info("auth.login", user_id=user.get("id"), hotel_id=user.get("hotelId"))
    return {field: user.get(field) for field in PROFILE_FIELDS}
