# ============================================================
# notifications.py — Guest notifications
# ------------------------------------------------------------
# Other modules use publish_notification() to tell a guest that
# something changed (e.g. a service request was completed). The
# notification is appended to the "notifications" collection,
# where the SPA polls it, and logged as an event.
# ============================================================
from hotel_api.logging_config import get_logger
from hotel_api.models import Notification
from hotel_api.repository import Repository
from hotel_api.store import JsonStore

logger = get_logger(__name__)


def publish_notification(store: JsonStore, recipient_id, title: str, message: str) -> dict:
    notification = Notification(recipient_id=recipient_id, title=title, message=message)
    created = Repository(store, "notifications").create(notification.to_record())
    logger.info(
        "notification.published",
        notification_id=created["id"],
        recipient_id=recipient_id,
        title=title,
    )
    return created
