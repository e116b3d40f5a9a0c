# ============================================================
# repository.py — Collection access for the core logic
# ------------------------------------------------------------
# Repository pattern over one collection of the JSON store.
# Bookings, rooms, devices and requests are all reached through
# it, so the core logic only needs a store injected and never
# touches the document directly.
#
# The tenant (hotel id) is an explicit parameter on collection
# reads; it is applied only for tenant-scoped collections.
# ============================================================
from typing import Optional

from hotel_api.store import JsonStore, matches, same_value
from hotel_api.tenancy import TENANT_SCOPED


class Repository:
    def __init__(self, store: JsonStore, collection: str):
        self.store = store
        self.collection = collection

    @property
    def tenant_scoped(self) -> bool:
        return self.collection in TENANT_SCOPED

    def create(self, record: dict):
        return self.store.append(self.collection, record)

    def get(self, record_id):
        return self.store.get(self.collection, record_id)

    def find(self, **match):
        return self.store.find(self.collection, **match)

    def filter(self, predicate=None, hotel_id: Optional[str] = None, **match):
        if hotel_id is not None and self.tenant_scoped:
            tenant_predicate = lambda r: same_value(r.get("hotelId"), hotel_id)
            if predicate is None:
                predicate = tenant_predicate
            else:
                inner = predicate
                predicate = lambda r: tenant_predicate(r) and inner(r)
        return self.store.filter(self.collection, predicate, **match)

    def update(self, record_id, changes: dict):
        return self.store.update(self.collection, record_id, changes)

    def update_status(self, record_id, status: str, **changes):
        return self.update(record_id, {"status": status, **changes})

    def replace(self, record_id, record: dict):
        return self.store.replace(self.collection, record_id, record)

    def delete(self, record_id) -> bool:
        return self.store.remove(self.collection, record_id)

    def query(self, match: dict, hotel_id: Optional[str] = None):
        """Records whose fields equal every value of ``match`` (query-string filters)."""
        return self.filter(lambda r: matches(r, match), hotel_id=hotel_id)
