# ============================================================
# store.py — JSON document record store
# ------------------------------------------------------------
# The whole database is one JSON document whose top-level keys
# are named collections (users, rooms, bookings, ...). Records
# are plain dicts keyed by a numeric "id".
#
#   - reads hand out copies, callers never mutate the document
#   - every mutation is written back to disk (atomic replace)
#   - without a path the store lives in memory only (tests)
#
# FastAPI runs sync routes on a threadpool: every operation is
# serialized by a re-entrant lock, and locked() gives a keyed
# scope for multi-step "check then write" sequences.
# ============================================================
import copy
import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Optional

from hotel_api.logging_config import get_logger

logger = get_logger(__name__)

COLLECTIONS = (
    "users",
    "rooms",
    "bookings",
    "iot-devices",
    "service-requests",
    "staff-requests",
    "notifications",
    "preferences",
)


def same_value(stored, wanted) -> bool:
    """Loose equality used for matching: 1 == "1", True == "true"."""
    if stored == wanted:
        return True
    if stored is None or wanted is None:
        return False
    if isinstance(stored, bool) or isinstance(wanted, bool):
        return str(stored).lower() == str(wanted).lower()
    return str(stored) == str(wanted)


def matches(record: dict, match: dict) -> bool:
    return all(same_value(record.get(key), value) for key, value in match.items())


class JsonStore:
    def __init__(self, path=None, document: Optional[dict] = None):
        self.path = Path(path) if path else None
        self._lock = threading.RLock()
        self._key_locks: dict = {}

        if document is not None:
            self._doc = copy.deepcopy(document)
        elif self.path and self.path.exists():
            with open(self.path, encoding="utf-8") as f:
                self._doc = json.load(f)
            logger.info("store.loaded", path=str(self.path))
        else:
            self._doc = {}

        for name in COLLECTIONS:
            self._doc.setdefault(name, [])

    # ------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------
    def save(self):
        if not self.path:
            return
        with self._lock:
            tmp = self.path.with_name(self.path.name + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(self._doc, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)

    def document(self) -> dict:
        with self._lock:
            return copy.deepcopy(self._doc)

    # ------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------
    def has_collection(self, name: str) -> bool:
        return name in self._doc

    def collection_names(self):
        with self._lock:
            return list(self._doc.keys())

    def _records(self, name: str) -> list:
        if name not in self._doc:
            raise KeyError(name)
        return self._doc[name]

    def _find_raw(self, name: str, record_id):
        for record in self._records(name):
            if same_value(record.get("id"), record_id):
                return record
        return None

    def get(self, name: str, record_id) -> Optional[dict]:
        with self._lock:
            record = self._find_raw(name, record_id)
            return copy.deepcopy(record) if record is not None else None

    def find(self, name: str, **match) -> Optional[dict]:
        with self._lock:
            for record in self._records(name):
                if matches(record, match):
                    return copy.deepcopy(record)
            return None

    def filter(self, name: str, predicate: Callable[[dict], bool] = None, **match) -> list:
        with self._lock:
            return [
                copy.deepcopy(record)
                for record in self._records(name)
                if matches(record, match) and (predicate is None or predicate(record))
            ]

    # ------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------
    def next_id(self, name: str) -> int:
        with self._lock:
            ids = [r.get("id") for r in self._records(name)]
            numeric = [int(i) for i in ids if isinstance(i, int) or (isinstance(i, str) and i.isdigit())]
            return max(numeric, default=0) + 1

    def append(self, name: str, record: dict) -> dict:
        with self._lock:
            record = copy.deepcopy(record)
            if record.get("id") is None:
                record["id"] = self.next_id(name)
            self._records(name).append(record)
            self.save()
            return copy.deepcopy(record)

    def update(self, name: str, record_id, changes: dict) -> Optional[dict]:
        with self._lock:
            record = self._find_raw(name, record_id)
            if record is None:
                return None
            record.update(copy.deepcopy(changes))
            self.save()
            return copy.deepcopy(record)

    def replace(self, name: str, record_id, new_record: dict) -> Optional[dict]:
        with self._lock:
            records = self._records(name)
            for i, record in enumerate(records):
                if same_value(record.get("id"), record_id):
                    new_record = copy.deepcopy(new_record)
                    new_record["id"] = record["id"]
                    records[i] = new_record
                    self.save()
                    return copy.deepcopy(new_record)
            return None

    def remove(self, name: str, record_id) -> bool:
        with self._lock:
            records = self._records(name)
            for i, record in enumerate(records):
                if same_value(record.get("id"), record_id):
                    del records[i]
                    self.save()
                    return True
            return False

    # ------------------------------------------------------------
    # Keyed mutual exclusion, e.g. locked("rooms", 12)
    # ------------------------------------------------------------
    @contextmanager
    def locked(self, *key):
        with self._lock:
            lock = self._key_locks.setdefault(key, threading.Lock())
        with lock:
            yield
