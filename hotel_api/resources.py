# ============================================================
# resources.py — Generic CRUD over every collection
# ------------------------------------------------------------
#   GET    /{collection}        list, ?field=value filters
#   GET    /{collection}/{id}   one record
#   POST   /{collection}        create (id assigned)
#   PUT    /{collection}/{id}   replace (id kept)
#   PATCH  /{collection}/{id}   merge
#   DELETE /{collection}/{id}   remove
#
# Collection listings honor the hotel header (tenancy.py).
# Passwords sent to /users are hashed before being stored and
# user records are never returned with their hash.
# ============================================================
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from hotel_api.api import get_store
from hotel_api.auth import hash_password, public_user
from hotel_api.errors import NotFound
from hotel_api.logging_config import get_logger
from hotel_api.repository import Repository
from hotel_api.store import JsonStore
from hotel_api.tenancy import get_hotel_id, tenant_for

logger = get_logger(__name__)
router = APIRouter()


def _repository(store: JsonStore, collection: str) -> Repository:
    if not store.has_collection(collection):
        raise NotFound(f"Unknown resource '{collection}'")
    return Repository(store, collection)


def _incoming(collection: str, data: dict) -> dict:
    data = {k: v for k, v in data.items() if k != "id"}
    if collection == "users" and data.get("password"):
        data["password"] = hash_password(data["password"])
    return data


def _outgoing(collection: str, record: dict) -> dict:
    return public_user(record) if collection == "users" else record


def _require(record, collection: str, item_id):
    if record is None:
        raise NotFound(f"{collection}/{item_id} not found")
    return record


@router.get("/{collection}")
def list_records(
    collection: str,
    request: Request,
    store: JsonStore = Depends(get_store),
    hotel_id: Optional[str] = Depends(get_hotel_id),
):
    repo = _repository(store, collection)
    match = {k: v for k, v in request.query_params.items() if not k.startswith("_")}
    records = repo.query(match, hotel_id=tenant_for("GET", collection, hotel_id))
    return [_outgoing(collection, r) for r in records]


@router.get("/{collection}/{item_id}")
def get_record(collection: str, item_id: str, store: JsonStore = Depends(get_store)):
    record = _repository(store, collection).get(item_id)
    return _outgoing(collection, _require(record, collection, item_id))


@router.post("/{collection}", status_code=201)
def create_record(collection: str, data: dict = Body(...), store: JsonStore = Depends(get_store)):
    created = _repository(store, collection).create(_incoming(collection, data))
    logger.info("record.created", collection=collection, record_id=created["id"])
    return _outgoing(collection, created)


@router.put("/{collection}/{item_id}")
def replace_record(collection: str, item_id: str, data: dict = Body(...), store: JsonStore = Depends(get_store)):
    record = _repository(store, collection).replace(item_id, _incoming(collection, data))
    return _outgoing(collection, _require(record, collection, item_id))


@router.patch("/{collection}/{item_id}")
def update_record(collection: str, item_id: str, data: dict = Body(...), store: JsonStore = Depends(get_store)):
    record = _repository(store, collection).update(item_id, _incoming(collection, data))
    return _outgoing(collection, _require(record, collection, item_id))


@router.delete("/{collection}/{item_id}")
def delete_record(collection: str, item_id: str, store: JsonStore = Depends(get_store)):
    if not _repository(store, collection).delete(item_id):
        raise NotFound(f"{collection}/{item_id} not found")
    logger.info("record.deleted", collection=collection, record_id=item_id)
    return {}
