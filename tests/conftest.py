import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from werkzeug.security import generate_password_hash

from hotel_api.app import create_app
from hotel_api.store import JsonStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# cheap hash rounds keep the suite fast; check_password_hash reads the method from the hash
TEST_HASH_METHOD = "pbkdf2:sha256:1000"

PASSWORDS = {
    "ana.garcia@hotel.com": "guest123",
    "carlos.rodriguez@hotel.com": "admin123",
}


@pytest.fixture(scope="session")
def base_document():
    """Fixture database with hashed passwords for the seeded users."""
    with open(FIXTURES_DIR / "db.json", encoding="utf-8") as f:
        doc = json.load(f)
    for user in doc["users"]:
        if user["email"] in PASSWORDS:
            user["password"] = generate_password_hash(PASSWORDS[user["email"]], method=TEST_HASH_METHOD)
    return doc


@pytest.fixture
def store(base_document):
    """In-memory store loaded with the fixture database."""
    return JsonStore(document=base_document)


@pytest.fixture
def empty_store():
    return JsonStore()


@pytest.fixture
def file_store(tmp_path, base_document):
    """Store backed by a db.json file in a temporary directory."""
    path = tmp_path / "db.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(base_document, f)
    return JsonStore(path)


@pytest.fixture
def client(store):
    return TestClient(create_app(store))
