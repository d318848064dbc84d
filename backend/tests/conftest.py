"""Pytest configuration and fixtures."""

import os
import sys
from types import SimpleNamespace

import pytest
from bson import ObjectId

# For unit tests, keep real credentials out of the process
if not os.environ.get("RUN_INTEGRATION"):
    os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/sweet_memories_test")
    for _var in (
        "CLOUDINARY_CLOUD_NAME",
        "CLOUDINARY_API_KEY",
        "CLOUDINARY_API_SECRET",
        "CLOUDINARY_URL",
    ):
        os.environ.pop(_var, None)
else:
    # For integration tests, load from .env
    from pathlib import Path

    from dotenv import load_dotenv

    env_path = Path(__file__).parent.parent.parent / ".env"

    # Safety check: require explicit confirmation for integration tests
    if not os.environ.get("CONFIRM_INTEGRATION_CREDENTIALS"):
        print(
            "\nIntegration tests use REAL MongoDB and Cloudinary credentials from .env.\n"
            "Set CONFIRM_INTEGRATION_CREDENTIALS=yes to proceed.\n",
            file=sys.stderr,
        )
        pytest.exit(
            "Integration tests require CONFIRM_INTEGRATION_CREDENTIALS=yes",
            returncode=1,
        )
    load_dotenv(env_path, override=True)

from fastapi.testclient import TestClient  # noqa: E402
from sweet_memories.config import Settings, get_settings  # noqa: E402
from sweet_memories.database import get_db  # noqa: E402
from sweet_memories.main import app  # noqa: E402


# =============================================================================
# In-memory MongoDB stand-in
# =============================================================================

class FakeCursor:
    """Mimics the async cursor returned by ``find``."""

    def __init__(self, docs: list[dict]):
        self._docs = docs

    def sort(self, key_or_list, direction=None) -> "FakeCursor":
        keys = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction)]
        # Stable sorts applied from the least significant key
        for field, order in reversed(keys):
            self._docs.sort(key=lambda d: d.get(field), reverse=order == -1)
        return self

    async def to_list(self, length=None) -> list[dict]:
        return [dict(d) for d in self._docs]


class FakeCollection:
    """Just enough of an async collection for the store functions."""

    def __init__(self):
        self.docs: list[dict] = []

    def _match(self, doc: dict, query: dict) -> bool:
        return all(doc.get(k) == v for k, v in query.items())

    async def insert_one(self, doc: dict):
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query: dict | None = None) -> FakeCursor:
        return FakeCursor([d for d in self.docs if self._match(d, query or {})])

    async def find_one(self, query: dict) -> dict | None:
        for doc in self.docs:
            if self._match(doc, query):
                return dict(doc)
        return None

    async def update_one(self, query: dict, update: dict):
        for doc in self.docs:
            if self._match(doc, query):
                doc.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query: dict):
        for i, doc in enumerate(self.docs):
            if self._match(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    """Collections created on first access, like a real database."""

    name = "sweet_memories_test"

    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}
        self.ping_error: Exception | None = None

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, name: str):
        if self.ping_error:
            raise self.ping_error
        return {"ok": 1.0}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """Empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def settings():
    """Settings with Cloudinary fully configured."""
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://localhost:27017/sweet_memories_test",
        cloudinary_cloud_name="test-cloud",
        cloudinary_api_key="test-key",
        cloudinary_api_secret="test-secret",
    )


@pytest.fixture
def unconfigured_settings():
    """Settings with no Cloudinary credentials at all."""
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://localhost:27017/sweet_memories_test",
    )


@pytest.fixture
def client(fake_db, settings):
    """Test client wired to the fake database and configured settings."""

    async def connect_fake_db():
        return fake_db

    app.dependency_overrides[get_db] = lambda: connect_fake_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_settings():
    """Swap the settings seen by the routes mid-test."""

    def _use(new_settings: Settings):
        app.dependency_overrides[get_settings] = lambda: new_settings

    return _use


@pytest.fixture
def unconnected_client(monkeypatch):
    """Test client with no MongoDB URI and the real database dependency."""
    monkeypatch.setattr("sweet_memories.database._mongo_db", None)
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, mongodb_uri=None)
    yield TestClient(app)
    app.dependency_overrides.clear()
