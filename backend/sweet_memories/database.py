"""Database utilities for MongoDB integration."""

import asyncio
from datetime import datetime, timezone
from typing import Annotated

from bson import ObjectId
from fastapi import Depends
from pymongo import DESCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from .config import Settings, get_settings
from .errors import ConfigurationError, ValidationError, dependency_errors
from .logging_config import get_logger

logger = get_logger("sweet_memories.database")

_mongo_client: AsyncMongoClient | None = None
_mongo_db: AsyncDatabase | None = None
# Held only while the first connection is opened
_connect_lock = asyncio.Lock()


async def get_database(settings: Settings | None = None) -> AsyncDatabase:
    """Get the cached MongoDB database, connecting on first use."""
    global _mongo_client, _mongo_db
    if _mongo_db is not None:
        return _mongo_db

    async with _connect_lock:
        if _mongo_db is None:
            if settings is None:
                settings = get_settings()
            if not settings.mongodb_uri:
                raise ConfigurationError("MONGODB_URI not set")
            client = AsyncMongoClient(settings.mongodb_uri, tz_aware=True)
            try:
                await client.aconnect()
            except Exception:
                await client.close()
                raise
            _mongo_client = client
            _mongo_db = client.get_default_database(settings.mongodb_database)
            logger.info(f"Connected to MongoDB database '{_mongo_db.name}'")
    return _mongo_db


async def close_database() -> None:
    """Release the cached client, if one was opened."""
    global _mongo_client, _mongo_db
    if _mongo_client is not None:
        await _mongo_client.close()
    _mongo_client = None
    _mongo_db = None


class DatabaseConnector:
    """Opens the database only when a handler asks for it.

    Handlers validate their input first, then ``await connect_db()``.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    async def __call__(self) -> AsyncDatabase:
        with dependency_errors("connect", "Failed to connect to MongoDB"):
            return await get_database(self._settings)


def get_db(settings: Annotated[Settings, Depends(get_settings)]) -> DatabaseConnector:
    """FastAPI dependency for a lazy MongoDB connector."""
    return DatabaseConnector(settings)


# Type alias for dependency injection
Database = Annotated[DatabaseConnector, Depends(get_db)]


# =============================================================================
# Collection Names
# =============================================================================

MEMORIES_COLLECTION = "memories"
GUESTBOOK_COLLECTION = "guestbook"


def parse_object_id(raw: str) -> ObjectId:
    """Decode a path identifier, rejecting malformed values."""
    if not ObjectId.is_valid(raw):
        raise ValidationError("Invalid id")
    return ObjectId(raw)


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def ping(db: AsyncDatabase) -> None:
    """Lightweight liveness check."""
    await db.command("ping")


# =============================================================================
# Memory Operations
# =============================================================================

async def insert_memory(
    db: AsyncDatabase,
    title: str,
    date: str,
    description: str,
    tag: str,
    image: str | None = None,
    cloudinary_id: str | None = None,
) -> dict:
    """Insert a new memory and return the stored document."""
    doc = {
        "title": title,
        "date": date,
        "description": description,
        "tag": tag,
        "image": image,
        "cloudinaryId": cloudinary_id,
        "favorite": False,
        "createdAt": _now(),
    }
    result = await db[MEMORIES_COLLECTION].insert_one(doc)
    return {**doc, "_id": result.inserted_id}


async def list_memories(db: AsyncDatabase) -> list[dict]:
    """All memories, newest date first, then newest created."""
    cursor = db[MEMORIES_COLLECTION].find({}).sort(
        [("date", DESCENDING), ("createdAt", DESCENDING)]
    )
    return await cursor.to_list()


async def get_memory(db: AsyncDatabase, memory_id: ObjectId) -> dict | None:
    """Get a memory by ID."""
    return await db[MEMORIES_COLLECTION].find_one({"_id": memory_id})


async def set_memory_favorite(
    db: AsyncDatabase,
    memory_id: ObjectId,
    favorite: bool,
) -> dict | None:
    """Set the favorite flag and return the record as stored afterwards.

    Returns None when no record matches the ID.
    """
    await db[MEMORIES_COLLECTION].update_one(
        {"_id": memory_id},
        {"$set": {"favorite": favorite}},
    )
    return await get_memory(db, memory_id)


async def delete_memory(db: AsyncDatabase, memory_id: ObjectId) -> bool:
    """Delete a memory. Returns whether a record was removed."""
    result = await db[MEMORIES_COLLECTION].delete_one({"_id": memory_id})
    return result.deleted_count > 0


# =============================================================================
# Guestbook Operations
# =============================================================================

async def insert_guestbook_entry(db: AsyncDatabase, name: str, message: str) -> dict:
    """Insert a guestbook entry and return the stored document."""
    doc = {"name": name, "message": message, "createdAt": _now()}
    result = await db[GUESTBOOK_COLLECTION].insert_one(doc)
    return {**doc, "_id": result.inserted_id}


async def list_guestbook_entries(db: AsyncDatabase) -> list[dict]:
    """All guestbook entries, newest first."""
    cursor = db[GUESTBOOK_COLLECTION].find({}).sort("createdAt", DESCENDING)
    return await cursor.to_list()
