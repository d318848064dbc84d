"""Memory routes."""

import math
from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Depends, status

from ..config import Settings, get_settings
from ..database import (
    Database,
    delete_memory,
    get_memory,
    insert_memory,
    list_memories,
    parse_object_id,
    set_memory_favorite,
)
from ..errors import ConfigurationError, NotFoundError, ValidationError, dependency_errors
from ..logging_config import get_logger
from ..media import MEMORIES_FOLDER, discard_media_asset, upload_image
from ..models import MemoryCreate, MemoryFavoriteUpdate, MemoryResponse, OkResponse

logger = get_logger("sweet_memories.memories")
router = APIRouter(prefix="/memories", tags=["memories"])


def is_truthy(value: Any) -> bool:
    """Truthiness as the frontend sees it: empty lists and objects count as true."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


@router.get("", response_model=list[MemoryResponse])
async def list_memories_endpoint(connect_db: Database):
    """List all memories, newest date first (ties: newest created first)."""
    db = await connect_db()
    with dependency_errors("list memories", "Failed to fetch memories"):
        items = await list_memories(db)
    logger.info(f"GET /memories | {len(items)} records")
    return items


@router.post("", response_model=MemoryResponse, status_code=status.HTTP_201_CREATED)
async def create_memory(
    connect_db: Database,
    settings: Annotated[Settings, Depends(get_settings)],
    request: MemoryCreate | None = None,
):
    """
    Create a memory, uploading its image first when one is attached.

    A failed upload aborts the request before anything is stored.
    """
    request = request or MemoryCreate()
    if not (request.title and request.date and request.description and request.tag):
        raise ValidationError("title, date, description, tag are required")

    image_url = None
    cloudinary_id = None
    if request.image:
        if not settings.media_available:
            raise ConfigurationError("Cloudinary not configured")
        uploaded = await upload_image(
            request.image, MEMORIES_FOLDER, fallback="Failed to create memory"
        )
        image_url = uploaded["url"]
        cloudinary_id = uploaded["public_id"]

    db = await connect_db()
    with dependency_errors("create memory", "Failed to create memory"):
        created = await insert_memory(
            db,
            title=request.title,
            date=request.date,
            description=request.description,
            tag=request.tag,
            image=image_url,
            cloudinary_id=cloudinary_id,
        )

    logger.info(f"Memory created | id={created['_id']} | image={bool(image_url)}")
    return created


@router.patch("/{memory_id}", response_model=MemoryResponse)
async def update_memory_favorite(
    memory_id: str,
    connect_db: Database,
    request: MemoryFavoriteUpdate | None = None,
):
    """Set or clear the favorite flag. Unknown IDs return 404."""
    oid = parse_object_id(memory_id)
    favorite = is_truthy((request or MemoryFavoriteUpdate()).favorite)

    db = await connect_db()
    with dependency_errors("update memory", "Failed to update memory"):
        updated = await set_memory_favorite(db, oid, favorite)
    if updated is None:
        raise NotFoundError("Not found")

    logger.info(f"PATCH /memories/{memory_id} | favorite={favorite}")
    return updated


@router.delete("/{memory_id}", response_model=OkResponse)
async def delete_memory_endpoint(
    memory_id: str,
    connect_db: Database,
    settings: Annotated[Settings, Depends(get_settings)],
    background_tasks: BackgroundTasks,
):
    """
    Delete a memory and, afterwards, its Cloudinary asset.

    The record deletion is authoritative. The asset is removed by a
    background task whose failure is only logged.
    """
    oid = parse_object_id(memory_id)

    db = await connect_db()
    with dependency_errors("delete memory", "Failed to delete memory"):
        existing = await get_memory(db, oid)
        if not existing:
            raise NotFoundError("Not found")
        await delete_memory(db, oid)

    cloudinary_id = existing.get("cloudinaryId")
    if cloudinary_id and settings.media_available:
        background_tasks.add_task(discard_media_asset, cloudinary_id)

    logger.info(f"DELETE /memories/{memory_id} | asset={cloudinary_id or '-'}")
    return OkResponse()
