"""Guestbook routes."""

from fastapi import APIRouter, status

from ..database import Database, insert_guestbook_entry, list_guestbook_entries
from ..errors import ValidationError, dependency_errors
from ..logging_config import get_logger
from ..models import GuestbookCreate, GuestbookEntryResponse

logger = get_logger("sweet_memories.guestbook")
router = APIRouter(prefix="/guestbook", tags=["guestbook"])


@router.get("", response_model=list[GuestbookEntryResponse])
async def list_guestbook(connect_db: Database):
    """List guestbook entries, newest first."""
    db = await connect_db()
    with dependency_errors("list guestbook", "Failed to fetch guestbook entries"):
        return await list_guestbook_entries(db)


@router.post("", response_model=GuestbookEntryResponse, status_code=status.HTTP_201_CREATED)
async def sign_guestbook(connect_db: Database, request: GuestbookCreate | None = None):
    """Add a guestbook entry."""
    request = request or GuestbookCreate()
    if not (request.name and request.message):
        raise ValidationError("name and message are required")

    db = await connect_db()
    with dependency_errors("create guestbook", "Failed to add guestbook entry"):
        created = await insert_guestbook_entry(db, request.name, request.message)

    logger.info(f"Guestbook entry created | id={created['_id']} | name={request.name[:50]}")
    return created
