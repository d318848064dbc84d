"""Pydantic models for API requests and responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Health Models
# =============================================================================

class HealthResponse(BaseModel):
    """Service and dependency health."""
    ok: bool = True
    mongo: bool
    mongoError: str | None = None
    cloudinaryConfigured: bool


class OkResponse(BaseModel):
    ok: bool = True


# =============================================================================
# Upload Models
# =============================================================================

class UploadRequest(BaseModel):
    """Generic image upload."""
    image: str | None = None  # data URI or base64 payload
    folder: str | None = None


class FolderUploadRequest(BaseModel):
    """Gallery image upload, optionally scoped to a folder."""
    image: str | None = None
    folderId: str | None = None


class UploadResponse(BaseModel):
    """Hosted image details."""
    url: str | None
    public_id: str | None
    width: int | None = None
    height: int | None = None


# =============================================================================
# Stored Documents
# =============================================================================

class StoredDocument(BaseModel):
    """A MongoDB document rendered with its ID as a hex string."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    created_at: datetime = Field(alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> str:
        return str(v)


# =============================================================================
# Memory Models
# =============================================================================

class MemoryCreate(BaseModel):
    """Request to create a memory.

    Required fields are checked for truthiness by the handler.
    """
    title: str | None = None
    date: str | None = None  # Free text, not parsed as a calendar date
    description: str | None = None
    tag: str | None = None
    image: str | None = None


class MemoryFavoriteUpdate(BaseModel):
    """Request to toggle a memory's favorite flag."""
    favorite: Any = None  # Coerced with bool()


class MemoryResponse(StoredDocument):
    """A stored memory."""
    title: str
    date: str
    description: str
    tag: str
    image: str | None = None
    cloudinary_id: str | None = Field(default=None, alias="cloudinaryId")
    favorite: bool = False


# =============================================================================
# Guestbook Models
# =============================================================================

class GuestbookCreate(BaseModel):
    """Request to sign the guestbook."""
    name: str | None = None
    message: str | None = None


class GuestbookEntryResponse(StoredDocument):
    """A stored guestbook entry."""
    name: str
    message: str
