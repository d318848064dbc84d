"""Image upload routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..errors import ConfigurationError, ValidationError
from ..logging_config import get_logger
from ..media import DEFAULT_FOLDER, gallery_folder, upload_image
from ..models import FolderUploadRequest, UploadRequest, UploadResponse

logger = get_logger("sweet_memories.uploads")
router = APIRouter(tags=["uploads"])


def _require_media(settings: Settings) -> None:
    if not settings.media_available:
        raise ConfigurationError("Cloudinary not configured")


@router.post("/upload", response_model=UploadResponse)
async def upload(
    settings: Annotated[Settings, Depends(get_settings)],
    request: UploadRequest | None = None,
):
    """Upload an image to Cloudinary (default folder ``sweet_memories``)."""
    request = request or UploadRequest()
    if not request.image:
        raise ValidationError("image is required")
    _require_media(settings)

    folder = request.folder or DEFAULT_FOLDER
    logger.info(f"POST /upload | folder={folder}")
    return UploadResponse(**await upload_image(request.image, folder, fallback="Upload failed"))


@router.post("/folder-upload", response_model=UploadResponse)
async def folder_upload(
    settings: Annotated[Settings, Depends(get_settings)],
    request: FolderUploadRequest | None = None,
):
    """
    Upload a gallery photo.

    Stored under ``sweet_memories/folders/<folderId>`` when a folder ID is
    given, else under ``sweet_memories/folders``.
    """
    request = request or FolderUploadRequest()
    if not request.image:
        raise ValidationError("image is required")
    _require_media(settings)

    folder = gallery_folder(request.folderId)
    logger.info(f"POST /folder-upload | folder={folder}")
    return UploadResponse(**await upload_image(request.image, folder, fallback="Folder upload failed"))
