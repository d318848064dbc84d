"""Cloudinary media storage.

The Cloudinary SDK is blocking, so every call runs in a worker thread.
"""

import asyncio
import os

import cloudinary
import cloudinary.uploader

from .config import Settings
from .errors import DependencyError
from .logging_config import get_logger, log_media_operation

logger = get_logger("sweet_memories.media")

# =============================================================================
# Folders
# =============================================================================

DEFAULT_FOLDER = "sweet_memories"
MEMORIES_FOLDER = f"{DEFAULT_FOLDER}/memories"
GALLERY_FOLDER = f"{DEFAULT_FOLDER}/folders"


def gallery_folder(folder_id: str | None) -> str:
    """Folder for a gallery upload, scoped by folder ID when given."""
    return f"{GALLERY_FOLDER}/{folder_id}" if folder_id else GALLERY_FOLDER


def configure_media(settings: Settings) -> bool:
    """Configure the SDK from settings. Returns whether credentials were found."""
    if settings.cloudinary_configured:
        # Explicit credentials win over the URL
        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True,
        )
        return True
    if settings.cloudinary_url:
        # The SDK parses CLOUDINARY_URL from the environment on reset
        os.environ["CLOUDINARY_URL"] = settings.cloudinary_url
        cloudinary.reset_config()
        cloudinary.config(secure=True)
        return True
    logger.warning("Cloudinary not configured - image uploads will fail.")
    return False


# =============================================================================
# Operations
# =============================================================================

async def upload_image(image: str, folder: str, fallback: str = "Upload failed") -> dict:
    """Upload an encoded image (data URI, base64 or remote URL).

    Returns:
        Dict with ``url``, ``public_id``, ``width`` and ``height``.

    Raises:
        DependencyError: Cloudinary rejected the upload or was unreachable.
    """

    def _upload():
        return cloudinary.uploader.upload(image, folder=folder)

    try:
        uploaded = await asyncio.to_thread(_upload)
    except Exception as e:
        log_media_operation("upload", folder, False, str(e))
        raise DependencyError(str(e) or fallback) from e

    log_media_operation("upload", uploaded.get("public_id", folder), True)
    return {
        "url": uploaded.get("secure_url"),
        "public_id": uploaded.get("public_id"),
        "width": uploaded.get("width"),
        "height": uploaded.get("height"),
    }


async def destroy_image(public_id: str) -> None:
    """Delete an asset by its public ID."""

    def _destroy():
        return cloudinary.uploader.destroy(public_id)

    try:
        await asyncio.to_thread(_destroy)
    except Exception as e:
        log_media_operation("destroy", public_id, False, str(e))
        raise DependencyError(str(e) or "Destroy failed") from e

    log_media_operation("destroy", public_id, True)


async def discard_media_asset(public_id: str) -> None:
    """Best-effort delete of an asset whose record is already gone.

    Failures are logged and dropped; an orphaned asset is accepted.
    """
    try:
        await destroy_image(public_id)
    except DependencyError as e:
        logger.warning(f"cloudinary destroy failed for {public_id}: {e}")
