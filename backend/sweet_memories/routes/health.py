"""Health check route."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..database import get_database, ping
from ..logging_config import get_logger
from ..models import HealthResponse

logger = get_logger("sweet_memories.health")
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health(settings: Annotated[Settings, Depends(get_settings)]):
    """
    Report MongoDB reachability and Cloudinary configuration.

    Never fails: a database error is reported in the body, not the status.
    """
    mongo = False
    mongo_error = None
    try:
        db = await get_database(settings)
        await ping(db)
        mongo = True
    except Exception as e:
        logger.warning(f"Health ping failed: {e}")
        mongo_error = str(e)

    return HealthResponse(
        mongo=mongo,
        mongoError=mongo_error,
        cloudinaryConfigured=settings.cloudinary_configured,
    )
