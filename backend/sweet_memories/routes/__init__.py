"""API routes."""

from .guestbook import router as guestbook_router
from .health import router as health_router
from .memories import router as memories_router
from .uploads import router as uploads_router

__all__ = [
    "health_router",
    "uploads_router",
    "memories_router",
    "guestbook_router",
]
