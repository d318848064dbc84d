"""Sweet Memories Backend API - FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import close_database
from .errors import register_error_handlers
from .logging_config import get_logger, setup_logging
from .media import configure_media
from .middleware import BodySizeLimitMiddleware
from .routes import guestbook_router, health_router, memories_router, uploads_router

logger = get_logger("sweet_memories")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    setup_logging(settings.log_level, settings.debug)
    configure_media(settings)
    logger.info(f"Starting Sweet Memories Backend API (debug={settings.debug})")
    yield
    # Shutdown
    await close_database()
    logger.info("Shutting down Sweet Memories Backend API")


app = FastAPI(
    title="Sweet Memories Backend API",
    description="Memories, guestbook and image uploads",
    version="0.1.0",
    lifespan=lifespan,
)

register_error_handlers(app)

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_origin_regex,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request body cap, counted on the bytes received
app.add_middleware(BodySizeLimitMiddleware, get_limit=lambda: get_settings().max_body_bytes)


# Include routers
app.include_router(health_router, prefix="/api")
app.include_router(uploads_router, prefix="/api")
app.include_router(memories_router, prefix="/api")
app.include_router(guestbook_router, prefix="/api")


@app.get("/")
async def root():
    """Service banner."""
    return {
        "service": "sweet-memories-backend",
        "version": "0.1.0",
        "status": "ok",
    }
