"""Configuration settings for the Sweet Memories backend."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # MongoDB
    mongodb_uri: str | None = None
    mongodb_database: str = "sweet_memories"  # Used when the URI names no database

    # Cloudinary: either the three discrete credentials or a single URL
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_url: str | None = None  # cloudinary://<key>:<secret>@<cloud>

    # Server
    host: str = "0.0.0.0"
    port: int = 10000

    # App
    debug: bool = False
    log_level: str = "INFO"
    # Base64 images travel inside JSON bodies
    max_body_bytes: int = 25 * 1024 * 1024
    # CORS: exact origins plus hosted frontends matched by pattern
    cors_origins: list[str] = [
        "http://localhost:3000",
    ]
    cors_origin_regex: str = (
        r"^(https://[^.]+\.github\.io"
        r"|https://.+\.onrender\.com"
        r"|https://.+\.vercel\.app)$"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars not in model

    @property
    def cloudinary_configured(self) -> bool:
        """All three discrete Cloudinary credentials are present."""
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

    @property
    def media_available(self) -> bool:
        """Uploads can be attempted (cloud name or connection URL set)."""
        return bool(self.cloudinary_cloud_name or self.cloudinary_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
