"""Logging setup for the Sweet Memories backend."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

_configured = False


def setup_logging(level: str = "INFO", debug: bool = False) -> None:
    """Configure the root logger once per process."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else level.upper())

    # pymongo is chatty at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a namespaced logger."""
    return logging.getLogger(name)


_media_logger = get_logger("sweet_memories.media")


def log_media_operation(
    operation: str,
    target: str,
    success: bool,
    error: str | None = None,
) -> None:
    """Log a single Cloudinary upload or destroy call."""
    if success:
        _media_logger.info(f"{operation.upper()} | {target} | ok")
    else:
        _media_logger.warning(f"{operation.upper()} | {target} | failed: {error}")
