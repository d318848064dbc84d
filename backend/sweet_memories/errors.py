"""Error taxonomy and its mapping onto the JSON error envelope.

Every failure leaves the API as ``{"error": "<message>"}`` with a status code
chosen by the exception class:

- ValidationError: missing/empty field or malformed identifier (400)
- NotFoundError: referenced record absent (404)
- PayloadTooLargeError: request body over the configured cap (413)
- ConfigurationError: Cloudinary or MongoDB not configured (500)
- DependencyError: MongoDB or Cloudinary call raised (500, message kept)
"""

from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging_config import get_logger

logger = get_logger("sweet_memories.errors")


class SweetMemoriesError(Exception):
    """Base error for the API."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SweetMemoriesError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(SweetMemoriesError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class PayloadTooLargeError(SweetMemoriesError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_message = "Request body too large"


class ConfigurationError(SweetMemoriesError):
    default_message = "Service not configured"


class DependencyError(SweetMemoriesError):
    default_message = "Upstream service failed"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the error envelope."""
    return JSONResponse(status_code=status_code, content={"error": message})


@contextmanager
def dependency_errors(action: str, fallback: str):
    """Turn store/media exceptions into DependencyError.

    Domain errors raised inside the block pass through unchanged.
    """
    try:
        yield
    except SweetMemoriesError:
        raise
    except Exception as e:
        logger.error(f"{action} error: {e}")
        raise DependencyError(str(e) or fallback) from e


async def _domain_error_handler(request: Request, exc: SweetMemoriesError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
    else:
        message = "Invalid request body"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _response_validation_handler(request: Request, exc: ResponseValidationError) -> JSONResponse:
    # A stored document that no longer fits the response model
    logger.error(f"{request.method} {request.url.path} | bad stored record: {exc.errors()}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SweetMemoriesError.default_message)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} | unhandled error")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) or SweetMemoriesError.default_message,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on the application."""
    app.add_exception_handler(SweetMemoriesError, _domain_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(ResponseValidationError, _response_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
