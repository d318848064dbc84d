"""ASGI middleware."""

from typing import Callable

from fastapi import HTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import PayloadTooLargeError, error_response


class BodySizeLimitMiddleware:
    """Cap request bodies by the bytes actually received.

    A declared ``Content-Length`` over the cap is refused up front. Bodies
    without one (chunked uploads) are counted as they stream in, and reading
    past the cap raises a 413 that the error handlers render.
    """

    def __init__(self, app: ASGIApp, get_limit: Callable[[], int]):
        self.app = app
        self.get_limit = get_limit

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = self.get_limit()
        declared = dict(scope.get("headers") or []).get(b"content-length")
        if declared and declared.isdigit() and int(declared) > limit:
            exc = PayloadTooLargeError()
            response = error_response(exc.status_code, exc.message)
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    raise HTTPException(
                        status_code=PayloadTooLargeError.status_code,
                        detail=PayloadTooLargeError.default_message,
                    )
            return message

        await self.app(scope, limited_receive, send)
