"""
Pokedex Backend — Request Body Size Middleware
================================================

What:  Rejects requests whose body is larger than `max_body_size`.
How:   Two checks. A declared Content-Length above the cap is answered with
       413 before anything is read. Bodies without that header (chunked
       transfer) are counted as they are received, and reading stops with a
       413 as soon as the running total passes the cap.
Who:   Applied to every request as raw ASGI middleware, since the counting
       has to sit between the server's `receive` and the route handler.

Base64 inflates images by a third, so the 10MB default admits images of
roughly 7.5MB.
"""

import logging
from typing import Optional

from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from pokedex.config import settings
from pokedex.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Configuration (from settings):
        max_body_size: Largest accepted body in bytes (default: 10MB)

    A body that overflows while streaming raises an HTTPException(413) out
    of `receive`. FastAPI re-raises HTTPException from body parsing as-is,
    so the global handler turns it into {"error": ...}.
    """

    def __init__(self, app: ASGIApp, max_body_size: Optional[int] = None):
        self.app = app
        self.max_body_size = max_body_size or settings.max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                response = JSONResponse(
                    status_code=400,
                    content={"error": "Invalid Content-Length header"},
                )
                await response(scope, receive, send)
                return

            if declared > self.max_body_size:
                self._log_rejection(scope, declared)
                await self._too_large()(scope, receive, send)
                return

        received = 0
        response_started = False

        async def counting_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    self._log_rejection(scope, received)
                    exc = PayloadTooLargeError(max_bytes=self.max_body_size)
                    raise HTTPException(status_code=exc.status_code, detail=exc.message)
            return message

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, counting_receive, tracking_send)
        except HTTPException as exc:
            # Apps that read the body outside FastAPI's handlers
            if exc.status_code != 413 or response_started:
                raise
            await self._too_large()(scope, receive, send)

    def _too_large(self) -> JSONResponse:
        exc = PayloadTooLargeError(max_bytes=self.max_body_size)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    def _log_rejection(self, scope: Scope, size: int) -> None:
        logger.warning(
            "Rejected %s %s: body of %d bytes exceeds %d",
            scope.get("method"),
            scope.get("path"),
            size,
            self.max_body_size,
        )
