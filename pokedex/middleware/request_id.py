"""
Pokedex Backend — Request ID Middleware
=========================================

What:  Assigns an ID to each incoming request and echoes it in the response.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates a short UUID; stores it in a ContextVar and request.state.
Who:   Applied to every request via Starlette middleware.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID header if sent
        2. Otherwise generate an 8-character UUID prefix
        3. Store in ContextVar (loggers, handlers) and request.state
        4. Add X-Request-ID to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
