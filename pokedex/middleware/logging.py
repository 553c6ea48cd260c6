"""
Pokedex Backend — Request Logging Middleware
==============================================

What:  One access-log line per HTTP request on the `pokedex.access` logger.
How:   Times the downstream handler and logs method, path, status, duration,
       request ID and client IP at a level chosen from the status class
       (5xx → ERROR, 4xx → WARNING, else INFO).
Who:   Applied to every request via Starlette middleware.

Not logged: request bodies (base64 images are large) and headers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pokedex.middleware.request_id import request_id_var

logger = logging.getLogger("pokedex.access")

# Probes hit these every few seconds
UNLOGGED_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "unknown"
        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            client,
        )
        return response
