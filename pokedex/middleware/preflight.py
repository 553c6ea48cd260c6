"""
Pokedex Backend — CORS Pre-flight Middleware
==============================================

What:  Answers every OPTIONS request with an empty 200 and the CORS headers.
How:   Short-circuits before routing, so OPTIONS never reaches a handler and
       never gets 405, whatever headers the browser asks for.
Who:   Sits in front of CORSMiddleware, which still decorates the actual
       GET/POST/PUT/DELETE responses.
"""

from typing import Optional, Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pokedex.config import settings


class PreflightMiddleware(BaseHTTPMiddleware):

    def __init__(
        self,
        app,
        allow_origins: Optional[Sequence[str]] = None,
        allow_methods: Sequence[str] = ("GET", "POST", "PUT", "DELETE", "OPTIONS"),
        allow_headers: Sequence[str] = ("Content-Type",),
        **kwargs,
    ):
        super().__init__(app, **kwargs)
        self.allow_origins = list(allow_origins or settings.cors_origins_list)
        self.allow_methods = ", ".join(allow_methods)
        self.allow_headers = ", ".join(allow_headers)

    def _allowed_origin(self, origin: Optional[str]) -> Optional[str]:
        if "*" in self.allow_origins:
            return "*"
        if origin in self.allow_origins:
            return origin
        return None

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "OPTIONS":
            return await call_next(request)

        headers = {
            "Access-Control-Allow-Methods": self.allow_methods,
            "Access-Control-Allow-Headers": self.allow_headers,
        }
        origin = self._allowed_origin(request.headers.get("origin"))
        if origin is not None:
            headers["Access-Control-Allow-Origin"] = origin
            if origin != "*":
                headers["Vary"] = "Origin"
        return Response(status_code=200, headers=headers)
