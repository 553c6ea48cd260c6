"""
Pokedex Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn pokedex.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │    Req ID → Logging → Preflight → CORS → Body Cap   │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────┐ ┌────────────────┐ ┌──────────┐  │
    │  │ /pokemons ... │ │ /upload/pokemon│ │ /, health│  │
    │  └───────────────┘ └────────────────┘ └──────────┘  │
    │  Static: /assets → settings.assets_root             │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Storage/DB→500│   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Every error body has the shape {"error": "<message>"}.
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from pokedex import __version__
from pokedex.config import settings
from pokedex.database import dispose_engine
from pokedex.exceptions import (
    DatabaseError,
    FileStorageError,
    NotFoundError,
    PokedexError,
    ValidationError,
)
from pokedex.middleware.body_limit import BodySizeLimitMiddleware
from pokedex.middleware.logging import RequestLoggingMiddleware
from pokedex.middleware.preflight import PreflightMiddleware
from pokedex.middleware.request_id import RequestIDMiddleware, request_id_var
from pokedex.routes import health, pokemons, upload

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type"]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Log where images are stored and where the server listens
    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Pokedex Backend %s starting up...", __version__)
    logger.info("Assets directory: %s", Path(settings.assets_root).resolve())
    logger.info("Server is running on http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Pokedex Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError           → 400 (client can fix the input)
        RequestValidationError    → 400 (malformed body or path parameter)
        NotFoundError             → 404
        FileStorageError          → 500 (generic message, details logged)
        DatabaseError             → 500 (raw database message)
        PokedexError (base)       → its status_code
        StarletteHTTPException    → its status code (unknown route, bad method)
        Exception (fallback)      → 500 generic message, stack trace logged
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = _format_validation_errors(exc)
        logger.warning("[%s] Request validation error: %s", rid, message)
        return _error(400, message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        rid = request_id_var.get("")
        logger.error("[%s] File storage error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(PokedexError)
    async def handle_pokedex_error(request: Request, exc: PokedexError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Pokedex API",
        description=(
            "CRUD API over a pokemon collection with localized names, plus base64 "
            "image uploads served back as static assets."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → Preflight → CORS → BodySizeLimit → routes
    app.add_middleware(BodySizeLimitMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=["X-Request-ID"],
    )

    # Every OPTIONS is answered here with 200, so CORSMiddleware never sees one
    app.add_middleware(
        PreflightMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(pokemons.router)
    app.include_router(upload.router)

    # ── Static Assets ─────────────────────────────────────────────────────
    # StaticFiles checks the directory when mounted, so it must exist first
    assets_root = Path(settings.assets_root)
    assets_root.mkdir(parents=True, exist_ok=True)
    app.mount("/assets", StaticFiles(directory=str(assets_root)), name="assets")

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
