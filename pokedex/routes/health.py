"""
Pokedex Backend — Liveness & Health Routes
============================================

What:  GET / (plain-text liveness) and GET /health (dependency check).
How:   /health runs SELECT 1 on a pooled connection and reports the
       database state; 503 when the database is unreachable.
Who:   Browsers, Docker health checks and load balancer probes.
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text

from pokedex import __version__
from pokedex import database
from pokedex.schemas.pokemon import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

WELCOME_MESSAGE = "Bienvenue sur le serveur Pokemon!"

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness text")
async def home() -> str:
    return WELCOME_MESSAGE


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check():
    """
    Check the service and its database.

    Returns:
        HealthResponse with HTTP 200 when the database answers, 503 otherwise.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
