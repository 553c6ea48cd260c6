"""
Pokedex Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates one process-wide async engine with connection pooling at import
       time and hands out a session per request that commits on success and
       rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    pool_size=20:     Persistent connections for normal load
    max_overflow=10:  Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:    Validates connections before use
    pool_recycle=3600: Recycles connections every hour
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from pokedex.config import settings


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: records stay readable after the dependency commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object that Alembic reads for migrations.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/pokemons")
        async def list_pokemons(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections; called from the shutdown lifespan."""
    await engine.dispose()
