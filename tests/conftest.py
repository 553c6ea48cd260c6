"""
Pokedex Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine: In-memory SQLite engine with the schema created
    ├── db_session: AsyncSession bound to db_engine (service tests)
    ├── mock_db_session: Mock AsyncSession for database failure paths
    ├── test_client: HTTPX AsyncClient with get_db_session routed to db_engine
    ├── temp_assets: Temporary assets root for ImageService tests
    ├── sample_png_bytes: Small PNG payload for upload tests
    └── sample_pokemon: A complete record with every localized name
"""

import os
import tempfile
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any pokedex import: config.settings is built at import.
# DATABASE_URL keeps its PostgreSQL default; the engine never connects because
# every test either overrides the session dependency or patches the engine.
os.environ["ASSETS_ROOT"] = tempfile.mkdtemp(prefix="pokedex_test_assets_")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "*"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pokedex.database import Base, get_db_session
from pokedex.models.pokemon import Pokemon  # noqa: F401  (registers the table)

TEST_DATABASE_URL = "sqlite+aiosqlite://"

# 1x1 transparent PNG
PNG_1X1 = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory database per test.

    StaticPool keeps the single SQLite connection alive so every session
    sees the same in-memory schema and rows.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        await pokemon_service.list_pokemons(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    get_db_session is overridden to hand out sessions on db_engine with the
    same commit/rollback behaviour as the real dependency.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/pokemons")
            assert response.status_code == 200
    """
    from pokedex.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ══════════════════════════════════════════════════════════════════════════
# Data Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def temp_assets(tmp_path):
    """A fresh assets root for each test (cleaned up by pytest)."""
    assets_dir = tmp_path / "assets"
    assets_dir.mkdir()
    return str(assets_dir)


@pytest.fixture
def sample_png_bytes():
    return PNG_1X1


@pytest.fixture
def sample_pokemon():
    return {
        "id": 25,
        "name": {
            "english": "Pikachu",
            "japanese": "ピカチュウ",
            "chinese": "皮卡丘",
            "french": "Pikachu",
        },
        "type": ["Electric"],
        "base": {
            "HP": 35,
            "Attack": 55,
            "Defense": 40,
            "Sp. Attack": 50,
            "Sp. Defense": 50,
            "Speed": 90,
        },
    }
