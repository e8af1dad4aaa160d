"""
Vidly Backend — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── db_engine: In-memory SQLite engine with all tables created
    ├── session_factory: Sessions bound to that engine
    ├── seed: Inserts ORM objects directly, bypassing the API
    ├── test_client: HTTPX AsyncClient against a fresh app whose
    │                get_db_session is overridden to use db_engine
    ├── user_token / admin_token: Signed x-auth-token values
    └── mock_db_session: AsyncMock session for service unit tests
"""

import os

# Override settings for testing BEFORE any app imports
# Why: app.config builds its singleton at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_PRIVATE_KEY"] = "test-signing-key-0123456789abcdef0123456789abcdef"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (registers tables on Base.metadata)
from app.database import Base, get_db_session
from app.identifiers import new_object_id
from app.main import create_app
from app.security import generate_auth_token


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory database per test.

    StaticPool keeps a single connection, so every session in the test sees
    the same in-memory database.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def seed(session_factory):
    """
    Inserts rows directly and returns them.

    Usage:
        genre, = await seed(Genre(name="Comedy"))
    """
    async def _seed(*entities):
        async with session_factory() as session:
            session.add_all(entities)
            await session.commit()
        return entities

    return _seed


@pytest_asyncio.fixture
async def fetch(session_factory):
    """Loads a row by primary key in a fresh session (what the API committed)."""
    async def _fetch(model, entity_id):
        async with session_factory() as session:
            return await session.get(model, entity_id)

    return _fetch


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    A fresh app per test keeps middleware state and dependency overrides
    isolated between tests.
    """
    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Auth Fixtures
# ══════════════════════════════════════════════════════════════════════════

def make_token(is_admin: bool = False, user_id: str = None) -> str:
    return generate_auth_token(
        user_id or new_object_id(),
        "Test User",
        "test@example.com",
        is_admin,
    )


@pytest.fixture
def token_factory():
    """Signs tokens for arbitrary identities: token_factory(is_admin=True, user_id=...)."""
    return make_token


@pytest.fixture
def user_token():
    return make_token(is_admin=False)


@pytest.fixture
def admin_token():
    return make_token(is_admin=True)


# ══════════════════════════════════════════════════════════════════════════
# Service Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    `add` assigns an id the way a flush would, so services can build
    responses from entities that never reach a database.
    """
    def _add(entity):
        if getattr(entity, "id", None) is None:
            entity.id = new_object_id()

    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock(side_effect=_add)
    return session
