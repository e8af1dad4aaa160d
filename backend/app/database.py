"""
Vidly Backend — Database Session Management
============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Route handlers receive the session via `Depends(get_db_session)` and
       pass it explicitly into the services; no service reaches for a global.
When:  Engine is created at module import; sessions are created per-request.

Transaction scope:
    One session (one transaction) per request. Multi-step writes inside a
    request, such as the rental insert plus stock decrement, commit or roll
    back together. The session does NOT serialize concurrent requests.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _engine_options() -> Dict[str, Any]:
    """Pool options for server databases; SQLite manages its own pool."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, which the
# route layer relies on when serializing the response
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations and
    the test suite uses for `create_all`.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On error: rolls back the transaction and re-raises
        4. Always: closes the session (returns connection to pool)

    No commit here: this teardown can run after the response has already
    been sent. Services commit their own writes (EntityService.commit)
    before the handler returns.

    Example usage in a route:
        @router.get("/genres")
        async def list_genres(db: AsyncSession = Depends(get_db_session)):
            return await genre_service.list(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            # Roll back for ANY failure, including application errors raised
            # after a flush, so no partial writes survive a rejected request
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the app lifespan on shutdown."""
    await engine.dispose()
