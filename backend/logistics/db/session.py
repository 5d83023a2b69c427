"""Database session and engine helpers."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from logistics.core.config import get_settings

_engine_cache: dict[str, AsyncEngine] = {}
_sessionmaker_cache: dict[str, async_sessionmaker[AsyncSession]] = {}


def _resolve_database_url(override: str | None = None) -> str:
    settings = get_settings()
    return override or settings.database_url


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for(url: str) -> AsyncEngine:
    """Create an async engine, turning on FK enforcement for SQLite."""
    engine = create_async_engine(url, echo=False, future=True)
    if make_url(url).get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return (and cache) an async sessionmaker for the given database URL."""
    url = _resolve_database_url(database_url)
    sessionmaker = _sessionmaker_cache.get(url)
    if sessionmaker is None:
        engine = create_engine_for(url)
        sessionmaker = async_sessionmaker(
            engine, expire_on_commit=False, class_=AsyncSession
        )
        _engine_cache[url] = engine
        _sessionmaker_cache[url] = sessionmaker
    return sessionmaker


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield an async database session using the configured engine."""
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Dispose the cached engine/sessionmaker for the given database URL."""
    url = _resolve_database_url(database_url)
    engine = _engine_cache.pop(url, None)
    if engine is not None:
        await engine.dispose()
    _sessionmaker_cache.pop(url, None)
