# movieshelf/db/session.py
from __future__ import annotations

"""
MovieShelf — Database Engine & Session Dependencies

No module-level engine: the application lifespan calls `init_database(app)`
to build the async engine and session factory and stores them on
`app.state`; `dispose_database(app)` releases the pool on shutdown.
Handlers receive a per-request `AsyncSession` through `get_async_db`.
"""

from typing import AsyncGenerator, Optional
import logging

from fastapi import FastAPI, Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from movieshelf.core.config import settings

logger = logging.getLogger("movieshelf.db")

# Pool knobs (ignored for SQLite)
_POOL_PRE_PING = True
_POOL_RECYCLE = 1800
_POOL_TIMEOUT = 30
_POOL_SIZE = 10
_MAX_OVERFLOW = 20


# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────
def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores FK constraints (and ON DELETE CASCADE) unless asked."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(url: Optional[str] = None, *, echo: Optional[bool] = None, **kwargs) -> AsyncEngine:
    """Build an async engine for `url` (defaults to `settings.ASYNC_DATABASE_URL`)."""
    url = url or settings.ASYNC_DATABASE_URL
    is_sqlite = make_url(url).get_backend_name() == "sqlite"

    options = {"echo": settings.DB_ECHO if echo is None else echo, "future": True}
    if not is_sqlite:
        options.update(
            pool_pre_ping=_POOL_PRE_PING,
            pool_recycle=_POOL_RECYCLE,
            pool_size=_POOL_SIZE,
            max_overflow=_MAX_OVERFLOW,
            pool_timeout=_POOL_TIMEOUT,
        )
    options.update(kwargs)

    engine = create_async_engine(url, **options)
    if is_sqlite:
        _enable_sqlite_foreign_keys(engine)
    return engine


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all registered tables (idempotent)."""
    from movieshelf.db import base  # registers every model on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(base.Base.metadata.create_all)


# ─────────────────────────────────────────────────────────────
# ⚡ Lifecycle
# ─────────────────────────────────────────────────────────────
async def init_database(app: FastAPI, url: Optional[str] = None) -> AsyncEngine:
    """Create the engine + session factory and attach them to `app.state`.

    Tables are created when `DB_CREATE_ALL` is enabled.
    """
    engine = create_engine(url)
    app.state.db_engine = engine
    app.state.session_maker = build_session_maker(engine)
    if settings.DB_CREATE_ALL:
        await create_tables(engine)
        logger.info("Database tables ensured")
    return engine


async def dispose_database(app: FastAPI) -> None:
    engine: Optional[AsyncEngine] = getattr(app.state, "db_engine", None)
    if engine is not None:
        await engine.dispose()
        app.state.db_engine = None
        app.state.session_maker = None


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a request-scoped async SQLAlchemy session."""
    session_maker = getattr(request.app.state, "session_maker", None)
    if session_maker is None:
        raise RuntimeError("Database is not initialised; call init_database() at startup")

    async with session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def db_healthcheck(engine: Optional[AsyncEngine]) -> bool:
    """Quick SELECT 1 to verify DB connectivity (used by /readyz)."""
    if engine is None:
        return False
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("DB healthcheck failed")
        return False


__all__ = [
    "create_engine",
    "build_session_maker",
    "create_tables",
    "init_database",
    "dispose_database",
    "get_async_db",
    "db_healthcheck",
]
