"""
Todo API - Database Engine, Sessions and Store Initialization
==============================================================

What:  Async SQLAlchemy engine factory, session dependency and the startup
       routine that makes sure the `todos` table exists.
Why:   Keeps all connection logic in one place. The engine is created by the
       application factory and stored on `app.state`, so each app instance
       (and each test) owns its own store instead of sharing a module global.
How:   SQLite through the aiosqlite driver. File databases use a regular
       connection pool; in-memory databases use a StaticPool so every session
       sees the same single connection.
"""

import logging
from pathlib import Path
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from todo_api.config import Settings
from todo_api.exceptions import StoreInitError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


def _is_memory_database(url: str) -> bool:
    database = make_url(url).database
    return not database or database == ":memory:"


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured store.

    Nothing is opened here; the first connection happens in init_store()
    or on the first request.
    """
    kwargs = {
        # sqlite3.connect(timeout=...): how long to wait on a locked database
        "connect_args": {"timeout": settings.db_busy_timeout},
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if _is_memory_database(settings.database_url):
        kwargs["poolclass"] = StaticPool

    return create_async_engine(settings.database_url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows returned by the repository stay readable
    # after the write has been committed.
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── Storage Initializer ───────────────────────────────────────────────────
async def init_store(engine: AsyncEngine) -> None:
    """
    Open (creating if absent) the store and ensure the todos table exists.

    Idempotent: create_all only issues CREATE TABLE for missing tables.

    Raises:
        StoreInitError: the database file or its directory cannot be created,
                        or the schema cannot be ensured.
    """
    # Register the models with Base.metadata before create_all
    from todo_api.models.todo import Todo  # noqa: F401

    url = engine.url
    try:
        if not _is_memory_database(str(url)):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, SQLAlchemyError) as e:
        raise StoreInitError(
            message=f"Could not open the todo store at {url.database}: {e}",
            context={"database": url.database, "error_type": type(e).__name__},
        ) from e

    logger.info("Todo store ready: %s", url.database or ":memory:")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session comes from the factory the application was built with, so
    every handler shares the app's pooled engine. Writes are committed by the
    repository itself (one statement per transaction); anything left open
    when the handler fails is rolled back here.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine(engine: AsyncEngine) -> None:
    """Close every pooled connection. Called on application shutdown."""
    await engine.dispose()
