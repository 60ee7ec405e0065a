"""
Todo API - Test Configuration (conftest.py)
============================================

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── memory_settings / file_settings: Settings pointing at an isolated store
    ├── memory_engine: initialized in-memory store for repository tests
    ├── db_session: AsyncSession bound to memory_engine
    ├── test_app: application built with file_settings, store initialized
    └── test_client: HTTPX AsyncClient talking to test_app over ASGI
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports: the module-level app
# in todo_api.main must never point at ./db.sqlite of the working directory.
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="todo_api_test_"), "db.sqlite")
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from todo_api.config import Settings
from todo_api.database import build_engine, build_session_factory, dispose_engine, init_store


@pytest.fixture
def memory_settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:", log_level="WARNING")


@pytest.fixture
def file_settings(tmp_path):
    """Settings for a SQLite file inside pytest's per-test tmp_path."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'todos.sqlite'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def memory_engine(memory_settings):
    engine = build_engine(memory_settings)
    await init_store(engine)
    yield engine
    await dispose_engine(engine)


@pytest_asyncio.fixture
async def db_session(memory_engine):
    """
    A session on a fresh in-memory store.

    Usage:
        async def test_insert(db_session):
            todo = await todo_repository.insert(db_session, "buy milk")
    """
    session_factory = build_session_factory(memory_engine)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_app(file_settings):
    """
    An application with its own file-backed store.

    ASGITransport does not run the lifespan, so the store is initialized
    here the same way the lifespan would.
    """
    from todo_api.main import create_app

    app = create_app(file_settings)
    await init_store(app.state.engine)
    yield app
    await dispose_engine(app.state.engine)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed directly into test_app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/todo_list")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
