"""
Author API: Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── settings:        Settings pointing at a throwaway SQLite file
    ├── memory_store:    In-memory AuthorStore (no database)
    ├── mock_store:      AsyncMock AuthorStore for service unit tests
    ├── app:             FastAPI app with the store dependency overridden
    ├── test_client:     HTTPX AsyncClient against ``app``
    ├── mock_client:     HTTPX AsyncClient against an app backed by ``mock_store``
    ├── database:        Database on SQLite with the schema created
    └── sql_client:      HTTPX AsyncClient against an app backed by ``database``
"""

import os
from typing import Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep tests independent of any deployment config
os.environ.pop("APP_CONFIG_FILE", None)
os.environ["APP_LOG_LEVEL"] = "WARNING"

from author_api.config import Settings  # noqa: E402
from author_api.database import Database  # noqa: E402
from author_api.dependencies import get_author_store  # noqa: E402
from author_api.main import create_app  # noqa: E402
from author_api.models.author import Author  # noqa: E402
from author_api.repositories.author_repository import (  # noqa: E402
    CreateAuthorCommand,
    PartialUpdateAuthorCommand,
    ReplaceAuthorCommand,
)


class InMemoryAuthorStore:
    """AuthorStore backed by a dict; ids are assigned sequentially from 1."""

    def __init__(self):
        self.rows: Dict[int, Author] = {}
        self._next_id = 1

    async def create(self, cmd: CreateAuthorCommand) -> Author:
        author = Author(id=self._next_id, name=cmd.name, bio=cmd.bio)
        self.rows[author.id] = author
        self._next_id += 1
        return author

    async def get(self, author_id: int) -> Optional[Author]:
        return self.rows.get(author_id)

    async def replace(self, cmd: ReplaceAuthorCommand) -> Optional[Author]:
        author = self.rows.get(cmd.id)
        if author is None:
            return None
        author.name = cmd.name
        author.bio = cmd.bio
        return author

    async def partial_update(self, cmd: PartialUpdateAuthorCommand) -> Optional[Author]:
        author = self.rows.get(cmd.id)
        if author is None:
            return None
        if cmd.update_name:
            author.name = cmd.name
        if cmd.update_bio:
            author.bio = cmd.bio
        return author

    async def delete(self, author_id: int) -> bool:
        return self.rows.pop(author_id, None) is not None

    async def list(self) -> List[Author]:
        return [self.rows[key] for key in sorted(self.rows)]

    async def truncate(self) -> None:
        self.rows.clear()


@pytest.fixture
def settings(tmp_path):
    """Settings with a per-test SQLite database file."""
    return Settings(database={"url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"})


@pytest.fixture
def memory_store():
    return InMemoryAuthorStore()


@pytest.fixture
def mock_store():
    """
    AsyncMock standing in for the storage contract.

    Usage:
        mock_store.get.return_value = Author(id=1, name="A", bio="B")
        result = await AuthorService(mock_store).get(1)
    """
    store = AsyncMock()
    store.create = AsyncMock()
    store.get = AsyncMock()
    store.replace = AsyncMock()
    store.partial_update = AsyncMock()
    store.delete = AsyncMock()
    store.list = AsyncMock()
    store.truncate = AsyncMock()
    return store


@pytest.fixture
def app(settings, memory_store):
    application = create_app(settings)
    application.dependency_overrides[get_author_store] = lambda: memory_store
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    Usage:
        response = await test_client.get("/authors")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(settings, mock_store):
    """Client whose storage calls land on ``mock_store`` (assert on its awaits)."""
    application = create_app(settings)
    application.dependency_overrides[get_author_store] = lambda: mock_store
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.database)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest_asyncio.fixture
async def sql_client(settings, database):
    application = create_app(settings, database=database)
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
