"""
Notes App Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the test suite.
How:   Each test gets its own SQLite file (aiosqlite driver) in tmp_path, so
       tests never need a running PostgreSQL server.

Fixture Hierarchy:
    Function-scoped:
    ├── database:          Database on a fresh SQLite file, schema created
    ├── note_service:      NoteService over `database`
    ├── app:               FastAPI app built by create_app() around `database`
    ├── test_client:       HTTPX AsyncClient talking to `app` over ASGI
    ├── mock_note_service: AsyncMock standing in for NoteService
    └── mock_client:       client whose app uses `mock_note_service`
"""

import os
import tempfile

# Must run before notes_app.config creates the settings singleton
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="notes_app_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STATIC_DIR"] = os.path.join(tempfile.gettempdir(), "notes_app_no_static")

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notes_app.config import Settings
from notes_app.database import Database
from notes_app.main import create_app
from notes_app.services.note_service import NoteService, get_note_service


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a per-test SQLite file and no static directory."""
    return Settings(
        database_url=sqlite_url(tmp_path / "notes.db"),
        log_level="WARNING",
        static_dir=str(tmp_path / "public"),
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database with the notes table already created; closed afterwards."""
    db = Database.from_settings(test_settings)
    await db.ensure_schema()
    yield db
    await db.close()


@pytest.fixture
def note_service(database) -> NoteService:
    return NoteService(database)


@pytest.fixture
def app(test_settings, database):
    """
    Application wired to the per-test database.

    ASGITransport does not run the lifespan, so `database` creates the
    schema itself.
    """
    return create_app(settings=test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_note_service():
    """
    NoteService replacement for failure injection.

    Usage:
        mock_note_service.list_notes.side_effect = DatabaseError("Failed to fetch notes")
    """
    service = MagicMock(spec=NoteService)
    service.list_notes = AsyncMock(return_value=[])
    service.insert_note = AsyncMock()
    service.update_note = AsyncMock(return_value=True)
    service.delete_note = AsyncMock(return_value=True)
    return service


@pytest_asyncio.fixture
async def mock_client(app, mock_note_service):
    """Client for an app whose routes receive `mock_note_service`."""
    app.dependency_overrides[get_note_service] = lambda: mock_note_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_note_data():
    return {"title": "Test Note", "content": "Test content"}
