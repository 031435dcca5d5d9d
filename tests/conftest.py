"""
pytest configuration file

Shared fixtures: an in-memory SQLite database, local blob storage under
tmp_path and a TestClient bound to a freshly built application.
"""

import os
import tempfile

# Must be set before anything imports cloudspace.main, which builds a default app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOCAL_STORAGE_DIR", tempfile.mkdtemp(prefix="cloudspace-test-"))
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from cloudspace.config import Settings
from cloudspace.db.session import Database
from cloudspace.main import create_app
from cloudspace.services.naming import NamingAssistant
from cloudspace.services.storage import LocalStorageService
from cloudspace.services.workspaces import WorkspaceStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from any .env file"""
    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        DATABASE_URL="sqlite+aiosqlite://",
        LOCAL_STORAGE_DIR=str(tmp_path / "storage"),
        STORAGE_BACKEND="local",
        BCRYPT_ROUNDS=4,
        RATE_LIMIT_ENABLED=False,
        OPENAI_API_KEY=None,
        NAMING_TIMEOUT_SECONDS=0.5,
    )


@pytest.fixture
def storage(settings) -> LocalStorageService:
    return LocalStorageService(settings)


@pytest.fixture
def naming(settings) -> NamingAssistant:
    """Naming assistant without an API key, always falls back to the date label"""
    return NamingAssistant(settings)


@pytest_asyncio.fixture
async def database(settings):
    database = Database(settings)
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def workspace(db_session, settings):
    return await WorkspaceStore(db_session, settings).create("team-space", "s3cret")


@pytest.fixture
def purges(monkeypatch) -> list:
    """Records blob purges instead of queueing them on the broker"""
    queued = []
    monkeypatch.setattr("cloudspace.services.files.schedule_storage_purge", queued.append)
    monkeypatch.setattr("cloudspace.services.folders.schedule_storage_purge", queued.append)
    return queued


@pytest.fixture
def client(settings, storage, naming):
    app = create_app(settings, storage=storage, naming=naming)
    with TestClient(app) as test_client:
        yield test_client
