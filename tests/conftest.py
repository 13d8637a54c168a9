"""Root conftest: shared fixtures for store and HTTP tests.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - The module-level db_manager is swapped for the test's manager and restored
    - A store fixture holds the store lock for the whole test; never combine it
      with an HTTP client in one test

Design Decisions:
    - httpx AsyncClient over ASGITransport: lifespan does not run, so fixtures
      initialize and seed the store themselves
"""

import os
from contextlib import asynccontextmanager

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

import world_countries.infrastructure.database as db_module  # noqa: E402
from world_countries.db.seed_data import SEED_COUNTRIES  # noqa: E402
from world_countries.infrastructure.country_store import CountryStore  # noqa: E402
from world_countries.infrastructure.database import DatabaseSessionManager  # noqa: E402
from world_countries.main import app  # noqa: E402


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'countries.db'}"


@pytest.fixture
async def bare_manager(database_url):
    """Manager over a database file with no countries table."""
    manager = DatabaseSessionManager(database_url)
    yield manager
    await manager.dispose()


@pytest.fixture
async def db_manager(bare_manager):
    async with bare_manager.session() as session:
        await CountryStore(session).initialize()
    return bare_manager


@pytest.fixture
async def seeded_manager(db_manager):
    async with db_manager.session() as session:
        await CountryStore(session).seed_if_empty(SEED_COUNTRIES)
    return db_manager


@pytest.fixture
async def store(db_manager):
    """CountryStore over an initialized, empty table."""
    async with db_manager.session() as session:
        yield CountryStore(session)


@pytest.fixture
async def seeded_store(seeded_manager):
    async with seeded_manager.session() as session:
        yield CountryStore(session)


@asynccontextmanager
async def _client_for(manager):
    original_manager = db_module.db_manager
    db_module.db_manager = manager
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            yield c
    finally:
        db_module.db_manager = original_manager


@pytest.fixture
async def client(seeded_manager):
    """HTTP client against the seeded store."""
    async with _client_for(seeded_manager) as c:
        yield c


@pytest.fixture
async def broken_client(bare_manager):
    """HTTP client against a store whose table was never created."""
    async with _client_for(bare_manager) as c:
        yield c
