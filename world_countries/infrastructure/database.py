"""Database Session Manager: one async engine guarded by one exclusive lock.

Invariants:
    - At most one session is open against the store at any time (asyncio.Lock)
    - The lock is held from session open until the owning request returns
    - Every session rolls back on SQLAlchemy failure and is always closed
    - SQLAlchemy exceptions leave as StorageUnavailableError (core/errors.py)

Design Decisions:
    - Singleton db_manager initialized in the FastAPI lifespan
    - expire_on_commit=False: rows stay readable after commit
    - Waiters suspend on the lock with no timeout; a stuck holder stalls all
      other requests
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from world_countries.core.errors import StorageUnavailableError
from world_countries.infrastructure.country_store import (
    CountryStore, describe_storage_error,
)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages the store engine and serializes every session through one lock."""

    def __init__(self, database_url: str):
        self.engine = create_async_engine(database_url, pool_pre_ping=True)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide an exclusive session with auto-rollback on exception."""
        async with self._lock:
            session = self._session_factory()
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"DB error: {e}")
                raise StorageUnavailableError(describe_storage_error(e), "execute") from e
            finally:
                await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except StorageUnavailableError as e:
            logger.error(f"DB health check failed: {e.message}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url)
    return db_manager


async def get_country_store() -> AsyncGenerator[CountryStore, None]:
    """FastAPI dependency: a CountryStore holding the store lock for the request."""
    if not db_manager:
        raise StorageUnavailableError("database not initialized", "connect")
    async with db_manager.session() as session:
        yield CountryStore(session)
