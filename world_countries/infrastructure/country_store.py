"""Country Store: parameterized CRUD over the single `countries` table.

Invariants:
    - A CountryStore wraps one AsyncSession obtained under the manager's lock
    - Every write commits immediately; a failed statement rolls the session back
    - Code matching is exact; region matching is LOWER(region) = LOWER(:region)
    - SQLAlchemyError never escapes: it becomes StorageUnavailableError

Design Decisions:
    - seed_if_empty inserts every record in one transaction, so a failure
      leaves the table empty rather than partially seeded
    - update/delete report affected row counts; callers decide what 0 means
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from world_countries.core.country_mapper import (
    country_to_row, row_to_country, updatable_fields,
)
from world_countries.core.errors import StorageUnavailableError
from world_countries.db.base import Base
from world_countries.models.country import CountryRow
from world_countries.schemas.country import Country

logger = logging.getLogger(__name__)


def describe_storage_error(exc: SQLAlchemyError) -> str:
    """Underlying driver message when there is one, else SQLAlchemy's own."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class CountryStore:
    """Country persistence bound to one exclusive session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def _statement(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(
                f"Country store {operation} failed: {e}",
                extra={"operation": operation},
            )
            raise StorageUnavailableError(describe_storage_error(e), operation) from e

    # ─── Schema & seed ──────────────────────────────────────────

    async def initialize(self) -> None:
        """Create the countries table if it does not exist."""
        async with self._statement("initialize"):
            conn = await self._session.connection()
            await conn.run_sync(Base.metadata.create_all)
            await self._session.commit()

    async def seed_if_empty(self, records: Sequence[Country]) -> int:
        """Insert records when the table is empty. Returns rows inserted."""
        async with self._statement("seed"):
            count = await self._session.scalar(
                select(func.count()).select_from(CountryRow),
            )
            if count:
                logger.info(
                    f"Seed skipped, table already holds {count} countries",
                    extra={"rows": count},
                )
                return 0
            self._session.add_all([country_to_row(r) for r in records])
            await self._session.commit()
        logger.info(f"Seeded {len(records)} countries", extra={"rows": len(records)})
        return len(records)

    # ─── Reads ──────────────────────────────────────────────────

    async def list_all(self) -> list[Country]:
        async with self._statement("list"):
            rows = (await self._session.scalars(select(CountryRow))).all()
        return [row_to_country(row) for row in rows]

    async def find_by_code(self, code: str) -> Country | None:
        """Exact match on code. Callers upper-case path input first."""
        async with self._statement("find_by_code"):
            row = (await self._session.scalars(
                select(CountryRow).where(CountryRow.code == code),
            )).one_or_none()
        return row_to_country(row) if row is not None else None

    async def list_distinct_regions(self) -> list[str]:
        async with self._statement("list_regions"):
            regions = (await self._session.scalars(
                select(CountryRow.region).distinct(),
            )).all()
        return list(regions)

    async def find_by_region(self, region: str) -> list[Country]:
        async with self._statement("find_by_region"):
            rows = (await self._session.scalars(
                select(CountryRow).where(
                    func.lower(CountryRow.region) == func.lower(region),
                ),
            )).all()
        return [row_to_country(row) for row in rows]

    async def exists(self, code: str) -> bool:
        async with self._statement("exists"):
            found = await self._session.scalar(
                select(CountryRow.code).where(CountryRow.code == code).limit(1),
            )
        return found is not None

    # ─── Writes ─────────────────────────────────────────────────

    async def insert(self, record: Country) -> None:
        """Persist record exactly as given; a duplicate key is a storage error."""
        async with self._statement("insert"):
            self._session.add(country_to_row(record))
            await self._session.commit()

    async def update(self, code: str, fields: Country) -> int:
        """Replace every column but code on the matching row. Returns rows affected."""
        async with self._statement("update"):
            result = await self._session.execute(
                update(CountryRow)
                .where(CountryRow.code == code)
                .values(**updatable_fields(fields)),
            )
            await self._session.commit()
        return result.rowcount

    async def delete(self, code: str) -> int:
        async with self._statement("delete"):
            result = await self._session.execute(
                delete(CountryRow).where(CountryRow.code == code),
            )
            await self._session.commit()
        return result.rowcount
