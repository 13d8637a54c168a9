"""Boundary Protocols: the store contract route handlers depend on.

Invariants:
    - Handlers see storage only through CountryRepository
    - Every method runs while the caller holds the store's exclusive lock
    - Lookups by code are exact; callers normalize case first

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Protocol, Sequence

from world_countries.schemas.country import Country


class CountryRepository(Protocol):
    """Contract for country persistence, implemented by infrastructure/country_store.py."""
    async def initialize(self) -> None: ...
    async def seed_if_empty(self, records: Sequence[Country]) -> int: ...
    async def list_all(self) -> list[Country]: ...
    async def find_by_code(self, code: str) -> Country | None: ...
    async def list_distinct_regions(self) -> list[str]: ...
    async def find_by_region(self, region: str) -> list[Country]: ...
    async def exists(self, code: str) -> bool: ...
    async def insert(self, record: Country) -> None: ...
    async def update(self, code: str, fields: Country) -> int: ...
    async def delete(self, code: str) -> int: ...
