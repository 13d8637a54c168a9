"""Country Store: primitives against a real SQLite file.

Invariants:
    - initialize() is idempotent and keeps existing rows
    - seed_if_empty() inserts once; a second call is a no-op
    - A failing seed leaves the table empty (single transaction)
    - Code lookups are exact; region lookups are case-insensitive
    - update/delete report 0 or 1 affected rows
    - Every SQLAlchemy failure is raised as StorageUnavailableError
"""

import pytest

from world_countries.core.errors import StorageUnavailableError
from world_countries.db.seed_data import SEED_COUNTRIES
from world_countries.infrastructure.country_store import CountryStore
from world_countries.schemas.country import Country

CHILE = Country(
    name="Chile", code="CL", capital="Santiago",
    region="South America", currency="CLP",
)


# -- initialize / seed --------------------------------------------------------

async def test_initialize_is_idempotent(store):
    await store.insert(CHILE)
    await store.initialize()
    assert await store.list_all() == [CHILE]


async def test_seed_populates_empty_table(store):
    inserted = await store.seed_if_empty(SEED_COUNTRIES)
    assert inserted == 10
    assert len(await store.list_all()) == 10


async def test_seed_twice_never_duplicates(store):
    await store.seed_if_empty(SEED_COUNTRIES)
    assert await store.seed_if_empty(SEED_COUNTRIES) == 0
    assert len(await store.list_all()) == 10


async def test_seed_skipped_when_table_has_rows(store):
    await store.insert(CHILE)
    assert await store.seed_if_empty(SEED_COUNTRIES) == 0
    assert await store.list_all() == [CHILE]


async def test_failed_seed_leaves_no_partial_rows(store):
    duplicated = [SEED_COUNTRIES[0], SEED_COUNTRIES[1], SEED_COUNTRIES[0]]
    with pytest.raises(StorageUnavailableError):
        await store.seed_if_empty(duplicated)
    assert await store.list_all() == []


async def test_seed_survives_reopen(db_manager, database_url):
    from world_countries.infrastructure.database import DatabaseSessionManager

    async with db_manager.session() as session:
        await CountryStore(session).seed_if_empty(SEED_COUNTRIES)
    await db_manager.dispose()

    reopened = DatabaseSessionManager(database_url)
    try:
        async with reopened.session() as session:
            store = CountryStore(session)
            await store.initialize()
            assert await store.seed_if_empty(SEED_COUNTRIES) == 0
            assert len(await store.list_all()) == 10
    finally:
        await reopened.dispose()


# -- reads --------------------------------------------------------------------

async def test_find_by_code_is_exact(seeded_store):
    japan = await seeded_store.find_by_code("JP")
    assert japan == Country(
        name="Japan", code="JP", capital="Tokyo", region="Asia", currency="JPY",
    )
    assert await seeded_store.find_by_code("jp") is None
    assert await seeded_store.find_by_code("XX") is None


async def test_find_by_region_ignores_case(seeded_store):
    asia = await seeded_store.find_by_region("aSiA")
    assert {c.code for c in asia} == {"JP", "IN"}
    assert await seeded_store.find_by_region("Atlantis") == []


async def test_list_distinct_regions(seeded_store):
    regions = await seeded_store.list_distinct_regions()
    assert sorted(regions) == sorted({
        "North America", "Europe", "Asia", "Oceania", "South America", "Africa",
    })


async def test_non_ascii_values_round_trip(seeded_store):
    brazil = await seeded_store.find_by_code("BR")
    assert brazil.capital == "Brasília"


async def test_exists(seeded_store):
    assert await seeded_store.exists("US") is True
    assert await seeded_store.exists("us") is False


# -- writes -------------------------------------------------------------------

async def test_insert_keeps_code_as_given(store):
    await store.insert(CHILE.model_copy(update={"code": "cl"}))
    assert await store.find_by_code("cl") is not None
    assert await store.find_by_code("CL") is None


async def test_insert_duplicate_is_storage_error(seeded_store):
    with pytest.raises(StorageUnavailableError) as exc_info:
        await seeded_store.insert(
            Country(name="X", code="US", capital="X", region="X", currency="X"),
        )
    assert exc_info.value.http_status == 500
    assert (await seeded_store.find_by_code("US")).name == "United States"


async def test_update_replaces_all_but_code(seeded_store):
    fields = Country(
        name="Deutschland", code="IGNORED", capital="Bonn",
        region="Europe", currency="DEM",
    )
    assert await seeded_store.update("DE", fields) == 1
    germany = await seeded_store.find_by_code("DE")
    assert germany.name == "Deutschland"
    assert germany.capital == "Bonn"
    assert germany.currency == "DEM"
    assert await seeded_store.find_by_code("IGNORED") is None


async def test_update_missing_affects_nothing(seeded_store):
    assert await seeded_store.update("XX", CHILE) == 0
    assert await seeded_store.find_by_code("XX") is None
    assert len(await seeded_store.list_all()) == 10


async def test_delete_counts_rows(seeded_store):
    assert await seeded_store.delete("GB") == 1
    assert await seeded_store.delete("GB") == 0
    assert await seeded_store.find_by_code("GB") is None


async def test_store_usable_after_failure(bare_manager):
    async with bare_manager.session() as session:
        store = CountryStore(session)
        with pytest.raises(StorageUnavailableError) as exc_info:
            await store.list_all()
        assert "no such table" in exc_info.value.message
        await store.initialize()
        assert await store.list_all() == []
