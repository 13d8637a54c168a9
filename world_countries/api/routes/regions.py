"""Region Routes: distinct geographical regions present in the store."""

from fastapi import APIRouter, Depends

from world_countries.core.repository_protocols import CountryRepository
from world_countries.infrastructure.database import get_country_store

router = APIRouter(tags=["countries"])


@router.get(
    "/regions",
    response_model=list[str],
    responses={
        200: {"description": "List of all geographical regions"},
        500: {
            "description": "Internal server error",
            "content": {"text/plain": {"schema": {"type": "string"}}},
        },
    },
)
async def get_regions(store: CountryRepository = Depends(get_country_store)):
    """Each region appears once, however many countries share it."""
    return await store.list_distinct_regions()
