"""Country Routes: list, lookup, region filter, create, update, delete.

Invariants:
    - Path codes are upper-cased before lookup/update/delete; create stores the
      body code untouched
    - Region filter is case-insensitive and answers 404 instead of []
    - Create checks existence first so a duplicate code yields 400, not 500
    - Update is a blind write; 0 affected rows means 404 and nothing is inserted
    - Each handler holds the store lock (get_country_store) until it returns

Design Decisions:
    - /region/{region} registered before /{code} so "region" is never read as a code
    - Error responses are raised as CountriesError and rendered by error_handlers.py
"""

import logging

from fastapi import APIRouter, Depends, Path, Response, status

from world_countries.core.country_mapper import with_code
from world_countries.core.errors import CountryConflictError, ResourceNotFoundError
from world_countries.core.repository_protocols import CountryRepository
from world_countries.infrastructure.database import get_country_store
from world_countries.schemas.country import Country

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/countries", tags=["countries"])

_PLAIN_TEXT = {"text/plain": {"schema": {"type": "string"}}}
_STORAGE_ERROR = {500: {"description": "Internal server error", "content": _PLAIN_TEXT}}
_CODE_PARAM_DOC = "ISO 3166-1 alpha-2 country code"


@router.get(
    "",
    response_model=list[Country],
    responses={200: {"description": "List of all countries"}, **_STORAGE_ERROR},
)
async def all_countries(store: CountryRepository = Depends(get_country_store)):
    """Return every country in the store."""
    return await store.list_all()


@router.get(
    "/region/{region}",
    response_model=list[Country],
    responses={
        200: {"description": "List of countries in the region"},
        404: {"description": "No countries found in the region", "content": _PLAIN_TEXT},
        **_STORAGE_ERROR,
    },
)
async def countries_by_region(
    region: str = Path(description="Geographical region name"),
    store: CountryRepository = Depends(get_country_store),
):
    """Return the countries of a region, matched case-insensitively."""
    countries = await store.find_by_region(region)
    if not countries:
        raise ResourceNotFoundError.for_region(region)
    return countries


@router.get(
    "/{code}",
    response_model=Country,
    responses={
        200: {"description": "Country found"},
        404: {"description": "Country not found", "content": _PLAIN_TEXT},
        **_STORAGE_ERROR,
    },
)
async def country_by_code(
    code: str = Path(description=_CODE_PARAM_DOC),
    store: CountryRepository = Depends(get_country_store),
):
    """Return the country for a code, in any letter case."""
    code = code.upper()
    country = await store.find_by_code(code)
    if country is None:
        raise ResourceNotFoundError.for_code(code)
    return country


@router.post(
    "",
    response_model=Country,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Country created successfully"},
        400: {"description": "Country with this code already exists", "content": _PLAIN_TEXT},
        **_STORAGE_ERROR,
    },
)
async def add_country(
    country: Country, store: CountryRepository = Depends(get_country_store),
):
    """Create a country. The code is stored exactly as submitted."""
    if await store.exists(country.code):
        raise CountryConflictError(country.code)
    await store.insert(country)
    logger.info(
        f"Country {country.code} created", extra={"country_code": country.code},
    )
    return country


@router.put(
    "/{code}",
    response_model=Country,
    responses={
        200: {"description": "Country updated successfully"},
        404: {"description": "Country not found", "content": _PLAIN_TEXT},
        **_STORAGE_ERROR,
    },
)
async def update_country(
    country: Country,
    code: str = Path(description=_CODE_PARAM_DOC),
    store: CountryRepository = Depends(get_country_store),
):
    """Replace name, capital, region and currency. The path code wins over the body code."""
    code = code.upper()
    rows = await store.update(code, country)
    if rows == 0:
        raise ResourceNotFoundError.for_code(code)
    logger.info(f"Country {code} updated", extra={"country_code": code})
    return with_code(country, code)


@router.delete(
    "/{code}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        204: {"description": "Country deleted successfully"},
        404: {"description": "Country not found", "content": _PLAIN_TEXT},
        **_STORAGE_ERROR,
    },
)
async def delete_country(
    code: str = Path(description=_CODE_PARAM_DOC),
    store: CountryRepository = Depends(get_country_store),
):
    code = code.upper()
    rows = await store.delete(code)
    if rows == 0:
        raise ResourceNotFoundError.for_code(code)
    logger.info(f"Country {code} deleted", extra={"country_code": code})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
