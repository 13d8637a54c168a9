"""Country Mapper: converts between ORM rows and the Country record.

Invariants:
    - COUNTRY_COLUMNS is the single definition of the five-column shape
    - A row that cannot be mapped raises StorageUnavailableError, never ValidationError
"""

from pydantic import ValidationError

from world_countries.core.errors import StorageUnavailableError
from world_countries.models.country import CountryRow
from world_countries.schemas.country import Country

COUNTRY_COLUMNS: tuple[str, ...] = ("code", "name", "capital", "region", "currency")


def row_to_country(row) -> Country:
    """Map a CountryRow (or any object exposing the five columns) to a Country."""
    try:
        return Country.model_validate(row, from_attributes=True)
    except ValidationError as e:
        raise StorageUnavailableError(str(e), "map") from e


def country_to_row(country: Country) -> CountryRow:
    return CountryRow(**{col: getattr(country, col) for col in COUNTRY_COLUMNS})


def updatable_fields(country: Country) -> dict[str, str]:
    """Every column except code, as written by an update."""
    return {col: getattr(country, col) for col in COUNTRY_COLUMNS if col != "code"}


def with_code(country: Country, code: str) -> Country:
    return country.model_copy(update={"code": code})
