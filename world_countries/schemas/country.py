"""Country Schemas: the JSON record shape exchanged over HTTP.

Invariants:
    - All five fields are required strings on input and output
    - Unknown input fields are ignored (pydantic default)
    - code is never normalized here; handlers decide when to upper-case
"""

from pydantic import BaseModel, ConfigDict, Field


class Country(BaseModel):
    """A country with its basic reference information."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "name": "Japan",
                "code": "JP",
                "capital": "Tokyo",
                "region": "Asia",
                "currency": "JPY",
            },
        },
    )

    name: str = Field(description="The full name of the country")
    code: str = Field(description="ISO 3166-1 alpha-2 country code (two letters)")
    capital: str = Field(description="The name of the capital city")
    region: str = Field(description="The geographical region of the country")
    currency: str = Field(description="The currency code used in the country")
