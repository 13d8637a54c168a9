"""Seed dataset: the ten countries loaded into an empty store at startup."""

from world_countries.schemas.country import Country

SEED_COUNTRIES: tuple[Country, ...] = (
    Country(name="United States", code="US", capital="Washington, D.C.",
            region="North America", currency="USD"),
    Country(name="Canada", code="CA", capital="Ottawa",
            region="North America", currency="CAD"),
    Country(name="United Kingdom", code="GB", capital="London",
            region="Europe", currency="GBP"),
    Country(name="Germany", code="DE", capital="Berlin",
            region="Europe", currency="EUR"),
    Country(name="France", code="FR", capital="Paris",
            region="Europe", currency="EUR"),
    Country(name="Japan", code="JP", capital="Tokyo",
            region="Asia", currency="JPY"),
    Country(name="Australia", code="AU", capital="Canberra",
            region="Oceania", currency="AUD"),
    Country(name="Brazil", code="BR", capital="Brasília",
            region="South America", currency="BRL"),
    Country(name="South Africa", code="ZA", capital="Pretoria",
            region="Africa", currency="ZAR"),
    Country(name="India", code="IN", capital="New Delhi",
            region="Asia", currency="INR"),
)
