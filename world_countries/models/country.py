"""Country ORM: persists the single `countries` table.

Invariants:
    - code is the primary key, stored exactly as inserted (no case folding)
    - every column is NOT NULL TEXT
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from world_countries.db.base import Base


class CountryRow(Base):
    """One row of the countries reference table."""
    __tablename__ = "countries"

    code: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    capital: Mapped[str] = mapped_column(Text, nullable=False)
    region: Mapped[str] = mapped_column(Text, nullable=False)
    currency: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"CountryRow(code={self.code!r}, name={self.name!r})"
