"""State model — US state reference data seeded once and never rewritten by jobs."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from legislature_api.models.base import Base, TimestampMixin, UUIDMixin


class State(Base, UUIDMixin, TimestampMixin):
    """A US state, referenced by two-letter abbreviation from every other table."""

    __tablename__ = "states"
    __natural_key__ = ("abbreviation",)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    abbreviation: Mapped[str] = mapped_column(String(2), nullable=False, unique=True)
    fips_code: Mapped[str] = mapped_column(String(2), nullable=False, unique=True)
