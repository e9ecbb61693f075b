"""Legislator model — members of a state legislature.

One row per seat: the natural key is (state, chamber, district_number), so a
new member elected to a seat replaces the previous occupant's descriptive
fields rather than creating a second row. External source identifiers live
in ``external_ids`` (``{"utah_legislature": "...", "openstates": "..."}``) and
are merged, not replaced, on re-ingest.
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from legislature_api.models.base import Base, JSONType, TimestampMixin, UUIDMixin

CHAMBERS: tuple[str, ...] = ("house", "senate")


class Legislator(Base, UUIDMixin, TimestampMixin):
    """State legislator holding a house or senate seat."""

    __tablename__ = "legislators"
    __natural_key__ = ("state", "chamber", "district_number")

    state: Mapped[str] = mapped_column(String(2), ForeignKey("states.abbreviation"), nullable=False, index=True)
    chamber: Mapped[str] = mapped_column(String(10), nullable=False)
    district_number: Mapped[int] = mapped_column(Integer, nullable=False)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    party: Mapped[str | None] = mapped_column(String(50), nullable=True)

    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    term_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    term_end: Mapped[date | None] = mapped_column(Date, nullable=True)

    external_ids: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    __table_args__ = (
        UniqueConstraint("state", "chamber", "district_number", name="uq_legislator_seat"),
        Index("ix_legislators_name", "last_name", "first_name"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
