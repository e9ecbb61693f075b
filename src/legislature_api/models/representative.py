"""Congressional delegation models.

Representative — a member of the U.S. House or Senate, keyed on bioguide_id.
HouseDistrict — one row per (state, district_number); at-large seats use 0.
SenateSeat — one row per (state, seat_class); classes 1-3.

Districts and seats reference the current holder by FK; the holder is
reassigned by the congress sync job.
"""

import uuid
from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legislature_api.models.base import Base, JSONType, TimestampMixin, UUIDMixin

REPRESENTATIVE_TYPES: tuple[str, ...] = ("house", "senate")


class Representative(Base, UUIDMixin, TimestampMixin):
    """Member of Congress."""

    __tablename__ = "representatives"
    __natural_key__ = ("bioguide_id",)

    bioguide_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    representative_type: Mapped[str] = mapped_column(String(10), nullable=False)
    state: Mapped[str] = mapped_column(String(2), ForeignKey("states.abbreviation"), nullable=False, index=True)
    party: Mapped[str | None] = mapped_column(String(50), nullable=True)

    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    office: Mapped[str | None] = mapped_column(Text, nullable=True)
    twitter_handle: Mapped[str | None] = mapped_column(String(100), nullable=True)

    term_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    term_end: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (Index("ix_representatives_name", "last_name", "first_name"),)


class HouseDistrict(Base, UUIDMixin, TimestampMixin):
    """Congressional district of a state."""

    __tablename__ = "house_districts"
    __natural_key__ = ("state", "district_number")

    state: Mapped[str] = mapped_column(String(2), ForeignKey("states.abbreviation"), nullable=False)
    district_number: Mapped[int] = mapped_column(Integer, nullable=False)
    representative_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("representatives.id", ondelete="SET NULL"), nullable=True
    )
    population: Mapped[int | None] = mapped_column(Integer, nullable=True)
    boundary_geojson: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    representative: Mapped[Representative | None] = relationship(lazy="selectin")

    __table_args__ = (UniqueConstraint("state", "district_number", name="uq_house_district"),)


class SenateSeat(Base, UUIDMixin, TimestampMixin):
    """One of a state's two U.S. Senate seats, identified by election class."""

    __tablename__ = "senate_seats"
    __natural_key__ = ("state", "seat_class")

    state: Mapped[str] = mapped_column(String(2), ForeignKey("states.abbreviation"), nullable=False)
    seat_class: Mapped[int] = mapped_column(Integer, nullable=False)
    representative_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("representatives.id", ondelete="SET NULL"), nullable=True
    )

    representative: Mapped[Representative | None] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("state", "seat_class", name="uq_senate_seat"),
        CheckConstraint("seat_class IN (1, 2, 3)", name="ck_senate_seat_class"),
    )
