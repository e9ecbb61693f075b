"""Bill models — state bills and the fact records that hang off them.

Bill is keyed on (state, bill_number, session_year) where bill_number is the
full source identifier (``HB0001``); bill_type is derived from its prefix.
Status is one of ``BILL_STATUSES``; any status may follow any other.
"""

import uuid
from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legislature_api.models.base import Base, JSONType, TimestampMixin, UUIDMixin
from legislature_api.models.legislator import Legislator

BILL_TYPES: tuple[str, ...] = ("HB", "HCR", "HJR", "HR", "SB", "SCR", "SJR", "SR")

BILL_STATUSES: tuple[str, ...] = (
    "introduced",
    "in_committee",
    "passed_committee",
    "failed_committee",
    "first_reading",
    "second_reading",
    "third_reading",
    "passed",
    "failed",
    "vetoed",
    "signed",
    "law",
)

VOTE_VALUES: tuple[str, ...] = ("yea", "nay", "absent", "present")

ASSIGNMENT_STATUSES: tuple[str, ...] = ("pending", "passed", "failed", "substituted")


def _in_clause(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class Bill(Base, UUIDMixin, TimestampMixin):
    """A bill or resolution in a state legislative session."""

    __tablename__ = "bills"
    __natural_key__ = ("state", "bill_number", "session_year")

    state: Mapped[str] = mapped_column(String(2), ForeignKey("states.abbreviation"), nullable=False)
    bill_number: Mapped[str] = mapped_column(String(20), nullable=False)
    bill_type: Mapped[str] = mapped_column(String(10), nullable=False)
    session_year: Mapped[int] = mapped_column(Integer, nullable=False)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="introduced")

    sponsor_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("legislators.id", ondelete="SET NULL"), nullable=True, index=True
    )

    full_text_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_action: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_action_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    fiscal_note_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    effective_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    external_ids: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    sponsor: Mapped[Legislator | None] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("state", "bill_number", "session_year", name="uq_bill_session"),
        CheckConstraint(_in_clause("status", BILL_STATUSES), name="ck_bill_status"),
        Index("ix_bills_session_number", "session_year", "bill_number"),
        Index("ix_bills_status", "status"),
    )


class Committee(Base, UUIDMixin, TimestampMixin):
    """A legislative committee bills are referred to."""

    __tablename__ = "committees"
    __natural_key__ = ("state", "name")

    state: Mapped[str] = mapped_column(String(2), ForeignKey("states.abbreviation"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    __table_args__ = (UniqueConstraint("state", "name", name="uq_committee_name"),)


class BillCosponsor(Base, UUIDMixin, TimestampMixin):
    """A legislator cosponsoring a bill."""

    __tablename__ = "bill_cosponsors"
    __natural_key__ = ("bill_id", "legislator_id")

    bill_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True
    )
    legislator_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("legislators.id", ondelete="CASCADE"), nullable=False
    )

    legislator: Mapped[Legislator] = relationship(lazy="selectin")

    __table_args__ = (UniqueConstraint("bill_id", "legislator_id", name="uq_bill_cosponsor"),)


class BillVote(Base, UUIDMixin, TimestampMixin):
    """A legislator's recorded vote on a bill on a given day."""

    __tablename__ = "bill_votes"
    __natural_key__ = ("bill_id", "legislator_id", "vote_date")

    bill_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True
    )
    legislator_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("legislators.id", ondelete="CASCADE"), nullable=False
    )
    vote: Mapped[str] = mapped_column(String(10), nullable=False)
    vote_date: Mapped[date] = mapped_column(Date, nullable=False)
    reading_number: Mapped[int | None] = mapped_column(Integer, nullable=True)

    legislator: Mapped[Legislator] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("bill_id", "legislator_id", "vote_date", name="uq_bill_vote"),
        CheckConstraint(_in_clause("vote", VOTE_VALUES), name="ck_bill_vote_value"),
        CheckConstraint("reading_number IS NULL OR reading_number BETWEEN 1 AND 3", name="ck_bill_vote_reading"),
    )


class BillCommitteeAssignment(Base, UUIDMixin, TimestampMixin):
    """Referral of a bill to a committee."""

    __tablename__ = "bill_committee_assignments"
    __natural_key__ = ("bill_id", "committee_id")

    bill_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True
    )
    committee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("committees.id", ondelete="CASCADE"), nullable=False
    )
    assignment_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str | None] = mapped_column(String(20), nullable=True)

    committee: Mapped[Committee] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("bill_id", "committee_id", name="uq_bill_committee_assignment"),
        CheckConstraint(
            "status IS NULL OR " + _in_clause("status", ASSIGNMENT_STATUSES), name="ck_assignment_status"
        ),
    )
