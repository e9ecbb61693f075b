"""create legislative schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates every table the sync jobs and the read API use:
  - states: seeded reference data
  - legislators: state legislators, one row per seat
  - representatives, house_districts, senate_seats: congressional delegation
  - bills, committees, bill_cosponsors, bill_votes, bill_committee_assignments
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_BILL_STATUSES = (
    "'introduced', 'in_committee', 'passed_committee', 'failed_committee', 'first_reading', "
    "'second_reading', 'third_reading', 'passed', 'failed', 'vetoed', 'signed', 'law'"
)


def _id() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _state_fk(index: bool = False) -> sa.Column:
    return sa.Column("state", sa.String(2), sa.ForeignKey("states.abbreviation"), nullable=False, index=index)


def upgrade() -> None:
    op.create_table(
        "states",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("abbreviation", sa.String(2), nullable=False, unique=True),
        sa.Column("fips_code", sa.String(2), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "legislators",
        _id(),
        _state_fk(index=True),
        sa.Column("chamber", sa.String(10), nullable=False),
        sa.Column("district_number", sa.Integer, nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("party", sa.String(50), nullable=True),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("website", sa.Text, nullable=True),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("term_start", sa.Date, nullable=True),
        sa.Column("term_end", sa.Date, nullable=True),
        sa.Column("external_ids", postgresql.JSONB, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("state", "chamber", "district_number", name="uq_legislator_seat"),
    )
    op.create_index("ix_legislators_name", "legislators", ["last_name", "first_name"])

    op.create_table(
        "representatives",
        _id(),
        sa.Column("bioguide_id", sa.String(20), nullable=False, unique=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("representative_type", sa.String(10), nullable=False),
        _state_fk(index=True),
        sa.Column("party", sa.String(50), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("website", sa.Text, nullable=True),
        sa.Column("office", sa.Text, nullable=True),
        sa.Column("twitter_handle", sa.String(100), nullable=True),
        sa.Column("term_start", sa.Date, nullable=True),
        sa.Column("term_end", sa.Date, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_representatives_name", "representatives", ["last_name", "first_name"])

    op.create_table(
        "house_districts",
        _id(),
        _state_fk(),
        sa.Column("district_number", sa.Integer, nullable=False),
        sa.Column(
            "representative_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("representatives.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("population", sa.Integer, nullable=True),
        sa.Column("boundary_geojson", postgresql.JSONB, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("state", "district_number", name="uq_house_district"),
    )

    op.create_table(
        "senate_seats",
        _id(),
        _state_fk(),
        sa.Column("seat_class", sa.Integer, nullable=False),
        sa.Column(
            "representative_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("representatives.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
        sa.UniqueConstraint("state", "seat_class", name="uq_senate_seat"),
        sa.CheckConstraint("seat_class IN (1, 2, 3)", name="ck_senate_seat_class"),
    )

    op.create_table(
        "bills",
        _id(),
        _state_fk(),
        sa.Column("bill_number", sa.String(20), nullable=False),
        sa.Column("bill_type", sa.String(10), nullable=False),
        sa.Column("session_year", sa.Integer, nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="introduced"),
        sa.Column(
            "sponsor_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("legislators.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column("full_text_url", sa.Text, nullable=True),
        sa.Column("last_action", sa.Text, nullable=True),
        sa.Column("last_action_date", sa.Date, nullable=True),
        sa.Column("fiscal_note_url", sa.Text, nullable=True),
        sa.Column("effective_date", sa.Date, nullable=True),
        sa.Column("external_ids", postgresql.JSONB, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("state", "bill_number", "session_year", name="uq_bill_session"),
        sa.CheckConstraint(f"status IN ({_BILL_STATUSES})", name="ck_bill_status"),
    )
    op.create_index("ix_bills_session_number", "bills", ["session_year", "bill_number"])
    op.create_index("ix_bills_status", "bills", ["status"])

    op.create_table(
        "committees",
        _id(),
        _state_fk(),
        sa.Column("name", sa.String(200), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("state", "name", name="uq_committee_name"),
    )

    op.create_table(
        "bill_cosponsors",
        _id(),
        sa.Column(
            "bill_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bills.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "legislator_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("legislators.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
        sa.UniqueConstraint("bill_id", "legislator_id", name="uq_bill_cosponsor"),
    )
    op.create_index("ix_bill_cosponsors_bill_id", "bill_cosponsors", ["bill_id"])

    op.create_table(
        "bill_votes",
        _id(),
        sa.Column(
            "bill_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bills.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "legislator_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("legislators.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("vote", sa.String(10), nullable=False),
        sa.Column("vote_date", sa.Date, nullable=False),
        sa.Column("reading_number", sa.Integer, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("bill_id", "legislator_id", "vote_date", name="uq_bill_vote"),
        sa.CheckConstraint("vote IN ('yea', 'nay', 'absent', 'present')", name="ck_bill_vote_value"),
        sa.CheckConstraint("reading_number IS NULL OR reading_number BETWEEN 1 AND 3", name="ck_bill_vote_reading"),
    )
    op.create_index("ix_bill_votes_bill_id", "bill_votes", ["bill_id"])

    op.create_table(
        "bill_committee_assignments",
        _id(),
        sa.Column(
            "bill_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bills.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "committee_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("committees.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("assignment_date", sa.Date, nullable=False),
        sa.Column("status", sa.String(20), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("bill_id", "committee_id", name="uq_bill_committee_assignment"),
        sa.CheckConstraint(
            "status IS NULL OR status IN ('pending', 'passed', 'failed', 'substituted')", name="ck_assignment_status"
        ),
    )
    op.create_index("ix_bill_committee_assignments_bill_id", "bill_committee_assignments", ["bill_id"])


def downgrade() -> None:
    op.drop_table("bill_committee_assignments")
    op.drop_table("bill_votes")
    op.drop_table("bill_cosponsors")
    op.drop_table("committees")
    op.drop_table("bills")
    op.drop_table("senate_seats")
    op.drop_table("house_districts")
    op.drop_table("representatives")
    op.drop_table("legislators")
    op.drop_table("states")
