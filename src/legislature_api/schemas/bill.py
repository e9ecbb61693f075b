"""Pydantic v2 schemas for bills and their cosponsors, votes and committee referrals."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel

from legislature_api.schemas.common import PaginationMeta
from legislature_api.schemas.legislator import LegislatorSummaryResponse

# ---------------------------------------------------------------------------
# Bill schemas
# ---------------------------------------------------------------------------


class BillSummaryResponse(BaseModel):
    """Bill summary for list endpoints."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    state: str
    bill_number: str
    bill_type: str
    session_year: int
    title: str
    status: str
    last_action: str | None = None
    last_action_date: date | None = None
    sponsor: LegislatorSummaryResponse | None = None


class BillDetailResponse(BillSummaryResponse):
    """Full bill detail."""

    description: str | None = None
    full_text_url: str | None = None
    fiscal_note_url: str | None = None
    effective_date: date | None = None

    external_ids: dict | None = None

    created_at: datetime
    updated_at: datetime


class PaginatedBillResponse(BaseModel):
    """Paginated list of bills."""

    items: list[BillSummaryResponse]
    pagination: PaginationMeta


# ---------------------------------------------------------------------------
# Bill fact schemas
# ---------------------------------------------------------------------------


class CommitteeResponse(BaseModel):
    """A legislative committee."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    state: str
    name: str


class PaginatedCommitteeResponse(BaseModel):
    """Paginated list of committees."""

    items: list[CommitteeResponse]
    pagination: PaginationMeta


class BillCosponsorResponse(BaseModel):
    """A cosponsor of a bill."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    bill_id: uuid.UUID
    legislator: LegislatorSummaryResponse


class BillVoteResponse(BaseModel):
    """A legislator's recorded vote on a bill."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    bill_id: uuid.UUID
    vote: str
    vote_date: date
    reading_number: int | None = None
    legislator: LegislatorSummaryResponse


class BillCommitteeAssignmentResponse(BaseModel):
    """Referral of a bill to a committee."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    bill_id: uuid.UUID
    assignment_date: date
    status: str | None = None
    committee: CommitteeResponse
