"""Pydantic v2 schemas for state legislators."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel

from legislature_api.schemas.common import PaginationMeta


class LegislatorSummaryResponse(BaseModel):
    """Legislator summary, also used as the nested sponsor / cosponsor object."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    state: str
    chamber: str
    district_number: int
    first_name: str
    last_name: str
    full_name: str
    party: str | None = None


class LegislatorDetailResponse(LegislatorSummaryResponse):
    """Full legislator detail with contact info."""

    email: str | None = None
    phone: str | None = None
    website: str | None = None
    image_url: str | None = None

    term_start: date | None = None
    term_end: date | None = None

    external_ids: dict | None = None

    created_at: datetime
    updated_at: datetime


class PaginatedLegislatorResponse(BaseModel):
    """Paginated list of legislators."""

    items: list[LegislatorDetailResponse]
    pagination: PaginationMeta
