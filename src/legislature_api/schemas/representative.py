"""Pydantic v2 schemas for members of Congress and their districts / seats."""

import uuid
from datetime import date

from pydantic import BaseModel

from legislature_api.schemas.common import PaginationMeta


class RepresentativeResponse(BaseModel):
    """A member of the U.S. House or Senate."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    bioguide_id: str
    first_name: str
    last_name: str
    representative_type: str
    state: str
    party: str | None = None

    phone: str | None = None
    website: str | None = None
    office: str | None = None
    twitter_handle: str | None = None

    term_start: date | None = None
    term_end: date | None = None


class PaginatedRepresentativeResponse(BaseModel):
    """Paginated list of representatives."""

    items: list[RepresentativeResponse]
    pagination: PaginationMeta


class HouseDistrictResponse(BaseModel):
    """A congressional district with its current representative."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    state: str
    district_number: int
    population: int | None = None
    representative: RepresentativeResponse | None = None


class PaginatedHouseDistrictResponse(BaseModel):
    """Paginated list of house districts."""

    items: list[HouseDistrictResponse]
    pagination: PaginationMeta


class SenateSeatResponse(BaseModel):
    """A Senate seat with its current senator."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    state: str
    seat_class: int
    representative: RepresentativeResponse | None = None


class PaginatedSenateSeatResponse(BaseModel):
    """Paginated list of senate seats."""

    items: list[SenateSeatResponse]
    pagination: PaginationMeta
