"""Pydantic v2 schemas for U.S. states."""

import uuid

from pydantic import BaseModel

from legislature_api.schemas.common import PaginationMeta


class StateResponse(BaseModel):
    """A U.S. state."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    name: str
    abbreviation: str
    fips_code: str


class PaginatedStateResponse(BaseModel):
    """Paginated list of states."""

    items: list[StateResponse]
    pagination: PaginationMeta
