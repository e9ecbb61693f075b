"""Congressional delegation API endpoints: representatives, house districts, senate seats."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.core.dependencies import get_async_session
from legislature_api.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationMeta
from legislature_api.schemas.representative import (
    HouseDistrictResponse,
    PaginatedHouseDistrictResponse,
    PaginatedRepresentativeResponse,
    PaginatedSenateSeatResponse,
    RepresentativeResponse,
    SenateSeatResponse,
)
from legislature_api.services.representative_service import (
    get_representative,
    list_house_districts,
    list_representatives,
    list_senate_seats,
)

representatives_router = APIRouter(tags=["representatives"])


@representatives_router.get("/representatives", response_model=PaginatedRepresentativeResponse)
async def list_all_representatives(
    state: str | None = Query(None, description="Filter by two-letter state abbreviation"),
    representative_type: str | None = Query(None, description="Filter by type (house, senate)"),
    party: str | None = Query(None, description="Filter by party"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
) -> PaginatedRepresentativeResponse:
    """List members of Congress ordered by state, type and last name."""
    try:
        representatives, total = await list_representatives(
            session,
            state=state,
            representative_type=representative_type,
            party=party,
            page=page,
            page_size=page_size,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Unexpected error listing representatives: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error listing representatives.",
        ) from e
    return PaginatedRepresentativeResponse(
        items=[RepresentativeResponse.model_validate(r) for r in representatives],
        pagination=PaginationMeta.build(total, page, page_size),
    )


@representatives_router.get("/representatives/{representative_id}", response_model=RepresentativeResponse)
async def get_representative_detail(
    representative_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> RepresentativeResponse:
    """Get a member of Congress by ID."""
    try:
        representative = await get_representative(session, representative_id)
    except Exception as e:
        logger.error(f"Unexpected error fetching representative {representative_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error fetching representative.",
        ) from e
    if representative is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Representative not found")
    return RepresentativeResponse.model_validate(representative)


@representatives_router.get("/house-districts", response_model=PaginatedHouseDistrictResponse)
async def list_all_house_districts(
    state: str | None = Query(None, description="Filter by two-letter state abbreviation"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
) -> PaginatedHouseDistrictResponse:
    """List congressional districts with their current representative."""
    try:
        districts, total = await list_house_districts(session, state=state, page=page, page_size=page_size)
    except Exception as e:
        logger.error(f"Unexpected error listing house districts: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error listing house districts.",
        ) from e
    return PaginatedHouseDistrictResponse(
        items=[HouseDistrictResponse.model_validate(d) for d in districts],
        pagination=PaginationMeta.build(total, page, page_size),
    )


@representatives_router.get("/senate-seats", response_model=PaginatedSenateSeatResponse)
async def list_all_senate_seats(
    state: str | None = Query(None, description="Filter by two-letter state abbreviation"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
) -> PaginatedSenateSeatResponse:
    """List Senate seats with their current senator."""
    try:
        seats, total = await list_senate_seats(session, state=state, page=page, page_size=page_size)
    except Exception as e:
        logger.error(f"Unexpected error listing senate seats: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error listing senate seats.",
        ) from e
    return PaginatedSenateSeatResponse(
        items=[SenateSeatResponse.model_validate(s) for s in seats],
        pagination=PaginationMeta.build(total, page, page_size),
    )
