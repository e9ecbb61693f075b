"""State legislator API endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.core.dependencies import get_async_session
from legislature_api.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationMeta
from legislature_api.schemas.legislator import LegislatorDetailResponse, PaginatedLegislatorResponse
from legislature_api.services.legislator_service import get_legislator, list_legislators

legislators_router = APIRouter(prefix="/legislators", tags=["legislators"])


@legislators_router.get("", response_model=PaginatedLegislatorResponse)
async def list_all_legislators(
    state: str | None = Query(None, description="Filter by two-letter state abbreviation"),
    chamber: str | None = Query(None, description="Filter by chamber (house, senate)"),
    party: str | None = Query(None, description="Filter by party"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
) -> PaginatedLegislatorResponse:
    """List state legislators ordered by chamber and district."""
    try:
        legislators, total = await list_legislators(
            session,
            state=state,
            chamber=chamber,
            party=party,
            page=page,
            page_size=page_size,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Unexpected error listing legislators: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error listing legislators.",
        ) from e
    return PaginatedLegislatorResponse(
        items=[LegislatorDetailResponse.model_validate(leg) for leg in legislators],
        pagination=PaginationMeta.build(total, page, page_size),
    )


@legislators_router.get("/{legislator_id}", response_model=LegislatorDetailResponse)
async def get_legislator_detail(
    legislator_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> LegislatorDetailResponse:
    """Get a legislator by ID."""
    try:
        legislator = await get_legislator(session, legislator_id)
    except Exception as e:
        logger.error(f"Unexpected error fetching legislator {legislator_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error fetching legislator.",
        ) from e
    if legislator is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Legislator not found")
    return LegislatorDetailResponse.model_validate(legislator)
