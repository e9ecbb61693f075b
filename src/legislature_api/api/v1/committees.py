"""Committee API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.core.dependencies import get_async_session
from legislature_api.schemas.bill import CommitteeResponse, PaginatedCommitteeResponse
from legislature_api.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationMeta
from legislature_api.services.bill_service import list_committees

committees_router = APIRouter(prefix="/committees", tags=["committees"])


@committees_router.get("", response_model=PaginatedCommitteeResponse)
async def list_all_committees(
    state: str | None = Query(None, description="Filter by two-letter state abbreviation"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
) -> PaginatedCommitteeResponse:
    """List legislative committees."""
    try:
        committees, total = await list_committees(session, state=state, page=page, page_size=page_size)
    except Exception as e:
        logger.error(f"Unexpected error listing committees: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error listing committees.",
        ) from e
    return PaginatedCommitteeResponse(
        items=[CommitteeResponse.model_validate(c) for c in committees],
        pagination=PaginationMeta.build(total, page, page_size),
    )
