"""States API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.core.dependencies import get_async_session
from legislature_api.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationMeta
from legislature_api.schemas.state import PaginatedStateResponse, StateResponse
from legislature_api.services.state_service import get_state, list_states

states_router = APIRouter(prefix="/states", tags=["states"])


@states_router.get("", response_model=PaginatedStateResponse)
async def list_all_states(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
) -> PaginatedStateResponse:
    """List U.S. states ordered by name."""
    try:
        states, total = await list_states(session, page=page, page_size=page_size)
    except Exception as e:
        logger.error(f"Unexpected error listing states: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error listing states.",
        ) from e
    return PaginatedStateResponse(
        items=[StateResponse.model_validate(s) for s in states],
        pagination=PaginationMeta.build(total, page, page_size),
    )


@states_router.get("/{abbreviation}", response_model=StateResponse)
async def get_state_detail(
    abbreviation: str,
    session: AsyncSession = Depends(get_async_session),
) -> StateResponse:
    """Get a state by its two-letter abbreviation."""
    try:
        state = await get_state(session, abbreviation)
    except Exception as e:
        logger.error(f"Unexpected error fetching state {abbreviation}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error fetching state.",
        ) from e
    if state is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="State not found")
    return StateResponse.model_validate(state)
