"""Bill API endpoints, including cosponsors, votes and committee referrals."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.core.dependencies import get_async_session
from legislature_api.schemas.bill import (
    BillCommitteeAssignmentResponse,
    BillCosponsorResponse,
    BillDetailResponse,
    BillSummaryResponse,
    BillVoteResponse,
    PaginatedBillResponse,
)
from legislature_api.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationMeta
from legislature_api.services.bill_service import (
    get_bill,
    list_bills,
    list_committee_assignments,
    list_cosponsors,
    list_votes,
)

bills_router = APIRouter(prefix="/bills", tags=["bills"])


async def _require_bill(session: AsyncSession, bill_id: uuid.UUID) -> None:
    try:
        bill = await get_bill(session, bill_id)
    except Exception as e:
        logger.error(f"Unexpected error fetching bill {bill_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error fetching bill.",
        ) from e
    if bill is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bill not found")


@bills_router.get("", response_model=PaginatedBillResponse)
async def list_all_bills(
    bill_status: str | None = Query(None, alias="status", description="Filter by exact status"),
    session_year: int | None = Query(None, description="Filter by session year"),
    sponsor_id: uuid.UUID | None = Query(None, description="Filter by sponsoring legislator"),
    chamber: str | None = Query(None, description="Filter by the sponsor's chamber (house, senate)"),
    state: str | None = Query(None, description="Filter by two-letter state abbreviation"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
) -> PaginatedBillResponse:
    """List bills, newest session first then by bill number.

    A page past the last one returns an empty ``items`` list.
    """
    try:
        bills, total = await list_bills(
            session,
            status=bill_status,
            session_year=session_year,
            sponsor_id=sponsor_id,
            chamber=chamber,
            state=state,
            page=page,
            page_size=page_size,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Unexpected error listing bills: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error listing bills.",
        ) from e
    return PaginatedBillResponse(
        items=[BillSummaryResponse.model_validate(b) for b in bills],
        pagination=PaginationMeta.build(total, page, page_size),
    )


@bills_router.get("/{bill_id}", response_model=BillDetailResponse)
async def get_bill_detail(
    bill_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> BillDetailResponse:
    """Get a bill with its sponsor."""
    try:
        bill = await get_bill(session, bill_id)
    except Exception as e:
        logger.error(f"Unexpected error fetching bill {bill_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error fetching bill.",
        ) from e
    if bill is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bill not found")
    return BillDetailResponse.model_validate(bill)


@bills_router.get("/{bill_id}/cosponsors", response_model=list[BillCosponsorResponse])
async def get_bill_cosponsors(
    bill_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> list[BillCosponsorResponse]:
    """List a bill's cosponsors."""
    await _require_bill(session, bill_id)
    try:
        cosponsors = await list_cosponsors(session, bill_id)
    except Exception as e:
        logger.error(f"Unexpected error fetching cosponsors for bill {bill_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error fetching cosponsors.",
        ) from e
    return [BillCosponsorResponse.model_validate(c) for c in cosponsors]


@bills_router.get("/{bill_id}/votes", response_model=list[BillVoteResponse])
async def get_bill_votes(
    bill_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> list[BillVoteResponse]:
    """List recorded votes on a bill."""
    await _require_bill(session, bill_id)
    try:
        votes = await list_votes(session, bill_id)
    except Exception as e:
        logger.error(f"Unexpected error fetching votes for bill {bill_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error fetching votes.",
        ) from e
    return [BillVoteResponse.model_validate(v) for v in votes]


@bills_router.get("/{bill_id}/committee-assignments", response_model=list[BillCommitteeAssignmentResponse])
async def get_bill_committee_assignments(
    bill_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> list[BillCommitteeAssignmentResponse]:
    """List a bill's committee referrals."""
    await _require_bill(session, bill_id)
    try:
        assignments = await list_committee_assignments(session, bill_id)
    except Exception as e:
        logger.error(f"Unexpected error fetching committee assignments for bill {bill_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error fetching committee assignments.",
        ) from e
    return [BillCommitteeAssignmentResponse.model_validate(a) for a in assignments]
