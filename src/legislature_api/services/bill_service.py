"""Bill service — bill listing and the fact records attached to a bill.

Bills are ordered newest session first, then by bill number, so paging
through a filtered list is stable between requests.
"""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.models.bill import (
    BILL_STATUSES,
    Bill,
    BillCommitteeAssignment,
    BillCosponsor,
    BillVote,
    Committee,
)
from legislature_api.models.legislator import CHAMBERS, Legislator

# ---------------------------------------------------------------------------
# Bills
# ---------------------------------------------------------------------------


async def list_bills(
    session: AsyncSession,
    *,
    status: str | None = None,
    session_year: int | None = None,
    sponsor_id: uuid.UUID | None = None,
    chamber: str | None = None,
    state: str | None = None,
    page: int = 1,
    page_size: int = 50,
) -> tuple[list[Bill], int]:
    """List bills with optional filters.

    Args:
        session: Database session.
        status: Exact status match.
        session_year: Exact session year match.
        sponsor_id: Sponsoring legislator.
        chamber: Chamber of the sponsoring legislator; unsponsored bills never match.
        state: Two-letter state abbreviation.
        page: Page number.
        page_size: Items per page.

    Returns:
        Tuple of (bills, total count).

    Raises:
        ValueError: If ``status`` or ``chamber`` is not a known value.
    """
    if status is not None and status not in BILL_STATUSES:
        msg = f"status must be one of {', '.join(BILL_STATUSES)}"
        raise ValueError(msg)
    if chamber is not None and chamber not in CHAMBERS:
        msg = f"chamber must be one of {', '.join(CHAMBERS)}"
        raise ValueError(msg)

    query = select(Bill)
    count_query = select(func.count(Bill.id))

    if chamber:
        query = query.join(Legislator, Bill.sponsor_id == Legislator.id).where(Legislator.chamber == chamber)
        count_query = count_query.join(Legislator, Bill.sponsor_id == Legislator.id).where(
            Legislator.chamber == chamber
        )
    if status:
        query = query.where(Bill.status == status)
        count_query = count_query.where(Bill.status == status)
    if session_year is not None:
        query = query.where(Bill.session_year == session_year)
        count_query = count_query.where(Bill.session_year == session_year)
    if sponsor_id is not None:
        query = query.where(Bill.sponsor_id == sponsor_id)
        count_query = count_query.where(Bill.sponsor_id == sponsor_id)
    if state:
        query = query.where(Bill.state == state.upper())
        count_query = count_query.where(Bill.state == state.upper())

    total = (await session.execute(count_query)).scalar_one()
    offset = (page - 1) * page_size
    query = (
        query.order_by(Bill.session_year.desc(), Bill.bill_number, Bill.state)
        .offset(offset)
        .limit(page_size)
    )
    result = await session.execute(query)
    return list(result.scalars().all()), total


async def get_bill(session: AsyncSession, bill_id: uuid.UUID) -> Bill | None:
    """Get a bill by ID (sponsor eager-loaded)."""
    result = await session.execute(select(Bill).where(Bill.id == bill_id))
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Bill facts
# ---------------------------------------------------------------------------


async def list_cosponsors(session: AsyncSession, bill_id: uuid.UUID) -> list[BillCosponsor]:
    """Cosponsors of a bill, ordered by legislator name."""
    query = (
        select(BillCosponsor)
        .join(Legislator, BillCosponsor.legislator_id == Legislator.id)
        .where(BillCosponsor.bill_id == bill_id)
        .order_by(Legislator.last_name, Legislator.first_name)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def list_votes(session: AsyncSession, bill_id: uuid.UUID) -> list[BillVote]:
    """Recorded votes on a bill, oldest first."""
    query = (
        select(BillVote)
        .join(Legislator, BillVote.legislator_id == Legislator.id)
        .where(BillVote.bill_id == bill_id)
        .order_by(BillVote.vote_date, BillVote.reading_number, Legislator.last_name)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def list_committee_assignments(session: AsyncSession, bill_id: uuid.UUID) -> list[BillCommitteeAssignment]:
    """Committee referrals of a bill in date order."""
    query = (
        select(BillCommitteeAssignment)
        .where(BillCommitteeAssignment.bill_id == bill_id)
        .order_by(BillCommitteeAssignment.assignment_date)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Committees
# ---------------------------------------------------------------------------


async def list_committees(
    session: AsyncSession,
    *,
    state: str | None = None,
    page: int = 1,
    page_size: int = 50,
) -> tuple[list[Committee], int]:
    """List committees, optionally for one state, ordered by state then name."""
    query = select(Committee)
    count_query = select(func.count(Committee.id))
    if state:
        query = query.where(Committee.state == state.upper())
        count_query = count_query.where(Committee.state == state.upper())

    total = (await session.execute(count_query)).scalar_one()
    query = query.order_by(Committee.state, Committee.name).offset((page - 1) * page_size).limit(page_size)
    result = await session.execute(query)
    return list(result.scalars().all()), total
