"""Legislator service — filtered, paginated reads of state legislators."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.models.legislator import CHAMBERS, Legislator


async def list_legislators(
    session: AsyncSession,
    *,
    state: str | None = None,
    chamber: str | None = None,
    party: str | None = None,
    page: int = 1,
    page_size: int = 50,
) -> tuple[list[Legislator], int]:
    """List legislators with optional filters, ordered by chamber then district.

    Args:
        session: Database session.
        state: Filter by two-letter state abbreviation.
        chamber: Filter by ``house`` or ``senate``.
        party: Filter by party.
        page: Page number.
        page_size: Items per page.

    Returns:
        Tuple of (legislators, total count).

    Raises:
        ValueError: If ``chamber`` is not a known chamber.
    """
    if chamber is not None and chamber not in CHAMBERS:
        msg = f"chamber must be one of {', '.join(CHAMBERS)}"
        raise ValueError(msg)

    query = select(Legislator)
    count_query = select(func.count(Legislator.id))

    if state:
        query = query.where(Legislator.state == state.upper())
        count_query = count_query.where(Legislator.state == state.upper())
    if chamber:
        query = query.where(Legislator.chamber == chamber)
        count_query = count_query.where(Legislator.chamber == chamber)
    if party:
        query = query.where(Legislator.party == party)
        count_query = count_query.where(Legislator.party == party)

    total = (await session.execute(count_query)).scalar_one()
    offset = (page - 1) * page_size
    query = (
        query.order_by(Legislator.chamber, Legislator.district_number, Legislator.state)
        .offset(offset)
        .limit(page_size)
    )
    result = await session.execute(query)
    return list(result.scalars().all()), total


async def get_legislator(session: AsyncSession, legislator_id: uuid.UUID) -> Legislator | None:
    """Get a legislator by ID."""
    result = await session.execute(select(Legislator).where(Legislator.id == legislator_id))
    return result.scalar_one_or_none()
