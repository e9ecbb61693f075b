"""Representative service — members of Congress, house districts and senate seats."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.models.representative import (
    REPRESENTATIVE_TYPES,
    HouseDistrict,
    Representative,
    SenateSeat,
)


async def list_representatives(
    session: AsyncSession,
    *,
    state: str | None = None,
    representative_type: str | None = None,
    party: str | None = None,
    page: int = 1,
    page_size: int = 50,
) -> tuple[list[Representative], int]:
    """List members of Congress ordered by state, type, then last name.

    Returns:
        Tuple of (representatives, total count).

    Raises:
        ValueError: If ``representative_type`` is not ``house`` or ``senate``.
    """
    if representative_type is not None and representative_type not in REPRESENTATIVE_TYPES:
        msg = f"representative_type must be one of {', '.join(REPRESENTATIVE_TYPES)}"
        raise ValueError(msg)

    query = select(Representative)
    count_query = select(func.count(Representative.id))

    if state:
        query = query.where(Representative.state == state.upper())
        count_query = count_query.where(Representative.state == state.upper())
    if representative_type:
        query = query.where(Representative.representative_type == representative_type)
        count_query = count_query.where(Representative.representative_type == representative_type)
    if party:
        query = query.where(Representative.party == party)
        count_query = count_query.where(Representative.party == party)

    total = (await session.execute(count_query)).scalar_one()
    offset = (page - 1) * page_size
    query = (
        query.order_by(
            Representative.state,
            Representative.representative_type,
            Representative.last_name,
            Representative.first_name,
        )
        .offset(offset)
        .limit(page_size)
    )
    result = await session.execute(query)
    return list(result.scalars().all()), total


async def get_representative(session: AsyncSession, representative_id: uuid.UUID) -> Representative | None:
    """Get a member of Congress by ID."""
    result = await session.execute(select(Representative).where(Representative.id == representative_id))
    return result.scalar_one_or_none()


async def list_house_districts(
    session: AsyncSession,
    *,
    state: str | None = None,
    page: int = 1,
    page_size: int = 50,
) -> tuple[list[HouseDistrict], int]:
    """List congressional districts with their current representative."""
    query = select(HouseDistrict)
    count_query = select(func.count(HouseDistrict.id))
    if state:
        query = query.where(HouseDistrict.state == state.upper())
        count_query = count_query.where(HouseDistrict.state == state.upper())

    total = (await session.execute(count_query)).scalar_one()
    query = (
        query.order_by(HouseDistrict.state, HouseDistrict.district_number)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await session.execute(query)
    return list(result.scalars().all()), total


async def list_senate_seats(
    session: AsyncSession,
    *,
    state: str | None = None,
    page: int = 1,
    page_size: int = 50,
) -> tuple[list[SenateSeat], int]:
    """List Senate seats with their current senator."""
    query = select(SenateSeat)
    count_query = select(func.count(SenateSeat.id))
    if state:
        query = query.where(SenateSeat.state == state.upper())
        count_query = count_query.where(SenateSeat.state == state.upper())

    total = (await session.execute(count_query)).scalar_one()
    query = query.order_by(SenateSeat.state, SenateSeat.seat_class).offset((page - 1) * page_size).limit(page_size)
    result = await session.execute(query)
    return list(result.scalars().all()), total
