"""State service — read access to the seeded U.S. states."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.models.state import State


async def list_states(
    session: AsyncSession,
    *,
    page: int = 1,
    page_size: int = 50,
) -> tuple[list[State], int]:
    """List states ordered by name.

    Returns:
        Tuple of (states, total count).
    """
    total = (await session.execute(select(func.count(State.id)))).scalar_one()
    query = select(State).order_by(State.name).offset((page - 1) * page_size).limit(page_size)
    result = await session.execute(query)
    return list(result.scalars().all()), total


async def get_state(session: AsyncSession, abbreviation: str) -> State | None:
    """Get a state by its two-letter abbreviation (case-insensitive)."""
    result = await session.execute(select(State).where(State.abbreviation == abbreviation.upper()))
    return result.scalar_one_or_none()
