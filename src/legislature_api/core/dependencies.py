"""FastAPI dependency injection for database sessions."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.core.database import Database


def get_database(request: Request) -> Database:
    """Return the Database created by the application lifespan.

    Raises:
        RuntimeError: If the lifespan has not attached a database.
    """
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        msg = "Database not initialized; the application lifespan did not run."
        raise RuntimeError(msg)
    return database


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    async with get_database(request).session() as session:
        yield session
