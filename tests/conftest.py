"""Shared test fixtures for settings, async database, and seeded reference data."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from legislature_api.core.config import Settings
from legislature_api.core.database import Database, create_database
from legislature_api.models.base import Base
from legislature_api.models.state import State


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        utah_legislature_token="test-token",
        congress_members_api_key="test-key",
    )


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """In-memory SQLite Database with all tables created.

    StaticPool keeps one connection so every session sees the same memory database.
    """
    db = create_database(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield db

    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await db.dispose()


@pytest.fixture
async def async_session(database: Database) -> AsyncGenerator[AsyncSession]:
    """Per-test async session on the in-memory database."""
    async with database.session() as session:
        yield session


@pytest.fixture
async def seeded_states(database: Database) -> list[str]:
    """Seed the two states most tests need."""
    async with database.session() as session:
        session.add_all(
            [
                State(name="Utah", abbreviation="UT", fips_code="49"),
                State(name="Washington", abbreviation="WA", fips_code="53"),
            ]
        )
        await session.commit()
    return ["UT", "WA"]
