"""Tests for FastAPI dependency injection module."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.core.database import Database
from legislature_api.core.dependencies import get_async_session, get_database


def _request(database: Database | None) -> MagicMock:
    request = MagicMock()
    request.app.state.database = database
    return request


class TestGetDatabase:
    def test_returns_attached_database(self, database: Database) -> None:
        assert get_database(_request(database)) is database

    def test_raises_without_lifespan(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            get_database(_request(None))


class TestGetAsyncSession:
    async def test_yields_session(self, database: Database) -> None:
        gen = get_async_session(_request(database))
        session = await gen.__anext__()
        assert isinstance(session, AsyncSession)
        await gen.aclose()
