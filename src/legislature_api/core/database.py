"""Async database engine and session management.

A ``Database`` owns one SQLAlchemy 2.x async engine and its session factory.
It is constructed explicitly at startup (app lifespan or CLI command) and
handed to whatever needs it; nothing here is module-level state.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


class Database:
    """Engine plus session factory for one process.

    Args:
        engine: The async engine to wrap.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(engine, expire_on_commit=False)

    def session(self) -> AsyncSession:
        """Open a new session (use as ``async with database.session() as s``)."""
        return self.session_factory()

    async def check_connection(self) -> None:
        """Round-trip a trivial query so connectivity problems surface before any work.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: If the database cannot be reached.
            OSError: If the network connection is refused.
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Dispose of the engine and release pooled connections."""
        await self.engine.dispose()


def create_database(database_url: str, *, schema: str | None = None, **kwargs: object) -> Database:
    """Create a ``Database`` for the given connection string.

    Args:
        database_url: SQLAlchemy async connection string.
        schema: Optional PostgreSQL schema for isolated environments.
        **kwargs: Additional arguments passed to create_async_engine.

    Returns:
        A new Database instance.
    """
    if schema is not None:
        connect_args = kwargs.pop("connect_args", {})
        if not isinstance(connect_args, dict):
            msg = "connect_args must be a dict"
            raise TypeError(msg)
        connect_args["server_settings"] = {"search_path": f"{schema},public"}
        kwargs["connect_args"] = connect_args
    # Pool sizing only applies to connection-pooled engines (not SQLite/StaticPool)
    uses_static_pool = kwargs.get("poolclass") is StaticPool or "sqlite" in database_url
    if not uses_static_pool:
        kwargs.setdefault("pool_size", 5)
        kwargs.setdefault("max_overflow", 5)
    return Database(create_async_engine(database_url, **kwargs))
