"""CLI commands that sync data from external legislative sources.

Each command runs one ingestion job and exits non-zero when configuration is
missing, the source or database fails, or any single item failed, so cron
can alert on the exit code.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Annotated

import typer
from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from legislature_api.core.config import Settings
    from legislature_api.lib.sources.base import BaseSource
    from legislature_api.services.ingestion_service import IngestionContext, IngestionResult

sync_app = typer.Typer()

_CHAMBER_CHOICES = {
    "house": ("house",),
    "senate": ("senate",),
    "all": ("house", "senate"),
}


def _create_source(name: str, settings: Settings) -> BaseSource:
    """Build a registered source from settings, or exit 1 if it cannot be configured."""
    from legislature_api.core.config import ConfigurationError
    from legislature_api.lib.sources import get_source

    try:
        if name == "utah_legislature":
            return get_source(
                name,
                token=settings.require("utah_legislature_token", "the utah_legislature source"),
                base_url=settings.utah_legislature_base_url,
                timeout=settings.source_timeout,
            )
        if name == "congress_members":
            return get_source(
                name,
                api_key=settings.require("congress_members_api_key", "the congress_members source"),
                congress=settings.congress_number,
                base_url=settings.congress_members_base_url,
                timeout=settings.source_timeout,
            )
        return get_source(name)
    except (ConfigurationError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


async def _run(
    settings: Settings,
    source: BaseSource,
    job: str,
    runner: Callable[[IngestionContext], Awaitable[IngestionResult]],
) -> IngestionResult:
    """Open the database, run one job against ``source``, and always release resources."""
    from legislature_api.cli.common import open_database
    from legislature_api.lib.sources.base import SourceError
    from legislature_api.services.ingestion_service import IngestionContext, IngestionError

    try:
        database = await open_database(settings)
        try:
            return await runner(IngestionContext(database=database, source=source))
        except (SourceError, IngestionError) as exc:
            logger.error("{} sync aborted: {}", job, exc)
            typer.echo(f"Error: {job} sync aborted: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        finally:
            await database.dispose()
    finally:
        await source.close()


@sync_app.command("legislators")
def legislators(
    source: Annotated[str, typer.Option("--source", help="Source to sync from")] = "utah_legislature",
) -> None:
    """Sync state legislators (run daily)."""
    asyncio.run(_legislators_impl(source))


async def _legislators_impl(source_name: str) -> None:
    """Async implementation of the legislators command."""
    from legislature_api.cli.common import load_settings, report
    from legislature_api.services import ingestion_service

    settings = load_settings()
    source = _create_source(source_name, settings)
    result = await _run(settings, source, "legislator", ingestion_service.sync_legislators)
    report(result)


@sync_app.command("bills")
def bills(
    source: Annotated[str, typer.Option("--source", help="Source to sync from")] = "utah_legislature",
    session: Annotated[
        str | None,
        typer.Option("--session", help="Session token (e.g. 2026GS); defaults to LEGISLATURE_SESSION or this year's"),
    ] = None,
    with_details: Annotated[
        bool | None,
        typer.Option("--with-details/--no-details", help="Fetch each bill's detail record (default: FETCH_BILL_DETAILS)"),
    ] = None,
) -> None:
    """Sync bills for a session (run hourly during session). Sync legislators first."""
    asyncio.run(_bills_impl(source, session, with_details))


async def _bills_impl(source_name: str, session: str | None, with_details: bool | None) -> None:
    """Async implementation of the bills command."""
    from legislature_api.cli.common import load_settings, report
    from legislature_api.lib.sources.base import SourceError
    from legislature_api.lib.sources.normalize import session_to_year
    from legislature_api.services import ingestion_service

    settings = load_settings()
    source = _create_source(source_name, settings)

    try:
        session_token = (session or settings.legislature_session or source.current_session()).strip().upper()
        session_to_year(session_token)
    except (SourceError, ValueError) as exc:
        await source.close()
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    details = settings.fetch_bill_details if with_details is None else with_details
    logger.info("Syncing bills for session {} (details={})", session_token, details)

    async def _sync(ctx: IngestionContext) -> IngestionResult:
        return await ingestion_service.sync_bills(ctx, session_token, with_details=details)

    result = await _run(settings, source, "bill", _sync)
    report(result)


@sync_app.command("congress")
def congress(
    chamber: Annotated[str, typer.Option("--chamber", help="house, senate, or all")] = "all",
) -> None:
    """Sync members of Congress and their district / seat assignments."""
    if chamber not in _CHAMBER_CHOICES:
        typer.echo(f"Unknown chamber: {chamber}. Use house, senate, or all.", err=True)
        raise typer.Exit(code=1)
    asyncio.run(_congress_impl(_CHAMBER_CHOICES[chamber]))


async def _congress_impl(chambers: tuple[str, ...]) -> None:
    """Async implementation of the congress command."""
    from legislature_api.cli.common import load_settings, report
    from legislature_api.services import ingestion_service

    settings = load_settings()
    source = _create_source("congress_members", settings)

    async def _sync(ctx: IngestionContext) -> IngestionResult:
        return await ingestion_service.sync_congress_members(ctx, chambers)

    result = await _run(settings, source, "congress", _sync)
    report(result)
