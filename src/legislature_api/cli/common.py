"""Shared start-up and reporting helpers for CLI commands.

Configuration and connectivity problems end the command with exit code 1
before any work starts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

if TYPE_CHECKING:
    from legislature_api.core.config import Settings
    from legislature_api.core.database import Database
    from legislature_api.services.ingestion_service import IngestionResult


def load_settings() -> Settings:
    """Load settings, or exit 1 with the validation problem (e.g. missing DATABASE_URL)."""
    from legislature_api.core.config import get_settings

    try:
        return get_settings()
    except ValidationError as exc:
        missing = [".".join(str(p) for p in err["loc"]).upper() for err in exc.errors()]
        typer.echo(f"Error: invalid or missing configuration: {', '.join(missing)}", err=True)
        raise typer.Exit(code=1) from exc


async def open_database(settings: Settings) -> Database:
    """Create the Database and verify it is reachable, or exit 1."""
    from legislature_api.core.database import create_database

    database = create_database(settings.database_url, schema=settings.database_schema)
    try:
        await database.check_connection()
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Database unreachable: {}", exc)
        await database.dispose()
        typer.echo("Error: cannot connect to the database (see logs for details)", err=True)
        raise typer.Exit(code=1) from exc
    return database


def report(result: IngestionResult) -> None:
    """Print a run summary; exit 1 if any item failed."""
    logger.bind(
        json_output=True,
        job=result.job,
        fetched=result.fetched,
        created=result.created,
        updated=result.updated,
        skipped=result.skipped,
        unresolved=result.unresolved,
        failed=result.failed,
    ).info("job_summary")
    typer.echo(
        f"{result.job}: fetched {result.fetched}, created {result.created}, updated {result.updated}, "
        f"skipped {result.skipped}, unresolved {result.unresolved}, failed {result.failed}"
    )
    if not result.succeeded:
        typer.echo(f"Error: {result.failed} item(s) failed (see logs for details)", err=True)
        raise typer.Exit(code=1)
