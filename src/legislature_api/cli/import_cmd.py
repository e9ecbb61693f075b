"""Import CLI commands for bill fact files."""

import asyncio
import json
from pathlib import Path

import typer

import_app = typer.Typer()


@import_app.command("bill-facts")
def import_bill_facts_cmd(
    file: Path = typer.Argument(..., help="Path to a bill-facts JSON file", exists=True, dir_okay=False),  # noqa: B008
) -> None:
    """Import committees, cosponsors, votes and committee referrals for synced bills."""
    asyncio.run(_import_bill_facts(file))


async def _import_bill_facts(file_path: Path) -> None:
    """Async implementation of the bill-facts import."""
    from pydantic import ValidationError

    from legislature_api.cli.common import load_settings, open_database, report
    from legislature_api.services.ingestion_service import IngestionError, import_bill_facts

    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        typer.echo(f"Error: cannot read {file_path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    if not isinstance(payload, dict):
        typer.echo(f"Error: {file_path} must contain a JSON object", err=True)
        raise typer.Exit(code=1)

    settings = load_settings()
    database = await open_database(settings)
    try:
        typer.echo(f"Importing {file_path}...")
        result = await import_bill_facts(database, payload)
    except (ValidationError, IngestionError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        await database.dispose()
    report(result)
