"""CLI commands for loading reference data."""

import asyncio

import typer

seed_app = typer.Typer()


@seed_app.command("states")
def states() -> None:
    """Load the 50 U.S. states (name, abbreviation, FIPS code). Safe to re-run."""
    asyncio.run(_states_impl())


async def _states_impl() -> None:
    """Async implementation of the states command."""
    from sqlalchemy.exc import SQLAlchemyError

    from legislature_api.cli.common import load_settings, open_database, report
    from legislature_api.services.ingestion_service import seed_states

    settings = load_settings()
    database = await open_database(settings)
    try:
        result = await seed_states(database)
    except SQLAlchemyError as exc:
        typer.echo(f"Error: state seed failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        await database.dispose()
    report(result)
