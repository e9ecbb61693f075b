"""Typer CLI root application with serve command."""

import typer

from legislature_api.core.logging import setup_logging

app = typer.Typer(name="legislature-api", help="State legislature and congressional data sync and API")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    from legislature_api.cli.common import load_settings

    settings = load_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "legislature_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from legislature_api.cli.db_cmd import db_app
    from legislature_api.cli.import_cmd import import_app
    from legislature_api.cli.seed_cmd import seed_app
    from legislature_api.cli.sync_cmd import sync_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(sync_app, name="sync", help="Sync data from external legislative sources")
    app.add_typer(seed_app, name="seed", help="Reference data commands")
    app.add_typer(import_app, name="import", help="Data import commands")


_register_subcommands()
