"""Database migration CLI commands using Alembic programmatically."""

import typer
from alembic import command
from alembic.config import Config
from loguru import logger

db_app = typer.Typer()


def _config() -> Config:
    return Config("alembic.ini")


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
) -> None:
    """Run database migrations up to the target revision."""
    logger.info("Upgrading database to {}", revision)
    command.upgrade(_config(), revision)
    logger.info("Database upgrade complete")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
) -> None:
    """Roll the database back to the target revision."""
    logger.info("Downgrading database to {}", revision)
    command.downgrade(_config(), revision)
    logger.info("Database downgrade complete")


@db_app.command()
def current() -> None:
    """Show the current database migration revision."""
    command.current(_config(), verbose=True)
