"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
A missing ``DATABASE_URL`` fails validation, which the CLI and the app factory
treat as a fatal startup error.
"""

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when a value required by the selected job is not configured.

    Args:
        setting: Environment variable name that is missing.
        purpose: What the value is needed for.
    """

    def __init__(self, setting: str, purpose: str) -> None:
        self.setting = setting
        self.purpose = purpose
        super().__init__(f"{setting} is required for {purpose}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        description="SQLAlchemy async connection string (postgresql+asyncpg://...)",
    )
    database_schema: str | None = Field(
        default=None,
        description="PostgreSQL schema for isolated environments (e.g., pr_42)",
    )

    @field_validator("database_schema")
    @classmethod
    def validate_database_schema(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not re.match(r"^[a-z_][a-z0-9_]{0,62}$", v):
            msg = "Invalid database_schema: must match ^[a-z_][a-z0-9_]{0,62}$"
            raise ValueError(msg)
        return v

    # State legislature source
    utah_legislature_token: str | None = Field(
        default=None,
        description="Developer token for the Utah Legislature API (glen.le.utah.gov)",
    )
    utah_legislature_base_url: str = Field(
        default="https://glen.le.utah.gov",
        description="Base URL of the Utah Legislature API",
    )
    legislature_session: str | None = Field(
        default=None,
        description="Session override for bill sync (e.g. 2026GS); defaults to the current year's general session",
    )
    fetch_bill_details: bool = Field(
        default=False,
        description="Fetch the detail record for every bill during bill sync",
    )

    @field_validator("legislature_session")
    @classmethod
    def validate_legislature_session(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip().upper()
        if not re.match(r"^\d{4}[A-Z0-9]*$", v):
            msg = "legislature_session must start with a four-digit year (e.g. 2026GS)"
            raise ValueError(msg)
        return v

    # Congressional members source
    congress_members_api_key: str | None = Field(
        default=None,
        description="API key sent as X-API-Key to the congressional members API",
    )
    congress_members_base_url: str = Field(
        default="https://api.propublica.org/congress/v1",
        description="Base URL of the congressional members API",
    )
    congress_number: int = Field(
        default=119,
        description="Congress to sync members for (119 = 2025-2027)",
        gt=0,
    )

    source_timeout: float = Field(
        default=15.0,
        description="Timeout in seconds for outbound source API requests",
        gt=0,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regex pattern for allowed CORS origins",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def require(self, name: str, purpose: str) -> str:
        """Return a configured string setting or raise ConfigurationError.

        Args:
            name: Settings attribute name (e.g. ``utah_legislature_token``).
            purpose: Short description used in the error message.

        Returns:
            The non-empty setting value.

        Raises:
            ConfigurationError: If the value is unset or blank.
        """
        value = getattr(self, name)
        if not value or not str(value).strip():
            raise ConfigurationError(name.upper(), purpose)
        return str(value)


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
