"""Declarative base, shared mixins, and portable column types for ORM models."""

import uuid
from datetime import datetime
from typing import ClassVar

from sqlalchemy import JSON, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Declarative base for all models.

    Models that are written by ingestion declare ``__natural_key__``: the
    column names that identify a record independently of its surrogate id.
    The upsert reconciler matches on exactly these columns.
    """

    __natural_key__: ClassVar[tuple[str, ...]] = ()

    # Fetch server-generated timestamps on flush instead of lazily on access
    __mapper_args__ = {"eager_defaults": True}


class UUIDMixin:
    """UUID primary key."""

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """created_at / updated_at maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
