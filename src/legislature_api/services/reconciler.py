"""Natural-key upsert reconciler.

Every model declares ``__natural_key__``. ``upsert`` looks a candidate up by
those columns; a hit is updated in place (identity and primary key kept), a
miss is inserted. Applying the same candidate twice leaves one row with the
same values, so ingestion jobs can be re-run freely.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from legislature_api.models.base import Base

# Dict-valued columns whose entries are merged rather than replaced.
DEFAULT_MERGE_FIELDS: tuple[str, ...] = ("external_ids",)


@dataclass
class UpsertOutcome:
    """Result of one upsert: the persistent instance and whether it was new."""

    instance: Any
    created: bool


def natural_key_of(model: type[Base], values: Mapping[str, Any]) -> dict[str, Any]:
    """Extract and validate the natural key of ``model`` from ``values``.

    Raises:
        ValueError: If the model declares no natural key or any component
            is missing, None, or a blank string.
    """
    fields = model.__natural_key__
    if not fields:
        msg = f"{model.__name__} declares no natural key"
        raise ValueError(msg)

    key = {name: values.get(name) for name in fields}
    empty = [name for name, value in key.items() if value is None or (isinstance(value, str) and not value.strip())]
    if empty:
        msg = f"{model.__name__} candidate has empty natural key component(s): {', '.join(empty)}"
        raise ValueError(msg)
    return key


async def find_by_natural_key(session: AsyncSession, model: type[Base], key: Mapping[str, Any]) -> Any | None:
    """Return the row of ``model`` matching ``key`` exactly, or None."""
    clauses = [getattr(model, name) == value for name, value in key.items()]
    result = await session.execute(select(model).where(*clauses))
    return result.scalar_one_or_none()


async def upsert(
    session: AsyncSession,
    model: type[Base],
    values: Mapping[str, Any],
    *,
    merge_fields: Iterable[str] = DEFAULT_MERGE_FIELDS,
) -> UpsertOutcome:
    """Insert or update one ``model`` row identified by its natural key.

    Non-key fields present in ``values`` overwrite the stored ones; fields not
    present are left alone. Dict fields named in ``merge_fields`` are merged
    key-by-key into the stored dict. The session is flushed but not committed.

    Args:
        session: Database session.
        model: ORM class declaring ``__natural_key__``.
        values: Candidate column values, including every natural key column.
        merge_fields: Dict-valued columns to merge instead of replace.

    Returns:
        UpsertOutcome with the persistent instance and a ``created`` flag.

    Raises:
        ValueError: If a natural key component is empty.
    """
    key = natural_key_of(model, values)
    merge = set(merge_fields)

    existing = await find_by_natural_key(session, model, key)
    if existing is None:
        instance = model(**dict(values))
        session.add(instance)
        await session.flush()
        return UpsertOutcome(instance=instance, created=True)

    for name, value in values.items():
        if name in key:
            continue
        if name in merge and isinstance(value, dict):
            merged = dict(getattr(existing, name) or {})
            merged.update(value)
            value = merged
        setattr(existing, name, value)
    await session.flush()
    return UpsertOutcome(instance=existing, created=False)
