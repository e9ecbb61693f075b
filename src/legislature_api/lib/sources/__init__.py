"""Sources library — pluggable external legislative data sourcing.

Public API:
    - LegislatorRecord, BillRecord, RepresentativeRecord: Normalized records from any source
    - BaseSource: Abstract fetch contract
    - SourceError / SourceNotSupportedError: Source-level errors
    - get_source: Source factory/registry
"""

from typing import Any

from loguru import logger

from legislature_api.lib.sources.base import (
    BaseSource,
    BillRecord,
    LegislatorRecord,
    RepresentativeRecord,
    SourceError,
    SourceNotSupportedError,
)
from legislature_api.lib.sources.congress_members import CongressMembersSource
from legislature_api.lib.sources.utah_legislature import UtahLegislatureSource
from legislature_api.lib.sources.washington import WashingtonLegislatureSource

_SOURCES: dict[str, type[BaseSource]] = {}


def get_source(name: str, **kwargs: Any) -> BaseSource:
    """Get a source instance by name.

    Args:
        name: Source name (e.g., "utah_legislature", "congress_members").
        **kwargs: Additional arguments forwarded to the source constructor.

    Returns:
        An instance of the requested source.

    Raises:
        ValueError: If the source is not registered.
    """
    cls = _SOURCES.get(name)
    if cls is None:
        msg = f"Unknown source: {name!r}. Available: {available_sources()}"
        raise ValueError(msg)
    return cls(**kwargs)


def register_source(name: str, cls: type[BaseSource]) -> None:
    """Register a source class in the registry.

    Args:
        name: Short name for the source.
        cls: Source class (must subclass BaseSource).
    """
    if name in _SOURCES:
        logger.warning("Overwriting existing source {!r}", name)
    _SOURCES[name] = cls


def available_sources() -> list[str]:
    """Names of all registered sources, sorted."""
    return sorted(_SOURCES)


register_source("utah_legislature", UtahLegislatureSource)
register_source("washington", WashingtonLegislatureSource)
register_source("congress_members", CongressMembersSource)

__all__ = [
    "BaseSource",
    "BillRecord",
    "CongressMembersSource",
    "LegislatorRecord",
    "RepresentativeRecord",
    "SourceError",
    "SourceNotSupportedError",
    "UtahLegislatureSource",
    "WashingtonLegislatureSource",
    "available_sources",
    "get_source",
    "register_source",
]
