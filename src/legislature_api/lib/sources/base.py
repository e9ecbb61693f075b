"""Abstract base interface for external legislative data sources.

Every source implements the same fetch contract. A source overrides only the
capabilities it actually has; the defaults raise ``SourceNotSupportedError``
so an unimplemented capability fails clearly instead of returning nothing.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date


@dataclass
class LegislatorRecord:
    """Normalized state legislator from any source.

    Natural key components (state, chamber, district_number) are always
    populated; sources drop raw entries that would leave one empty.
    """

    source_name: str
    source_record_id: str

    state: str
    chamber: str
    district_number: int

    first_name: str
    last_name: str
    party: str | None = None

    email: str | None = None
    phone: str | None = None
    website: str | None = None
    image_url: str | None = None

    term_start: date | None = None
    term_end: date | None = None

    raw_data: dict = field(default_factory=dict)


@dataclass
class BillRecord:
    """Normalized bill from any source.

    ``sponsor_source_id`` is the sponsor's identifier in the *source* system;
    the ingestion job resolves it to a legislator id. ``status`` is None when
    the source entry carries no status at all.
    """

    source_name: str
    source_record_id: str

    state: str
    bill_number: str
    bill_type: str
    session_year: int

    title: str
    status: str | None
    sponsor_source_id: str | None = None

    description: str | None = None
    full_text_url: str | None = None
    last_action: str | None = None
    last_action_date: date | None = None
    fiscal_note_url: str | None = None
    effective_date: date | None = None

    raw_data: dict = field(default_factory=dict)


@dataclass
class RepresentativeRecord:
    """Normalized member of Congress.

    Exactly one of ``district_number`` (house) or ``seat_class`` (senate) is
    normally set; either may be None when the source data does not allow it
    to be determined.
    """

    source_name: str
    bioguide_id: str

    first_name: str
    last_name: str
    representative_type: str
    state: str
    party: str | None = None

    phone: str | None = None
    website: str | None = None
    office: str | None = None
    twitter_handle: str | None = None

    district_number: int | None = None
    seat_class: int | None = None

    term_start: date | None = None
    term_end: date | None = None
    in_office: bool = True

    raw_data: dict = field(default_factory=dict)


class SourceError(Exception):
    """Raised when a source experiences a transport error or returns a malformed payload.

    Args:
        source_name: Name of the failing source.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the source.
    """

    def __init__(self, source_name: str, message: str, status_code: int | None = None) -> None:
        self.source_name = source_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{source_name}: {message}")


class SourceNotSupportedError(SourceError):
    """Raised when a source does not implement the requested capability."""

    def __init__(self, source_name: str, capability: str) -> None:
        self.capability = capability
        super().__init__(source_name, f"{capability} is not supported by this source")


class BaseSource(ABC):
    """Abstract interface for legislative data sources."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Unique short name for this source (e.g. 'utah_legislature')."""

    @property
    def state(self) -> str | None:
        """Two-letter state the source covers, or None for national sources."""
        return None

    def current_session(self) -> str:
        """Session token used when none is configured."""
        raise SourceNotSupportedError(self.source_name, "session discovery")

    async def fetch_legislators(self) -> list[LegislatorRecord]:
        """Fetch all current state legislators."""
        raise SourceNotSupportedError(self.source_name, "legislator fetch")

    async def fetch_bills(self, session: str) -> list[BillRecord]:
        """Fetch the bill list for a session token (e.g. ``2026GS``)."""
        raise SourceNotSupportedError(self.source_name, "bill fetch")

    async def fetch_bill(self, session: str, bill_id: str) -> BillRecord:
        """Fetch full detail for one bill."""
        raise SourceNotSupportedError(self.source_name, "bill detail fetch")

    async def fetch_members(self, chamber: str) -> list[RepresentativeRecord]:
        """Fetch members of Congress for ``house`` or ``senate``."""
        raise SourceNotSupportedError(self.source_name, "congressional member fetch")

    async def close(self) -> None:  # noqa: B027
        """Release any held HTTP resources."""
