"""Pydantic v2 schemas for the bill-facts import file.

The file carries committees, cosponsors, votes and committee referrals for
bills that were already synced. Bills are referenced by number and session
year, legislators by their identifier in ``source``.

Example::

    {
      "state": "UT",
      "source": "utah_legislature",
      "session_year": 2026,
      "committees": [{"name": "House Judiciary"}],
      "cosponsors": [{"bill_number": "HB0001", "legislator": "123"}],
      "votes": [{"bill_number": "HB0001", "legislator": "123", "vote": "yea",
                 "vote_date": "2026-02-01", "reading_number": 3}],
      "committee_assignments": [{"bill_number": "HB0001", "committee": "House Judiciary",
                                 "assignment_date": "2026-01-20", "status": "passed"}]
    }

Only the envelope is validated up front; each entry is validated on its own
so one bad entry fails alone.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from legislature_api.lib.sources.normalize import normalize_vote
from legislature_api.models.bill import ASSIGNMENT_STATUSES


class BillReference(BaseModel):
    """Fields shared by every entry that points at a bill."""

    bill_number: str = Field(min_length=1)
    session_year: int | None = Field(default=None, description="Defaults to the file's session_year")

    @field_validator("bill_number")
    @classmethod
    def normalize_bill_number(cls, v: str) -> str:
        return v.strip().upper()


class CommitteeFact(BaseModel):
    """A committee to create or keep."""

    name: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Committee name must not be blank"
            raise ValueError(msg)
        return v


class CosponsorFact(BillReference):
    """A legislator cosponsoring a bill."""

    legislator: str = Field(min_length=1, description="Legislator identifier in the file's source")


class VoteFact(BillReference):
    """A recorded vote."""

    legislator: str = Field(min_length=1, description="Legislator identifier in the file's source")
    vote: str
    vote_date: date
    reading_number: int | None = Field(default=None, ge=1, le=3)

    @field_validator("vote")
    @classmethod
    def normalize_vote_value(cls, v: str) -> str:
        return normalize_vote(v)


class CommitteeAssignmentFact(BillReference):
    """Referral of a bill to a committee."""

    committee: str = Field(min_length=1)
    assignment_date: date
    status: str | None = None

    @field_validator("committee")
    @classmethod
    def strip_committee(cls, v: str) -> str:
        return v.strip()

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip().lower()
        if v not in ASSIGNMENT_STATUSES:
            msg = f"status must be one of {', '.join(ASSIGNMENT_STATUSES)}"
            raise ValueError(msg)
        return v


class BillFactsFile(BaseModel):
    """Top-level envelope of a bill-facts import file."""

    state: str = Field(min_length=2, max_length=2)
    source: str = Field(min_length=1)
    session_year: int | None = None

    committees: list[dict] = Field(default_factory=list)
    cosponsors: list[dict] = Field(default_factory=list)
    votes: list[dict] = Field(default_factory=list)
    committee_assignments: list[dict] = Field(default_factory=list)

    @field_validator("state")
    @classmethod
    def upper_state(cls, v: str) -> str:
        return v.upper()
