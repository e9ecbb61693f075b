"""Unit tests for the bill-facts import schemas and pagination metadata."""

from datetime import date

import pytest
from pydantic import ValidationError

from legislature_api.schemas.bill_facts import BillFactsFile, CommitteeAssignmentFact, CommitteeFact, VoteFact
from legislature_api.schemas.common import PaginationMeta


class TestVoteFact:
    def test_normalizes_vote_and_bill_number(self) -> None:
        fact = VoteFact.model_validate(
            {"bill_number": " hb0001 ", "legislator": "123", "vote": "Aye", "vote_date": "2026-02-01"}
        )
        assert fact.bill_number == "HB0001"
        assert fact.vote == "yea"
        assert fact.vote_date == date(2026, 2, 1)
        assert fact.session_year is None

    def test_rejects_unknown_vote(self) -> None:
        with pytest.raises(ValidationError, match="Unrecognised vote"):
            VoteFact.model_validate({"bill_number": "HB1", "legislator": "1", "vote": "abstain", "vote_date": "2026-02-01"})

    @pytest.mark.parametrize("reading", [0, 4])
    def test_reading_number_bounds(self, reading: int) -> None:
        with pytest.raises(ValidationError):
            VoteFact.model_validate(
                {"bill_number": "HB1", "legislator": "1", "vote": "yea", "vote_date": "2026-02-01", "reading_number": reading}
            )


class TestCommitteeFacts:
    def test_blank_committee_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CommitteeFact.model_validate({"name": "   "})

    def test_assignment_status(self) -> None:
        base = {"bill_number": "HB1", "committee": " House Rules ", "assignment_date": "2026-01-20"}
        assert CommitteeAssignmentFact.model_validate({**base, "status": "Substituted"}).status == "substituted"
        assert CommitteeAssignmentFact.model_validate({**base, "status": ""}).status is None
        assert CommitteeAssignmentFact.model_validate(base).committee == "House Rules"
        with pytest.raises(ValidationError, match="status must be one of"):
            CommitteeAssignmentFact.model_validate({**base, "status": "tabled"})


class TestBillFactsFile:
    def test_envelope_defaults(self) -> None:
        facts = BillFactsFile.model_validate({"state": "ut", "source": "utah_legislature"})
        assert facts.state == "UT"
        assert facts.committees == facts.votes == []

    def test_envelope_requires_two_letter_state(self) -> None:
        with pytest.raises(ValidationError):
            BillFactsFile.model_validate({"state": "Utah", "source": "utah_legislature"})


class TestPaginationMeta:
    @pytest.mark.parametrize(("total", "page_size", "pages"), [(0, 50, 0), (1, 50, 1), (100, 50, 2), (101, 50, 3)])
    def test_total_pages(self, total: int, page_size: int, pages: int) -> None:
        assert PaginationMeta.build(total, 1, page_size).total_pages == pages
