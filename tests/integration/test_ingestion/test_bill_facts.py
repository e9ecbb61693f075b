"""Integration tests for importing committees, cosponsors, votes and referrals."""

from datetime import date

import pytest
from pydantic import ValidationError
from sqlalchemy import select

from legislature_api.models.bill import Bill, BillCommitteeAssignment, BillCosponsor, BillVote, Committee
from legislature_api.models.legislator import Legislator
from legislature_api.services.ingestion_service import IngestionError, import_bill_facts


@pytest.fixture
async def synced(database, seeded_states):  # type: ignore[no-untyped-def]
    """One Utah legislator (source id 123) and one 2026 bill."""
    async with database.session() as session:
        legislator = Legislator(
            state="UT",
            chamber="house",
            district_number=14,
            first_name="Jane",
            last_name="Doe",
            external_ids={"utah_legislature": "123"},
        )
        session.add(legislator)
        await session.flush()
        bill = Bill(
            state="UT",
            bill_number="HB0001",
            bill_type="HB",
            session_year=2026,
            title="Budget Amendments",
            status="introduced",
            sponsor_id=legislator.id,
        )
        session.add(bill)
        await session.commit()
        return {"legislator_id": legislator.id, "bill_id": bill.id}


def _payload(**sections: list) -> dict:
    return {"state": "ut", "source": "utah_legislature", "session_year": 2026, **sections}


async def _all(database, model) -> list:  # type: ignore[no-untyped-def]
    async with database.session() as session:
        return list((await session.execute(select(model))).scalars().all())


class TestImportBillFacts:
    async def test_imports_every_section(self, database, synced) -> None:  # type: ignore[no-untyped-def]
        payload = _payload(
            committees=[{"name": "House Judiciary"}],
            cosponsors=[{"bill_number": "hb0001", "legislator": "123"}],
            votes=[{"bill_number": "HB0001", "legislator": "123", "vote": "Aye", "vote_date": "2026-02-01", "reading_number": 3}],
            committee_assignments=[
                {"bill_number": "HB0001", "committee": "House Judiciary", "assignment_date": "2026-01-20", "status": "Passed"}
            ],
        )

        result = await import_bill_facts(database, payload)

        assert result.fetched == 4
        assert result.created == 4
        assert result.succeeded
        (committee,) = await _all(database, Committee)
        (cosponsor,) = await _all(database, BillCosponsor)
        (vote,) = await _all(database, BillVote)
        (assignment,) = await _all(database, BillCommitteeAssignment)
        assert cosponsor.bill_id == synced["bill_id"]
        assert cosponsor.legislator_id == synced["legislator_id"]
        assert (vote.vote, vote.vote_date, vote.reading_number) == ("yea", date(2026, 2, 1), 3)
        assert assignment.committee_id == committee.id
        assert assignment.status == "passed"

    async def test_reimport_updates_in_place(self, database, synced) -> None:  # type: ignore[no-untyped-def]
        vote = {"bill_number": "HB0001", "legislator": "123", "vote": "yea", "vote_date": "2026-02-01"}
        await import_bill_facts(database, _payload(votes=[vote]))

        result = await import_bill_facts(database, _payload(votes=[{**vote, "vote": "nay"}]))

        assert result.updated == 1
        (row,) = await _all(database, BillVote)
        assert row.vote == "nay"

    async def test_bad_entries_fail_individually(self, database, synced) -> None:  # type: ignore[no-untyped-def]
        payload = _payload(
            cosponsors=[
                {"bill_number": "HB9999", "legislator": "123"},
                {"bill_number": "HB0001", "legislator": "999"},
                {"bill_number": "HB0001", "legislator": "123"},
            ],
            votes=[{"bill_number": "HB0001", "legislator": "123", "vote": "maybe", "vote_date": "2026-02-01"}],
            committee_assignments=[{"bill_number": "HB0001", "committee": "Nonexistent", "assignment_date": "2026-01-20"}],
        )

        result = await import_bill_facts(database, payload)

        assert result.created == 1
        assert result.failed == 4
        assert any("Unknown bill UT/HB9999/2026" in e for e in result.errors)
        assert any("Unknown utah_legislature legislator '999'" in e for e in result.errors)
        assert any("Unknown committee 'Nonexistent'" in e for e in result.errors)

    async def test_unseeded_state_raises(self, database, synced) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(IngestionError, match="not seeded"):
            await import_bill_facts(database, {"state": "TX", "source": "utah_legislature"})

    async def test_malformed_envelope_raises(self, database) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(ValidationError):
            await import_bill_facts(database, {"state": "Utah", "source": "utah_legislature"})
