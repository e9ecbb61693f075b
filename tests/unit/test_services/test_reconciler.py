"""Unit tests for the natural-key upsert reconciler."""

import pytest
from sqlalchemy import func, select

from legislature_api.models.bill import Committee
from legislature_api.models.legislator import Legislator
from legislature_api.models.state import State
from legislature_api.services.reconciler import find_by_natural_key, natural_key_of, upsert


def _legislator(**overrides: object) -> dict:
    values = {
        "state": "UT",
        "chamber": "house",
        "district_number": 14,
        "first_name": "Jane",
        "last_name": "Doe",
        "phone": "801-555-0100",
        "external_ids": {"utah_legislature": "123"},
    }
    values.update(overrides)
    return values


async def _count(session, model) -> int:  # type: ignore[no-untyped-def]
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


class TestNaturalKeyOf:
    def test_extracts_declared_columns(self) -> None:
        key = natural_key_of(Legislator, _legislator())
        assert key == {"state": "UT", "chamber": "house", "district_number": 14}

    def test_zero_is_a_valid_component(self) -> None:
        assert natural_key_of(Legislator, _legislator(district_number=0))["district_number"] == 0

    @pytest.mark.parametrize("field", ["state", "chamber", "district_number"])
    def test_missing_component_raises(self, field: str) -> None:
        values = _legislator()
        values[field] = None
        with pytest.raises(ValueError, match=field):
            natural_key_of(Legislator, values)

    def test_blank_string_component_raises(self) -> None:
        with pytest.raises(ValueError, match="empty natural key"):
            natural_key_of(Committee, {"state": "UT", "name": "   "})


class TestUpsert:
    async def test_insert_then_idempotent(self, async_session, seeded_states) -> None:  # type: ignore[no-untyped-def]
        first = await upsert(async_session, Legislator, _legislator())
        await async_session.commit()
        second = await upsert(async_session, Legislator, _legislator())
        await async_session.commit()

        assert first.created is True
        assert second.created is False
        assert first.instance.id == second.instance.id
        assert await _count(async_session, Legislator) == 1

    async def test_update_in_place(self, async_session, seeded_states) -> None:  # type: ignore[no-untyped-def]
        created = await upsert(async_session, Legislator, _legislator())
        await async_session.commit()
        original_id = created.instance.id

        outcome = await upsert(async_session, Legislator, _legislator(phone="801-555-0199", first_name="Janet"))
        await async_session.commit()

        assert outcome.created is False
        row = await find_by_natural_key(
            async_session, Legislator, {"state": "UT", "chamber": "house", "district_number": 14}
        )
        assert row.id == original_id
        assert row.phone == "801-555-0199"
        assert row.first_name == "Janet"
        assert await _count(async_session, Legislator) == 1

    async def test_absent_fields_are_left_alone(self, async_session, seeded_states) -> None:  # type: ignore[no-untyped-def]
        await upsert(async_session, Legislator, _legislator(email="jdoe@le.utah.gov"))
        await async_session.commit()

        values = _legislator()
        values.pop("phone")
        outcome = await upsert(async_session, Legislator, values)

        assert outcome.instance.email == "jdoe@le.utah.gov"
        assert outcome.instance.phone == "801-555-0100"

    async def test_external_ids_are_merged(self, async_session, seeded_states) -> None:  # type: ignore[no-untyped-def]
        await upsert(async_session, Legislator, _legislator())
        await async_session.commit()

        outcome = await upsert(async_session, Legislator, _legislator(external_ids={"openstates": "ocd-person/1"}))
        await async_session.commit()

        assert outcome.instance.external_ids == {"utah_legislature": "123", "openstates": "ocd-person/1"}

    async def test_different_keys_create_distinct_rows(self, async_session, seeded_states) -> None:  # type: ignore[no-untyped-def]
        await upsert(async_session, Legislator, _legislator())
        await upsert(async_session, Legislator, _legislator(chamber="senate"))
        await upsert(async_session, Legislator, _legislator(district_number=15))
        await async_session.commit()

        assert await _count(async_session, Legislator) == 3

    async def test_empty_key_rejected_before_write(self, async_session) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(ValueError, match="abbreviation"):
            await upsert(async_session, State, {"name": "Nowhere", "abbreviation": "", "fips_code": "99"})

        assert await _count(async_session, State) == 0

    async def test_find_by_natural_key_miss(self, async_session, seeded_states) -> None:  # type: ignore[no-untyped-def]
        assert await find_by_natural_key(async_session, State, {"abbreviation": "ZZ"}) is None
