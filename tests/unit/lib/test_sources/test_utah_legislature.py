"""Unit tests for the Utah Legislature source."""

from datetime import date

import httpx
import pytest

from legislature_api.lib.sources.base import SourceError
from legislature_api.lib.sources.utah_legislature import UtahLegislatureSource

_BASE = "https://glen.le.utah.gov"
_TOKEN = "test-token"

# ---------------------------------------------------------------------------
# Sample API responses
# ---------------------------------------------------------------------------

_LEGISLATORS = [
    {
        "id": "123",
        "firstName": "Jane",
        "lastName": "Doe",
        "chamber": "H",
        "district": 14,
        "party": "R",
        "email": "jdoe@le.utah.gov",
        "phone": "801-555-0100",
        "website": "https://house.utah.gov/jdoe",
        "imageUrl": "https://le.utah.gov/images/jdoe.jpg",
    },
    {
        "id": "456",
        "firstName": "John",
        "lastName": "Roe",
        "chamber": "S",
        "district": "7",
        "party": "D",
    },
]

_BILL_LIST = [
    {
        "id": "HB0001",
        "shortTitle": "Budget",
        "longTitle": "Public Education Base Budget Amendments",
        "status": "Governor Signed",
        "sponsor": "123",
        "sessionId": "2026GS",
    },
    {
        "id": "SJR0003",
        "shortTitle": "Resolution",
        "longTitle": "",
        "status": "Senate Comm - Favorable Recommendation",
        "sponsor": "",
        "sessionId": "2026GS",
    },
]

_BILL_DETAIL = {
    "id": "HB0001",
    "shortTitle": "Budget",
    "longTitle": "Public Education Base Budget Amendments",
    "status": "House/ passed 3rd reading",
    "sponsor": "123",
    "description": "This bill supplements or reduces appropriations.",
    "lastAction": "House/ passed 3rd reading",
    "lastActionDate": "2026-02-03T15:04:05Z",
    "billFileURL": "https://le.utah.gov/~2026/bills/static/HB0001.html",
    "fiscalNoteURL": "https://le.utah.gov/~2026/bills/fiscal/HB0001.pdf",
}


@pytest.fixture
async def source():  # type: ignore[no-untyped-def]
    src = UtahLegislatureSource(token=_TOKEN)
    yield src
    await src.close()


class TestUtahSourceProperties:
    def test_source_name(self) -> None:
        assert UtahLegislatureSource(token=_TOKEN).source_name == "utah_legislature"

    def test_state(self) -> None:
        assert UtahLegislatureSource(token=_TOKEN).state == "UT"

    def test_current_session_is_general_session(self) -> None:
        session = UtahLegislatureSource(token=_TOKEN).current_session()
        assert session.endswith("GS")
        assert session[:4] == str(date.today().year)


class TestFetchLegislators:
    async def test_maps_chamber_codes_and_contact_fields(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=f"{_BASE}/legislators/{_TOKEN}", json=_LEGISLATORS)

        records = await source.fetch_legislators()

        assert len(records) == 2
        house, senate = records
        assert house.source_record_id == "123"
        assert house.chamber == "house"
        assert house.district_number == 14
        assert house.state == "UT"
        assert house.phone == "801-555-0100"
        assert house.image_url == "https://le.utah.gov/images/jdoe.jpg"
        assert senate.chamber == "senate"
        assert senate.district_number == 7
        assert senate.email is None

    async def test_accepts_wrapped_list(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=f"{_BASE}/legislators/{_TOKEN}", json={"legislators": _LEGISLATORS[:1]})

        records = await source.fetch_legislators()

        assert [r.source_record_id for r in records] == ["123"]

    async def test_drops_entries_with_empty_key_parts(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        payload = [
            {"id": "1", "firstName": "A", "lastName": "B", "chamber": "H", "district": None},
            {"id": "2", "firstName": "C", "lastName": "D", "chamber": "X", "district": 3},
            {"id": "", "firstName": "E", "lastName": "F", "chamber": "S", "district": 3},
            {"id": "4", "firstName": "G", "lastName": "H", "chamber": "S", "district": 3},
        ]
        httpx_mock.add_response(url=f"{_BASE}/legislators/{_TOKEN}", json=payload)

        records = await source.fetch_legislators()

        assert [r.source_record_id for r in records] == ["4"]
        for record in records:
            assert record.state
            assert record.chamber in ("house", "senate")
            assert record.district_number is not None

    async def test_http_error_raises_source_error(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=f"{_BASE}/legislators/{_TOKEN}", status_code=503)

        with pytest.raises(SourceError) as exc_info:
            await source.fetch_legislators()

        assert exc_info.value.status_code == 503
        assert exc_info.value.source_name == "utah_legislature"

    async def test_non_json_raises_source_error(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=f"{_BASE}/legislators/{_TOKEN}", text="<html>maintenance</html>")

        with pytest.raises(SourceError, match="Invalid JSON"):
            await source.fetch_legislators()

    async def test_wrong_shape_raises_source_error(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=f"{_BASE}/legislators/{_TOKEN}", json={"legislators": "nope"})

        with pytest.raises(SourceError, match="Expected a list"):
            await source.fetch_legislators()

    async def test_network_error_does_not_leak_token(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        with pytest.raises(SourceError) as exc_info:
            await source.fetch_legislators()

        assert _TOKEN not in str(exc_info.value)
        assert "***" in str(exc_info.value)


class TestFetchBills:
    async def test_maps_bill_list(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=f"{_BASE}/bills/2026GS/billlist/{_TOKEN}", json=_BILL_LIST)

        records = await source.fetch_bills("2026GS")

        assert len(records) == 2
        hb1, sjr3 = records
        assert hb1.bill_number == "HB0001"
        assert hb1.bill_type == "HB"
        assert hb1.session_year == 2026
        assert hb1.title == "Public Education Base Budget Amendments"
        assert hb1.status == "signed"
        assert hb1.sponsor_source_id == "123"
        assert sjr3.bill_type == "SJR"
        assert sjr3.title == "Resolution"
        assert sjr3.status == "passed_committee"
        assert sjr3.sponsor_source_id is None

    async def test_invalid_session_raises_value_error(self, source) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(ValueError, match="four-digit year"):
            await source.fetch_bills("GS")

    async def test_fetch_bill_detail(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=f"{_BASE}/bills/2026GS/HB0001/{_TOKEN}", json=_BILL_DETAIL)

        record = await source.fetch_bill("2026GS", "HB0001")

        assert record.description == "This bill supplements or reduces appropriations."
        assert record.last_action_date == date(2026, 2, 3)
        assert record.full_text_url == "https://le.utah.gov/~2026/bills/static/HB0001.html"
        assert record.fiscal_note_url == "https://le.utah.gov/~2026/bills/fiscal/HB0001.pdf"
        assert record.status == "passed"

    async def test_fetch_bill_detail_without_status_leaves_status_unset(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(
            url=f"{_BASE}/bills/2026GS/HB0001/{_TOKEN}", json={"id": "HB0001", "description": "Full text"}
        )

        record = await source.fetch_bill("2026GS", "HB0001")

        assert record.description == "Full text"
        assert record.status is None

    async def test_fetch_bill_detail_not_found(self, source, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=f"{_BASE}/bills/2026GS/HB9999/{_TOKEN}", status_code=404)

        with pytest.raises(SourceError) as exc_info:
            await source.fetch_bill("2026GS", "HB9999")

        assert exc_info.value.status_code == 404
