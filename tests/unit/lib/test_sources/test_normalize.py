"""Unit tests for source value normalization."""

from datetime import date

import pytest

from legislature_api.lib.sources.normalize import (
    current_session,
    first_non_empty,
    normalize_bill_status,
    normalize_chamber,
    normalize_vote,
    parse_date,
    parse_district_number,
    seat_class_for_election,
    session_to_year,
    split_bill_id,
)


class TestNormalizeChamber:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [("H", "house"), ("S", "senate"), ("h", "house"), ("upper", "senate"), ("lower", "house"), ("House", "house")],
    )
    def test_known_codes(self, code: str, expected: str) -> None:
        assert normalize_chamber(code) == expected

    def test_unknown_code_lowercased(self) -> None:
        assert normalize_chamber("Joint") == "joint"

    def test_empty(self) -> None:
        assert normalize_chamber(None) == ""


class TestBillIdentifiers:
    def test_split_bill_id(self) -> None:
        assert split_bill_id("HB0001") == ("HB", "0001")
        assert split_bill_id("sjr12") == ("SJR", "12")

    def test_split_without_digits(self) -> None:
        assert split_bill_id("HCR") == ("HCR", "")

    def test_session_to_year(self) -> None:
        assert session_to_year("2026GS") == 2026
        assert session_to_year("2025S1") == 2025

    def test_session_to_year_invalid(self) -> None:
        with pytest.raises(ValueError, match="four-digit year"):
            session_to_year("GS2026")

    def test_current_session(self) -> None:
        assert current_session(date(2026, 3, 1)) == "2026GS"
        assert current_session(date(2026, 3, 1), suffix="S1") == "2026S1"


class TestParsing:
    def test_parse_date_iso(self) -> None:
        assert parse_date("2026-01-20") == date(2026, 1, 20)

    def test_parse_date_timestamp(self) -> None:
        assert parse_date("2026-02-03T15:04:05Z") == date(2026, 2, 3)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", "02/03/2026"])
    def test_parse_date_unparseable(self, value: str | None) -> None:
        assert parse_date(value) is None

    def test_first_non_empty(self) -> None:
        assert first_non_empty(None, "  ", " Title ") == "Title"
        assert first_non_empty(None, "") == ""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3, 3), ("12", 12), (" 7 ", 7), ("At-Large", 0), ("AL", 0), ("", None), (None, None), ("x", None)],
    )
    def test_parse_district_number(self, value: object, expected: int | None) -> None:
        assert parse_district_number(value) == expected

    @pytest.mark.parametrize(
        ("year", "expected"),
        [("2030", 1), (2026, 2), ("2028", 3), ("2024", 1), ("2027", None), ("", None), (None, None)],
    )
    def test_seat_class_for_election(self, year: object, expected: int | None) -> None:
        assert seat_class_for_election(year) == expected


class TestNormalizeBillStatus:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Governor Signed", "signed"),
            ("Governor Vetoed", "vetoed"),
            ("Became Law", "law"),
            ("Senate Comm - Favorable Recommendation", "passed_committee"),
            ("House Comm - Held", "failed_committee"),
            ("House Rules Committee", "in_committee"),
            ("House/ passed 3rd reading", "passed"),
            ("Senate/ failed 3rd reading", "failed"),
            ("Senate/ 3rd reading calendar", "third_reading"),
            ("House/ 2nd reading", "second_reading"),
            ("Senate/ received bill from House / 1st reading", "first_reading"),
            ("Senate/ passed", "passed"),
            ("Passed committee", "passed_committee"),
            ("second reading", "second_reading"),
            ("", "introduced"),
            (None, "introduced"),
            ("Numbered but not distributed", "introduced"),
        ],
    )
    def test_mapping(self, raw: str | None, expected: str) -> None:
        assert normalize_bill_status(raw) == expected

    def test_unfavorable_is_not_favorable(self) -> None:
        assert normalize_bill_status("Senate Comm - Not Considered, Unfavorable") == "failed_committee"


class TestNormalizeVote:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("Yea", "yea"), ("aye", "yea"), ("NO", "nay"), ("excused", "absent"), ("Not  Voting", "absent"), ("present", "present")],
    )
    def test_aliases(self, raw: str, expected: str) -> None:
        assert normalize_vote(raw) == expected

    @pytest.mark.parametrize("raw", ["", None, "maybe"])
    def test_invalid(self, raw: str | None) -> None:
        with pytest.raises(ValueError, match="Unrecognised vote"):
            normalize_vote(raw)
