"""Utah State Legislature (glen.le.utah.gov) source for legislators and bills.

The API authenticates with a developer token embedded in the URL path, so
every path logged or placed in an error message is redacted first.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from loguru import logger

from legislature_api.lib.sources.base import BaseSource, BillRecord, LegislatorRecord, SourceError
from legislature_api.lib.sources.normalize import (
    current_session,
    first_non_empty,
    normalize_bill_status,
    normalize_chamber,
    parse_date,
    parse_district_number,
    session_to_year,
    split_bill_id,
)

DEFAULT_BASE_URL = "https://glen.le.utah.gov"

_DEFAULT_TIMEOUT = 15.0

_STATE = "UT"


class UtahLegislatureSource(BaseSource):
    """Fetches Utah legislators and bills from the legislature's public API.

    Args:
        token: Developer token issued by the Utah Legislature.
        base_url: API root, overridable for testing.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL, timeout: float = _DEFAULT_TIMEOUT) -> None:
        self._token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @property
    def source_name(self) -> str:
        return "utah_legislature"

    @property
    def state(self) -> str:
        return _STATE

    def current_session(self) -> str:
        return current_session()

    async def fetch_legislators(self) -> list[LegislatorRecord]:
        """Fetch all current Utah House and Senate members."""
        data = await self._request(f"/legislators/{self._token}")
        items = self._as_list(data, "legislators")

        records: list[LegislatorRecord] = []
        for item in items:
            record = self._map_legislator(item)
            if record is not None:
                records.append(record)

        logger.info("Fetched {} legislators from {} ({} raw)", len(records), self.source_name, len(items))
        return records

    async def fetch_bills(self, session: str) -> list[BillRecord]:
        """Fetch the bill list for ``session`` (e.g. ``2026GS``).

        Raises:
            ValueError: If ``session`` does not begin with a year.
        """
        session_year = session_to_year(session)
        data = await self._request(f"/bills/{session}/billlist/{self._token}")
        items = self._as_list(data, "bills")

        records: list[BillRecord] = []
        for item in items:
            record = self._map_bill(item, session_year)
            if record is not None:
                records.append(record)

        logger.info("Fetched {} bills for session {} ({} raw)", len(records), session, len(items))
        return records

    async def fetch_bill(self, session: str, bill_id: str) -> BillRecord:
        """Fetch the detail view of one bill, which adds description, actions and URLs."""
        session_year = session_to_year(session)
        data = await self._request(f"/bills/{session}/{bill_id}/{self._token}")
        if not isinstance(data, dict):
            raise SourceError(self.source_name, f"Unexpected bill detail payload for {bill_id}")

        record = self._map_bill(data, session_year)
        if record is None:
            raise SourceError(self.source_name, f"Bill detail for {bill_id} is missing its identifier")
        return record

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _redact(self, path: str) -> str:
        if not self._token:
            return path
        return path.replace(self._token, "***")

    def _as_list(self, data: Any, key: str) -> list[dict[str, Any]]:
        """Accept either a bare JSON array or an object wrapping one under ``key``."""
        if isinstance(data, dict):
            data = data.get(key, [])
        if not isinstance(data, list):
            raise SourceError(self.source_name, f"Expected a list of {key}, got {type(data).__name__}")
        return [item for item in data if isinstance(item, dict)]

    async def _request(self, path: str) -> Any:
        """GET ``path`` and decode the JSON body."""
        safe_path = self._redact(path)
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Utah Legislature API error: {} {} for {}",
                exc.response.status_code,
                exc.response.reason_phrase,
                safe_path,
            )
            raise SourceError(
                self.source_name,
                f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Utah Legislature request failed for {}: {}", safe_path, type(exc).__name__)
            raise SourceError(
                self.source_name,
                f"Request failed for {safe_path}: {type(exc).__name__}",
            ) from exc
        except json.JSONDecodeError as exc:
            logger.error("Utah Legislature returned non-JSON response for {}", safe_path)
            raise SourceError(
                self.source_name,
                f"Invalid JSON response for {safe_path}",
            ) from exc

    def _map_legislator(self, item: dict[str, Any]) -> LegislatorRecord | None:
        """Map one legislator entry; returns None and warns when key fields are unusable."""
        source_id = str(item.get("id") or "").strip()
        chamber = normalize_chamber(item.get("chamber"))
        district = parse_district_number(item.get("district"))
        first_name = first_non_empty(item.get("firstName"))
        last_name = first_non_empty(item.get("lastName"))

        if not source_id or chamber not in ("house", "senate") or district is None:
            logger.warning(
                "Skipping Utah legislator with id={!r} chamber={!r} district={!r}",
                item.get("id"),
                item.get("chamber"),
                item.get("district"),
            )
            return None
        if not first_name and not last_name:
            logger.warning("Skipping Utah legislator {} with no name", source_id)
            return None

        return LegislatorRecord(
            source_name=self.source_name,
            source_record_id=source_id,
            state=_STATE,
            chamber=chamber,
            district_number=district,
            first_name=first_name,
            last_name=last_name,
            party=item.get("party") or None,
            email=item.get("email") or None,
            phone=item.get("phone") or None,
            website=item.get("website") or None,
            image_url=item.get("imageUrl") or None,
            raw_data=item,
        )

    def _map_bill(self, item: dict[str, Any], session_year: int) -> BillRecord | None:
        """Map a bill list or detail entry; returns None and warns without an identifier."""
        bill_id = str(item.get("id") or "").strip().upper()
        if not bill_id:
            logger.warning("Skipping Utah bill with no id: {!r}", item.get("shortTitle"))
            return None

        bill_type, _ = split_bill_id(bill_id)
        raw_status = item.get("status")

        return BillRecord(
            source_name=self.source_name,
            source_record_id=bill_id,
            state=_STATE,
            bill_number=bill_id,
            bill_type=bill_type,
            session_year=session_year,
            title=first_non_empty(item.get("longTitle"), item.get("shortTitle")),
            status=normalize_bill_status(raw_status) if first_non_empty(raw_status) else None,
            sponsor_source_id=str(item["sponsor"]).strip() if item.get("sponsor") else None,
            description=item.get("description") or None,
            full_text_url=item.get("billFileURL") or None,
            last_action=item.get("lastAction") or None,
            last_action_date=parse_date(item.get("lastActionDate")),
            fiscal_note_url=item.get("fiscalNoteURL") or None,
            effective_date=parse_date(item.get("effectiveDate")),
            raw_data=item,
        )
