"""Congressional members source (ProPublica Congress API shape).

Members are fetched per chamber for a single Congress. Senators carry no
class in the payload, so it is derived from ``next_election``.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any

import httpx
from loguru import logger

from legislature_api.lib.sources.base import BaseSource, RepresentativeRecord, SourceError
from legislature_api.lib.sources.normalize import (
    first_non_empty,
    parse_district_number,
    seat_class_for_election,
)

DEFAULT_BASE_URL = "https://api.propublica.org/congress/v1"

# Current congress session (2025-2027)
_DEFAULT_CONGRESS = 119

_CHAMBERS = ("house", "senate")


class CongressMembersSource(BaseSource):
    """Fetches current members of the U.S. House and Senate.

    Args:
        api_key: API key sent in the ``X-API-Key`` header.
        congress: Congress number (default: 119 for 2025-2027).
        base_url: API root, overridable for testing.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        congress: int = _DEFAULT_CONGRESS,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        self._congress = congress
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"X-API-Key": api_key},
            timeout=timeout,
        )

    @property
    def source_name(self) -> str:
        return "congress_members"

    async def fetch_members(self, chamber: str) -> list[RepresentativeRecord]:
        """Fetch all in-office members of one chamber.

        Args:
            chamber: ``house`` or ``senate``.
        """
        if chamber not in _CHAMBERS:
            msg = f"Unsupported chamber for congressional members: {chamber}"
            raise SourceError(self.source_name, msg)

        path = f"/{self._congress}/{chamber}/members.json"
        data = await self._request(path)
        members = self._extract_members(data)

        records: list[RepresentativeRecord] = []
        for member in members:
            if not member.get("in_office", True):
                continue
            record = self._map_member(member, chamber)
            if record is not None:
                records.append(record)

        logger.info("Fetched {} {} members for congress {}", len(records), chamber, self._congress)
        return records

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _extract_members(self, data: Any) -> list[dict[str, Any]]:
        """Pull the member list out of either response shape.

        The API nests members under ``results[0].members``; some mirrors
        return ``results`` as the flat member list.
        """
        if not isinstance(data, dict):
            raise SourceError(self.source_name, "Expected a JSON object")
        if str(data.get("status", "OK")).upper() == "ERROR":
            errors = data.get("errors") or []
            detail = "; ".join(str(e.get("error", e)) if isinstance(e, dict) else str(e) for e in errors)
            raise SourceError(self.source_name, f"API returned an error: {detail or 'unknown'}")

        results = data.get("results") or []
        if not isinstance(results, list):
            raise SourceError(self.source_name, "Expected 'results' to be a list")
        if results and isinstance(results[0], dict) and "members" in results[0]:
            members = results[0].get("members") or []
        else:
            members = results
        return [m for m in members if isinstance(m, dict)]

    async def _request(self, path: str) -> Any:
        """Make an authenticated GET request."""
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Congress members API error: {} {} for {}",
                exc.response.status_code,
                exc.response.reason_phrase,
                path,
            )
            raise SourceError(
                self.source_name,
                f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Congress members request failed: {}", exc)
            raise SourceError(
                self.source_name,
                f"Request failed: {exc}",
            ) from exc
        except json.JSONDecodeError as exc:
            logger.error("Congress members API returned non-JSON response for {}", path)
            raise SourceError(
                self.source_name,
                f"Invalid JSON response for {path}",
            ) from exc

    def _map_member(self, member: dict[str, Any], chamber: str) -> RepresentativeRecord | None:
        """Map one member entry.

        Returns None and logs a warning if the member is missing an id,
        a state, or a name.
        """
        bioguide_id = str(member.get("id") or "").strip()
        state = str(member.get("state") or "").strip().upper()
        first_name = first_non_empty(member.get("first_name"))
        last_name = first_non_empty(member.get("last_name"))
        if not bioguide_id or len(state) != 2 or not last_name:
            logger.warning(
                "Skipping congressional member with missing id={!r}, state={!r} or name={!r}",
                member.get("id"),
                member.get("state"),
                member.get("last_name"),
            )
            return None

        district_number: int | None = None
        seat_class: int | None = None
        if chamber == "house":
            district_number = parse_district_number(member.get("district"))
            if member.get("at_large"):
                district_number = 0
        else:
            seat_class = seat_class_for_election(member.get("next_election"))

        return RepresentativeRecord(
            source_name=self.source_name,
            bioguide_id=bioguide_id,
            first_name=first_name,
            last_name=last_name,
            representative_type=chamber,
            state=state,
            party=member.get("party") or None,
            phone=member.get("phone") or None,
            website=member.get("url") or None,
            office=member.get("office") or None,
            twitter_handle=member.get("twitter_account") or None,
            district_number=district_number,
            seat_class=seat_class,
            term_end=self._parse_term_end(member.get("next_election")),
            in_office=bool(member.get("in_office", True)),
            raw_data=member,
        )

    @staticmethod
    def _parse_term_end(next_election: Any) -> date | None:
        """Terms end on January 3rd following the next election."""
        if not next_election:
            return None
        try:
            return date(int(next_election) + 1, 1, 3)
        except (ValueError, TypeError):
            logger.warning("Malformed next_election in member data: {!r}", next_election)
            return None
