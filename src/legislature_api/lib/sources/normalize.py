"""Normalization of inconsistent external encodings into internal values.

Sources disagree on how they spell chambers, bill identifiers, sessions,
dates and statuses. Everything here is pure and side-effect free apart from
debug logging.
"""

import re
from datetime import date, datetime

from loguru import logger

from legislature_api.models.bill import BILL_STATUSES

_CHAMBER_CODES = {
    "H": "house",
    "S": "senate",
    "LOWER": "house",
    "UPPER": "senate",
}

_SESSION_RE = re.compile(r"^\s*(\d{4})")

# Senate classes rotate on a six-year cycle: class 1 elected 2018/2024/2030,
# class 2 2020/2026/2032, class 3 2022/2028/2034.
_SEAT_CLASS_BY_CYCLE = {2: 1, 4: 2, 0: 3}


def normalize_chamber(code: str | None) -> str:
    """Map a chamber code to ``house`` / ``senate``.

    ``H``/``S`` and Open States' ``lower``/``upper`` are translated; anything
    else is lowercased and returned unchanged (callers decide validity).
    """
    if not code:
        return ""
    value = code.strip()
    return _CHAMBER_CODES.get(value.upper(), value.lower())


def split_bill_id(bill_id: str) -> tuple[str, str]:
    """Split a compound identifier like ``HB0001`` into (``HB``, ``0001``).

    An identifier with no digits is returned whole as the type with an empty number.
    """
    value = bill_id.strip().upper()
    for i, ch in enumerate(value):
        if ch.isdigit():
            return value[:i].strip(), value[i:]
    return value, ""


def session_to_year(session: str) -> int:
    """Extract the year from a session token (``2026GS`` -> 2026).

    Raises:
        ValueError: If the token does not start with a four-digit year.
    """
    match = _SESSION_RE.match(session or "")
    if match is None:
        msg = f"Session token {session!r} does not start with a four-digit year"
        raise ValueError(msg)
    return int(match.group(1))


def current_session(today: date | None = None, suffix: str = "GS") -> str:
    """Session token for the current calendar year's general session."""
    year = (today or date.today()).year
    return f"{year}{suffix}"


def parse_date(value: str | None) -> date | None:
    """Parse ``YYYY-MM-DD`` or RFC 3339 timestamps; return None when unparseable."""
    if not value or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug("Unrecognised date format: {!r}", value)
        return None


def first_non_empty(*values: str | None) -> str:
    """Return the first truthy, non-blank string, or ``""``."""
    for value in values:
        if value and value.strip():
            return value.strip()
    return ""


def parse_district_number(value: object) -> int | None:
    """Parse a district number; at-large districts become 0.

    Returns None when the value cannot be interpreted.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    if text.replace("-", "").replace(" ", "").lower() in {"atlarge", "al"}:
        return 0
    if text.isdigit():
        return int(text)
    return None


def seat_class_for_election(next_election: object) -> int | None:
    """Derive a Senate seat class from the seat's next election year."""
    try:
        year = int(str(next_election).strip())
    except (TypeError, ValueError):
        return None
    if year % 2:
        return None
    return _SEAT_CLASS_BY_CYCLE.get(year % 6)


def normalize_bill_status(raw: str | None) -> str:
    """Map a free-text source status onto the fixed status enumeration.

    Rules are checked in order; the first match wins. Unrecognised or empty
    statuses fall back to ``introduced``.

    Examples:
        ``"Governor Signed"`` -> ``signed``
        ``"Senate Comm - Favorable Recommendation"`` -> ``passed_committee``
        ``"House/ passed 3rd reading"`` -> ``passed``
    """
    if not raw or not raw.strip():
        return "introduced"
    text = raw.strip().lower()

    as_enum = re.sub(r"[\s\-]+", "_", text)
    if as_enum in BILL_STATUSES:
        return as_enum

    failed = bool(re.search(r"\b(fail(ed|s)?|defeated|lost|unfavorable|held|tabled)\b", text))
    passed = bool(re.search(r"\b(pass(ed|es)?|favorable|approved|adopted)\b", text))

    if "veto" in text:
        return "vetoed"
    if re.search(r"\b(law|chaptered)\b", text):
        return "law"
    if "signed" in text:
        return "signed"
    if re.search(r"\bcomm(ittee|\.)?\b", text):
        if failed:
            return "failed_committee"
        if passed:
            return "passed_committee"
        return "in_committee"
    if re.search(r"\b(3rd|third) reading\b", text):
        if failed:
            return "failed"
        if passed:
            return "passed"
        return "third_reading"
    if re.search(r"\b(2nd|second) reading\b", text):
        return "second_reading"
    if re.search(r"\b(1st|first) reading\b", text):
        return "first_reading"
    if failed:
        return "failed"
    if passed:
        return "passed"
    logger.debug("Unmapped bill status {!r}; using 'introduced'", raw)
    return "introduced"


_VOTE_ALIASES = {
    "yea": "yea",
    "yes": "yea",
    "aye": "yea",
    "y": "yea",
    "nay": "nay",
    "no": "nay",
    "n": "nay",
    "absent": "absent",
    "excused": "absent",
    "not voting": "absent",
    "nv": "absent",
    "present": "present",
}


def normalize_vote(raw: str | None) -> str:
    """Map a recorded vote onto ``yea`` / ``nay`` / ``absent`` / ``present``.

    Raises:
        ValueError: If the vote is empty or unrecognised.
    """
    value = " ".join((raw or "").strip().lower().split())
    vote = _VOTE_ALIASES.get(value)
    if vote is None:
        msg = f"Unrecognised vote value: {raw!r}"
        raise ValueError(msg)
    return vote
