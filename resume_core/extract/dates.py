from __future__ import annotations

import re
from datetime import date

_MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}
_ONGOING = {"present", "current", "now", "today", "ongoing"}

MONTH_PATTERN = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"
DATE_PATTERN = rf"(?:{MONTH_PATTERN}\s+\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}}(?:-\d{{1,2}})?)"
DATE_RANGE_RE = re.compile(
    rf"({DATE_PATTERN})\s*(?:[-–—]|\bto\b)\s*({DATE_PATTERN}|present|current|now)",
    re.IGNORECASE,
)

_MONTH_YEAR_RE = re.compile(r"^([a-z]+)\.?\s+(\d{4})$")
_NUMERIC_MONTH_YEAR_RE = re.compile(r"^(\d{1,2})/(\d{4})$")
_ISO_RE = re.compile(r"^(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?$")


def _month_start(year: int, month: int) -> date | None:
    try:
        return date(year, month, 1)
    except ValueError:
        return None


def parse_resume_date(value: str | None) -> date | None:
    """Best-effort parse of a resume date string; ``None`` when unparsable."""
    text = re.sub(r"\s+", " ", str(value or "")).strip().lower()
    if not text:
        return None
    if text in _ONGOING:
        return date.max

    match = _MONTH_YEAR_RE.match(text)
    if match:
        month = _MONTHS.get(match.group(1)[:3])
        if month is None:
            return None
        return _month_start(int(match.group(2)), month)

    match = _NUMERIC_MONTH_YEAR_RE.match(text)
    if match:
        month = int(match.group(1))
        if not 1 <= month <= 12:
            return None
        return _month_start(int(match.group(2)), month)

    match = _ISO_RE.match(text)
    if match:
        month = int(match.group(2) or 1)
        day = int(match.group(3) or 1)
        try:
            return date(int(match.group(1)), month, day)
        except ValueError:
            return None
    return None


def recency_sort_key(value: str | None) -> tuple[int, int]:
    """Sort key placing the newest dates first and unparsable values last."""
    parsed = parse_resume_date(value)
    if parsed is None:
        return (1, 0)
    return (0, -parsed.toordinal())
