from __future__ import annotations

import re
from typing import Iterable

from resume_core.parsing.urls import normalize_url
from resume_core.schemas.entities import ContactDetails

_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
_PHONE_RE = re.compile(r"\+?\d[\d\s().-]{7,}\d")
_YEAR_RANGE_RE = re.compile(r"^\d{4}\s*[-–]\s*\d{4}$")
_LINKEDIN_RE = re.compile(
    r"((?:https?://|www\.)?(?:[a-z0-9.-]*\.)?linkedin\.com/[\w\-/%?#=&.+]+)",
    re.IGNORECASE,
)
_LABELLED_LINE_RE = re.compile(r"^(?:email|e-mail|phone|mobile|tel|linkedin|github|portfolio|website)\b", re.IGNORECASE)
_LEADING_MARKER_RE = re.compile(r"^[•*-]+\s*")
_CITY_STATE_RE = re.compile(
    r"\b([A-Z][A-Za-z.'-]+(?:\s+[A-Z][A-Za-z.'-]+)*)\s*,\s*"
    r"([A-Z]{2}(?:\s+\d{5}(?:-\d{4})?)?|[A-Z][A-Za-z.'-]+(?:\s+[A-Z][A-Za-z.'-]+)*)\b"
)
_CONTACT_LINE_RE = re.compile(r"^([^:]+):\s*(.+)$")
_SENSITIVE_PATTERNS = (re.compile(r"linkedin", re.I), re.compile(r"credly", re.I), re.compile(r"\bjd\b", re.I))
_HAS_URL_RE = re.compile(r"(https?://|www\.)", re.IGNORECASE)

_LOCATION_SCAN_LINES = 8
_LINKEDIN_SCAN_LINES = 12
_MAX_LOCATION_CHARS = 60


def _first_phone(text: str) -> str:
    for match in _PHONE_RE.finditer(text):
        candidate = re.sub(r"\s+", " ", match.group(0)).strip()
        digits = sum(char.isdigit() for char in candidate)
        if digits < 9 or digits > 15 or _YEAR_RANGE_RE.match(candidate):
            continue
        return candidate
    return ""


def parse_contact_line(line: str) -> tuple[str, str] | None:
    """Split ``Label: value`` contact lines; unlabelled lines return an empty label."""
    if not line:
        return None
    trimmed = re.sub(r"^[\s•*-]+", "", str(line)).strip()
    if not trimmed:
        return None
    match = _CONTACT_LINE_RE.match(trimmed)
    if match and not match.group(1).strip().lower().startswith(("http", "www")):
        return match.group(1).strip(), match.group(2).strip()
    return "", trimmed


def dedupe_contact_lines(lines: Iterable[str | None]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for line in lines:
        trimmed = str(line or "").strip()
        if not trimmed:
            continue
        key = trimmed.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(trimmed)
    return result


def filter_sensitive_contact_lines(lines: Iterable[str]) -> list[str]:
    kept: list[str] = []
    for line in lines:
        trimmed = line.strip() if isinstance(line, str) else ""
        if not trimmed:
            continue
        lowered = trimmed.lower()
        if not any(pattern.search(lowered) for pattern in _SENSITIVE_PATTERNS):
            kept.append(trimmed)
            continue
        if _HAS_URL_RE.search(trimmed) or "linkedin" in lowered or "credly" in lowered:
            continue
        kept.append(trimmed)
    return kept


def detect_likely_location(text: str) -> str:
    """Guess a ``City, ST`` style location from the first lines of the resume."""
    if not text:
        return ""
    lines = []
    for raw in str(text).splitlines()[:_LOCATION_SCAN_LINES]:
        cleaned = _LEADING_MARKER_RE.sub("", raw, count=1).strip()
        if cleaned:
            lines.append(cleaned)
    for line in lines:
        if _LABELLED_LINE_RE.match(line):
            continue
        match = _CITY_STATE_RE.search(re.sub(r"\s+", " ", line))
        if match:
            value = re.sub(r"\s{2,}", " ", match.group(0)).strip()
            if value and len(value) <= _MAX_LOCATION_CHARS:
                return value
    return ""


def _find_linkedin(text: str) -> str:
    for line in text.splitlines()[:_LINKEDIN_SCAN_LINES]:
        parsed = parse_contact_line(line)
        if parsed is None:
            continue
        label, value = parsed
        if "linkedin" in label.lower():
            normalized = normalize_url(value)
            if normalized:
                return normalized
        raw = _LINKEDIN_RE.search(value)
        if raw:
            normalized = normalize_url(raw.group(1))
            if normalized:
                return normalized

    raw = _LINKEDIN_RE.search(text)
    if raw:
        return normalize_url(raw.group(1))
    return ""


def extract_contact_details(text: str = "", linkedin_profile_url: str = "") -> ContactDetails:
    details = ContactDetails()
    text = str(text or "")

    if text:
        email = _EMAIL_RE.search(text)
        if email:
            details.email = email.group(0)
        details.phone = _first_phone(text)
        details.linkedin = _find_linkedin(text)

    explicit_linkedin = normalize_url(linkedin_profile_url)
    if explicit_linkedin:
        details.linkedin = explicit_linkedin

    details.city_state = detect_likely_location(text)
    details.contact_lines = dedupe_contact_lines(
        f"{label}: {value}"
        for label, value in (
            ("Email", details.email),
            ("Phone", details.phone),
            ("LinkedIn", details.linkedin),
            ("Location", details.city_state),
        )
        if value
    )
    return details
