from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from resume_core.schemas.entities import ExperienceEntry

from .dates import DATE_RANGE_RE, MONTH_PATTERN, recency_sort_key

logger = logging.getLogger(__name__)

_PAREN_RE = re.compile(r"\(([^)]+)\)")
_RANGE_SPLIT_RE = re.compile(r"\s*(?:[-–—]|\bto\b)\s*", re.IGNORECASE)
_AT_RE = re.compile(r"(.+?)\s+at\s+(.+)", re.IGNORECASE)
_TRAILING_SEPARATORS = " ,;|-–—"
_RESPONSIBILITY_BULLET_RE = re.compile(r"^\s*[-*•]\s*")
_SECTION_START_RE = re.compile(r"^#*\s*(?:(?:work|professional)\s+)?experience\s*:?\s*$", re.IGNORECASE)
_SECTION_END_RE = re.compile(
    r"^#*\s*(?:education|skills|projects|certifications?|summary|objective|awards|interests|languages)\b",
    re.IGNORECASE,
)
_BULLET_LINE_RE = re.compile(r"^\s*[-*•]\s+(.*)")
_MONTH_RANGE_RE = re.compile(rf"\b{MONTH_PATTERN}\s+\d{{4}}\s*[-–—]", re.IGNORECASE)
_YEAR_RANGE_RE = re.compile(r"\b\d{4}\s*(?:[-–—]|\bto\b)\s*(?:present|current|\d{4})\b", re.IGNORECASE)


def _split_range(value: str) -> tuple[str, str]:
    parts = _RANGE_SPLIT_RE.split(value.strip(), maxsplit=1)
    start = parts[0].strip() if parts else ""
    end = parts[1].strip() if len(parts) > 1 else ""
    return start, end


def parse_experience_line(text: str) -> ExperienceEntry:
    """Parse ``Title at Company (Start - End)`` and its pipe separated variant."""
    text = (text or "").strip()
    start_date = end_date = ""

    paren = _PAREN_RE.search(text)
    if paren and re.search(r"\d{4}", paren.group(1)):
        ranged = DATE_RANGE_RE.search(paren.group(1))
        if ranged:
            start_date, end_date = ranged.group(1).strip(), ranged.group(2).strip()
        else:
            start_date, end_date = _split_range(paren.group(1))
        text = (text[: paren.start()] + text[paren.end():]).strip()
    else:
        trailing = DATE_RANGE_RE.search(text)
        if trailing:
            start_date, end_date = trailing.group(1).strip(), trailing.group(2).strip()
            text = (text[: trailing.start()] + text[trailing.end():]).strip()
    text = text.strip(_TRAILING_SEPARATORS)

    if "|" in text:
        segments = [segment.strip() for segment in text.split("|") if segment.strip()]
        title = segments[0] if segments else ""
        company = segments[1] if len(segments) > 1 else ""
        return ExperienceEntry(company=company, title=title, start_date=start_date, end_date=end_date)

    at_match = _AT_RE.match(text)
    if at_match:
        return ExperienceEntry(
            company=at_match.group(2).strip(_TRAILING_SEPARATORS),
            title=at_match.group(1).strip(),
            start_date=start_date,
            end_date=end_date,
        )
    return ExperienceEntry(title=text, start_date=start_date, end_date=end_date)


def _normalize_responsibilities(responsibilities: Any) -> list[str]:
    if not isinstance(responsibilities, (list, tuple)):
        return []
    cleaned: list[str] = []
    for line in responsibilities:
        if not isinstance(line, str):
            continue
        value = re.sub(r"\s+", " ", _RESPONSIBILITY_BULLET_RE.sub("", line)).strip()
        if value:
            cleaned.append(value)
    return cleaned


def flatten_roles(records: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Expand ``{"company": ..., "roles": [...]}`` records into one record per role."""
    flattened: list[dict[str, Any]] = []
    for record in records:
        roles = record.get("roles") if isinstance(record, dict) else None
        if isinstance(roles, list) and roles:
            base = {key: value for key, value in record.items() if key != "roles"}
            for role in roles:
                if not isinstance(role, dict):
                    continue
                merged = {**base, **role}
                merged["company"] = role.get("company") or base.get("company") or ""
                merged["responsibilities"] = role.get("responsibilities") or base.get("responsibilities") or []
                flattened.append(merged)
        else:
            flattened.append(record)
    return flattened


def _entry_from_record(record: Any) -> ExperienceEntry | None:
    if isinstance(record, ExperienceEntry):
        return record
    if isinstance(record, str):
        return parse_experience_line(record)
    if not isinstance(record, dict):
        return None
    title = str(record.get("title") or "")
    company = str(record.get("company") or "")
    base = parse_experience_line(" at ".join(part for part in (title, company) if part))
    return ExperienceEntry(
        company=company or base.company,
        title=title or base.title,
        start_date=str(record.get("startDate") or record.get("start_date") or base.start_date),
        end_date=str(record.get("endDate") or record.get("end_date") or base.end_date),
        responsibilities=_normalize_responsibilities(record.get("responsibilities")),
    )


def _looks_like_new_job(text: str) -> bool:
    return bool(
        re.search(r"\bat\b", text, re.IGNORECASE)
        or _MONTH_RANGE_RE.search(text)
        or _YEAR_RANGE_RE.search(text)
        or "|" in text
    )


def _extract_from_text(source: str) -> list[ExperienceEntry]:
    entries: list[ExperienceEntry] = []
    current: ExperienceEntry | None = None
    in_section = False

    def push_current() -> None:
        nonlocal current
        if current is None:
            return
        current.responsibilities = _normalize_responsibilities(current.responsibilities)
        entries.append(current)
        current = None

    for line in source.splitlines():
        trimmed = line.strip()
        if _SECTION_START_RE.match(trimmed):
            in_section = True
            continue
        if not in_section:
            continue
        if _SECTION_END_RE.match(trimmed):
            break
        if not trimmed:
            continue

        bullet = _BULLET_LINE_RE.match(line)
        candidate = bullet.group(1).strip() if bullet else (trimmed if not line[:1].isspace() else None)
        if candidate is not None and _looks_like_new_job(candidate):
            entry = parse_experience_line(candidate)
            if entry.company or entry.start_date or entry.end_date:
                push_current()
                current = entry
                continue

        if current is None:
            continue
        if bullet:
            current.responsibilities.append(bullet.group(1).strip())
        elif re.match(r"^\s{2,}\S", line):
            current.responsibilities.append(trimmed)

    push_current()
    return entries


def extract_experience(source: str | list[Any] | None) -> list[ExperienceEntry]:
    """Extract experience entries from raw resume text or from a list of records."""
    if not source:
        return []
    if isinstance(source, str):
        return _extract_from_text(source)

    records = flatten_roles(item for item in source if item)
    entries: list[ExperienceEntry] = []
    for record in records:
        entry = _entry_from_record(record)
        if entry is None:
            continue
        if entry.company or entry.start_date or entry.end_date:
            entries.append(entry)
    return entries


def sort_by_recency(entries: list[ExperienceEntry]) -> list[ExperienceEntry]:
    return sorted(entries, key=lambda entry: recency_sort_key(entry.end_date or entry.start_date))
