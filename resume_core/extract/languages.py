from __future__ import annotations

import re
from typing import Any

from resume_core.schemas.entities import LanguageEntry

_SECTION_START_RE = re.compile(r"^#*\s*languages?\b", re.IGNORECASE)
_NEXT_SECTION_RE = re.compile(
    r"^#*\s*(?:(?:work|professional)\s+)?(?:experience|education|skills|projects|certifications?|summary|objective|awards|interests)\s*:?\s*$",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^[-*•]\s+(.*)")
_PAREN_RE = re.compile(r"^(.*?)\s*\((.*?)\)$")
_LEVEL_SPLIT_RE = re.compile(r"[-–:|]")


def parse_language_line(text: str) -> LanguageEntry:
    """Parse ``English (Native)``, ``French - B2`` or ``German: basic``."""
    text = (text or "").strip()
    paren = _PAREN_RE.match(text)
    if paren:
        return LanguageEntry(language=paren.group(1).strip(), proficiency=paren.group(2).strip())
    language, *levels = _LEVEL_SPLIT_RE.split(text)
    return LanguageEntry(language=language.strip(), proficiency="-".join(levels).strip())


def _entry_from_record(record: Any) -> LanguageEntry:
    if isinstance(record, LanguageEntry):
        return record
    if isinstance(record, dict):
        language = str(record.get("language") or record.get("name") or "").strip()
        proficiency = str(record.get("proficiency") or record.get("level") or "").strip()
        return LanguageEntry(language=language, proficiency=proficiency)
    return parse_language_line(str(record or ""))


def extract_languages(source: str | list[Any] | None) -> list[LanguageEntry]:
    if not source:
        return []
    if not isinstance(source, str):
        entries = (_entry_from_record(item) for item in source if item)
        return [entry for entry in entries if entry.language]

    entries: list[LanguageEntry] = []
    in_section = False
    for line in source.splitlines():
        trimmed = line.strip()
        if not in_section:
            if _SECTION_START_RE.match(trimmed):
                in_section = True
            continue
        if not trimmed or _NEXT_SECTION_RE.match(trimmed):
            in_section = False
            continue
        bullet = _BULLET_RE.match(trimmed)
        entry = parse_language_line(bullet.group(1) if bullet else trimmed)
        if entry.language:
            entries.append(entry)
    return entries
