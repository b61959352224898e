from __future__ import annotations

import re
from typing import Any

_SECTION_START_RE = re.compile(r"^#*\s*education\b", re.IGNORECASE)
_NEXT_SECTION_RE = re.compile(
    r"^#*\s*(?:(?:work|professional)\s+)?(?:experience|skills|projects|certifications?|summary|objective|awards|interests|languages)\s*:?\s*$",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^[-*•]\s+(.*)")


def extract_education(source: str | list[Any] | None) -> list[str]:
    if not source:
        return []
    if not isinstance(source, str):
        return [str(item) for item in source if item]

    entries: list[str] = []
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
        entries.append(bullet.group(1).strip() if bullet else trimmed)
    return entries
