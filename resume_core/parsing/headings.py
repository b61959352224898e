from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

_TRAILING_PUNCTUATION_RE = re.compile(r"[\s\-–—:.;,!?]+$")
_WORD_START_RE = re.compile(r"\b\w")
_SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class HeadingVocabulary:
    """Synonym tables used to fold free-form headings into canonical ones."""

    exact: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({"experience": "Work Experience"})
    )
    contains: tuple[tuple[str, str], ...] = (
        ("training", "Certification"),
        ("certification", "Certification"),
    )
    plain_headings: tuple[str, ...] = (
        r"(?:work|professional)\s*experience",
        "education",
        "skills",
        "projects",
        "certifications?",
        "summary",
        "languages?",
    )

    def plain_heading_pattern(self) -> re.Pattern[str]:
        return re.compile(rf"^(?:{'|'.join(self.plain_headings)})$", re.IGNORECASE)


DEFAULT_HEADING_VOCABULARY = HeadingVocabulary()


def title_case(value: str) -> str:
    return _WORD_START_RE.sub(lambda match: match.group(0).upper(), value.lower())


def normalize_heading(heading: str = "", vocabulary: HeadingVocabulary | None = None) -> str:
    vocab = vocabulary or DEFAULT_HEADING_VOCABULARY
    base = _TRAILING_PUNCTUATION_RE.sub("", str(heading or "").strip()).strip()
    normalized = title_case(_SPACE_RE.sub(" ", base))
    lowered = normalized.lower()
    if lowered in vocab.exact:
        return vocab.exact[lowered]
    for needle, canonical in vocab.contains:
        if needle in lowered:
            return canonical
    return normalized


def heading_key(heading: str, vocabulary: HeadingVocabulary | None = None) -> str:
    return normalize_heading(heading, vocabulary).lower()
