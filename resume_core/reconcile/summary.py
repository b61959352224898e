from __future__ import annotations

import re

from resume_core.parsing.headings import HeadingVocabulary, heading_key, normalize_heading
from resume_core.schemas.document import Section, Token

_EMAIL_RE = re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE)
_PHONE_RE = re.compile(r"\+?\d[\d\-\s().]{7,}\d")
_YEAR_RANGE_RE = re.compile(r"^\(?\d{4}\s*[-–]\s*\d{4}\)?$")
_URL_RE = re.compile(r"\bhttps?://\S+", re.IGNORECASE)
_PROFILE_HOST_RE = re.compile(r"linkedin|github", re.IGNORECASE)
_MONTH_RANGE_RE = re.compile(
    r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+\d{4}.*?(?:present|current|\d{4})",
    re.IGNORECASE,
)
_BARE_YEAR_RANGE_RE = re.compile(r"\b\d{4}\b\s*(?:[-–—]+|\bto\b)\s*(?:present|current|\d{4})", re.IGNORECASE)


def _has_phone(text: str) -> bool:
    for match in _PHONE_RE.finditer(text):
        candidate = match.group(0).strip()
        digits = sum(char.isdigit() for char in candidate)
        if 9 <= digits <= 15 and not _YEAR_RANGE_RE.match(candidate):
            return True
    return False


def contains_contact_info(text: str) -> bool:
    value = str(text or "")
    return bool(
        _EMAIL_RE.search(value)
        or _has_phone(value)
        or _URL_RE.search(value)
        or _PROFILE_HOST_RE.search(value)
    )


def _tokens_text(tokens: list[Token]) -> str:
    return " ".join(f"{token.text or ''} {token.href or ''}" for token in tokens)


def is_job_entry(tokens: list[Token]) -> bool:
    text = _tokens_text(tokens)
    if contains_contact_info(text):
        return False
    if any(token.type == "jobsep" for token in tokens):
        return True
    return bool(_MONTH_RANGE_RE.search(text) or _BARE_YEAR_RANGE_RE.search(text))


def _as_experience_item(tokens: list[Token]) -> list[Token]:
    kept = [token for token in tokens if token.type != "jobsep"]
    while kept and kept[0].type != "bullet" and not (kept[0].text or "").strip():
        kept.pop(0)
    while kept and not (kept[-1].text or "").strip():
        kept.pop()
    if not any(token.type == "bullet" for token in kept):
        kept.insert(0, Token.bullet())
    return kept


def move_summary_job_entries(
    sections: list[Section],
    vocabulary: HeadingVocabulary | None = None,
) -> list[Section]:
    """Relocate job-looking lines out of the Summary into Work Experience."""
    summary = next((s for s in sections if heading_key(s.heading, vocabulary) == "summary"), None)
    if summary is None:
        return sections

    moved: list[list[Token]] = []
    remaining: list[list[Token]] = []
    for tokens in summary.items:
        if is_job_entry(tokens):
            moved.append(_as_experience_item(tokens))
        else:
            remaining.append(tokens)
    summary.items = remaining

    if moved:
        work = next((s for s in sections if heading_key(s.heading, vocabulary) == "work experience"), None)
        if work is None:
            work = Section(heading=normalize_heading("Work Experience", vocabulary))
            sections.append(work)
        work.items.extend(moved)

    if not summary.items:
        sections.remove(summary)
    return sections
