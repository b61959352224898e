from __future__ import annotations

import re
from typing import Any

from resume_core.parsing.urls import normalize_url
from resume_core.schemas.entities import CertificationEntry

_URL_RE = re.compile(
    r"(https?://\S+|www\.\S+|(?:[a-z0-9.-]*linkedin\.com|credly\.com)\S*)",
    re.IGNORECASE,
)
_CREDLY_LINE_RE = re.compile(r"https?://\S*credly\.com/\S*", re.IGNORECASE)
_PAREN_PROVIDER_RE = re.compile(r"^(.*?)\s*\((.*?)\)$")
_DASH_SPLIT_RE = re.compile(r"\s+[-–—|]\s+")
_SECTION_START_RE = re.compile(r"^#*\s*(?:certifications?|licenses?|training)\b", re.IGNORECASE)
_NEXT_SECTION_RE = re.compile(
    r"^#*\s*(?:(?:work|professional)\s+)?(?:experience|education|skills|projects|summary|objective|awards|interests|languages)\s*:?\s*$",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^[-*•]\s+")

_NAME_FIELDS = ("name", "title", "certificateName", "credentialName")
_PROVIDER_FIELDS = ("provider", "authority", "issuingOrganization", "issuer", "organization")
_URL_FIELDS = ("url", "credentialUrl", "link", "certUrl")
DATE_FIELDS = ("date", "issueDate", "issued", "startDate", "endDate")


def parse_certification_line(text: str) -> CertificationEntry:
    """Parse ``Name (Provider)`` or ``Name - Provider`` with an optional URL anywhere."""
    text = (text or "").strip()
    url = ""
    url_match = _URL_RE.search(text)
    if url_match:
        url = normalize_url(url_match.group(0))
        text = (text[: url_match.start()] + text[url_match.end():]).strip()

    paren = _PAREN_PROVIDER_RE.match(text)
    if paren:
        return CertificationEntry(name=paren.group(1).strip(), provider=paren.group(2).strip(), url=url)

    parts = _DASH_SPLIT_RE.split(text)
    name = parts[0].strip(" -–—|") if parts else ""
    provider = " - ".join(part.strip() for part in parts[1:] if part.strip())
    return CertificationEntry(name=name, provider=provider, url=url)


def _first_field(record: dict[str, Any], fields: tuple[str, ...]) -> str:
    for field_name in fields:
        value = record.get(field_name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def certification_from_record(record: Any) -> CertificationEntry:
    if isinstance(record, CertificationEntry):
        return record
    if not isinstance(record, dict):
        return parse_certification_line(str(record or ""))

    url = _first_field(record, _URL_FIELDS)
    if not url:
        url = next(
            (value for value in record.values() if isinstance(value, str) and "credly.com" in value.lower()),
            "",
        )
    entry = CertificationEntry(
        name=_first_field(record, _NAME_FIELDS),
        provider=_first_field(record, _PROVIDER_FIELDS),
        url=normalize_url(url),
        date=_first_field(record, DATE_FIELDS),
    )
    if entry.name or entry.provider or entry.url:
        return entry
    return parse_certification_line(str(record))


def extract_certifications(source: str | list[Any] | None) -> list[CertificationEntry]:
    if not source:
        return []
    if not isinstance(source, str):
        return [certification_from_record(item) for item in source]

    entries: list[CertificationEntry] = []
    in_section = False
    for line in source.splitlines():
        trimmed = line.strip()
        if _CREDLY_LINE_RE.search(trimmed):
            entries.append(parse_certification_line(_BULLET_RE.sub("", trimmed)))
            continue
        if _SECTION_START_RE.match(trimmed):
            in_section = True
            continue
        if not in_section:
            continue
        if not trimmed or _NEXT_SECTION_RE.match(trimmed):
            in_section = False
            continue
        entries.append(parse_certification_line(_BULLET_RE.sub("", trimmed)))
    return entries
