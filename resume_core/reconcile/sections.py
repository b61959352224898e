from __future__ import annotations

import logging
import re
from typing import Callable

from resume_core.core.config import get_scoring_value
from resume_core.extract.certifications import parse_certification_line
from resume_core.extract.dates import recency_sort_key
from resume_core.extract.experience import parse_experience_line
from resume_core.parsing.headings import HeadingVocabulary, heading_key, normalize_heading
from resume_core.parsing.tokenizer import parse_line
from resume_core.parsing.urls import link_label, normalize_url
from resume_core.schemas.document import Section, Token, flatten_entry
from resume_core.schemas.entities import CertificationEntry, ExperienceEntry
from resume_core.schemas.inputs import SupplementaryProfile

from .summary import contains_contact_info

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Information not provided"

_VISIBLE_RE = re.compile(r"[^\s•·\-–—]")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
_SPACE_RE = re.compile(r"\s+")


def _has_visible_text(tokens: list[Token]) -> bool:
    return any(_VISIBLE_RE.search(f"{token.text or ''}{token.href or ''}") for token in tokens)


def prune_empty_sections(sections: list[Section]) -> list[Section]:
    """Drop visually empty items, then sections left with no items."""
    pruned: list[Section] = []
    for section in sections:
        section.items = [tokens for tokens in section.items if _has_visible_text(tokens)]
        if section.items:
            pruned.append(section)
    return pruned


def merge_duplicate_sections(
    sections: list[Section],
    vocabulary: HeadingVocabulary | None = None,
) -> list[Section]:
    """Fold sections sharing a canonical heading into the first occurrence."""
    merged: list[Section] = []
    seen: dict[str, Section] = {}
    for section in sections:
        key = heading_key(section.heading, vocabulary)
        existing = seen.get(key)
        if existing is None:
            seen[key] = section
            merged.append(section)
        elif not existing.items:
            existing.heading = section.heading
            existing.items = list(section.items)
        else:
            existing.items.extend(section.items)
    return merged


def _bulleted_line(text: str) -> list[Token]:
    return [Token.bullet(), *parse_line(text)]


def _first_line_text(tokens: list[Token]) -> str:
    parts: list[str] = []
    for token in tokens:
        if token.type == "newline":
            break
        if token.type == "jobsep":
            parts.append(" | ")
        elif token.text:
            parts.append(token.text)
    return _SPACE_RE.sub(" ", "".join(parts)).strip()


def format_experience(entry: ExperienceEntry) -> str:
    head = " at ".join(part for part in (entry.title, entry.company) if part)
    dates = " – ".join(part for part in (entry.start_date, entry.end_date) if part)
    if dates:
        return f"{head} ({dates})" if head else f"({dates})"
    return head


def _find_section(
    sections: list[Section],
    canonical: str,
    vocabulary: HeadingVocabulary | None,
) -> Section | None:
    return next((s for s in sections if heading_key(s.heading, vocabulary) == canonical), None)


def _ensure_work_experience(
    sections: list[Section],
    profile: SupplementaryProfile,
    vocabulary: HeadingVocabulary | None,
) -> None:
    canonical = normalize_heading("Work Experience", vocabulary)
    work = _find_section(sections, canonical.lower(), vocabulary)
    if work is None:
        work = Section(heading=canonical)
        sections.append(work)

    ranked: list[tuple[ExperienceEntry, list[Token]]] = []
    unparsed: list[list[Token]] = []
    seen: set[tuple[str, str, str, str]] = set()

    for tokens in work.items:
        entry = parse_experience_line(_first_line_text(tokens))
        if not (entry.company or entry.start_date or entry.end_date):
            unparsed.append(tokens)
            continue
        key = entry.identity_key()
        if key in seen:
            continue
        seen.add(key)
        if not any(token.type == "bullet" for token in tokens):
            tokens = [Token.bullet(), *tokens]
        ranked.append((entry, tokens))

    had_existing = bool(ranked or unparsed)
    additions: list[ExperienceEntry] = []
    for entry in [*profile.resume_experience, *profile.profile_experience]:
        key = entry.identity_key()
        if key in seen:
            continue
        seen.add(key)
        additions.append(entry)

    if additions and profile.job_title and not had_existing:
        newest = min(range(len(additions)), key=lambda i: recency_sort_key(additions[i].end_date or additions[i].start_date))
        additions[newest] = additions[newest].model_copy(update={"title": profile.job_title})

    for entry in additions:
        ranked.append((entry, _bulleted_line(format_experience(entry))))

    ranked.sort(key=lambda pair: recency_sort_key(pair[0].end_date or pair[0].start_date))
    work.items = [tokens for _, tokens in ranked] + unparsed

    if not work.items:
        other_experience = any(
            section is not work and "experience" in section.heading.lower() and section.items
            for section in sections
        )
        if not other_experience:
            work.items = [parse_line(PLACEHOLDER_TEXT)]


def _ensure_education(
    sections: list[Section],
    profile: SupplementaryProfile,
    vocabulary: HeadingVocabulary | None,
) -> None:
    canonical = normalize_heading("Education", vocabulary)
    education = _find_section(sections, canonical.lower(), vocabulary)
    if education is None:
        education = Section(heading=canonical)
        sections.append(education)
    if education.items:
        return
    lines = profile.resume_education or profile.profile_education
    if lines:
        education.items = [_bulleted_line(str(line)) for line in lines if str(line).strip()]
    if not education.items:
        education.items = [parse_line(PLACEHOLDER_TEXT)]


def _ensure_projects(
    sections: list[Section],
    profile: SupplementaryProfile,
) -> None:
    if not profile.project.strip():
        return
    if any("project" in section.heading.lower() for section in sections):
        return
    sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(profile.project.strip()) if s.strip()]
    summary = " ".join(sentences[:2])
    sections.append(Section(heading="Projects", items=[_bulleted_line(summary)]))


def _certification_from_item(tokens: list[Token]) -> CertificationEntry:
    flat = flatten_entry(tokens)
    entry = parse_certification_line(_SPACE_RE.sub(" ", flat.text))
    if not entry.url and flat.links:
        entry = entry.model_copy(update={"url": normalize_url(flat.links[0].href or "")})
    return entry


def _certification_item(entry: CertificationEntry) -> list[Token]:
    label = f"{entry.name} - {entry.provider}" if entry.name and entry.provider else entry.name or entry.provider
    if entry.url:
        return [Token.bullet(), Token.link(label, entry.url)]
    return [Token.bullet(), Token.paragraph(label)]


def _verification_label(href: str) -> str:
    label = link_label(href)
    if label == href:
        return "Verification Profile"
    return f"{label} Profile"


def _ensure_certifications(
    sections: list[Section],
    profile: SupplementaryProfile,
    vocabulary: HeadingVocabulary | None,
) -> None:
    canonical = normalize_heading("Certification", vocabulary)
    existing_sections = [s for s in sections if heading_key(s.heading, vocabulary) == canonical.lower()]
    existing = [_certification_from_item(tokens) for section in existing_sections for tokens in section.items]

    candidates = [
        *profile.verified_certifications,
        *existing,
        *profile.resume_certifications,
        *profile.profile_certifications,
    ]
    unique: list[CertificationEntry] = []
    seen: set[tuple[str, str]] = set()
    for entry in candidates:
        if not (entry.name or entry.provider):
            continue
        key = entry.identity_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    unique.sort(key=lambda entry: recency_sort_key(entry.date))
    limit = int(get_scoring_value("reconcile.max_certifications", 5))
    items = [_certification_item(entry) for entry in unique[:limit]]

    verification = normalize_url(profile.verification_profile_url) if profile.verification_profile_url else ""
    if verification and not any(token.href == verification for tokens in items for token in tokens):
        items.append([Token.bullet(), Token.link(_verification_label(verification), verification)])

    for section in existing_sections[1:]:
        sections.remove(section)
    if not items:
        if existing_sections:
            sections.remove(existing_sections[0])
        return
    if existing_sections:
        existing_sections[0].heading = canonical
        existing_sections[0].items = items
    else:
        sections.append(Section(heading=canonical, items=items))


def _contact_text(tokens: list[Token]) -> str:
    flat = flatten_entry(tokens)
    return " ".join([flat.text, *(link.href or "" for link in flat.links)])


def _has_link(tokens: list[Token], matches: Callable[[str], bool]) -> bool:
    return any(token.type == "link" and matches(normalize_url(token.href or "")) for token in tokens)


def _ensure_contact_line(
    sections: list[Section],
    profile: SupplementaryProfile,
    vocabulary: HeadingVocabulary | None,
) -> None:
    """Carry the Credly and LinkedIn profile links on the Summary's contact line."""
    summary = _find_section(sections, "summary", vocabulary)
    first = summary.items[0] if summary is not None and summary.items else None
    replaces_first = first is not None and contains_contact_info(_contact_text(first))
    contact = list(first) if replaces_first else []

    links: list[Token] = []
    verification = normalize_url(profile.verification_profile_url) if profile.verification_profile_url else ""
    if verification and not _has_link(contact, lambda href: href == verification):
        links.append(Token.link(_verification_label(verification), verification))
    linkedin = normalize_url(profile.linkedin_profile_url) if profile.linkedin_profile_url else ""
    if linkedin and not _has_link(contact, lambda href: "linkedin.com" in href.lower()):
        links.append(Token.link("LinkedIn Profile", linkedin))
    if not links:
        return

    for link in links:
        if contact:
            contact.append(Token.paragraph(" | "))
        contact.append(link)
    if summary is None:
        summary = Section(heading=normalize_heading("Summary", vocabulary))
        sections.insert(0, summary)
    if replaces_first:
        summary.items[0] = contact
    else:
        summary.items.insert(0, contact)


def ensure_required_sections(
    sections: list[Section],
    profile: SupplementaryProfile | None = None,
    vocabulary: HeadingVocabulary | None = None,
) -> list[Section]:
    """Guarantee Work Experience and Education, and fold in supplementary data."""
    profile = profile or SupplementaryProfile()
    _ensure_contact_line(sections, profile, vocabulary)
    _ensure_work_experience(sections, profile, vocabulary)
    _ensure_education(sections, profile, vocabulary)
    _ensure_projects(sections, profile)
    _ensure_certifications(sections, profile, vocabulary)
    logger.debug("required_sections_ensured headings=%s", [section.heading for section in sections])
    return prune_empty_sections(merge_duplicate_sections(sections, vocabulary))
