from __future__ import annotations

import re
from dataclasses import dataclass

from resume_core.core.config import get_scoring_value
from resume_core.parsing.tokenizer import parse_line
from resume_core.parsing.urls import normalize_url
from resume_core.schemas.document import Section, Token, item_text
from resume_core.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

_SKILL_SPLIT_RE = re.compile(r"[;,]")
_SKILL_KEY_RE = re.compile(r"[^a-z0-9+]+")


@dataclass
class _SkillCandidate:
    display: str
    href: str = ""


def _skill_key(value: str) -> str:
    return _SKILL_KEY_RE.sub(" ", value.lower()).strip()


def _line_links(tokens: list[Token]) -> list[tuple[str, str]]:
    links: list[tuple[str, str]] = []
    for token in tokens:
        if token.type != "link" or not token.href or not token.text:
            continue
        href = normalize_url(token.href)
        if href:
            links.append((token.text.strip(), href))
    return links


def _match_link(skill: str, links: list[tuple[str, str]]) -> str:
    """Best-effort pairing of a raw skill with a link token from the same line."""
    key = _skill_key(skill)
    if not key:
        return ""
    for label, href in links:
        if _skill_key(label) == key:
            return href
    for label, href in links:
        if key in _skill_key(label):
            return href
    for label, href in links:
        label_key = _skill_key(label)
        if label_key and label_key in key:
            return href
    return ""


def _split_line(tokens: list[Token]) -> list[_SkillCandidate]:
    text = item_text(tokens)
    if not text:
        return []
    links = _line_links(tokens)
    parts = _SKILL_SPLIT_RE.split(text) if _SKILL_SPLIT_RE.search(text) else [text]
    return [
        _SkillCandidate(display=part.strip(), href=_match_link(part.strip(), links))
        for part in parts
        if part.strip()
    ]


def _bulleted(tokens: list[Token]) -> list[Token]:
    if tokens and tokens[0].type == "bullet":
        return tokens
    rest = [token for token in tokens if token.type != "bullet"]
    return [Token.bullet(), *rest]


def _explode_items(section: Section) -> list[list[Token]]:
    expanded: list[list[Token]] = []
    for tokens in section.items:
        if not _SKILL_SPLIT_RE.search(item_text(tokens)):
            expanded.append(_bulleted(tokens))
            continue
        for candidate in _split_line(tokens):
            if candidate.href:
                expanded.append([Token.bullet(), Token.link(candidate.display, candidate.href)])
            else:
                expanded.append(_bulleted(parse_line(candidate.display)))
    return expanded


def _passes_job_filter(lower: str, job_set: set[str], taxonomy: TaxonomyProvider) -> bool:
    if lower in job_set:
        return True
    category = taxonomy.category_for(lower)
    if category is None:
        return False
    return category in job_set or any(member in job_set for member in taxonomy.members(category))


def _grouped_items(
    section: Section,
    job_set: set[str],
    taxonomy: TaxonomyProvider,
) -> list[list[Token]]:
    unique: dict[str, _SkillCandidate] = {}
    for tokens in section.items:
        for candidate in _split_line(tokens):
            lower = candidate.display.lower()
            existing = unique.get(lower)
            if existing is None:
                unique[lower] = candidate
            elif candidate.href and not existing.href:
                existing.href = candidate.href

    groups: dict[tuple[str, str], list[_SkillCandidate]] = {}
    for lower, candidate in unique.items():
        category = taxonomy.category_for(lower)
        if lower in job_set and lower != category:
            groups.setdefault(("skill", lower), [candidate])
            continue
        if category is None or not _passes_job_filter(lower, job_set, taxonomy):
            continue
        group = groups.setdefault(("category", category), [_SkillCandidate(display=category)])
        if lower != category:
            group.append(candidate)

    max_groups = int(get_scoring_value("reconcile.max_skill_groups", 5))
    max_members = int(get_scoring_value("reconcile.max_group_members", 4))
    items: list[list[Token]] = []
    for entries in list(groups.values())[:max_groups]:
        tokens = [Token.bullet()]
        for index, entry in enumerate(entries[:max_members]):
            if index > 0:
                tokens.append(Token.paragraph(", "))
            if entry.href:
                tokens.append(Token.link(entry.display, entry.href))
            else:
                tokens.append(Token.paragraph(entry.display))
        items.append(tokens)
    return items


def split_skills(
    sections: list[Section],
    job_skills: list[str] | None = None,
    *,
    taxonomy: TaxonomyProvider | None = None,
) -> list[Section]:
    """Explode skill sections into one bullet per skill.

    With a target skill list, skills the job names keep their own bullet and
    skills that only share a taxonomy category with a job skill fold under
    one umbrella bullet for that category. Everything else is dropped.
    """
    job_set = {str(skill).strip().lower() for skill in (job_skills or []) if str(skill or "").strip()}
    provider = taxonomy or get_default_taxonomy_provider()
    for section in sections:
        if "skill" not in (section.heading or "").lower():
            continue
        if job_set:
            section.items = _grouped_items(section, job_set, provider)
        else:
            section.items = _explode_items(section)
    return sections
