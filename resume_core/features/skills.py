from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field

from .lexicon import DEFAULT_LEXICON, MetricLexicon, term_pattern

_SKILL_SPLIT_RE = re.compile(r"[\n,]")


class SkillMatchRow(BaseModel):
    skill: str
    matched: bool


class SkillMatch(BaseModel):
    score: int = 0
    table: list[SkillMatchRow] = Field(default_factory=list)
    new_skills: list[str] = Field(default_factory=list)


def _collect(value: Any, out: list[str]) -> None:
    if value is None:
        return
    if isinstance(value, (list, tuple, set)):
        for entry in value:
            _collect(entry, out)
        return
    if isinstance(value, dict):
        for entry in value.values():
            _collect(entry, out)
        return
    if isinstance(value, str):
        out.extend(token.strip() for token in _SKILL_SPLIT_RE.split(value) if token.strip())


def normalize_skill_list_input(value: Any) -> list[str]:
    """Flatten strings, lists and mappings into a case-insensitively unique skill list."""
    values: list[str] = []
    _collect(value, values)

    seen: set[str] = set()
    normalized: list[str] = []
    for entry in values:
        key = entry.lower()
        if key in seen:
            continue
        seen.add(key)
        normalized.append(entry)
    return normalized


def extract_resume_skills(text: str, lexicon: MetricLexicon | None = None) -> list[str]:
    vocab = lexicon or DEFAULT_LEXICON
    lower = (text or "").lower()
    return [term for term in vocab.technical_terms if term_pattern(term).search(lower)]


def calculate_match_score(job_skills: list[str], resume_skills: list[str]) -> SkillMatch:
    resume_set = {skill.lower() for skill in resume_skills}
    table = [SkillMatchRow(skill=skill, matched=skill.lower() in resume_set) for skill in job_skills]
    matched = sum(1 for row in table if row.matched)
    score = round(matched / len(job_skills) * 100) if job_skills else 0
    return SkillMatch(
        score=score,
        table=table,
        new_skills=[row.skill for row in table if not row.matched],
    )
