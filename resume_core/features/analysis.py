from __future__ import annotations

import math
import re
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from resume_core.core.config import get_scoring_value

from .lexicon import DEFAULT_LEXICON, MetricLexicon, term_pattern
from .skills import extract_resume_skills

_BULLET_GLYPHS = "-\u2022\u2023\u25e6*"
_BULLET_START_RE = re.compile(rf"^[{re.escape(_BULLET_GLYPHS)}]")
_BULLET_PREFIX_RE = re.compile(rf"^[{re.escape(_BULLET_GLYPHS)}]\s*")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_MULTI_SPACE_RE = re.compile(r"\S\s{3,}\S")
_SUMMARY_HEADING_LINE_RE = re.compile(r"^[A-Z][A-Z0-9\s/&-]{2,}$")
_JOB_TOKEN_RE = re.compile(r"[a-z0-9+.#]+")
_NON_ASCII_RE = re.compile(r"[\u2460-\u24ff\u2500-\u257f]")
_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
_PHONE_RE = re.compile(r"\b\+?\d{1,3}[\s.-]?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b")
_ACHIEVEMENT_SYMBOL_RE = re.compile(r"[+\d%$]")
_SUMMARY_HEADING_KEYS = re.compile(r"summary|profile|overview")


class ResumeAnalysis(BaseModel):
    """One read-only text pass shared by every ATS analyzer."""

    model_config = ConfigDict(frozen=True)

    text: str
    normalized_resume: str
    lines: tuple[str, ...]
    bullet_lines: tuple[str, ...]
    heading_lines: tuple[str, ...]
    heading_set: frozenset[str]
    multi_column_lines: tuple[str, ...]
    bullet_ratio: float
    bullet_word_counts: tuple[int, ...]
    avg_bullet_words: float
    filler_bullets: tuple[str, ...]
    paragraphs: tuple[str, ...]
    dense_paragraphs: tuple[str, ...]
    achievement_lines: tuple[str, ...]
    verb_start_lines: tuple[str, ...]
    long_bullet_lines: tuple[str, ...]
    short_bullet_lines: tuple[str, ...]
    job_skills: tuple[str, ...]
    resume_skills: tuple[str, ...]
    job_keywords: tuple[str, ...]
    bullet_keyword_hits: tuple[str, ...]
    job_keyword_matches: tuple[str, ...]
    summary_text: str
    summary_keyword_hits: tuple[str, ...]
    summary_skill_hits: tuple[str, ...]
    non_ascii_characters: int
    has_contact_info: bool
    summary_present: bool
    raw_line_count: int
    estimated_page_count: int


def _unique_lower(values: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for value in values:
        key = str(value or "").strip().lower()
        if key:
            seen.setdefault(key, None)
    return tuple(seen)


def extract_summary_text(text: str, lexicon: MetricLexicon | None = None) -> str:
    """Collect the lines under a summary-style heading up to the next heading."""
    vocab = lexicon or DEFAULT_LEXICON
    collecting = False
    collected: list[str] = []
    for raw_line in (text or "").splitlines():
        trimmed = raw_line.strip()
        if not collecting:
            if trimmed and vocab.summary_heading_re.match(trimmed):
                collecting = True
            continue
        if not trimmed:
            continue
        if _SUMMARY_HEADING_LINE_RE.match(trimmed) and trimmed == trimmed.upper():
            break
        if vocab.section_break_re.match(trimmed):
            break
        collected.append(trimmed)
    return re.sub(r"\s+", " ", " ".join(collected)).strip()


def _is_heading_line(line: str, max_chars: int) -> bool:
    if len(line) > max_chars:
        return False
    letters = re.sub(r"[^A-Za-z]", "", line)
    return len(letters) >= 4 and line == line.upper()


def _job_keywords(job_text: str, job_skills: tuple[str, ...], lexicon: MetricLexicon) -> tuple[str, ...]:
    min_length = int(get_scoring_value("analysis.job_keyword_min_length", 4))
    limit = int(get_scoring_value("analysis.job_keyword_limit", 80))
    candidates = [
        token
        for token in (raw.strip(".") for raw in _JOB_TOKEN_RE.findall(job_text.lower()))
        if len(token) >= min_length and token not in lexicon.stop_words
    ][:limit]
    return _unique_lower([*job_skills, *candidates])


def _hits(keywords: Iterable[str], text: str) -> tuple[str, ...]:
    if not text:
        return ()
    return tuple(keyword for keyword in keywords if term_pattern(keyword).search(text))


def analyze_resume(
    text: str,
    *,
    job_text: str = "",
    job_skills: Iterable[str] | None = None,
    resume_skills: Iterable[str] | None = None,
    lexicon: MetricLexicon | None = None,
) -> ResumeAnalysis:
    vocab = lexicon or DEFAULT_LEXICON
    text = text or ""
    dense_words = int(get_scoring_value("analysis.dense_paragraph_words", 70))
    lines_per_page = int(get_scoring_value("analysis.lines_per_page", 55))
    heading_max_chars = int(get_scoring_value("analysis.heading_max_chars", 42))
    long_words = int(get_scoring_value("analysis.long_bullet_words", 28))
    short_words = int(get_scoring_value("analysis.short_bullet_words", 8))

    all_lines = text.splitlines()
    lines = tuple(line.strip() for line in all_lines if line.strip())
    paragraphs = tuple(block.strip() for block in _PARAGRAPH_SPLIT_RE.split(text) if block.strip())
    dense_paragraphs = tuple(
        block
        for block in paragraphs
        if not _BULLET_START_RE.match(block) and len(block.split()) >= dense_words
    )
    bullet_lines = tuple(line for line in lines if _BULLET_START_RE.match(line))
    heading_lines = tuple(line for line in lines if _is_heading_line(line, heading_max_chars))
    heading_set = frozenset(re.sub(r"[^a-z]", "", line.lower()) for line in heading_lines)

    word_counts = tuple(len(_BULLET_PREFIX_RE.sub("", line).split()) for line in bullet_lines)
    long_lines = tuple(line for line, count in zip(bullet_lines, word_counts) if count > long_words)
    short_lines = tuple(line for line, count in zip(bullet_lines, word_counts) if 0 < count < short_words)

    normalized_job_skills = _unique_lower(job_skills or ())
    if resume_skills is None:
        resume_skills = extract_resume_skills(text, vocab)
    normalized_resume_skills = _unique_lower(resume_skills)
    job_keywords = _job_keywords(job_text or "", normalized_job_skills, vocab)

    summary_text = extract_summary_text(text, vocab)

    return ResumeAnalysis(
        text=text,
        normalized_resume=text.lower(),
        lines=lines,
        bullet_lines=bullet_lines,
        heading_lines=heading_lines,
        heading_set=heading_set,
        multi_column_lines=tuple(line for line in lines if _MULTI_SPACE_RE.search(line)),
        bullet_ratio=len(bullet_lines) / len(lines) if lines else 0.0,
        bullet_word_counts=word_counts,
        avg_bullet_words=sum(word_counts) / len(word_counts) if word_counts else 0.0,
        filler_bullets=tuple(line for line in bullet_lines if vocab.filler_re.search(line)),
        paragraphs=paragraphs,
        dense_paragraphs=dense_paragraphs,
        achievement_lines=tuple(
            line
            for line in bullet_lines
            if vocab.action_verb_re.search(line) or _ACHIEVEMENT_SYMBOL_RE.search(line)
        ),
        verb_start_lines=tuple(line for line in bullet_lines if vocab.verb_start_re.match(line)),
        long_bullet_lines=long_lines,
        short_bullet_lines=short_lines,
        job_skills=normalized_job_skills,
        resume_skills=normalized_resume_skills,
        job_keywords=job_keywords,
        bullet_keyword_hits=tuple(
            line for line in bullet_lines if any(term_pattern(k).search(line) for k in job_keywords)
        ),
        job_keyword_matches=_hits(job_keywords, text),
        summary_text=summary_text,
        summary_keyword_hits=_hits(job_keywords, summary_text),
        summary_skill_hits=_hits(normalized_job_skills, summary_text),
        non_ascii_characters=len(_NON_ASCII_RE.findall(text)),
        has_contact_info=bool(_EMAIL_RE.search(text) or _PHONE_RE.search(text)),
        summary_present=any(_SUMMARY_HEADING_KEYS.search(heading) for heading in heading_set),
        raw_line_count=len(all_lines),
        estimated_page_count=max(1, math.ceil(len(all_lines) / lines_per_page)),
    )
