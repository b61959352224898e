from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property, lru_cache

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has", "have", "in", "is",
        "it", "of", "on", "or", "that", "the", "to", "with", "will", "our", "your", "they", "them",
        "into", "about", "over", "more", "than", "who", "what", "when", "where", "which", "were",
        "while", "within", "under", "across", "through", "using", "per",
    }
)

ACTION_VERBS = (
    "accelerated",
    "achieved",
    "built",
    "delivered",
    "developed",
    "drove",
    "enhanced",
    "expanded",
    "improved",
    "increased",
    "launched",
    "led",
    "optimized",
    "reduced",
    "scaled",
    "spearheaded",
    "streamlined",
)

FILLER_OPENERS = ("responsible for", "duties included", "tasked with")

TECHNICAL_TERMS = (
    "javascript", "typescript", "python", "java", "c++", "c#", "go", "ruby", "php", "swift",
    "kotlin", "react", "angular", "vue", "node", "express", "next.js", "docker", "kubernetes",
    "aws", "gcp", "azure", "sql", "mysql", "postgresql", "mongodb", "git", "graphql", "linux",
    "bash", "redis", "jenkins", "terraform", "ansible",
)

SUMMARY_HEADINGS = ("summary", "professional summary", "profile", "overview")
SECTION_BREAK_HEADINGS = (
    "experience",
    "work experience",
    "employment history",
    "education",
    "skills",
    "projects",
    "certifications",
    "awards",
    "accomplishments",
)


@lru_cache(maxsize=1024)
def term_pattern(term: str) -> re.Pattern[str]:
    """Whole-word, case-insensitive matcher for a literal term."""
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)


@dataclass(frozen=True)
class MetricLexicon:
    """Word lists the ATS analyzers read; pass a smaller one in tests."""

    stop_words: frozenset[str] = STOP_WORDS
    action_verbs: tuple[str, ...] = ACTION_VERBS
    filler_openers: tuple[str, ...] = FILLER_OPENERS
    technical_terms: tuple[str, ...] = TECHNICAL_TERMS
    summary_headings: tuple[str, ...] = SUMMARY_HEADINGS
    section_break_headings: tuple[str, ...] = SECTION_BREAK_HEADINGS

    @cached_property
    def action_verb_re(self) -> re.Pattern[str]:
        return re.compile(rf"\b(?:{'|'.join(map(re.escape, self.action_verbs))})\b", re.IGNORECASE)

    @cached_property
    def verb_start_re(self) -> re.Pattern[str]:
        return re.compile(
            rf"^[-\u2022\u2023\u25e6*]?\s*(?:{'|'.join(map(re.escape, self.action_verbs))})\b",
            re.IGNORECASE,
        )

    @cached_property
    def filler_re(self) -> re.Pattern[str]:
        return re.compile(rf"\b(?:{'|'.join(map(re.escape, self.filler_openers))})\b", re.IGNORECASE)

    @cached_property
    def summary_heading_re(self) -> re.Pattern[str]:
        return re.compile(rf"^(?:{'|'.join(map(re.escape, self.summary_headings))})$", re.IGNORECASE)

    @cached_property
    def section_break_re(self) -> re.Pattern[str]:
        return re.compile(rf"^(?:{'|'.join(map(re.escape, self.section_break_headings))})$", re.IGNORECASE)


DEFAULT_LEXICON = MetricLexicon()
