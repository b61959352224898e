from __future__ import annotations

import re

from resume_core.core.config import get_scoring_value
from resume_core.schemas.metrics import Metric

from .analysis import ResumeAnalysis
from .metric import clamp, create_metric, summarize_list

CATEGORY = "ATS Readability"

_TABLE_WORD_RE = re.compile(r"\btable\b")
_PAGE_FOOTER_RE = re.compile(r"\bpage \d+ of \d+", re.IGNORECASE)
_IMAGE_LINK_RE = re.compile(r"https?://\S+\.(?:png|jpg|jpeg|gif|svg)", re.IGNORECASE)
_DECORATIVE_RE = re.compile(r"[{}<>]")

_ISSUE_LABELS = {
    "tableLikeFormatting": "table-like formatting",
    "tableOfContents": "a table of contents",
    "pageNumberFooters": "page number footers",
    "embeddedImages": "embedded images",
    "multiColumnSpacing": "multi-column spacing that ATS bots misread",
    "decorativeCharacters": "decorative characters or HTML brackets",
    "nonAsciiCharacters": "non-standard symbols that confuse parsers",
}


def _fixed(flag: bool, key: str, default: float) -> float:
    return float(get_scoring_value(f"readability.penalties.{key}", default)) if flag else 0.0


def multi_column_penalty(line_count: int) -> float:
    if line_count < int(get_scoring_value("readability.multi_column.min_lines", 3)):
        return 0.0
    base = float(get_scoring_value("readability.multi_column.base", 5))
    per_line = float(get_scoring_value("readability.multi_column.per_line", 3))
    cap = float(get_scoring_value("readability.multi_column.cap", 20))
    return min(base + line_count * per_line, cap)


def evaluate_readability(analysis: ResumeAnalysis) -> Metric:
    text = analysis.text
    lowered = analysis.normalized_resume
    columns = len(analysis.multi_column_lines)
    symbols = analysis.non_ascii_characters

    breakdown = {
        "tableLikeFormatting": _fixed(
            bool(_TABLE_WORD_RE.search(lowered)) and "|" in text, "table_like_formatting", 22
        ),
        "tableOfContents": _fixed("table of contents" in lowered, "table_of_contents", 18),
        "pageNumberFooters": _fixed(bool(_PAGE_FOOTER_RE.search(text)), "page_number_footers", 12),
        "embeddedImages": _fixed(bool(_IMAGE_LINK_RE.search(text)), "embedded_images", 16),
        "multiColumnSpacing": multi_column_penalty(columns),
        "decorativeCharacters": _fixed(bool(_DECORATIVE_RE.search(text)), "decorative_characters", 8),
        "nonAsciiCharacters": min(
            symbols * float(get_scoring_value("readability.non_ascii.per_char", 1.5)),
            float(get_scoring_value("readability.non_ascii.cap", 18)),
        ),
    }
    penalty = sum(breakdown.values())
    issues = [_ISSUE_LABELS[key] for key, value in breakdown.items() if value > 0]

    tips: list[str] = []
    if issues:
        tips.append(f"Remove {summarize_list(issues)}; they frequently break ATS parsing engines.")
    else:
        tips.append("Formatting is ATS-safe. Keep the clean structure as you update content.")
    if columns >= 6:
        tips.append("Switch to a single-column layout so ATS parsers read left-to-right cleanly.")
    if symbols > 10:
        tips.append("Replace decorative symbols with plain text because ATS parsers misread special characters.")

    return create_metric(
        CATEGORY,
        clamp(100 - penalty, 0, 100),
        tips,
        details={
            "baseScore": 100,
            "penaltyTotal": round(min(penalty, 100)),
            "penaltyBreakdown": {key: round(value, 2) for key, value in breakdown.items()},
            "multiColumnIndicators": columns,
            "nonAsciiCharacters": symbols,
        },
    )
