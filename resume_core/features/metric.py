from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from resume_core.core.config import get_scoring_value
from resume_core.schemas.metrics import Metric, Rating

ATS_METRIC_DEFINITIONS: tuple[tuple[str, str], ...] = (
    ("layoutSearchability", "Layout & Searchability"),
    ("atsReadability", "ATS Readability"),
    ("impact", "Impact"),
    ("crispness", "Crispness"),
    ("otherQuality", "Other Quality Metrics"),
)
ATS_METRIC_KEYS = tuple(key for key, _ in ATS_METRIC_DEFINITIONS)
ATS_METRIC_CATEGORIES = dict(ATS_METRIC_DEFINITIONS)


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rating_for(score: float) -> Rating:
    if score >= float(get_scoring_value("ratings.excellent", 85)):
        return "EXCELLENT"
    if score >= float(get_scoring_value("ratings.good", 70)):
        return "GOOD"
    return "NEEDS_IMPROVEMENT"


def summarize_list(values: Iterable[str], *, limit: int = 3, conjunction: str = "and") -> str:
    """Human list: ``a``, ``a and b``, ``a, b and c`` or ``a, b, c and 2 more``."""
    unique = [value for value in dict.fromkeys(values) if value]
    if not unique:
        return ""
    if len(unique) == 1:
        return unique[0]
    if len(unique) == 2:
        return f"{unique[0]} {conjunction} {unique[1]}"
    display = unique[:limit]
    remaining = len(unique) - len(display)
    if remaining > 0:
        return f"{', '.join(display)} and {remaining} more"
    return f"{', '.join(display[:-1])} {conjunction} {display[-1]}"


def _clean_tips(tips: Iterable[Any] | None) -> list[str]:
    cleaned = (tip.strip() for tip in (tips or []) if isinstance(tip, str))
    return [tip for tip in dict.fromkeys(cleaned) if tip]


def _default_tip(category: str, rating: Rating) -> str:
    if rating == "EXCELLENT":
        return (
            f"Keep refining your {category.lower()} as you add new achievements "
            "so the resume stays future-proof."
        )
    return (
        f"Focus on improving {category.lower()} to raise this score: "
        "tighten structure and mirror the job requirements."
    )


def create_metric(
    category: str,
    score: float,
    tips: Iterable[Any] | None = None,
    details: Mapping[str, Any] | None = None,
) -> Metric:
    if not isinstance(score, (int, float)) or math.isnan(score):
        score = 0
    rounded = round_half_up(clamp(float(score), 0.0, 100.0))
    rating = rating_for(rounded)
    cleaned = _clean_tips(tips) or [_default_tip(category, rating)]
    return Metric(category=category, score=rounded, rating=rating, tips=cleaned, details=dict(details or {}))


def zero_metric(key: str) -> Metric:
    return create_metric(ATS_METRIC_CATEGORIES[key], 0)


def sanitize_metric(metric: Metric | Mapping[str, Any] | None, category: str) -> Metric:
    """Coerce a partial or foreign metric shape into a complete ``Metric``."""
    if metric is None:
        return create_metric(category, 0)
    if isinstance(metric, Metric):
        return create_metric(metric.category or category, metric.score, metric.tips, metric.details)
    if not isinstance(metric, Mapping):
        return create_metric(category, 0)

    score = metric.get("score")
    tips: list[Any] = []
    if isinstance(metric.get("tip"), str):
        tips.append(metric["tip"])
    if isinstance(metric.get("tips"), list):
        tips.extend(metric["tips"])
    details = metric.get("details")
    return create_metric(
        str(metric.get("category") or category),
        score if isinstance(score, (int, float)) and not isinstance(score, bool) else 0,
        tips,
        details if isinstance(details, Mapping) else None,
    )


def ratio_score(value: float, *, ideal: float, tolerance: float) -> float:
    if not math.isfinite(value) or value <= 0:
        return 0.0
    return clamp01(1 - abs(value - ideal) / tolerance)


def range_score(value: float, *, ideal_min: float, ideal_max: float, tolerance: float) -> float:
    if not math.isfinite(value) or value <= 0:
        return 0.0
    if ideal_min <= value <= ideal_max:
        return 1.0
    if tolerance <= 0:
        return 0.0
    distance = ideal_min - value if value < ideal_min else value - ideal_max
    return clamp01(1 - distance / tolerance)


def percent(value: float, digits: int = 1) -> float:
    return round(value * 100, digits)


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"
