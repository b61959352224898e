from __future__ import annotations

from typing import Any, Literal, Mapping

from resume_core.core.config import get_scoring_value
from resume_core.schemas.metrics import Metric, MetricDelta, ScoreBreakdown, breakdown_mapping

from .metric import ATS_METRIC_DEFINITIONS, clamp, round_half_up, sanitize_metric

Phase = Literal["uploaded", "enhanced"]

_DEFAULT_WEIGHTS = {
    "layoutSearchability": 0.20,
    "atsReadability": 0.25,
    "impact": 0.25,
    "crispness": 0.15,
    "otherQuality": 0.15,
}

BreakdownLike = ScoreBreakdown | Mapping[str, Any] | None


def metric_weights() -> dict[str, float]:
    return {
        key: float(get_scoring_value(f"composite.weights.{key}", _DEFAULT_WEIGHTS[key]))
        for key, _ in ATS_METRIC_DEFINITIONS
    }


def ensure_score_breakdown_completeness(source: BreakdownLike = None) -> ScoreBreakdown:
    """Fill every category, coercing partial metrics and zeroing missing ones."""
    if isinstance(source, ScoreBreakdown):
        return source
    raw = source or {}
    metrics = {key: sanitize_metric(raw.get(key), category) for key, category in ATS_METRIC_DEFINITIONS}
    return ScoreBreakdown.model_validate(metrics)


def score_breakdown_to_array(source: BreakdownLike = None) -> list[Metric]:
    mapping = breakdown_mapping(ensure_score_breakdown_completeness(source))
    return [mapping[key] for key, _ in ATS_METRIC_DEFINITIONS]


def compute_composite_score(source: BreakdownLike = None) -> int:
    mapping = breakdown_mapping(ensure_score_breakdown_completeness(source))
    weights = metric_weights()
    total_weight = sum(weights.values())
    if not total_weight:
        return 0
    weighted = sum(clamp(mapping[key].score, 0, 100) * weights[key] for key, _ in ATS_METRIC_DEFINITIONS)
    return round_half_up(weighted / total_weight)


def build_ats_score_explanation(source: BreakdownLike = None, *, phase: Phase = "uploaded") -> str:
    mapping = breakdown_mapping(ensure_score_breakdown_completeness(source))
    weights = metric_weights()
    total_weight = sum(weights.values())
    parts = []
    for key, category in ATS_METRIC_DEFINITIONS:
        share = round_half_up(weights[key] / total_weight * 100) if total_weight else 0
        parts.append(f"{category} {mapping[key].score}% ({share}% weight)")
    label = "enhanced" if phase == "enhanced" else "uploaded"
    return (
        f"Weighted ATS composite for the {label} resume using {', '.join(parts)}. "
        "Metrics are derived from JD keywords, structure, and formatting cues."
    )


def compare_score_breakdowns(before: BreakdownLike, after: BreakdownLike) -> list[MetricDelta]:
    """Per-category before/after table for the improvement workflow."""
    old = breakdown_mapping(ensure_score_breakdown_completeness(before))
    new = breakdown_mapping(ensure_score_breakdown_completeness(after))
    return [
        MetricDelta(
            key=key,
            category=category,
            before=old[key].score,
            after=new[key].score,
            delta=new[key].score - old[key].score,
        )
        for key, category in ATS_METRIC_DEFINITIONS
    ]
