from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Rating = Literal["EXCELLENT", "GOOD", "NEEDS_IMPROVEMENT"]


class Metric(BaseModel):
    category: str
    score: int = Field(ge=0, le=100)
    rating: Rating
    tips: list[str] = Field(min_length=1)
    details: dict[str, Any] = Field(default_factory=dict)


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    layout_searchability: Metric
    ats_readability: Metric
    impact: Metric
    crispness: Metric
    other_quality: Metric


class MetricDelta(BaseModel):
    key: str
    category: str
    before: int
    after: int
    delta: int


class AtsScoreResult(BaseModel):
    composite_score: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    explanation: str


def breakdown_mapping(breakdown: ScoreBreakdown) -> dict[str, Metric]:
    return {
        "layoutSearchability": breakdown.layout_searchability,
        "atsReadability": breakdown.ats_readability,
        "impact": breakdown.impact,
        "crispness": breakdown.crispness,
        "otherQuality": breakdown.other_quality,
    }
