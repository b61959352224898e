from __future__ import annotations

import math

from resume_core.core.config import get_scoring_value
from resume_core.schemas.metrics import Metric

from .analysis import ResumeAnalysis
from .metric import clamp01, create_metric, percent, plural, range_score

CATEGORY = "Crispness"


def evaluate_crispness(analysis: ResumeAnalysis) -> Metric:
    bullets = len(analysis.bullet_lines)
    average = analysis.avg_bullet_words
    ideal_min = float(get_scoring_value("crispness.ideal_words.min", 12))
    ideal_max = float(get_scoring_value("crispness.ideal_words.max", 22))

    length_score = range_score(
        average,
        ideal_min=ideal_min,
        ideal_max=ideal_max,
        tolerance=float(get_scoring_value("crispness.ideal_words.tolerance", 10)),
    )
    filler_ratio = len(analysis.filler_bullets) / bullets if bullets else 1.0
    filler_score = clamp01(1 - filler_ratio)
    verb_ratio = len(analysis.verb_start_lines) / bullets if bullets else 0.0
    long_ratio = len(analysis.long_bullet_lines) / bullets if bullets else 0.0
    short_ratio = len(analysis.short_bullet_lines) / bullets if bullets else 0.0
    balance_score = clamp01(1 - min(1.0, long_ratio * 1.1 + max(0.0, short_ratio - 0.3)))

    score = 100 * clamp01(
        length_score * float(get_scoring_value("crispness.weights.length", 0.30))
        + filler_score * float(get_scoring_value("crispness.weights.filler", 0.25))
        + verb_ratio * float(get_scoring_value("crispness.weights.verb_start", 0.25))
        + balance_score * float(get_scoring_value("crispness.weights.balance", 0.20))
    )

    tips: list[str] = []
    if not bullets:
        tips.append("Introduce concise bullet points (12 to 20 words) so recruiters can skim quickly.")
    if average and average < ideal_min:
        tips.append(
            f"Expand key bullets beyond {round(average)} words to explain scope and outcomes without losing clarity."
        )
    if average > ideal_max:
        tips.append(
            f"Tighten lengthy bullets. Your average is {round(average)} words, above the ATS-friendly "
            f"{int(ideal_min)} to {int(ideal_max)} word range."
        )
    if analysis.long_bullet_lines:
        tips.append(
            f"Break overly long bullets ({len(analysis.long_bullet_lines)}) into two lines so each accomplishment pops."
        )
    if len(analysis.short_bullet_lines) > math.ceil(bullets * 0.4):
        tips.append("Add a bit more context to ultra-short bullets so they explain the impact.")
    if analysis.filler_bullets:
        tips.append(
            'Replace filler openers like "responsible for" with action verbs: '
            f"{plural(len(analysis.filler_bullets), 'bullet')} use passive phrasing."
        )
    if not tips:
        tips.append("Bullet length is crisp and skimmable. Maintain this balance while adding fresh wins.")

    return create_metric(
        CATEGORY,
        score,
        tips,
        details={
            "bulletCount": bullets,
            "averageBulletWords": round(average, 2),
            "lengthScore": percent(length_score),
            "fillerBulletRatio": percent(filler_ratio),
            "fillerScore": percent(filler_score),
            "verbStartRatio": percent(verb_ratio),
            "balanceScore": percent(balance_score),
            "longBullets": len(analysis.long_bullet_lines),
            "shortBullets": len(analysis.short_bullet_lines),
        },
    )
