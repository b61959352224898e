from __future__ import annotations

import math

from resume_core.core.config import get_scoring_value
from resume_core.schemas.metrics import Metric

from .analysis import ResumeAnalysis
from .metric import clamp01, create_metric, percent, summarize_list

CATEGORY = "Impact"


def evaluate_impact(analysis: ResumeAnalysis) -> Metric:
    bullets = len(analysis.bullet_lines)
    achievements = len(analysis.achievement_lines)
    keywords = analysis.job_keywords
    job_skills = analysis.job_skills

    achievement_ratio = achievements / bullets if bullets else 0.0
    achievement_volume = clamp01(achievements / max(3, bullets * 0.6))
    keyword_ratio = len(analysis.bullet_keyword_hits) / bullets if bullets else 0.0

    summary_present = bool(analysis.summary_text)
    summary_skill_score = 0.0
    summary_keyword_score = 0.0
    if summary_present:
        summary_skill_score = clamp01(len(analysis.summary_skill_hits) / max(1, min(len(job_skills), 6)))
        summary_keyword_score = clamp01(
            (len(analysis.summary_keyword_hits) + summary_skill_score * min(len(keywords), 6))
            / max(2, min(len(keywords), 10))
        )

    score = 100 * clamp01(
        achievement_ratio * float(get_scoring_value("impact.weights.achievement_ratio", 0.45))
        + keyword_ratio * float(get_scoring_value("impact.weights.keyword_hits", 0.22))
        + achievement_volume * float(get_scoring_value("impact.weights.achievement_volume", 0.23))
        + max(summary_keyword_score, summary_skill_score)
        * float(get_scoring_value("impact.weights.summary_alignment", 0.10))
    )

    tips: list[str] = []
    if not achievements:
        tips.append(
            "Add metrics or outcome verbs (e.g., increased, reduced) to your bullets. "
            "None of the bullet points currently show quantified results."
        )
    elif achievements < max(3, math.ceil(bullets * 0.4)):
        tips.append(
            "Strengthen impact statements by pairing more bullets with numbers: only "
            f"{achievements} of {bullets or 'your'} bullets include metrics or performance verbs."
        )
    else:
        tips.append("Your bullets already show strong impact. Keep pairing metrics with outcome-driven verbs.")

    if keywords and len(analysis.bullet_keyword_hits) < max(2, math.ceil(len(keywords) * 0.1)):
        sample = [word.capitalize() for word in keywords[:5]]
        tips.append(
            f"Mirror the job posting by weaving in keywords such as {summarize_list(sample)} "
            "inside your accomplishment bullets."
        )

    if summary_present and not analysis.summary_skill_hits and job_skills:
        tips.append("Rework your summary to echo critical job keywords so reviewers immediately see the alignment.")

    if analysis.resume_skills and job_skills:
        resume_set = set(analysis.resume_skills)
        missing = [skill.capitalize() for skill in job_skills if skill not in resume_set]
        if missing:
            tips.append(f"Explicitly list {summarize_list(missing, limit=5)} to mirror the job posting.")

    return create_metric(
        CATEGORY,
        score,
        tips,
        details={
            "bulletCount": bullets,
            "achievementBullets": achievements,
            "achievementRatio": percent(achievement_ratio),
            "achievementVolumeScore": percent(achievement_volume),
            "keywordHitRatio": percent(keyword_ratio),
            "summaryPresent": summary_present,
            "summaryKeywordScore": percent(summary_keyword_score),
            "summarySkillScore": percent(summary_skill_score),
            "jobKeywordCount": len(keywords),
            "bulletKeywordHits": len(analysis.bullet_keyword_hits),
        },
    )
