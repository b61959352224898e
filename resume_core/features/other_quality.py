from __future__ import annotations

from resume_core.core.config import get_scoring_value
from resume_core.schemas.metrics import Metric

from .analysis import ResumeAnalysis
from .metric import clamp01, create_metric, percent, summarize_list

CATEGORY = "Other Quality Metrics"


def evaluate_other_quality(analysis: ResumeAnalysis) -> Metric:
    job_skills = analysis.job_skills
    resume_skills = analysis.resume_skills
    matches = analysis.job_keyword_matches

    if job_skills:
        found = set(resume_skills).intersection(job_skills)
        skill_coverage = len(found) / len(job_skills)
    else:
        skill_coverage = 1.0 if resume_skills else 0.0

    if matches:
        keyword_density = len(matches) / max(len(job_skills) or len(matches), 6)
    elif resume_skills:
        keyword_density = min(1.0, len(resume_skills) / 12)
    else:
        keyword_density = 0.0

    weights_key = "with_job_skills" if job_skills else "without_job_skills"
    skill_weight = float(get_scoring_value(f"other_quality.{weights_key}.skills", 0.45 if job_skills else 0.25))
    keyword_weight = float(get_scoring_value(f"other_quality.{weights_key}.keywords", 0.35 if job_skills else 0.50))
    summary_weight = float(get_scoring_value("other_quality.summary_weight", 0.20)) if analysis.summary_present else 0.0

    summary_contribution = 0.0
    if analysis.summary_present:
        summary_contribution = clamp01(
            (len(analysis.summary_keyword_hits) + len(analysis.summary_skill_hits)) / max(2, len(job_skills))
        )

    score = 100 * clamp01(
        skill_coverage * skill_weight + keyword_density * keyword_weight + summary_contribution * summary_weight
    )

    tips: list[str] = []
    if not resume_skills:
        tips.append("Add a dedicated skills section so ATS parsers can map your proficiencies.")
    if job_skills and resume_skills:
        resume_set = set(resume_skills)
        missing = [skill for skill in job_skills if skill not in resume_set]
        if missing:
            tips.append(f"Incorporate keywords such as {summarize_list(missing)} to mirror the job description.")
    if analysis.summary_present and not analysis.summary_keyword_hits and job_skills:
        tips.append(
            "Infuse your summary or headline with domain language from the posting, for example "
            f"{summarize_list(job_skills[:3])}, to reinforce alignment."
        )
    if not tips:
        tips.append("Keyword coverage is solid. Keep tailoring skills to each job description.")

    return create_metric(
        CATEGORY,
        score,
        tips,
        details={
            "normalizedJobSkillCount": len(job_skills),
            "normalizedResumeSkillCount": len(resume_skills),
            "jobKeywordMatches": len(matches),
            "skillCoverage": percent(skill_coverage),
            "keywordDensity": percent(keyword_density),
            "summaryContribution": percent(summary_contribution),
            "weights": {
                "skillWeight": percent(skill_weight),
                "keywordWeight": percent(keyword_weight),
                "summaryWeight": percent(summary_weight),
            },
            "summaryPresent": analysis.summary_present,
        },
    )
