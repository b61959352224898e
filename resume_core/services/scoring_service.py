from __future__ import annotations

import concurrent.futures
import logging
from typing import Any, Callable, Iterable, Literal

from resume_core.core.config import settings
from resume_core.features import (
    ANALYZERS,
    ATS_METRIC_DEFINITIONS,
    MetricLexicon,
    ResumeAnalysis,
    analyze_resume,
    build_ats_score_explanation,
    compute_composite_score,
    ensure_score_breakdown_completeness,
    normalize_skill_list_input,
    zero_metric,
)
from resume_core.schemas.metrics import AtsScoreResult, Metric, ScoreBreakdown

logger = logging.getLogger(__name__)

Analyzer = Callable[[ResumeAnalysis], Metric]


def _run_analyzer(key: str, analyzer: Analyzer, analysis: ResumeAnalysis) -> Metric:
    try:
        return analyzer(analysis)
    except Exception:
        logger.exception("ats_analyzer_failed key=%s", key)
        return zero_metric(key)


def _run_all(analysis: ResumeAnalysis, analyzers: dict[str, Analyzer], parallel: bool) -> dict[str, Metric]:
    if not parallel:
        return {key: _run_analyzer(key, analyzer, analysis) for key, analyzer in analyzers.items()}

    with concurrent.futures.ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
        futures = {
            key: executor.submit(_run_analyzer, key, analyzer, analysis) for key, analyzer in analyzers.items()
        }
        return {key: future.result() for key, future in futures.items()}


def build_score_breakdown(
    text: str,
    *,
    job_text: str = "",
    job_skills: Any = None,
    resume_skills: Iterable[str] | None = None,
    lexicon: MetricLexicon | None = None,
    parallel: bool | None = None,
    analyzers: dict[str, Analyzer] | None = None,
) -> ScoreBreakdown:
    """Analyze the resume once, then run every category analyzer over that snapshot."""
    if not (text or "").strip():
        logger.debug("ats_breakdown_empty_input")
        return ensure_score_breakdown_completeness()

    analysis = analyze_resume(
        text,
        job_text=job_text,
        job_skills=normalize_skill_list_input(job_skills),
        resume_skills=resume_skills,
        lexicon=lexicon,
    )
    selected = analyzers or ANALYZERS
    use_parallel = settings.parallel_scoring if parallel is None else parallel
    metrics = _run_all(analysis, selected, use_parallel)

    missing = [key for key, _ in ATS_METRIC_DEFINITIONS if key not in metrics]
    if missing:
        logger.warning("ats_breakdown_missing keys=%s", ",".join(missing))
    return ensure_score_breakdown_completeness(metrics)


def score_resume(
    text: str,
    *,
    job_text: str = "",
    job_skills: Any = None,
    resume_skills: Iterable[str] | None = None,
    phase: Literal["uploaded", "enhanced"] = "uploaded",
    lexicon: MetricLexicon | None = None,
    parallel: bool | None = None,
) -> AtsScoreResult:
    breakdown = build_score_breakdown(
        text,
        job_text=job_text,
        job_skills=job_skills,
        resume_skills=resume_skills,
        lexicon=lexicon,
        parallel=parallel,
    )
    composite = compute_composite_score(breakdown)
    logger.info("ats_score_built composite=%s phase=%s", composite, phase)
    return AtsScoreResult(
        composite_score=composite,
        breakdown=breakdown,
        explanation=build_ats_score_explanation(breakdown, phase=phase),
    )
