from .analysis import ResumeAnalysis, analyze_resume, extract_summary_text
from .composite import (
    build_ats_score_explanation,
    compare_score_breakdowns,
    compute_composite_score,
    ensure_score_breakdown_completeness,
    metric_weights,
    score_breakdown_to_array,
)
from .crispness import evaluate_crispness
from .impact import evaluate_impact
from .layout import evaluate_layout
from .lexicon import DEFAULT_LEXICON, MetricLexicon
from .metric import (
    ATS_METRIC_DEFINITIONS,
    ATS_METRIC_KEYS,
    clamp,
    create_metric,
    rating_for,
    sanitize_metric,
    summarize_list,
    zero_metric,
)
from .other_quality import evaluate_other_quality
from .readability import evaluate_readability
from .skills import SkillMatch, calculate_match_score, extract_resume_skills, normalize_skill_list_input

ANALYZERS = {
    "layoutSearchability": evaluate_layout,
    "atsReadability": evaluate_readability,
    "impact": evaluate_impact,
    "crispness": evaluate_crispness,
    "otherQuality": evaluate_other_quality,
}

__all__ = [
    "ANALYZERS",
    "ATS_METRIC_DEFINITIONS",
    "ATS_METRIC_KEYS",
    "DEFAULT_LEXICON",
    "MetricLexicon",
    "ResumeAnalysis",
    "SkillMatch",
    "analyze_resume",
    "extract_summary_text",
    "build_ats_score_explanation",
    "compare_score_breakdowns",
    "compute_composite_score",
    "ensure_score_breakdown_completeness",
    "metric_weights",
    "score_breakdown_to_array",
    "evaluate_layout",
    "evaluate_readability",
    "evaluate_impact",
    "evaluate_crispness",
    "evaluate_other_quality",
    "clamp",
    "create_metric",
    "rating_for",
    "sanitize_metric",
    "summarize_list",
    "zero_metric",
    "calculate_match_score",
    "extract_resume_skills",
    "normalize_skill_list_input",
]
