from __future__ import annotations

from resume_core.core.config import get_scoring_value
from resume_core.schemas.metrics import Metric

from .analysis import ResumeAnalysis
from .metric import clamp01, create_metric, percent, plural, ratio_score, summarize_list

CATEGORY = "Layout & Searchability"
KEY_SECTIONS = ("experience", "education", "skills", "summary")


def _penalty(count: float, each: float, cap: float) -> float:
    return min(cap, count * each) if count > 0 else 0.0


def evaluate_layout(analysis: ResumeAnalysis) -> Metric:
    heading_target = float(get_scoring_value("layout.heading_target", 6))
    max_pages = int(get_scoring_value("layout.max_pages", 2))
    max_lines = int(get_scoring_value("layout.max_lines", 130))

    present = [
        section for section in KEY_SECTIONS if any(section in heading for heading in analysis.heading_set)
    ]
    heading_score = clamp01(len(analysis.heading_lines) / heading_target)
    section_score = clamp01(len(present) / len(KEY_SECTIONS))
    bullet_score = (
        ratio_score(
            analysis.bullet_ratio,
            ideal=float(get_scoring_value("layout.bullet_ratio.ideal", 0.42)),
            tolerance=float(get_scoring_value("layout.bullet_ratio.tolerance", 0.28)),
        )
        if analysis.bullet_lines
        else 0.0
    )
    contact_score = 1.0 if analysis.has_contact_info else 0.0

    paragraph_penalty = _penalty(
        len(analysis.dense_paragraphs),
        float(get_scoring_value("layout.penalties.dense_paragraph_each", 0.08)),
        float(get_scoring_value("layout.penalties.dense_paragraph_cap", 0.25)),
    )
    page_penalty = _penalty(
        analysis.estimated_page_count - max_pages,
        float(get_scoring_value("layout.penalties.page_each", 0.18)),
        float(get_scoring_value("layout.penalties.page_cap", 0.30)),
    )
    length_penalty = _penalty(
        analysis.raw_line_count - max_lines,
        float(get_scoring_value("layout.penalties.line_each", 0.003)),
        float(get_scoring_value("layout.penalties.line_cap", 0.20)),
    )

    score = 100 * clamp01(
        heading_score * float(get_scoring_value("layout.weights.headings", 0.23))
        + section_score * float(get_scoring_value("layout.weights.sections", 0.24))
        + bullet_score * float(get_scoring_value("layout.weights.bullets", 0.33))
        + contact_score * float(get_scoring_value("layout.weights.contact", 0.14))
        - paragraph_penalty
        - page_penalty
        - length_penalty
    )

    tips: list[str] = []
    missing = [section.capitalize() for section in KEY_SECTIONS if section not in present]
    if missing:
        tips.append(
            f"Add clear section headers for {summarize_list(missing)} so ATS bots can index your resume "
            f"(only {plural(len(analysis.heading_lines), 'heading')} detected)."
        )
    if analysis.bullet_lines and bullet_score < 0.55:
        tips.append(
            f"Adjust your bullet usage: {plural(len(analysis.bullet_lines), 'bullet')} across "
            f"{len(analysis.lines)} lines makes scanning harder for recruiters."
        )
    if not analysis.bullet_lines:
        tips.append("Break dense paragraphs into bullets so scanners can pick out wins.")
    if not analysis.has_contact_info:
        tips.append("Add contact details (email or phone) so hiring teams can reach you quickly.")
    if analysis.dense_paragraphs:
        tips.append(
            f"Break up {plural(len(analysis.dense_paragraphs), 'dense paragraph')} with bullet points "
            "so resume scanners do not skip your achievements."
        )
    if analysis.estimated_page_count > max_pages:
        tips.append(
            f"Tighten the document to {max_pages} pages. ATS scoring drops once resumes stretch to "
            f"{analysis.estimated_page_count} pages."
        )
    elif analysis.raw_line_count > max_lines:
        tips.append("Trim excess line spacing or sections so the resume stays within a quick-scan length.")
    if not tips:
        tips.append("Your structure is solid. Keep the consistent headings and bullet patterns to remain searchable.")

    return create_metric(
        CATEGORY,
        score,
        tips,
        details={
            "headingCount": len(analysis.heading_lines),
            "headingDensity": percent(heading_score),
            "sectionCoverage": percent(section_score),
            "bulletCount": len(analysis.bullet_lines),
            "bulletUsageScore": percent(bullet_score),
            "contactInfoPresent": analysis.has_contact_info,
            "paragraphPenalty": round(paragraph_penalty * 100),
            "pagePenalty": round(page_penalty * 100),
            "lengthPenalty": round(length_penalty * 100),
            "estimatedPageCount": analysis.estimated_page_count,
            "rawLineCount": analysis.raw_line_count,
        },
    )
