import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_core.features import (  # noqa: E402
    ATS_METRIC_KEYS,
    MetricLexicon,
    analyze_resume,
    calculate_match_score,
    evaluate_crispness,
    evaluate_other_quality,
    evaluate_readability,
    extract_resume_skills,
    extract_summary_text,
    normalize_skill_list_input,
)
from resume_core.schemas.metrics import breakdown_mapping  # noqa: E402
from resume_core.services.scoring_service import build_score_breakdown, score_resume  # noqa: E402

SAMPLE_RESUME = """JANE DOE
jane.doe@example.com | +1 512 555 0142

SUMMARY
Backend engineer focused on Python APIs and Kubernetes platforms.

EXPERIENCE
Senior Engineer at Acme (Jan 2020 - Present)
- Led migration of payments platform to Kubernetes cutting deploy time by forty percent
- Reduced cloud spend by 30% through autoscaling and right sizing of Python workers
- Responsible for on-call rotation

EDUCATION
BSc Computer Science, State University

SKILLS
Python, Kubernetes, Docker, SQL
"""


class BreakdownCompletenessTests(unittest.TestCase):
    def test_empty_text_gives_all_zero_breakdown(self):
        for text in ("", "   \n  "):
            metrics = breakdown_mapping(build_score_breakdown(text))
            self.assertEqual(list(metrics), list(ATS_METRIC_KEYS))
            for metric in metrics.values():
                self.assertEqual(metric.score, 0)
                self.assertEqual(metric.rating, "NEEDS_IMPROVEMENT")
                self.assertGreaterEqual(len(metric.tips), 1)

    def test_any_input_yields_bounded_scores_with_tips(self):
        samples = [SAMPLE_RESUME, "x", "{}<>|table", "- a\n- b\n- c", "①②③ ╔══╗" * 20]
        for text in samples:
            for metric in breakdown_mapping(build_score_breakdown(text, job_text="python kubernetes")).values():
                self.assertIsInstance(metric.score, int)
                self.assertTrue(0 <= metric.score <= 100, (text, metric))
                self.assertTrue(metric.tips)

    def test_parallel_and_sequential_runs_agree(self):
        parallel = build_score_breakdown(SAMPLE_RESUME, job_skills=["Python", "Go"], parallel=True)
        sequential = build_score_breakdown(SAMPLE_RESUME, job_skills=["Python", "Go"], parallel=False)
        self.assertEqual(parallel, sequential)

    def test_failing_analyzer_is_replaced_by_zero_metric(self):
        def boom(analysis):
            raise ValueError("broken analyzer")

        with self.assertLogs("resume_core.services.scoring_service", level="ERROR"):
            breakdown = build_score_breakdown(SAMPLE_RESUME, analyzers={"impact": boom}, parallel=False)
        self.assertEqual(breakdown.impact.score, 0)
        self.assertEqual(breakdown.impact.category, "Impact")
        self.assertEqual(breakdown.crispness.score, 0)

    def test_score_resume_composite_within_metric_bounds(self):
        result = score_resume(SAMPLE_RESUME, job_text="Python Kubernetes engineer", phase="enhanced")
        scores = [metric.score for metric in breakdown_mapping(result.breakdown).values()]
        self.assertTrue(min(scores) <= result.composite_score <= max(scores))
        self.assertIn("enhanced resume", result.explanation)

    def test_breakdown_serializes_with_camel_keys(self):
        payload = build_score_breakdown(SAMPLE_RESUME).model_dump(by_alias=True)
        self.assertEqual(list(payload), list(ATS_METRIC_KEYS))


class AnalysisTests(unittest.TestCase):
    def test_segmentation(self):
        analysis = analyze_resume(SAMPLE_RESUME)
        self.assertEqual(len(analysis.bullet_lines), 3)
        self.assertIn("EXPERIENCE", analysis.heading_lines)
        self.assertIn("summary", analysis.heading_set)
        self.assertTrue(analysis.has_contact_info)
        self.assertTrue(analysis.summary_present)
        self.assertEqual(len(analysis.filler_bullets), 1)
        self.assertEqual(len(analysis.verb_start_lines), 2)
        self.assertEqual(analysis.estimated_page_count, 1)

    def test_job_keywords_merge_skills_and_description_tokens(self):
        analysis = analyze_resume("x", job_text="We need Kubernetes and Python experience", job_skills=["Go"])
        self.assertEqual(analysis.job_keywords, ("go", "need", "kubernetes", "python", "experience"))

    def test_summary_text_stops_at_next_heading(self):
        text = "Jane\nSummary\nBackend engineer focused on APIs.\n\nEXPERIENCE\n- Led things"
        self.assertEqual(extract_summary_text(text), "Backend engineer focused on APIs.")

    def test_injected_lexicon_changes_verbs(self):
        lexicon = MetricLexicon(action_verbs=("shipped",))
        analysis = analyze_resume("- Shipped the thing\n- Led the thing", lexicon=lexicon)
        self.assertEqual(analysis.verb_start_lines, ("- Shipped the thing",))


class AnalyzerTests(unittest.TestCase):
    def test_readability_multi_column_needs_three_lines(self):
        two = evaluate_readability(analyze_resume("Name    Title\nA    B"))
        self.assertEqual(two.score, 100)
        self.assertEqual(two.rating, "EXCELLENT")

        three = evaluate_readability(analyze_resume("Name    Title\nA    B\nC    D"))
        self.assertEqual(three.score, 86)
        self.assertEqual(three.details["penaltyBreakdown"]["multiColumnSpacing"], 14)

    def test_readability_fixed_penalties(self):
        self.assertEqual(evaluate_readability(analyze_resume("Built <b>tools</b>")).score, 92)
        self.assertEqual(evaluate_readability(analyze_resume("Rated ①②")).score, 97)
        self.assertEqual(evaluate_readability(analyze_resume("Page 1 of 2")).score, 88)

    def test_crisp_bullets_score_full_marks(self):
        text = (
            "- Led migration of payments platform to Kubernetes cutting deploy time by forty percent\n"
            "- Reduced cloud spend across three regions by tuning autoscaling policies for batch workers"
        )
        metric = evaluate_crispness(analyze_resume(text))
        self.assertEqual(metric.score, 100)
        self.assertEqual(len(metric.tips), 1)

    def test_filler_bullet_scores_low(self):
        metric = evaluate_crispness(analyze_resume("- Responsible for managing servers"))
        self.assertEqual(metric.score, 12)
        self.assertTrue(any("responsible for" in tip for tip in metric.tips))

    def test_other_quality_without_skills_suggests_section(self):
        metric = evaluate_other_quality(analyze_resume("Worked on many things"))
        self.assertEqual(metric.score, 0)
        self.assertIn("Add a dedicated skills section so ATS parsers can map your proficiencies.", metric.tips)

    def test_other_quality_reports_missing_job_skills(self):
        analysis = analyze_resume("- Built Python services", job_skills=["Python", "Terraform"])
        metric = evaluate_other_quality(analysis)
        self.assertEqual(metric.details["skillCoverage"], 50.0)
        self.assertTrue(any("terraform" in tip for tip in metric.tips))


class SkillHelperTests(unittest.TestCase):
    def test_normalize_skill_list_input(self):
        value = ["Python, Go", ["go", "SQL\nAWS"], {"extra": "Rust"}, None]
        self.assertEqual(normalize_skill_list_input(value), ["Python", "Go", "SQL", "AWS", "Rust"])

    def test_extract_resume_skills_matches_symbols(self):
        skills = extract_resume_skills("Wrote C++ and C# services on Node with next.js")
        self.assertEqual(skills, ["c++", "c#", "node", "next.js"])

    def test_calculate_match_score(self):
        match = calculate_match_score(["Python", "Go", "SQL"], ["python", "sql"])
        self.assertEqual(match.score, 67)
        self.assertEqual(match.new_skills, ["Go"])
        self.assertEqual([row.matched for row in match.table], [True, False, True])
        self.assertEqual(calculate_match_score([], ["python"]).score, 0)


if __name__ == "__main__":
    unittest.main()
