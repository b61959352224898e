import itertools
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_core.features import (  # noqa: E402
    ATS_METRIC_KEYS,
    build_ats_score_explanation,
    compare_score_breakdowns,
    compute_composite_score,
    create_metric,
    ensure_score_breakdown_completeness,
    sanitize_metric,
    score_breakdown_to_array,
    summarize_list,
)


def _scores(*values):
    return {key: {"score": value} for key, value in zip(ATS_METRIC_KEYS, values)}


class CompositeScoreTests(unittest.TestCase):
    def test_weighted_average(self):
        self.assertEqual(compute_composite_score(_scores(80, 80, 80, 80, 80)), 80)
        self.assertEqual(compute_composite_score(_scores(100, 0, 0, 0, 0)), 20)
        self.assertEqual(compute_composite_score(_scores(50, 60, 70, 80, 90)), 68)

    def test_missing_categories_count_as_zero(self):
        self.assertEqual(compute_composite_score({}), 0)
        self.assertEqual(compute_composite_score({"impact": {"score": 100}}), 25)

    def test_composite_stays_within_metric_range(self):
        for values in itertools.product((0, 37, 64, 100), repeat=5):
            composite = compute_composite_score(_scores(*values))
            self.assertTrue(min(values) <= composite <= max(values), values)

    def test_explanation_lists_scores_and_weight_shares(self):
        text = build_ats_score_explanation(_scores(50, 60, 70, 80, 90), phase="enhanced")
        self.assertTrue(text.startswith("Weighted ATS composite for the enhanced resume using "))
        self.assertIn("Layout & Searchability 50% (20% weight)", text)
        self.assertIn("ATS Readability 60% (25% weight)", text)
        self.assertIn("Other Quality Metrics 90% (15% weight)", text)
        self.assertIn("uploaded resume", build_ats_score_explanation({}))

    def test_compare_breakdowns(self):
        deltas = compare_score_breakdowns(_scores(50, 60, 70, 80, 90), _scores(55, 60, 65, 80, 100))
        self.assertEqual([delta.delta for delta in deltas], [5, 0, -5, 0, 10])
        self.assertEqual(deltas[0].category, "Layout & Searchability")


class MetricHelperTests(unittest.TestCase):
    def test_create_metric_clamps_rounds_and_rates(self):
        self.assertEqual(create_metric("Impact", 49.5).score, 50)
        self.assertEqual(create_metric("Impact", 140).score, 100)
        self.assertEqual(create_metric("Impact", -3).score, 0)
        self.assertEqual(create_metric("Impact", 85).rating, "EXCELLENT")
        self.assertEqual(create_metric("Impact", 70).rating, "GOOD")
        self.assertEqual(create_metric("Impact", 69).rating, "NEEDS_IMPROVEMENT")

    def test_create_metric_always_has_a_tip(self):
        excellent = create_metric("Impact", 95)
        self.assertEqual(len(excellent.tips), 1)
        self.assertTrue(excellent.tips[0].startswith("Keep refining your impact"))
        poor = create_metric("Impact", 10, ["  ", "Fix it", "Fix it"])
        self.assertEqual(poor.tips, ["Fix it"])

    def test_sanitize_metric_accepts_foreign_shapes(self):
        metric = sanitize_metric({"score": 120.4, "tip": "x", "tips": ["x", " y "]}, "Crispness")
        self.assertEqual((metric.score, metric.rating, metric.tips), (100, "EXCELLENT", ["x", "y"]))
        self.assertEqual(metric.category, "Crispness")
        self.assertEqual(sanitize_metric("nonsense", "Crispness").score, 0)
        self.assertEqual(sanitize_metric({"score": "90"}, "Crispness").score, 0)

    def test_completeness_and_array_order(self):
        breakdown = ensure_score_breakdown_completeness({"crispness": {"score": 77}})
        self.assertEqual(breakdown.crispness.score, 77)
        self.assertEqual(breakdown.layout_searchability.score, 0)
        categories = [metric.category for metric in score_breakdown_to_array(breakdown)]
        self.assertEqual(
            categories,
            ["Layout & Searchability", "ATS Readability", "Impact", "Crispness", "Other Quality Metrics"],
        )

    def test_summarize_list(self):
        self.assertEqual(summarize_list([]), "")
        self.assertEqual(summarize_list(["a"]), "a")
        self.assertEqual(summarize_list(["a", "a", "b"]), "a and b")
        self.assertEqual(summarize_list(["a", "b", "c"]), "a, b and c")
        self.assertEqual(summarize_list(["a", "b", "c", "d", "e"]), "a, b, c and 2 more")
        self.assertEqual(summarize_list(["a", "b"], conjunction="or"), "a or b")


if __name__ == "__main__":
    unittest.main()
