import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.matching import (  # noqa: E402
    clamp_score,
    fallback_ats_score,
    match_containment,
    match_exact,
    percent,
    weighted_ats_score,
)
from app.matching.scoring import round_half_up  # noqa: E402


class ExactMatchTests(unittest.TestCase):
    def test_partial_match(self):
        result = match_exact(["python", "aws"], ["python", "docker", "kubernetes"])
        self.assertEqual(result.match_percentage, 33)
        self.assertEqual(result.matched_keywords, ["python"])
        self.assertEqual(result.missing_keywords, ["docker", "kubernetes"])

    def test_empty_job_keywords(self):
        result = match_exact(["python"], [])
        self.assertEqual(result.match_percentage, 0)
        self.assertEqual(result.matched_keywords, [])
        self.assertEqual(result.missing_keywords, [])

    def test_case_insensitive_and_deduplicated(self):
        result = match_exact(["Python"], ["PYTHON", "python", "Go"])
        self.assertEqual(result.matched_keywords, ["python"])
        self.assertEqual(result.missing_keywords, ["go"])
        self.assertEqual(result.match_percentage, 50)

    def test_half_rounds_up(self):
        job = ["k1", "k2", "k3", "k4", "k5", "k6", "k7", "k8"]
        self.assertEqual(match_exact(["k1"], job).match_percentage, 13)

    def test_percentage_uses_full_intersection_before_caps(self):
        job = [f"skill{i}" for i in range(12)]
        result = match_exact(job, job)
        self.assertEqual(result.match_percentage, 100)
        self.assertEqual(len(result.matched_keywords), 10)

        result = match_exact([], [f"skill{i}" for i in range(20)])
        self.assertEqual(result.match_percentage, 0)
        self.assertEqual(len(result.missing_keywords), 10)

    def test_matched_and_missing_are_disjoint(self):
        resume = ["python", "sql", "docker", "go"]
        job = ["go", "python", "rust", "sql", "java", "go"]
        result = match_exact(resume, job, matched_cap=100, missing_cap=100)
        self.assertFalse(set(result.matched_keywords) & set(result.missing_keywords))
        self.assertEqual(set(result.matched_keywords) | set(result.missing_keywords), set(job))


class ContainmentMatchTests(unittest.TestCase):
    def test_substring_either_direction(self):
        resume = ["postgresql", "react"]
        job = ["sql", "reactjs", "java"]
        result = match_containment(resume, job)
        self.assertEqual(result.matched_keywords, ["sql", "reactjs"])
        self.assertEqual(result.missing_keywords, ["java"])
        self.assertEqual(result.match_percentage, 67)
        self.assertEqual(match_exact(resume, job).match_percentage, 0)

    def test_matched_cap_is_fifteen(self):
        job = [f"tool{i}" for i in range(20)]
        result = match_containment(job, job)
        self.assertEqual(len(result.matched_keywords), 15)
        self.assertEqual(result.match_percentage, 100)


class ScoreTests(unittest.TestCase):
    def test_rounding_and_clamping(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(2.4999), 2)
        self.assertEqual(clamp_score(-5), 0)
        self.assertEqual(clamp_score(150), 100)
        self.assertEqual(clamp_score(float("nan")), 0)
        self.assertEqual(percent(1, 0), 0)
        self.assertEqual(percent(0, 0), 0)

    def test_weighted_report_score(self):
        self.assertEqual(weighted_ats_score(33, 100), 60)
        self.assertEqual(weighted_ats_score(50, 50), 50)
        self.assertEqual(weighted_ats_score(100, 100), 100)
        self.assertEqual(weighted_ats_score(0, 0), 0)
        self.assertEqual(weighted_ats_score(50, 50, keyword_weight=1.0, formatting_weight=0.0), 50)

    def test_fallback_score_adds_flat_bonus(self):
        self.assertEqual(fallback_ats_score(0), 10)
        self.assertEqual(fallback_ats_score(33), 43)
        self.assertEqual(fallback_ats_score(95), 100)
        self.assertEqual(fallback_ats_score(40, bonus=0), 40)


if __name__ == "__main__":
    unittest.main()
