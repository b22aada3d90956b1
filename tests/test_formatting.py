import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.matching import check_formatting, percent  # noqa: E402


def _padded(text: str, length: int) -> str:
    return text + "x" * (length - len(text))


class FormattingCheckTests(unittest.TestCase):
    def test_all_checks_pass(self):
        text = _padded("Led development of X, improved performance by 30%, email: a@b.com, Experience: ", 600)
        report = check_formatting(text)
        self.assertEqual(report.total, 6)
        self.assertEqual(report.passed, 6)
        self.assertEqual(report.score, 100)
        self.assertTrue(all(report.checks.values()))

    def test_short_text_fails_length_check(self):
        report = check_formatting("hi there")
        self.assertFalse(report.checks["not_too_short"])
        self.assertTrue(report.checks["not_too_long"])
        self.assertFalse(report.checks["has_contact_info"])
        self.assertEqual(report.passed, 1)
        self.assertEqual(report.score, 17)
        self.assertLessEqual(report.score, 83)

    def test_none_is_treated_as_empty(self):
        self.assertEqual(check_formatting(None).score, check_formatting("").score)

    def test_too_long_text(self):
        report = check_formatting("a" * 10000)
        self.assertFalse(report.checks["not_too_long"])
        self.assertTrue(report.checks["not_too_short"])
        self.assertEqual(report.score, 17)

    def test_length_bounds_are_exclusive(self):
        self.assertFalse(check_formatting("a" * 500).checks["not_too_short"])
        self.assertTrue(check_formatting("a" * 501).checks["not_too_short"])
        self.assertTrue(check_formatting("a" * 9999).checks["not_too_long"])

    def test_term_checks_ignore_case(self):
        report = check_formatting("GITHUB profile. EDUCATION. DESIGNED systems for 5 years.")
        self.assertTrue(report.checks["has_contact_info"])
        self.assertTrue(report.checks["has_sections"])
        self.assertTrue(report.checks["has_action_verbs"])
        self.assertTrue(report.checks["has_metrics"])

    def test_metrics_need_a_number(self):
        self.assertTrue(check_formatting("cut costs by 12%").checks["has_metrics"])
        self.assertTrue(check_formatting("shipped 3 products").checks["has_metrics"])
        self.assertFalse(check_formatting("shipped several products").checks["has_metrics"])

    def test_score_grows_with_each_passing_check(self):
        self.assertEqual([percent(k, 6) for k in range(7)], [0, 17, 33, 50, 67, 83, 100])


if __name__ == "__main__":
    unittest.main()
