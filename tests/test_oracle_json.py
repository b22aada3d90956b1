import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.schemas.oracle import (  # noqa: E402
    ATSCompatibilityPayload,
    ResumeAnalysisPayload,
    ResumeValidityPayload,
    SchemaError,
    SchemaOk,
)
from app.services.oracle_json import extract_json_object, parse_oracle_payload  # noqa: E402

ANALYSIS = {
    "overallScore": 82,
    "strengths": ["Clear impact statements"],
    "weaknesses": ["No summary section"],
    "suggestions": ["Add a professional summary"],
    "keySkills": ["Python", "Docker"],
    "summary": "Solid backend resume.",
}


class ExtractJsonObjectTests(unittest.TestCase):
    def test_object_inside_prose_and_code_fence(self):
        text = 'Sure! ```json\n{"a": 1, "b": {"c": 2}}\n``` hope that helps'
        self.assertEqual(extract_json_object(text), {"a": 1, "b": {"c": 2}})

    def test_skips_braces_that_do_not_decode(self):
        self.assertEqual(extract_json_object('set {x} first, then {"a": 1}'), {"a": 1})

    def test_nothing_to_extract(self):
        self.assertIsNone(extract_json_object(None))
        self.assertIsNone(extract_json_object("no braces here"))
        self.assertIsNone(extract_json_object("{broken"))

    def test_deep_nesting_is_not_an_object(self):
        self.assertIsNone(extract_json_object('{"a": ' + "[" * 100000 + "]" * 100000 + "}"))


class ParseOraclePayloadTests(unittest.TestCase):
    def test_valid_analysis(self):
        outcome = parse_oracle_payload("Here you go:\n" + json.dumps(ANALYSIS), ResumeAnalysisPayload)
        self.assertIsInstance(outcome, SchemaOk)
        self.assertEqual(outcome.payload.overall_score, 82)
        self.assertEqual(outcome.payload.key_skills, ["Python", "Docker"])

    def test_scores_are_clamped_and_rounded(self):
        outcome = parse_oracle_payload(json.dumps({**ANALYSIS, "overallScore": 105.4}), ResumeAnalysisPayload)
        self.assertEqual(outcome.payload.overall_score, 100)
        outcome = parse_oracle_payload(json.dumps({**ANALYSIS, "overallScore": 72.5}), ResumeAnalysisPayload)
        self.assertEqual(outcome.payload.overall_score, 73)

    def test_wrong_types_are_schema_mismatches(self):
        cases = [
            {**ANALYSIS, "overallScore": "85"},
            {**ANALYSIS, "overallScore": True},
            {**ANALYSIS, "overallScore": 10**400},
            {**ANALYSIS, "overallScore": float("nan")},
            {**ANALYSIS, "strengths": "one long string"},
            {key: value for key, value in ANALYSIS.items() if key != "summary"},
        ]
        for payload in cases:
            outcome = parse_oracle_payload(json.dumps(payload), ResumeAnalysisPayload)
            self.assertIsInstance(outcome, SchemaError)
            self.assertEqual(outcome.kind, "schema_mismatch")

    def test_failure_kinds(self):
        self.assertEqual(parse_oracle_payload("", ResumeAnalysisPayload).kind, "empty_response")
        self.assertEqual(parse_oracle_payload("   ", ResumeAnalysisPayload).kind, "empty_response")
        self.assertEqual(parse_oracle_payload("I cannot help", ResumeAnalysisPayload).kind, "no_json")
        self.assertEqual(parse_oracle_payload('{"overallScore": ', ResumeAnalysisPayload).kind, "invalid_json")

    def test_ats_payload(self):
        body = {
            "atsScore": 64,
            "matchPercentage": 58,
            "matchedKeywords": ["python"],
            "missingKeywords": ["terraform"],
            "recommendations": ["Mention Terraform"],
            "summary": "Decent match.",
            "extra": "ignored",
        }
        outcome = parse_oracle_payload(json.dumps(body), ATSCompatibilityPayload)
        self.assertIsInstance(outcome, SchemaOk)
        self.assertEqual(outcome.payload.match_percentage, 58)
        self.assertEqual(outcome.payload.missing_keywords, ["terraform"])

    def test_validity_payload_is_strict_about_booleans(self):
        ok = parse_oracle_payload('{"isResume": true, "confidence": 91}', ResumeValidityPayload)
        self.assertIsInstance(ok, SchemaOk)
        self.assertTrue(ok.payload.is_resume)
        self.assertEqual(ok.payload.reason, "")

        bad = parse_oracle_payload('{"isResume": "true", "confidence": 91}', ResumeValidityPayload)
        self.assertIsInstance(bad, SchemaError)
        self.assertEqual(bad.kind, "schema_mismatch")


if __name__ == "__main__":
    unittest.main()
