import json
import sys
import unittest
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tests.support import (  # noqa: E402
    ANALYSIS_MARKER,
    RESUME_PARAGRAPHS,
    VALIDITY_MARKER,
    ScriptedOracle,
    build_docx,
    configure_test_env,
    new_user_id,
)

configure_test_env()

from fastapi.testclient import TestClient  # noqa: E402

from app.api.deps import get_orchestrator  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.main import app  # noqa: E402
from app.services.analysis_orchestrator import AnalysisOrchestrator  # noqa: E402

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

ANALYSIS_REPLY = json.dumps(
    {
        "overallScore": 84,
        "strengths": ["Quantified achievements"],
        "weaknesses": ["No summary"],
        "suggestions": ["Add a summary"],
        "keySkills": ["Python", "Kubernetes"],
        "summary": "Strong backend profile.",
    }
)


class ResumesApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)
        cls.resume_docx = build_docx(RESUME_PARAGRAPHS)

    def setUp(self):
        self.user = new_user_id()
        self.headers = {"X-User-Id": self.user}

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use_oracle(self, oracle):
        app.dependency_overrides[get_orchestrator] = lambda: AnalysisOrchestrator(oracle)

    def _upload(self, content=None, filename="resume.docx", headers=None):
        return self.client.post(
            "/v1/resumes/upload",
            files={"resume": (filename, content if content is not None else self.resume_docx, DOCX_TYPE)},
            headers=self.headers if headers is None else headers,
        )

    def _blob_count(self) -> int:
        root = Path(settings.blob_local_dir)
        return len(list(root.iterdir())) if root.exists() else 0

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_upload_without_oracle_returns_degraded_analysis(self):
        response = self._upload()
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["resume"]["file_name"], "resume.docx")
        self.assertEqual(body["resume"]["file_size"], len(self.resume_docx))
        self.assertEqual(body["analysis"]["overall_score"], 70)
        self.assertIn("AI analysis temporarily unavailable", body["analysis"]["weaknesses"])
        self.assertIn("kubernetes", body["analysis"]["key_skills"])

    def test_upload_uses_oracle_analysis(self):
        oracle = ScriptedOracle(
            {
                VALIDITY_MARKER: '{"isResume": true, "confidence": 93, "reason": "Work history"}',
                ANALYSIS_MARKER: ANALYSIS_REPLY,
            }
        )
        self._use_oracle(oracle)
        response = self._upload()
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["analysis"]["overall_score"], 84)
        self.assertEqual(body["analysis"]["key_skills"], ["Python", "Kubernetes"])
        self.assertEqual(len(oracle.prompts), 2)

        stored = self.client.get(f"/v1/resumes/{body['resume']['id']}", headers=self.headers).json()
        self.assertEqual(stored["overall_score"], 84)
        self.assertIn("Jane Doe", stored["original_text"])

    def test_non_resume_is_rejected_and_blob_discarded(self):
        self._use_oracle(
            ScriptedOracle({VALIDITY_MARKER: '{"isResume": false, "confidence": 92, "reason": "Looks like an invoice."}'})
        )
        before = self._blob_count()
        response = self._upload()
        self.assertEqual(response.status_code, 400)
        detail = response.json()["detail"]
        self.assertIn("doesn't appear to be a resume", detail["message"])
        self.assertEqual(detail["confidence"], 92)
        self.assertEqual(detail["reason"], "Looks like an invoice.")
        self.assertEqual(self._blob_count(), before)
        self.assertEqual(self.client.get("/v1/resumes", headers=self.headers).json()["count"], 0)

    def test_too_little_text_is_rejected(self):
        before = self._blob_count()
        response = self._upload(build_docx(["Hi"]))
        self.assertEqual(response.status_code, 400)
        self.assertIn("Could not extract sufficient text", response.json()["detail"])
        self.assertEqual(self._blob_count(), before)

    def test_unsupported_extension(self):
        response = self._upload(b"plain text", filename="resume.txt")
        self.assertEqual(response.status_code, 400)
        self.assertIn("Only PDF and DOCX", response.json()["detail"])

    def test_upload_too_large(self):
        with patch("app.api.v1.resumes.settings", replace(settings, max_upload_bytes=1024)):
            response = self._upload(b"x" * 4096)
        self.assertEqual(response.status_code, 413)

    def test_missing_user_is_unauthorized(self):
        self.assertEqual(self._upload(headers={}).status_code, 401)
        self.assertEqual(self.client.get("/v1/resumes").status_code, 401)

    def test_missing_file_field(self):
        response = self.client.post("/v1/resumes/upload", headers=self.headers)
        self.assertEqual(response.status_code, 422)

    def test_list_get_delete_lifecycle(self):
        first = self._upload().json()["resume"]["id"]
        second = self._upload().json()["resume"]["id"]

        listing = self.client.get("/v1/resumes", headers=self.headers).json()
        self.assertEqual(listing["count"], 2)
        self.assertEqual([item["id"] for item in listing["resumes"]], [second, first])

        other = {"X-User-Id": new_user_id()}
        self.assertEqual(self.client.get(f"/v1/resumes/{first}", headers=other).status_code, 404)
        self.assertEqual(self.client.delete(f"/v1/resumes/{first}", headers=other).status_code, 404)

        record = self.client.get(f"/v1/resumes/{first}", headers=self.headers).json()
        blob_path = Path(settings.blob_local_dir) / record["blob_id"]
        self.assertTrue(blob_path.exists())

        response = self.client.delete(f"/v1/resumes/{first}", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Resume deleted successfully")
        self.assertFalse(blob_path.exists())
        self.assertEqual(self.client.get(f"/v1/resumes/{first}", headers=self.headers).status_code, 404)
        self.assertEqual(self.client.get("/v1/resumes", headers=self.headers).json()["count"], 1)


if __name__ == "__main__":
    unittest.main()
