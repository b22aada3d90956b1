from __future__ import annotations

import os
import tempfile
import uuid
from io import BytesIO
from pathlib import Path

from docx import Document

from app.ai.types import OracleError

TEST_DATA_DIR = Path(tempfile.gettempdir()) / "resume-analyzer-tests"

VALIDITY_MARKER = '"isResume"'
ANALYSIS_MARKER = '"overallScore"'
ATS_MARKER = '"atsScore"'

RESUME_PARAGRAPHS = [
    "Jane Doe",
    "Email: jane@example.com | Phone: +1 555 0100 | github.com/janedoe",
    "Experience",
    "Senior Backend Engineer at Acme (2019-2024)",
    "- Led migration of 40 services to Kubernetes and improved deploy speed by 35%.",
    "- Developed Python APIs with FastAPI, PostgreSQL and Docker.",
    "Education",
    "B.Sc. Computer Science",
    "Skills",
    "Python, Docker, Kubernetes, PostgreSQL, AWS",
]

JOB_DESCRIPTION = (
    "We are hiring a backend engineer with strong Python, Docker and Kubernetes skills. "
    "Experience with AWS and Terraform is a plus. Python and Docker are used daily."
)


def configure_test_env() -> None:
    """Must run before anything imports app.core.config."""
    os.environ["AI_PROVIDER"] = "disabled"
    os.environ["RATE_LIMIT_ENABLED"] = "0"
    os.environ["API_KEY"] = ""
    os.environ.setdefault("RESUME_DB_PATH", str(TEST_DATA_DIR / "resumes.db"))
    os.environ.setdefault("BLOB_LOCAL_DIR", str(TEST_DATA_DIR / "blobs"))
    os.environ.setdefault("UPLOAD_TMP_DIR", str(TEST_DATA_DIR / "tmp"))
    os.environ.setdefault("BLOB_STORE", "local")


def new_user_id() -> str:
    return f"user-{uuid.uuid4().hex[:12]}"


def build_docx(paragraphs: list[str]) -> bytes:
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class ScriptedOracle:
    """Replies chosen by a marker found in the prompt; exceptions are raised instead of returned."""

    def __init__(self, routes: dict[str, object] | None = None, default: object = None):
        self._routes = routes or {}
        self._default = default
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self._default
        for marker, value in self._routes.items():
            if marker in prompt:
                reply = value
                break
        if isinstance(reply, BaseException):
            raise reply
        if reply is None:
            raise OracleError("no scripted reply", code="oracle_error")
        return str(reply)
