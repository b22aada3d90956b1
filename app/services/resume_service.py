from __future__ import annotations

import asyncio
import logging
import time
import uuid
from pathlib import Path
from typing import Any

from app.parsing.parse import DOCX_CONTENT_TYPE, PDF_CONTENT_TYPE, parse_document
from app.schemas.analysis import AnalysisResult, ATSCompatibilityResult
from app.schemas.resumes import HistoryEntry, ResumeRecord, ResumeSummary, UploadedResume, UploadResponse
from app.services.analysis_orchestrator import AnalysisOrchestrator
from app.storage.blob_store import BlobStore, BlobStoreError, safe_file_stem
from app.storage.resume_store import ResumeStore

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {
    ".pdf": PDF_CONTENT_TYPE,
    ".docx": DOCX_CONTENT_TYPE,
}


class ResumeServiceError(ValueError):
    status_code = 400

    def __init__(self, message: str, *, status_code: int | None = None, details: dict[str, Any] | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}


class InsufficientInputError(ResumeServiceError):
    pass


class NotAResumeError(ResumeServiceError):
    pass


class UploadTooLargeError(ResumeServiceError):
    status_code = 413


class ResumeNotFoundError(ResumeServiceError):
    status_code = 404


def resume_extension(filename: str) -> str:
    extension = Path(filename or "").suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise InsufficientInputError("Invalid file type. Only PDF and DOCX files are allowed.")
    return extension


def purge_stale_uploads(tmp_dir: str | Path, max_age_s: float = 3600) -> int:
    """Remove leftover temp uploads older than ``max_age_s``; returns how many were removed."""
    directory = Path(tmp_dir)
    if not directory.is_dir():
        return 0
    cutoff = time.time() - max_age_s
    removed = 0
    for path in directory.iterdir():
        if path.is_file() and path.stat().st_mtime < cutoff:
            path.unlink(missing_ok=True)
            removed += 1
    return removed


class ResumeService:
    def __init__(
        self,
        *,
        store: ResumeStore,
        blobs: BlobStore,
        orchestrator: AnalysisOrchestrator,
        tmp_dir: str | Path,
        min_extracted_chars: int = 50,
        min_job_description_chars: int = 50,
    ):
        self._store = store
        self._blobs = blobs
        self._orchestrator = orchestrator
        self._tmp_dir = Path(tmp_dir)
        self._min_extracted_chars = min_extracted_chars
        self._min_job_description_chars = min_job_description_chars

    def _write_temp_file(self, filename: str, extension: str, content: bytes) -> Path:
        self._tmp_dir.mkdir(parents=True, exist_ok=True)
        path = self._tmp_dir / f"{safe_file_stem(filename)}-{uuid.uuid4().hex}{extension}"
        path.write_bytes(content)
        return path

    async def _discard_blob(self, blob_id: str) -> None:
        try:
            await asyncio.to_thread(self._blobs.delete, blob_id)
        except BlobStoreError as exc:
            logger.warning("blob_cleanup_failed blob_id=%s: %s", blob_id, exc)

    async def upload_resume(
        self,
        *,
        owner_id: str,
        filename: str,
        content_type: str | None,
        content: bytes,
    ) -> UploadResponse:
        extension = resume_extension(filename)
        if not content:
            raise InsufficientInputError("No file uploaded. Please upload a PDF or DOCX file.")

        logger.info("resume_upload_started owner=%s file=%s size=%s", owner_id, filename, len(content))
        temp_path = self._write_temp_file(filename, extension, content)
        blob_id: str | None = None
        try:
            blob = await asyncio.to_thread(self._blobs.upload, str(temp_path))
            blob_id = blob.blob_id

            parsed = await asyncio.to_thread(parse_document, str(temp_path), content_type)
            text = parsed.text
            if len(text) < self._min_extracted_chars:
                raise InsufficientInputError(
                    "Could not extract sufficient text from the file. "
                    "Please ensure the file contains readable text."
                )

            validity = await self._orchestrator.validate_is_resume(text)
            if not validity.is_valid:
                logger.warning(
                    "resume_rejected file=%s confidence=%s reason=%s",
                    filename,
                    validity.confidence,
                    validity.reason,
                )
                raise NotAResumeError(
                    f"This document doesn't appear to be a resume or CV. {validity.reason}".strip(),
                    details={"confidence": validity.confidence, "reason": validity.reason},
                )

            analysis = await self._orchestrator.analyze_resume(text)
            record = self._store.create_resume(
                owner_id=owner_id,
                file_name=filename,
                file_url=blob.url,
                blob_id=blob.blob_id,
                file_type=ALLOWED_EXTENSIONS[extension],
                file_size=len(content),
                original_text=text,
                analysis=analysis,
            )
        except Exception:
            if blob_id is not None:
                await self._discard_blob(blob_id)
            raise
        finally:
            temp_path.unlink(missing_ok=True)

        logger.info(
            "resume_upload_completed resume_id=%s owner=%s score=%s",
            record.id,
            owner_id,
            record.overall_score,
        )
        return UploadResponse(
            message="Resume uploaded and analyzed successfully!",
            resume=UploadedResume(
                id=record.id,
                file_name=record.file_name,
                file_url=record.file_url,
                file_size=record.file_size,
                uploaded_at=record.uploaded_at,
            ),
            analysis=record.analysis(),
        )

    def list_resumes(self, owner_id: str) -> list[ResumeSummary]:
        return self._store.list_resumes(owner_id)

    def get_resume(self, owner_id: str, resume_id: int) -> ResumeRecord:
        record = self._store.get_resume(resume_id, owner_id)
        if record is None:
            raise ResumeNotFoundError("Resume not found")
        return record

    async def delete_resume(self, owner_id: str, resume_id: int) -> None:
        record = self.get_resume(owner_id, resume_id)
        # a stuck blob must not keep the record alive
        await self._discard_blob(record.blob_id)
        self._store.delete_resume(record.id)
        logger.info("resume_deleted resume_id=%s owner=%s", record.id, owner_id)

    async def check_ats(self, owner_id: str, resume_id: int, job_description: str) -> ATSCompatibilityResult:
        description = (job_description or "").strip()
        if not description:
            raise InsufficientInputError("Resume ID and job description are required")
        if len(description) < self._min_job_description_chars:
            raise InsufficientInputError(
                "Job description is too short. Please provide a detailed job description."
            )

        record = self.get_resume(owner_id, resume_id)
        logger.info("ats_check_started resume_id=%s owner=%s", resume_id, owner_id)
        result = await self._orchestrator.check_ats_compatibility(record.original_text, description)

        self._store.update_ats_result(record.id, result)
        self._store.add_history(record.id, result.ats_score)
        logger.info("ats_check_completed resume_id=%s ats_score=%s", record.id, result.ats_score)
        return result

    def history(self, owner_id: str, resume_id: int) -> list[HistoryEntry]:
        record = self.get_resume(owner_id, resume_id)
        return self._store.list_history(record.id)

    async def reanalyze(self, owner_id: str, resume_id: int) -> AnalysisResult:
        record = self.get_resume(owner_id, resume_id)
        logger.info("reanalysis_started resume_id=%s owner=%s", record.id, owner_id)
        analysis = await self._orchestrator.analyze_resume(record.original_text)
        self._store.update_analysis(record.id, analysis)
        logger.info("reanalysis_completed resume_id=%s score=%s", record.id, analysis.overall_score)
        return analysis
