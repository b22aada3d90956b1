from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from app.ai.config import load_ai_config
from app.ai.factory import get_oracle
from app.core.config import settings
from app.services.analysis_orchestrator import AnalysisOrchestrator, OrchestratorConfig
from app.services.resume_service import ResumeService
from app.storage.blob_store import get_blob_store
from app.storage.resume_store import get_resume_store


@lru_cache(maxsize=1)
def get_orchestrator() -> AnalysisOrchestrator:
    cfg = load_ai_config()
    return AnalysisOrchestrator(get_oracle(cfg), OrchestratorConfig.from_scoring(timeout_s=cfg.timeout_s))


def get_resume_service(orchestrator: AnalysisOrchestrator = Depends(get_orchestrator)) -> ResumeService:
    return ResumeService(
        store=get_resume_store(),
        blobs=get_blob_store(),
        orchestrator=orchestrator,
        tmp_dir=settings.upload_tmp_dir,
        min_extracted_chars=settings.min_extracted_chars,
        min_job_description_chars=settings.min_job_description_chars,
    )
