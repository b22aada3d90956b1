from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.api.deps import get_resume_service
from app.api.errors import raise_http_error
from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.core.security import check_api_key, current_user_id
from app.schemas.analysis import AnalysisResult, ATSCheckRequest, ATSCompatibilityResult, ATSReport, ATSReportRequest
from app.schemas.resumes import HistoryResponse
from app.services.ats_report import generate_ats_report
from app.services.resume_service import ResumeService, ResumeServiceError

router = APIRouter()


@router.post("/analysis/ats-check", response_model=ATSCompatibilityResult)
@rate_limit()
async def ats_check(
    request: Request,
    payload: ATSCheckRequest,
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        return await service.check_ats(user_id, payload.resume_id, payload.job_description)
    except ResumeServiceError as exc:
        raise_http_error(exc)


@router.get("/analysis/history/{resume_id}", response_model=HistoryResponse)
@rate_limit()
async def analysis_history(
    request: Request,
    resume_id: int,
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        history = service.history(user_id, resume_id)
    except ResumeServiceError as exc:
        raise_http_error(exc)
    return HistoryResponse(count=len(history), history=history)


@router.post("/analysis/re-analyze/{resume_id}", response_model=AnalysisResult)
@rate_limit()
async def reanalyze(
    request: Request,
    resume_id: int,
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        return await service.reanalyze(user_id, resume_id)
    except ResumeServiceError as exc:
        raise_http_error(exc)


@router.post("/analysis/ats-report", response_model=ATSReport)
@rate_limit()
async def ats_report(request: Request, payload: ATSReportRequest):
    check_api_key(request.headers.get("X-API-Key"))
    resume_text = payload.resume_text.strip()
    description = payload.job_description.strip()
    if not resume_text or not description:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Resume text and job description are required")
    if len(description) < settings.min_job_description_chars:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Job description is too short. Please provide a detailed job description.",
        )
    return generate_ats_report(resume_text, description)
