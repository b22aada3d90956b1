from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from app.api.deps import get_resume_service
from app.api.errors import raise_http_error
from app.core.config import settings
from app.core.rate_limit import rate_limit, upload_rate_limit
from app.core.security import current_user_id
from app.schemas.resumes import MessageResponse, ResumeListResponse, ResumeRecord, UploadResponse
from app.services.resume_service import ResumeService, ResumeServiceError, UploadTooLargeError, resume_extension

router = APIRouter()

_CHUNK_BYTES = 1024 * 64


async def _read_limited(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise UploadTooLargeError(
                f"File is too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB."
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/resumes/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
@upload_rate_limit()
async def upload_resume(
    request: Request,
    resume: UploadFile = File(...),
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
):
    filename = resume.filename or "resume"
    try:
        resume_extension(filename)
        content = await _read_limited(resume)
        return await service.upload_resume(
            owner_id=user_id,
            filename=filename,
            content_type=resume.content_type,
            content=content,
        )
    except ResumeServiceError as exc:
        raise_http_error(exc)


@router.get("/resumes", response_model=ResumeListResponse)
@rate_limit()
async def list_resumes(
    request: Request,
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
):
    resumes = service.list_resumes(user_id)
    return ResumeListResponse(count=len(resumes), resumes=resumes)


@router.get("/resumes/{resume_id}", response_model=ResumeRecord)
@rate_limit()
async def get_resume(
    request: Request,
    resume_id: int,
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        return service.get_resume(user_id, resume_id)
    except ResumeServiceError as exc:
        raise_http_error(exc)


@router.delete("/resumes/{resume_id}", response_model=MessageResponse)
@rate_limit()
async def delete_resume(
    request: Request,
    resume_id: int,
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        await service.delete_resume(user_id, resume_id)
    except ResumeServiceError as exc:
        raise_http_error(exc)
    return MessageResponse(message="Resume deleted successfully")
