from __future__ import annotations

from fastapi import HTTPException

from app.services.resume_service import ResumeServiceError


def raise_http_error(exc: ResumeServiceError) -> None:
    detail: str | dict = str(exc)
    if exc.details:
        detail = {"message": str(exc), **exc.details}
    raise HTTPException(status_code=exc.status_code, detail=detail) from exc
