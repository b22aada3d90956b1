from __future__ import annotations

from pydantic import BaseModel

from app.schemas.analysis import AnalysisResult


class ResumeSummary(BaseModel):
    id: int
    file_name: str
    file_url: str
    file_size: int
    overall_score: int | None = None
    ats_score: int | None = None
    summary: str = ""
    uploaded_at: str


class ResumeRecord(ResumeSummary):
    owner_id: str
    blob_id: str
    file_type: str
    original_text: str
    strengths: list[str]
    weaknesses: list[str]
    suggestions: list[str]
    key_skills: list[str]
    matched_keywords: list[str]
    missing_keywords: list[str]
    updated_at: str

    def analysis(self) -> AnalysisResult:
        return AnalysisResult(
            overall_score=self.overall_score or 0,
            strengths=self.strengths,
            weaknesses=self.weaknesses,
            suggestions=self.suggestions,
            key_skills=self.key_skills,
            summary=self.summary,
        )


class UploadedResume(BaseModel):
    id: int
    file_name: str
    file_url: str
    file_size: int
    uploaded_at: str


class UploadResponse(BaseModel):
    message: str
    resume: UploadedResume
    analysis: AnalysisResult


class ResumeListResponse(BaseModel):
    count: int
    resumes: list[ResumeSummary]


class HistoryEntry(BaseModel):
    id: int
    resume_id: int
    score: int
    analyzed_at: str


class HistoryResponse(BaseModel):
    count: int
    history: list[HistoryEntry]


class MessageResponse(BaseModel):
    message: str
