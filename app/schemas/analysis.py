from __future__ import annotations

from pydantic import BaseModel, Field

from app.matching.formatting import FormattingReport


class AnalysisResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    key_skills: list[str] = Field(default_factory=list)
    summary: str = ""


class ATSCompatibilityResult(BaseModel):
    ats_score: int = Field(ge=0, le=100)
    match_percentage: int = Field(ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    summary: str = ""


class ResumeValidity(BaseModel):
    is_valid: bool
    confidence: int = Field(ge=0, le=100)
    reason: str = ""


class ATSReport(BaseModel):
    ats_score: int = Field(ge=0, le=100)
    keyword_match: int = Field(ge=0, le=100)
    resume_keywords: list[str]
    job_keywords: list[str]
    matched_keywords: list[str]
    missing_keywords: list[str]
    formatting: FormattingReport


class ATSCheckRequest(BaseModel):
    resume_id: int = Field(ge=1)
    job_description: str = Field(default="", max_length=50000)


class ATSReportRequest(BaseModel):
    resume_text: str = Field(default="", max_length=50000)
    job_description: str = Field(default="", max_length=50000)
