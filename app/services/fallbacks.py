from __future__ import annotations

from typing import Sequence

from app.matching import (
    extract_document_keywords,
    fallback_ats_score,
    match_containment,
)
from app.matching.matcher import MatchResult
from app.schemas.analysis import AnalysisResult, ATSCompatibilityResult, ResumeValidity

AI_UNAVAILABLE = "AI analysis temporarily unavailable"
DEGRADED_OVERALL_SCORE = 70
FAIL_OPEN_CONFIDENCE = 50
FAIL_OPEN_REASON = "Validation check failed, proceeding with analysis"
SKILLS_PLACEHOLDER = "Skills detected in resume"

DEGRADED_STRENGTHS = (
    "Resume successfully uploaded and processed",
    "Text extracted successfully from document",
    "Standard resume structure detected",
)
DEGRADED_WEAKNESSES = (
    AI_UNAVAILABLE,
    "Limited automated feedback at this time",
)
DEGRADED_SUGGESTIONS = (
    "Ensure clear section headings (Experience, Education, Skills)",
    "Add quantifiable achievements with numbers and percentages",
    "Include relevant keywords for your target industry",
    "Keep formatting simple and ATS-friendly",
    "Use strong action verbs to describe responsibilities",
)
DEGRADED_SUMMARY = (
    "AI analysis is temporarily unavailable, but your resume has been saved. "
    "You can view the extracted text and re-analyze it once the AI service is restored."
)


def build_degraded_analysis(keywords: Sequence[str]) -> AnalysisResult:
    return AnalysisResult(
        overall_score=DEGRADED_OVERALL_SCORE,
        strengths=list(DEGRADED_STRENGTHS),
        weaknesses=list(DEGRADED_WEAKNESSES),
        suggestions=list(DEGRADED_SUGGESTIONS),
        key_skills=list(keywords) or [SKILLS_PLACEHOLDER],
        summary=DEGRADED_SUMMARY,
    )


def degraded_resume_analysis(resume_text: str | None) -> AnalysisResult:
    return build_degraded_analysis(extract_document_keywords(resume_text, "basic"))


def build_degraded_ats(match: MatchResult) -> ATSCompatibilityResult:
    missing = match.missing_keywords
    if missing:
        keyword_tip = f"Consider adding these keywords: {', '.join(missing[:5])}"
        summary_tail = f"Consider adding: {', '.join(missing[:3])}"
    else:
        keyword_tip = "Good keyword coverage"
        summary_tail = "Good keyword alignment!"

    return ATSCompatibilityResult(
        ats_score=fallback_ats_score(match.match_percentage),
        match_percentage=match.match_percentage,
        matched_keywords=match.matched_keywords,
        missing_keywords=missing,
        recommendations=[
            f"{AI_UNAVAILABLE} - basic keyword matching performed",
            keyword_tip,
            "Ensure your resume uses exact terms from the job description",
            "Add quantifiable achievements that match job requirements",
            "Use industry-standard terminology",
        ],
        summary=f"Your resume matches {match.match_percentage}% of job keywords. {summary_tail}",
    )


def degraded_ats_compatibility(resume_text: str | None, job_description: str | None) -> ATSCompatibilityResult:
    match = match_containment(
        extract_document_keywords(resume_text, "ats_fallback"),
        extract_document_keywords(job_description, "ats_fallback"),
    )
    return build_degraded_ats(match)


def fail_open_validity() -> ResumeValidity:
    return ResumeValidity(is_valid=True, confidence=FAIL_OPEN_CONFIDENCE, reason=FAIL_OPEN_REASON)
