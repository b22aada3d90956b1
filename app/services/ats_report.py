from __future__ import annotations

import logging

from app.matching import (
    check_formatting,
    extract_document_keywords,
    match_exact,
    weighted_ats_score,
)
from app.schemas.analysis import ATSReport

logger = logging.getLogger(__name__)

_REPORT_KEYWORD_LIMIT = 20


def generate_ats_report(resume_text: str | None, job_description: str | None) -> ATSReport:
    """Deterministic resume vs. job description report: exact keyword match weighted with formatting."""
    resume_keywords = extract_document_keywords(resume_text, "ats_report")
    job_keywords = extract_document_keywords(job_description, "ats_report")

    match = match_exact(resume_keywords, job_keywords)
    formatting = check_formatting(resume_text)
    ats_score = weighted_ats_score(match.match_percentage, formatting.score)

    logger.info(
        "ats_report_generated ats_score=%s keyword_match=%s formatting_score=%s",
        ats_score,
        match.match_percentage,
        formatting.score,
    )
    return ATSReport(
        ats_score=ats_score,
        keyword_match=match.match_percentage,
        resume_keywords=resume_keywords[:_REPORT_KEYWORD_LIMIT],
        job_keywords=job_keywords[:_REPORT_KEYWORD_LIMIT],
        matched_keywords=match.matched_keywords,
        missing_keywords=match.missing_keywords,
        formatting=formatting,
    )
