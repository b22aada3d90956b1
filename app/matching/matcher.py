from __future__ import annotations

from typing import Callable, Sequence

from pydantic import BaseModel

from app.core.config.scoring import get_scoring_value
from app.matching.scoring import percent

EXACT = "exact"
CONTAINMENT = "containment"


class MatchResult(BaseModel):
    match_percentage: int
    matched_keywords: list[str]
    missing_keywords: list[str]


def _unique_lower(keywords: Sequence[str] | None) -> list[str]:
    seen: dict[str, None] = {}
    for keyword in keywords or []:
        value = str(keyword).strip().lower()
        if value:
            seen.setdefault(value, None)
    return list(seen)


def _exact_hit(job_keyword: str, resume_keywords: Sequence[str], resume_set: set[str]) -> bool:
    return job_keyword in resume_set


def _containment_hit(job_keyword: str, resume_keywords: Sequence[str], resume_set: set[str]) -> bool:
    return any(rk in job_keyword or job_keyword in rk for rk in resume_keywords)


def _match(
    resume_keywords: Sequence[str] | None,
    job_keywords: Sequence[str] | None,
    hit: Callable[[str, Sequence[str], set[str]], bool],
    matched_cap: int,
    missing_cap: int,
) -> MatchResult:
    job = _unique_lower(job_keywords)
    resume = _unique_lower(resume_keywords)
    resume_set = set(resume)

    matched: list[str] = []
    missing: list[str] = []
    for keyword in job:
        (matched if hit(keyword, resume, resume_set) else missing).append(keyword)

    return MatchResult(
        match_percentage=percent(len(matched), len(job)),
        matched_keywords=matched[:matched_cap],
        missing_keywords=missing[:missing_cap],
    )


def _cap(path: str, default: int) -> int:
    return int(get_scoring_value(path, default))


def match_exact(
    resume_keywords: Sequence[str] | None,
    job_keywords: Sequence[str] | None,
    *,
    matched_cap: int | None = None,
    missing_cap: int | None = None,
) -> MatchResult:
    """Case-insensitive exact membership of each job keyword in the resume keywords."""
    return _match(
        resume_keywords,
        job_keywords,
        _exact_hit,
        matched_cap if matched_cap is not None else _cap("matching.matched_cap.exact", 10),
        missing_cap if missing_cap is not None else _cap("matching.missing_cap", 10),
    )


def match_containment(
    resume_keywords: Sequence[str] | None,
    job_keywords: Sequence[str] | None,
    *,
    matched_cap: int | None = None,
    missing_cap: int | None = None,
) -> MatchResult:
    """A job keyword counts as matched when it contains, or is contained in, any resume keyword."""
    return _match(
        resume_keywords,
        job_keywords,
        _containment_hit,
        matched_cap if matched_cap is not None else _cap("matching.matched_cap.containment", 15),
        missing_cap if missing_cap is not None else _cap("matching.missing_cap", 10),
    )
