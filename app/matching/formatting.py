from __future__ import annotations

import re

from pydantic import BaseModel

from app.core.config.scoring import get_scoring_value
from app.matching.scoring import percent

_METRICS_PATTERN = re.compile(r"\d+%|\d+ [a-z]+", re.IGNORECASE)


class FormattingReport(BaseModel):
    checks: dict[str, bool]
    passed: int
    total: int
    score: int


def _terms_pattern(path: str) -> re.Pattern[str]:
    terms = get_scoring_value(path) or []
    if not terms:
        raise RuntimeError(f"Scoring config '{path}' must list at least one term.")
    return re.compile("|".join(re.escape(str(term)) for term in terms), re.IGNORECASE)


def _patterns() -> tuple[re.Pattern[str], re.Pattern[str], re.Pattern[str]]:
    return (
        _terms_pattern("formatting.contact_terms"),
        _terms_pattern("formatting.section_terms"),
        _terms_pattern("formatting.action_verbs"),
    )


def check_formatting(text: str | None) -> FormattingReport:
    body = text or ""
    contact, sections, verbs = _patterns()
    min_chars = int(get_scoring_value("formatting.min_chars", 500))
    max_chars = int(get_scoring_value("formatting.max_chars", 10000))

    checks = {
        "has_contact_info": bool(contact.search(body)),
        "has_sections": bool(sections.search(body)),
        "has_action_verbs": bool(verbs.search(body)),
        "has_metrics": bool(_METRICS_PATTERN.search(body)),
        "not_too_short": len(body) > min_chars,
        "not_too_long": len(body) < max_chars,
    }
    passed = sum(1 for value in checks.values() if value)
    total = len(checks)
    return FormattingReport(checks=checks, passed=passed, total=total, score=percent(passed, total))
