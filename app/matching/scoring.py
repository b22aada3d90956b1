from __future__ import annotations

import math

from app.core.config.scoring import get_scoring_value


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    if math.isnan(value):
        return 0
    return max(0, min(100, round_half_up(value)))


def percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return clamp_score(100 * part / whole)


def weighted_ats_score(
    match_percentage: int,
    formatting_score: int,
    *,
    keyword_weight: float | None = None,
    formatting_weight: float | None = None,
) -> int:
    """Score used by the deterministic ATS report: keywords 60%, formatting 40%."""
    kw = keyword_weight if keyword_weight is not None else float(
        get_scoring_value("aggregation.report.keyword_weight", 0.6)
    )
    fw = formatting_weight if formatting_weight is not None else float(
        get_scoring_value("aggregation.report.formatting_weight", 0.4)
    )
    return clamp_score(kw * match_percentage + fw * formatting_score)


def fallback_ats_score(match_percentage: int, *, bonus: int | None = None) -> int:
    """Score used when the oracle cannot run an ATS check: a flat bonus for having a resume at all."""
    flat = bonus if bonus is not None else int(get_scoring_value("aggregation.fallback.flat_bonus", 10))
    return min(clamp_score(match_percentage) + flat, 100)
