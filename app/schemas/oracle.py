from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Annotated, Any, Generic, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictStr

from app.matching.scoring import clamp_score


def _coerce_score(value: Any) -> int:
    # bool is an int subclass; "true" is not a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    try:
        as_float = float(value)
    except OverflowError:
        raise ValueError("must be a finite number") from None
    if not math.isfinite(as_float):
        raise ValueError("must be a finite number")
    return clamp_score(value)


Score = Annotated[int, BeforeValidator(_coerce_score)]


class OraclePayload(BaseModel):
    """Base for JSON objects returned by the text-completion oracle (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ResumeAnalysisPayload(OraclePayload):
    overall_score: Score = Field(alias="overallScore")
    strengths: list[StrictStr]
    weaknesses: list[StrictStr]
    suggestions: list[StrictStr]
    key_skills: list[StrictStr] = Field(alias="keySkills")
    summary: StrictStr


class ATSCompatibilityPayload(OraclePayload):
    ats_score: Score = Field(alias="atsScore")
    match_percentage: Score = Field(alias="matchPercentage")
    matched_keywords: list[StrictStr] = Field(alias="matchedKeywords")
    missing_keywords: list[StrictStr] = Field(alias="missingKeywords")
    recommendations: list[StrictStr]
    summary: StrictStr


class ResumeValidityPayload(OraclePayload):
    is_resume: StrictBool = Field(alias="isResume")
    confidence: Score
    reason: StrictStr = ""


P = TypeVar("P", bound=OraclePayload)


@dataclass(frozen=True)
class SchemaOk(Generic[P]):
    payload: P


@dataclass(frozen=True)
class SchemaError:
    kind: str
    reason: str


SchemaResult = Union[SchemaOk[P], SchemaError]
