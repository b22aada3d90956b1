from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

from app.ai.prompts import (
    build_ats_compatibility_prompt,
    build_resume_analysis_prompt,
    build_resume_validity_prompt,
)
from app.ai.types import OracleError, TextOracle
from app.core.config.scoring import get_scoring_value
from app.schemas.analysis import AnalysisResult, ATSCompatibilityResult, ResumeValidity
from app.schemas.oracle import (
    ATSCompatibilityPayload,
    P,
    ResumeAnalysisPayload,
    ResumeValidityPayload,
    SchemaError,
    SchemaOk,
    SchemaResult,
)
from app.services.fallbacks import (
    degraded_ats_compatibility,
    degraded_resume_analysis,
    fail_open_validity,
)
from app.services.oracle_json import parse_oracle_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrchestratorConfig:
    timeout_s: float = 30.0
    min_confidence: int = 60
    validation_prompt_chars: int = 2000
    matched_cap: int = 15
    missing_cap: int = 10

    @classmethod
    def from_scoring(cls, timeout_s: float = 30.0) -> "OrchestratorConfig":
        return cls(
            timeout_s=timeout_s,
            min_confidence=int(get_scoring_value("validation.min_confidence", 60)),
            validation_prompt_chars=int(get_scoring_value("validation.prompt_chars", 2000)),
            matched_cap=int(get_scoring_value("matching.matched_cap.containment", 15)),
            missing_cap=int(get_scoring_value("matching.missing_cap", 10)),
        )


def _disjoint(matched: list[str], missing: list[str]) -> tuple[list[str], list[str]]:
    seen: set[str] = set()
    clean_matched: list[str] = []
    for keyword in matched:
        key = keyword.strip().lower()
        if key and key not in seen:
            seen.add(key)
            clean_matched.append(keyword.strip())
    clean_missing: list[str] = []
    for keyword in missing:
        key = keyword.strip().lower()
        if key and key not in seen:
            seen.add(key)
            clean_missing.append(keyword.strip())
    return clean_matched, clean_missing


class AnalysisOrchestrator:
    """Ask the oracle first, fall back to the deterministic pipeline on any failure.

    Every public method returns a complete result; oracle errors, timeouts,
    unparseable replies and schema mismatches never reach the caller.
    """

    def __init__(self, oracle: TextOracle, config: OrchestratorConfig | None = None):
        self._oracle = oracle
        self._config = config or OrchestratorConfig()

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    async def _attempt(self, task: str, prompt: str, model: type[P]) -> SchemaResult[P]:
        started = time.perf_counter()
        try:
            text = await asyncio.wait_for(self._oracle.generate(prompt), timeout=self._config.timeout_s)
        except asyncio.TimeoutError:
            outcome: SchemaResult[Any] = SchemaError(
                kind="timeout", reason=f"no reply within {self._config.timeout_s}s"
            )
        except OracleError as exc:
            outcome = SchemaError(kind=exc.code, reason=str(exc))
        except Exception as exc:  # noqa: BLE001 - any oracle failure routes to the fallback
            outcome = SchemaError(kind="oracle_exception", reason=f"{type(exc).__name__}: {exc}")
        else:
            try:
                outcome = parse_oracle_payload(text, model)
            except Exception as exc:  # noqa: BLE001 - decoder or validator failures route to the fallback
                outcome = SchemaError(kind="invalid_json", reason=f"{type(exc).__name__}: {exc}")

        latency_ms = int((time.perf_counter() - started) * 1000)
        if isinstance(outcome, SchemaError):
            logger.warning(
                "oracle_attempt_failed task=%s kind=%s latency_ms=%s reason=%s",
                task,
                outcome.kind,
                latency_ms,
                outcome.reason,
            )
        else:
            logger.info("oracle_attempt_ok task=%s latency_ms=%s", task, latency_ms)
        return outcome

    async def analyze_resume(self, resume_text: str) -> AnalysisResult:
        outcome = await self._attempt(
            "resume_analysis",
            build_resume_analysis_prompt(resume_text),
            ResumeAnalysisPayload,
        )
        if isinstance(outcome, SchemaOk):
            return AnalysisResult(**outcome.payload.model_dump())

        logger.info("resume_analysis_fallback kind=%s", outcome.kind)
        return degraded_resume_analysis(resume_text)

    async def check_ats_compatibility(self, resume_text: str, job_description: str) -> ATSCompatibilityResult:
        outcome = await self._attempt(
            "ats_compatibility",
            build_ats_compatibility_prompt(resume_text, job_description),
            ATSCompatibilityPayload,
        )
        if isinstance(outcome, SchemaOk):
            payload = outcome.payload
            matched, missing = _disjoint(payload.matched_keywords, payload.missing_keywords)
            return ATSCompatibilityResult(
                ats_score=payload.ats_score,
                match_percentage=payload.match_percentage,
                matched_keywords=matched[: self._config.matched_cap],
                missing_keywords=missing[: self._config.missing_cap],
                recommendations=payload.recommendations,
                summary=payload.summary,
            )

        logger.info("ats_compatibility_fallback kind=%s", outcome.kind)
        return degraded_ats_compatibility(resume_text, job_description)

    async def validate_is_resume(self, text: str) -> ResumeValidity:
        """Fail open: an unreachable or confused oracle never blocks an upload."""
        outcome = await self._attempt(
            "resume_validity",
            build_resume_validity_prompt(text, self._config.validation_prompt_chars),
            ResumeValidityPayload,
        )
        if isinstance(outcome, SchemaError):
            return fail_open_validity()

        payload = outcome.payload
        verdict = ResumeValidity(
            is_valid=payload.is_resume and payload.confidence >= self._config.min_confidence,
            confidence=payload.confidence,
            reason=payload.reason,
        )
        logger.info(
            "resume_validity_checked is_resume=%s confidence=%s is_valid=%s",
            payload.is_resume,
            payload.confidence,
            verdict.is_valid,
        )
        return verdict
