from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from app.core.config.scoring import get_scoring_value
from app.matching.tokenizer import tokenize


@dataclass(frozen=True)
class KeywordProfile:
    name: str
    pattern: str
    min_length: int
    min_frequency: int
    cap: int
    drop_numeric: bool
    stop_words: frozenset[str]


def _stop_word_groups(groups: Iterable[str]) -> frozenset[str]:
    words: set[str] = set()
    for group in groups:
        values = get_scoring_value(f"keywords.stop_words.{group}")
        if not isinstance(values, list):
            raise RuntimeError(f"Stop-word group '{group}' is missing from scoring config.")
        words.update(str(value).strip().lower() for value in values)
    return frozenset(words)


def load_keyword_profile(name: str) -> KeywordProfile:
    raw = get_scoring_value(f"keywords.profiles.{name}")
    if not isinstance(raw, dict):
        raise ValueError(f"Unknown keyword profile '{name}'.")
    return KeywordProfile(
        name=name,
        pattern=str(raw.get("pattern", "basic")),
        min_length=int(raw.get("min_length", 3)),
        min_frequency=int(raw.get("min_frequency", 1)),
        cap=int(raw.get("cap", 15)),
        drop_numeric=bool(raw.get("drop_numeric", False)),
        stop_words=_stop_word_groups(raw.get("stop_words") or []),
    )


def extract_keywords(
    tokens: Iterable[str],
    *,
    stop_words: frozenset[str] | set[str],
    min_length: int,
    min_frequency: int = 1,
    cap: int = 15,
    drop_numeric: bool = False,
) -> list[str]:
    """Rank tokens by frequency, most frequent first.

    Ties keep first-seen order: ``Counter`` preserves insertion order and
    ``sorted`` is stable.
    """
    counts: Counter[str] = Counter()
    for token in tokens:
        if len(token) < min_length or token in stop_words:
            continue
        if drop_numeric and token.isdigit():
            continue
        counts[token] += 1

    ranked = sorted(
        (item for item in counts.items() if item[1] >= min_frequency),
        key=lambda item: -item[1],
    )
    return [token for token, _count in ranked[: max(cap, 0)]]


def extract_document_keywords(text: str | None, profile: str | KeywordProfile) -> list[str]:
    resolved = load_keyword_profile(profile) if isinstance(profile, str) else profile
    return extract_keywords(
        tokenize(text, resolved.pattern),
        stop_words=resolved.stop_words,
        min_length=resolved.min_length,
        min_frequency=resolved.min_frequency,
        cap=resolved.cap,
        drop_numeric=resolved.drop_numeric,
    )
