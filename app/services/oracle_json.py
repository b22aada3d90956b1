from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from app.schemas.oracle import P, SchemaError, SchemaOk, SchemaResult

_DECODER = json.JSONDecoder()


def extract_json_object(text: str | None) -> dict[str, Any] | None:
    """Return the first JSON object embedded anywhere in ``text``.

    Model replies often wrap the object in prose or code fences, so every
    ``{`` is tried as a starting point until one decodes to a mapping.
    """
    if not text:
        return None
    start = text.find("{")
    while start != -1:
        try:
            value, _end = _DECODER.raw_decode(text, start)
        except (ValueError, RecursionError):
            # JSONDecodeError, integer digit limit, or nesting too deep
            value = None
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    return None


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors()[:5]:
        location = ".".join(str(item) for item in error.get("loc", ())) or "<root>"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_oracle_payload(text: str | None, model: type[P]) -> SchemaResult[P]:
    if not text or not text.strip():
        return SchemaError(kind="empty_response", reason="oracle returned no text")
    if "{" not in text:
        return SchemaError(kind="no_json", reason="no JSON object in oracle response")

    candidate = extract_json_object(text)
    if candidate is None:
        return SchemaError(kind="invalid_json", reason="could not decode a JSON object from oracle response")

    try:
        payload = model.model_validate(candidate)
    except ValidationError as exc:
        return SchemaError(kind="schema_mismatch", reason=_describe(exc))
    return SchemaOk(payload=payload)
