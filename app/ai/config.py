import os
from dataclasses import dataclass

_DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}

_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str | None = None
    base_url: str | None = None
    timeout_s: float = 30.0
    temperature: float = 0.2


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def load_ai_config() -> AIConfig:
    provider = (os.getenv("AI_PROVIDER") or "gemini").strip().lower()
    model = (os.getenv("AI_MODEL") or _DEFAULT_MODELS.get(provider, "")).strip()
    key = (os.getenv(_KEY_ENV.get(provider, ""), "") or "").strip()
    if _looks_like_placeholder(key):
        key = ""
    return AIConfig(
        provider=provider,
        model=model,
        api_key=key or None,
        base_url=(os.getenv("AI_BASE_URL") or "").strip() or None,
        timeout_s=float(os.getenv("AI_TIMEOUT_S", "30")),
        temperature=float(os.getenv("AI_TEMPERATURE", "0.2")),
    )
