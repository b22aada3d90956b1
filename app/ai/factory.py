import logging

from app.ai.config import AIConfig, load_ai_config
from app.ai.types import TextOracle

from app.ai.providers.disabled_provider import DisabledOracle
from app.ai.providers.gemini_provider import GeminiProvider
from app.ai.providers.openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)


def get_oracle(cfg: AIConfig | None = None) -> TextOracle:
    cfg = cfg or load_ai_config()

    if cfg.provider == "disabled":
        return DisabledOracle("AI provider disabled by configuration")

    if cfg.provider not in {"openai", "gemini"}:
        raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")

    if not cfg.api_key:
        logger.info("oracle_disabled provider=%s reason=missing_api_key", cfg.provider)
        return DisabledOracle(f"{cfg.provider} API key is missing")

    if cfg.provider == "openai":
        return OpenAIProvider(cfg)

    return GeminiProvider(cfg)
