from app.ai.providers.openai_provider import OpenAIProvider

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class GeminiProvider(OpenAIProvider):
    """Gemini through its OpenAI-compatible endpoint."""

    def default_base_url(self) -> str | None:
        return GEMINI_OPENAI_BASE_URL
