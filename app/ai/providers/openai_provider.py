from __future__ import annotations

from openai import APIStatusError, APITimeoutError, AsyncOpenAI, OpenAIError

from app.ai.config import AIConfig
from app.ai.types import OracleError


class OpenAIProvider:
    def __init__(self, config: AIConfig, *, client: AsyncOpenAI | None = None):
        if not config.api_key and client is None:
            raise OracleError("API key is missing", code="oracle_disabled")
        self._model = config.model
        self._temperature = config.temperature
        # one attempt per request; the orchestrator falls back instead of retrying
        self._client = client or AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url or self.default_base_url(),
            timeout=config.timeout_s,
            max_retries=0,
        )

    def default_base_url(self) -> str | None:
        return None

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._temperature,
            )
        except APITimeoutError as exc:
            raise OracleError(str(exc), code="timeout") from exc
        except APIStatusError as exc:
            raise OracleError(f"oracle returned HTTP {exc.status_code}", code="http_error") from exc
        except OpenAIError as exc:
            raise OracleError(str(exc), code="oracle_error") from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise OracleError("oracle returned an empty response", code="empty_response")
        return str(content)
