from app.ai.types import OracleError


class DisabledOracle:
    def __init__(self, reason: str = "AI provider is not configured"):
        self._reason = reason

    async def generate(self, prompt: str) -> str:
        raise OracleError(self._reason, code="oracle_disabled")
