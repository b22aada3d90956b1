from typing import Protocol


class OracleError(RuntimeError):
    def __init__(self, message: str, *, code: str = "oracle_unavailable"):
        super().__init__(message)
        self.code = code


class TextOracle(Protocol):
    """Single-shot text completion: one prompt in, free-form text out."""

    async def generate(self, prompt: str) -> str: ...
