# src/taskmind/llm/offline.py

from __future__ import annotations

from .client import LLMError


class OfflineLLMClient:
    """
    Stand-in used when no external API is configured.

    It never answers: every call fails with a configuration error, so the
    classifier falls back to its default "create a Personal/normal task" path.
    """

    def __init__(self, reason: str = "LLM API key is not set.") -> None:
        self.reason = reason

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        raise LLMError(self.reason)
