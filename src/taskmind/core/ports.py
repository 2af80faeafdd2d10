# src/taskmind/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the store and the LLM provider swappable and makes testing easier.
"""

from __future__ import annotations

from typing import Any, Protocol


class LLMClient(Protocol):
    """Single-shot text completion client (OpenAI/OpenRouter-compatible)."""

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str: ...


class ClassificationLog(Protocol):
    """Append-only audit trail of classifier exchanges."""

    def record_classification(
        self,
        *,
        input_text: str,
        response: str,
        context_type: str = ...,
    ) -> int: ...


class TaskRepo(ClassificationLog, Protocol):
    def list_tasks(self, status: Any | None = None) -> list[Any]: ...
    def get_task(self, task_id: str) -> Any | None: ...

    def create_task(
        self,
        *,
        title: str,
        description: str,
        workflow: Any,
        priority: Any,
    ) -> Any: ...

    def complete_task(self, task_id: str) -> None: ...

    # Diagnostics (console /status, /log)
    def count_classifications(self) -> int: ...
    def list_classifications(self, limit: int = 20) -> list[Any]: ...
