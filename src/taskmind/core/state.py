# src/taskmind/core/state.py

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import Task
from .ports import LLMClient, TaskRepo


@dataclass
class AppState:
    """
    Everything a request needs, built once by the composition root
    (cli/bootstrap.py) and passed in explicitly.
    """

    settings: Any
    llm: LLMClient
    task_store: TaskRepo

    # Last loaded task list; replaced wholesale on every reload.
    tasks: list[Task] = field(default_factory=list)

    # Last submission's status line; read through current_status().
    status_message: str | None = None
    status_expires_at: float = 0.0

    # Held for the whole classify -> mutate -> reload chain.
    submit_lock: threading.Lock = field(default_factory=threading.Lock)

    def set_status(self, message: str, *, now: float | None = None) -> None:
        if now is None:
            now = time.monotonic()
        ttl = float(getattr(self.settings, "status_message_seconds", 5.0))
        self.status_message = message
        self.status_expires_at = now + ttl

    def current_status(self, *, now: float | None = None) -> str | None:
        """The transient status message, or None once it has expired."""
        if self.status_message is None:
            return None
        if now is None:
            now = time.monotonic()
        if now >= self.status_expires_at:
            self.status_message = None
            return None
        return self.status_message
