# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskmind.core.state import AppState
from taskmind.tasks.task_store import TaskStore

from .fakes import FakeLLMClient


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskmind-test",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        llm_models=["test/model-a", "test/model-b"],
        llm_max_tokens=300,
        llm_temperature=0.3,
        status_message_seconds=5.0,
        api_token=None,
    )


@pytest.fixture()
def llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def state(settings: SimpleNamespace, llm: FakeLLMClient, store: TaskStore) -> AppState:
    """
    AppState wired with a fake LLM.

    NOTE: We keep the real SQLite TaskStore here because its correctness is
    part of what we want to test.
    """
    return AppState(settings=settings, llm=llm, task_store=store)
