# src/taskmind/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.state import AppState
from .task_models import Priority, Task, TaskStatus

logger = logging.getLogger(__name__)


def urgent_active_tasks(tasks: Iterable[Task]) -> list[Task]:
    """The urgent-alert view: active tasks with priority == urgent, in list order."""
    return [t for t in tasks if t.priority is Priority.URGENT and t.status is TaskStatus.ACTIVE]


def active_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [t for t in tasks if t.status is TaskStatus.ACTIVE]


def reload_tasks(state: AppState) -> list[Task]:
    """Replace the cached task list with a fresh, newest-first copy from the store."""
    state.tasks = list(state.task_store.list_tasks())
    logger.debug("Reloaded %d tasks", len(state.tasks))
    return state.tasks
