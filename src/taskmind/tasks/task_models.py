# src/taskmind/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Workflow(StrEnum):
    """Fixed workflow categories a task belongs to."""

    DISTRIBUTED = "Distributed"
    KONFIDANTS = "Konfidants"
    CAREER_WHEEL = "Career Wheel"
    PERSONAL = "Personal"


class Priority(StrEnum):
    URGENT = "urgent"
    IMPORTANT = "important"
    NORMAL = "normal"


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    A task starts ACTIVE and may move to COMPLETED exactly once; there is no
    way back.
    """

    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        # Unreadable rows are an error, never silently reopened.
        try:
            return cls(raw)
        except ValueError as e:
            raise ValueError(f"Unknown task status in store: {raw!r}") from e


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    workflow: Workflow
    priority: Priority
    status: TaskStatus
    created_at: float
    completed_at: float | None = None

    @property
    def is_active(self) -> bool:
        return self.status is TaskStatus.ACTIVE

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "workflow": self.workflow.value,
            "priority": self.priority.value,
            "status": self.status.value,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
        }


@dataclass(frozen=True, slots=True)
class ClassificationRecord:
    id: int
    input: str
    response: str
    context_type: str
    created_at: float
