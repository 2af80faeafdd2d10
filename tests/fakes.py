# tests/fakes.py

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field, replace

from taskmind.tasks.task_models import ClassificationRecord, Priority, Task, TaskStatus, Workflow


class FakeLLMClient:
    """
    Deterministic LLM client for unit tests.

    - Captures calls for assertions
    - Returns a predefined text, or raises `error` if set
    """

    def __init__(self, next_text: str = "{}", error: Exception | None = None) -> None:
        self.next_text = next_text
        self.error = error
        self.calls: list[tuple[str, int, float]] = []

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        self.calls.append((prompt, max_tokens, temperature))
        if self.error is not None:
            raise self.error
        return self.next_text


def make_task(
    task_id: str,
    title: str,
    *,
    workflow: Workflow = Workflow.PERSONAL,
    priority: Priority = Priority.NORMAL,
    status: TaskStatus = TaskStatus.ACTIVE,
    created_at: float | None = None,
) -> Task:
    return Task(
        id=task_id,
        title=title,
        description=title,
        workflow=workflow,
        priority=priority,
        status=status,
        created_at=time.time() if created_at is None else created_at,
    )


@dataclass
class FakeTaskRepo:
    """
    In-memory TaskRepo with caller-chosen ids ("t1", ...).

    This avoids SQLite and keeps orchestration tests about decisions and
    transitions only.
    """

    tasks: dict[str, Task] = field(default_factory=dict)
    records: list[ClassificationRecord] = field(default_factory=list)
    fail_writes: Exception | None = None
    complete_calls: list[str] = field(default_factory=list)

    @classmethod
    def with_tasks(cls, *tasks: Task) -> FakeTaskRepo:
        return cls(tasks={t.id: t for t in tasks})

    def list_tasks(self, status=None) -> list[Task]:
        out = [t for t in self.tasks.values() if status is None or t.status == status]
        return sorted(out, key=lambda t: t.created_at, reverse=True)

    def get_task(self, task_id: str) -> Task | None:
        return self.tasks.get(task_id)

    def create_task(self, *, title, description, workflow, priority) -> Task:
        if self.fail_writes is not None:
            raise self.fail_writes
        task = Task(
            id=uuid.uuid4().hex,
            title=title,
            description=description,
            workflow=Workflow(workflow),
            priority=Priority(priority),
            status=TaskStatus.ACTIVE,
            created_at=time.time(),
        )
        self.tasks[task.id] = task
        return task

    def complete_task(self, task_id: str) -> None:
        if self.fail_writes is not None:
            raise self.fail_writes
        self.complete_calls.append(task_id)
        t = self.tasks.get(task_id)
        if t is None or t.status is TaskStatus.COMPLETED:
            return
        self.tasks[task_id] = replace(t, status=TaskStatus.COMPLETED, completed_at=time.time())

    def record_classification(self, *, input_text, response, context_type="task_processing") -> int:
        rec = ClassificationRecord(
            id=len(self.records) + 1,
            input=input_text,
            response=response,
            context_type=context_type,
            created_at=time.time(),
        )
        self.records.append(rec)
        return rec.id

    def count_classifications(self) -> int:
        return len(self.records)

    def list_classifications(self, limit: int = 20) -> list[ClassificationRecord]:
        return list(reversed(self.records))[:limit]
