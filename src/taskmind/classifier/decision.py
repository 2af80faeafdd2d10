# src/taskmind/classifier/decision.py

"""
Classifier decisions and their wire format.

The model must answer with exactly one of:

    {"action": "complete", "taskId": "<id>"}
    {"action": "create", "task": {"title": ..., "description": ...,
                                  "workflow": ..., "priority": ...}}

Anything else is a DecisionError; callers replace it with fallback_decision().
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..tasks.task_models import Priority, Workflow

FALLBACK_TITLE_CHARS = 50


class ClassificationError(Exception):
    """The classifier could not produce a usable decision."""


class DecisionError(ClassificationError):
    """The model's answer is not valid JSON or matches neither decision shape."""


@dataclass(frozen=True, slots=True)
class TaskDraft:
    title: str
    description: str
    workflow: Workflow
    priority: Priority

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "workflow": self.workflow.value,
            "priority": self.priority.value,
        }


@dataclass(frozen=True, slots=True)
class CompleteDecision:
    task_id: str

    action = "complete"

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action, "taskId": self.task_id}


@dataclass(frozen=True, slots=True)
class CreateDecision:
    task: TaskDraft

    action = "create"

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action, "task": self.task.to_dict()}


Decision = CompleteDecision | CreateDecision


def serialize_decision(decision: Decision, *, error: str | None = None) -> str:
    payload = decision.to_dict()
    if error is not None:
        payload["error"] = error
    return json.dumps(payload, ensure_ascii=False)


def fallback_decision(user_input: str) -> CreateDecision:
    """Deterministic default used whenever classification fails."""
    return CreateDecision(
        task=TaskDraft(
            title=user_input[:FALLBACK_TITLE_CHARS],
            description=user_input,
            workflow=Workflow.PERSONAL,
            priority=Priority.NORMAL,
        )
    )


def _require_str(obj: dict[str, Any], key: str) -> str:
    val = obj.get(key)
    if not isinstance(val, str) or not val.strip():
        raise DecisionError(f"'{key}' must be a non-empty string")
    return val.strip()


def _parse_task_draft(raw_task: Any, user_input: str) -> TaskDraft:
    if not isinstance(raw_task, dict):
        raise DecisionError("'task' must be an object")

    title = _require_str(raw_task, "title")

    description = raw_task.get("description")
    if not isinstance(description, str) or not description.strip():
        description = user_input

    try:
        workflow = Workflow(raw_task.get("workflow"))
    except ValueError as e:
        raise DecisionError(f"unknown workflow: {raw_task.get('workflow')!r}") from e
    try:
        priority = Priority(raw_task.get("priority"))
    except ValueError as e:
        raise DecisionError(f"unknown priority: {raw_task.get('priority')!r}") from e

    return TaskDraft(title=title, description=description, workflow=workflow, priority=priority)


def decision_from_dict(data: Any, *, user_input: str = "") -> Decision:
    """Validate an already-decoded payload against the two decision shapes."""
    if not isinstance(data, dict):
        raise DecisionError("decision must be a JSON object")

    action = data.get("action")

    if action == "complete":
        task_id = data.get("taskId")
        # Models sometimes echo numeric ids without quotes.
        if isinstance(task_id, int) and not isinstance(task_id, bool):
            task_id = str(task_id)
        if not isinstance(task_id, str) or not task_id.strip():
            raise DecisionError("'taskId' must be a non-empty string")
        return CompleteDecision(task_id=task_id.strip())

    if action == "create":
        return CreateDecision(task=_parse_task_draft(data.get("task"), user_input))

    raise DecisionError(f"unknown action: {action!r}")


def parse_decision(raw: str, *, user_input: str = "") -> Decision:
    """Strictly parse model output text into a Decision."""
    text = (raw or "").strip()
    if not text:
        raise DecisionError("empty response")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecisionError(f"response is not valid JSON: {e.msg}") from e
    return decision_from_dict(data, user_input=user_input)
