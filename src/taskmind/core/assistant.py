# src/taskmind/core/assistant.py

"""
One user submission, end to end:

    classify -> apply decision to the store -> reload the task list -> status message

Classification problems never fail the submission (the classifier falls back to
a default task). Store problems are logged and reported in the status message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..classifier.decision import CompleteDecision, CreateDecision, Decision
from ..classifier.intent import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, classify_with_fallback
from ..tasks.task_api import reload_tasks
from ..tasks.task_models import Task, TaskStatus
from .state import AppState

logger = logging.getLogger(__name__)


class AssistantBusyError(RuntimeError):
    """Another submission is still being processed."""


@dataclass(slots=True)
class ProcessResult:
    decision: Decision | None = None
    # Classification error text when `decision` is the fallback default.
    error: str | None = None
    message: str | None = None
    applied: bool = False
    created_task: Task | None = None
    skipped: bool = False


def _apply_decision(state: AppState, decision: Decision, active_ids: set[str]) -> ProcessResult:
    if isinstance(decision, CompleteDecision):
        if decision.task_id not in active_ids:
            logger.info("Completion for unknown/inactive task id=%s ignored", decision.task_id)
            return ProcessResult(
                decision=decision,
                message="No matching active task found; nothing was completed.",
            )
        state.task_store.complete_task(decision.task_id)
        return ProcessResult(decision=decision, applied=True, message="Task marked as completed!")

    if isinstance(decision, CreateDecision):
        draft = decision.task
        task = state.task_store.create_task(
            title=draft.title,
            description=draft.description,
            workflow=draft.workflow,
            priority=draft.priority,
        )
        return ProcessResult(
            decision=decision,
            applied=True,
            created_task=task,
            message=f"Created new {draft.priority.value} task in {draft.workflow.value}!",
        )

    raise TypeError(f"Unsupported decision: {decision!r}")


def process_input(state: AppState, text: str) -> ProcessResult:
    """
    Handle one submission. Only one may run at a time per AppState;
    an overlapping call raises AssistantBusyError.
    """
    # The raw text is classified and stored as typed; stripping only decides
    # whether there is anything to submit.
    user_input = text or ""
    if not user_input.strip():
        return ProcessResult(skipped=True)

    if not state.submit_lock.acquire(blocking=False):
        raise AssistantBusyError("Another request is still being processed.")

    try:
        try:
            result = _classify_and_apply(state, user_input)
        except Exception as e:
            logger.exception("Submission failed (input=%r)", user_input[:80])
            result = ProcessResult(message=f"Error: {e}")

        try:
            reload_tasks(state)
        except Exception as e:
            logger.exception("Failed to reload tasks.")
            if result.message is None or not result.message.startswith("Error:"):
                result.message = f"Error: {e}"

        if result.message:
            state.set_status(result.message)
        return result
    finally:
        state.submit_lock.release()


def _classify_and_apply(state: AppState, user_input: str) -> ProcessResult:
    active = state.task_store.list_tasks(TaskStatus.ACTIVE)
    settings = state.settings

    outcome = classify_with_fallback(
        user_input,
        active,
        llm=state.llm,
        log=state.task_store,
        max_tokens=int(getattr(settings, "llm_max_tokens", DEFAULT_MAX_TOKENS)),
        temperature=float(getattr(settings, "llm_temperature", DEFAULT_TEMPERATURE)),
    )

    result = _apply_decision(state, outcome.decision, {t.id for t in active})
    result.error = outcome.error
    return result


def complete_task_by_id(state: AppState, task_id: str) -> list[Task]:
    """Direct completion (urgent panel check button): complete, then reload."""
    state.task_store.complete_task(task_id)
    return reload_tasks(state)
