# tests/test_intent.py

from __future__ import annotations

import json

import pytest

from taskmind.classifier.decision import ClassificationError, CompleteDecision, CreateDecision, DecisionError
from taskmind.classifier.intent import classify, classify_with_fallback
from taskmind.classifier.prompt import build_classify_prompt, render_active_tasks
from taskmind.llm.client import LLMError
from taskmind.tasks.task_models import Priority, Workflow

from .fakes import FakeLLMClient, FakeTaskRepo, make_task

ISO_TASK = make_task("t1", "ISO review", workflow=Workflow.DISTRIBUTED)


def test_render_active_tasks_uses_none_sentinel() -> None:
    assert render_active_tasks([]) == "None"


def test_render_active_tasks_lists_id_title_workflow_priority() -> None:
    rendered = render_active_tasks([ISO_TASK])
    assert rendered == "- ID: t1, Title: ISO review, Workflow: Distributed, Priority: normal"


def test_prompt_carries_categories_priorities_and_completion_cues() -> None:
    prompt = build_classify_prompt("Done with ISO review", [ISO_TASK])

    assert 'User input: "Done with ISO review"' in prompt
    assert "- ID: t1, Title: ISO review" in prompt
    assert "- Distributed: iso, project, pmo, tempo, vendor, billing, wiki" in prompt
    assert "- Konfidants: employee, consulting, client, crm, proposal" in prompt
    assert "- Career Wheel: coaching, wheeler, career, dashboard, mentor" in prompt
    assert "- Personal: home, gym, date, anniversary, council, tv" in prompt
    assert '- urgent: contains "urgent", "asap", "emergency", "immediately"' in prompt
    assert '- important: contains "important", "priority", "should"' in prompt
    assert "- normal: everything else" in prompt
    for word in ("done", "finished", "completed", "sorted"):
        assert f'"{word}"' in prompt
    assert '{"action": "complete", "taskId": "EXACT_TASK_ID_FROM_LIST"}' in prompt
    assert prompt.endswith("Only respond with valid JSON. No additional text.")


def test_prompt_for_empty_task_list() -> None:
    prompt = build_classify_prompt("gym tonight", [])
    assert "Current active tasks:\nNone\n" in prompt


def test_classify_uses_low_temperature_and_short_budget() -> None:
    llm = FakeLLMClient('{"action": "complete", "taskId": "t1"}')

    classify("Done with ISO review", [ISO_TASK], llm=llm, max_tokens=300, temperature=0.3)

    (_, max_tokens, temperature), = llm.calls
    assert max_tokens == 300
    assert temperature == 0.3


def test_classify_records_successful_decision() -> None:
    llm = FakeLLMClient('{"action": "complete", "taskId": "t1"}')
    log = FakeTaskRepo()

    decision = classify("Done with ISO review", [ISO_TASK], llm=llm, log=log)

    assert decision == CompleteDecision(task_id="t1")
    (rec,) = log.records
    assert rec.input == "Done with ISO review"
    assert json.loads(rec.response) == {"action": "complete", "taskId": "t1"}
    assert rec.context_type == "task_processing"


def test_classify_raises_on_bad_output() -> None:
    with pytest.raises(DecisionError):
        classify("hi", [], llm=FakeLLMClient("not json"))


def test_classify_wraps_llm_failures() -> None:
    with pytest.raises(ClassificationError, match="rate-limited"):
        classify("hi", [], llm=FakeLLMClient(error=LLMError("LLM is rate-limited. Try again later.")))


def test_create_decision_for_urgent_client_meeting() -> None:
    llm = FakeLLMClient(
        json.dumps(
            {
                "action": "create",
                "task": {
                    "title": "Client meeting",
                    "description": "Urgent client meeting needed",
                    "workflow": "Konfidants",
                    "priority": "urgent",
                },
            }
        )
    )

    outcome = classify_with_fallback("Urgent client meeting needed", [], llm=llm)

    assert not outcome.degraded
    assert isinstance(outcome.decision, CreateDecision)
    assert outcome.decision.task.workflow is Workflow.KONFIDANTS
    assert outcome.decision.task.priority is Priority.URGENT


@pytest.mark.parametrize(
    "llm",
    [
        FakeLLMClient("I think you finished the ISO review!"),
        FakeLLMClient('{"action": "create", "task": {"title": "x", "workflow": "Work", "priority": "normal"}}'),
        FakeLLMClient(error=LLMError("All LLM models failed.")),
        FakeLLMClient(error=ConnectionError("connection reset")),
    ],
)
def test_any_failure_falls_back_to_personal_normal(llm: FakeLLMClient) -> None:
    text = "Remember to call the plumber about the kitchen sink before Friday afternoon"
    log = FakeTaskRepo()

    outcome = classify_with_fallback(text, [ISO_TASK], llm=llm, log=log)

    assert outcome.degraded
    assert outcome.error
    assert isinstance(outcome.decision, CreateDecision)
    assert outcome.decision.task.title == text[:50]
    assert outcome.decision.task.description == text
    assert outcome.decision.task.workflow is Workflow.PERSONAL
    assert outcome.decision.task.priority is Priority.NORMAL

    (rec,) = log.records
    payload = json.loads(rec.response)
    assert payload["action"] == "create"
    assert payload["error"] == outcome.error


def test_log_failure_does_not_break_classification() -> None:
    class BrokenLog:
        def record_classification(self, *, input_text, response, context_type="task_processing"):
            raise RuntimeError("disk full")

    outcome = classify_with_fallback(
        "Done with ISO review",
        [ISO_TASK],
        llm=FakeLLMClient('{"action": "complete", "taskId": "t1"}'),
        log=BrokenLog(),
    )
    assert outcome.decision == CompleteDecision(task_id="t1")
    assert outcome.error is None
