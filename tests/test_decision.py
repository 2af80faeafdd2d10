# tests/test_decision.py

from __future__ import annotations

import json

import pytest

from taskmind.classifier.decision import (
    CompleteDecision,
    CreateDecision,
    DecisionError,
    fallback_decision,
    parse_decision,
    serialize_decision,
)
from taskmind.tasks.task_models import Priority, Workflow


def test_parse_complete_decision() -> None:
    d = parse_decision('{"action": "complete", "taskId": "t1"}')
    assert d == CompleteDecision(task_id="t1")


def test_parse_complete_accepts_numeric_task_id() -> None:
    d = parse_decision('{"action": "complete", "taskId": 42}')
    assert d == CompleteDecision(task_id="42")


def test_parse_create_decision() -> None:
    raw = json.dumps(
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
    d = parse_decision(raw, user_input="Urgent client meeting needed")
    assert isinstance(d, CreateDecision)
    assert d.task.workflow is Workflow.KONFIDANTS
    assert d.task.priority is Priority.URGENT
    assert d.task.title == "Client meeting"


def test_create_without_description_uses_raw_input() -> None:
    raw = '{"action": "create", "task": {"title": "Gym", "workflow": "Personal", "priority": "normal"}}'
    d = parse_decision(raw, user_input="go to the gym tonight")
    assert isinstance(d, CreateDecision)
    assert d.task.description == "go to the gym tonight"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "Sure! Here is the JSON you asked for.",
        '```json\n{"action": "complete", "taskId": "t1"}\n```',
        "[]",
        '{"action": "delete", "taskId": "t1"}',
        '{"action": "complete"}',
        '{"action": "complete", "taskId": ""}',
        '{"action": "create"}',
        '{"action": "create", "task": {"title": "x", "workflow": "Work", "priority": "normal"}}',
        '{"action": "create", "task": {"title": "x", "workflow": "Personal", "priority": "high"}}',
        '{"action": "create", "task": {"title": "", "workflow": "Personal", "priority": "normal"}}',
    ],
)
def test_invalid_payloads_raise_decision_error(raw: str) -> None:
    with pytest.raises(DecisionError):
        parse_decision(raw, user_input="anything")


def test_fallback_truncates_title_to_50_chars() -> None:
    text = "x" * 49 + "yz and a lot more words after the cut"
    d = fallback_decision(text)
    assert d.task.title == text[:50]
    assert len(d.task.title) == 50
    assert d.task.description == text
    assert d.task.workflow is Workflow.PERSONAL
    assert d.task.priority is Priority.NORMAL


def test_serialize_matches_wire_format() -> None:
    assert json.loads(serialize_decision(CompleteDecision(task_id="t1"))) == {
        "action": "complete",
        "taskId": "t1",
    }
    payload = json.loads(serialize_decision(fallback_decision("hello"), error="boom"))
    assert payload == {
        "action": "create",
        "task": {
            "title": "hello",
            "description": "hello",
            "workflow": "Personal",
            "priority": "normal",
        },
        "error": "boom",
    }
