# src/taskmind/classifier/prompt.py

from __future__ import annotations

from collections.abc import Iterable

from ..tasks.task_models import Task

WORKFLOW_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Distributed": ("iso", "project", "pmo", "tempo", "vendor", "billing", "wiki"),
    "Konfidants": ("employee", "consulting", "client", "crm", "proposal"),
    "Career Wheel": ("coaching", "wheeler", "career", "dashboard", "mentor"),
    "Personal": ("home", "gym", "date", "anniversary", "council", "tv"),
}

WORKFLOW_DESCRIPTIONS: dict[str, str] = {
    "Distributed": "PMO & Operations",
    "Konfidants": "Strategic Consulting",
    "Career Wheel": "M&E Coaching",
    "Personal": "",
}

PRIORITY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "urgent": ("urgent", "asap", "emergency", "immediately"),
    "important": ("important", "priority", "should"),
}

COMPLETION_WORDS: tuple[str, ...] = ("done", "finished", "completed", "sorted")

CLASSIFY_PROMPT_TEMPLATE = """
You are an ADHD-friendly task management AI assistant.

Current active tasks:
{active_tasks}

Available workflows: {workflows}

User input: "{user_input}"

Analyze if this input is:
1. Completing an existing task (look for completion words like {completion_words})
2. Creating a new task

If completing a task, match it to an existing task by keywords and respond with:
{{"action": "complete", "taskId": "EXACT_TASK_ID_FROM_LIST"}}

If creating a new task, determine the workflow based on keywords:
{workflow_rules}

Determine priority:
{priority_rules}
- normal: everything else

Respond with:
{{"action": "create", "task": {{"title": "brief title", "description": "full description", "workflow": "workflow name", "priority": "urgent|important|normal"}}}}

Only respond with valid JSON. No additional text.
""".strip()


def render_active_tasks(tasks: Iterable[Task]) -> str:
    lines = [
        f"- ID: {t.id}, Title: {t.title}, Workflow: {t.workflow.value}, Priority: {t.priority.value}"
        for t in tasks
    ]
    return "\n".join(lines) if lines else "None"


def _quoted(words: Iterable[str]) -> str:
    return ", ".join(f'"{w}"' for w in words)


def build_classify_prompt(user_input: str, active_tasks: Iterable[Task]) -> str:
    workflows = ", ".join(
        f"{name} ({desc})" if desc else name for name, desc in WORKFLOW_DESCRIPTIONS.items()
    )
    workflow_rules = "\n".join(
        f"- {name}: {', '.join(words)}" for name, words in WORKFLOW_KEYWORDS.items()
    )
    priority_rules = "\n".join(
        f"- {name}: contains {_quoted(words)}" for name, words in PRIORITY_KEYWORDS.items()
    )
    return CLASSIFY_PROMPT_TEMPLATE.format(
        active_tasks=render_active_tasks(active_tasks),
        workflows=workflows,
        user_input=user_input,
        completion_words=_quoted(COMPLETION_WORDS),
        workflow_rules=workflow_rules,
        priority_rules=priority_rules,
    )
