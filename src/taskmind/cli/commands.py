# src/taskmind/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.assistant import complete_task_by_id
from ..core.state import AppState
from ..tasks.task_api import active_tasks, reload_tasks, urgent_active_tasks
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_ts(ts: float) -> str:
    return datetime.fromtimestamp(ts).astimezone().strftime("%Y-%m-%d %H:%M")


def format_task(task: Task) -> str:
    mark = "x" if not task.is_active else " "
    return (
        f"[{mark}] {task.title} ({task.workflow.value}, {task.priority.value}) "
        f"id={task.id} created={_fmt_ts(task.created_at)}"
    )


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    models = ", ".join(list(getattr(state.settings, "llm_models", []) or []))
    tasks = state.tasks
    last = state.current_status() or "-"
    return (
        "Status:\n"
        f"  Last message: {last}\n"
        f"  Tasks: {len(tasks)} total, {len(active_tasks(tasks))} active, "
        f"{len(urgent_active_tasks(tasks))} urgent\n"
        f"  Classifier log entries: {state.task_store.count_classifications()}\n"
        f"  Models (priority -> fallback): {models}"
    )


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """
    /tasks      -> all tasks, newest first
    /tasks all  -> same
    /tasks active
    """
    tasks = reload_tasks(state)
    if args and args[0].lower() == "active":
        tasks = active_tasks(tasks)
    if not tasks:
        return "No tasks."
    lines = [f"All Tasks ({len(active_tasks(state.tasks))} active):"]
    lines.extend(format_task(t) for t in tasks)
    return "\n".join(lines)


def cmd_urgent(state: AppState, args: list[str]) -> str:
    urgent = urgent_active_tasks(reload_tasks(state))
    if not urgent:
        return "No urgent tasks."
    lines = ["URGENT TASKS:"]
    lines.extend(f"  {t.title} [{t.workflow.value}] id={t.id}" for t in urgent)
    return "\n".join(lines)


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <task id>"
    task_id = args[0]
    task = state.task_store.get_task(task_id)
    if task is None:
        return f"No task with id={task_id}."
    complete_task_by_id(state, task_id)
    logger.debug("Task completed from console id=%s", task_id)
    return f"Task '{task.title}' marked as completed."


def cmd_log(state: AppState, args: list[str]) -> str:
    """/log [n] -> last n classifier exchanges (default 5)."""
    try:
        limit = int(args[0]) if args else 5
    except ValueError:
        return "Usage: /log [n]"
    records = state.task_store.list_classifications(limit=max(1, limit))
    if not records:
        return "Classifier log is empty."
    lines = ["Recent classifications:"]
    for r in records:
        lines.append(f"  {_fmt_ts(r.created_at)} {r.input!r} -> {r.response}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task counts and configured models.")
registry.register("tasks", cmd_tasks, help_text="List tasks: /tasks | /tasks active.", aliases=["ls"])
registry.register("urgent", cmd_urgent, help_text="Show urgent active tasks.")
registry.register("done", cmd_done, help_text="Complete a task by id: /done <id>.")
registry.register("log", cmd_log, help_text="Show recent classifier exchanges: /log [n].")
