# src/taskmind/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.assistant import AssistantBusyError, process_input
from ..core.state import AppState
from ..tasks.task_api import reload_tasks, urgent_active_tasks

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _print_urgent(state: AppState) -> None:
    urgent = urgent_active_tasks(state.tasks)
    if not urgent:
        return
    _print_ts(f"URGENT TASKS ({len(urgent)}):")
    for t in urgent:
        print(f"    ! {t.title} [{t.workflow.value}] id={t.id}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Describe a task or say what you finished. Use /help for commands. Use /exit to quit.\n")

    try:
        reload_tasks(state)
    except Exception:
        logger.exception("Initial task load failed.")
    _print_urgent(state)

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            _print_ts(cmd_response)
            continue

        _print_ts("AI is thinking...")
        try:
            result = process_input(state, user_input)
        except AssistantBusyError as e:
            _print_ts(str(e))
            continue

        if result.error:
            _print_ts(f"[LLM] {result.error} (used default classification)")
        if result.message:
            _print_ts(result.message)
        _print_urgent(state)

    logger.info("Console connector finished.")
