# src/taskmind/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts connectors:
- console REPL in the main thread (optional),
- web API (foreground when the console is off, background thread otherwise).
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.web_connector import WebBackgroundRunner, run_web_server, start_web_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    if not settings.console_enabled:
        if not settings.web_enabled:
            logger.warning("Both console and web connectors are disabled; nothing to do.")
            return
        run_web_server(state)
        logger.info("Bye.")
        return

    web_runner: WebBackgroundRunner | None = None
    if settings.web_enabled:
        web_runner = start_web_in_background(state)

    try:
        run_console_loop(state)
    finally:
        if web_runner is not None:
            web_runner.stop()
            web_runner.join(timeout=10.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
