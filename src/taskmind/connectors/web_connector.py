# src/taskmind/connectors/web_connector.py

from __future__ import annotations

import logging
import threading

import uvicorn

from ..core.state import AppState
from ..web.app import create_app

logger = logging.getLogger(__name__)


def _build_server(state: AppState) -> uvicorn.Server:
    settings = state.settings
    config = uvicorn.Config(
        create_app(state),
        host=str(getattr(settings, "web_host", "127.0.0.1")),
        port=int(getattr(settings, "web_port", 8000)),
        log_config=None,  # keep our logging_setup handlers
    )
    return uvicorn.Server(config)


def run_web_server(state: AppState) -> None:
    """Serve the HTTP API in the current thread until interrupted."""
    server = _build_server(state)
    logger.info("Web API listening on http://%s:%s", server.config.host, server.config.port)
    server.run()


class WebBackgroundRunner:
    """uvicorn in a daemon thread, used when the console runs in the foreground."""

    def __init__(self, state: AppState) -> None:
        # uvicorn skips signal handler installation outside the main thread.
        self._server = _build_server(state)
        self._thread = threading.Thread(target=self._server.run, name="web", daemon=True)

    def start(self) -> None:
        logger.info(
            "Web API starting in background on http://%s:%s",
            self._server.config.host,
            self._server.config.port,
        )
        self._thread.start()

    def stop(self) -> None:
        self._server.should_exit = True

    def join(self, timeout: float | None = None) -> None:
        self._thread.join(timeout=timeout)


def start_web_in_background(state: AppState) -> WebBackgroundRunner:
    runner = WebBackgroundRunner(state)
    runner.start()
    return runner
