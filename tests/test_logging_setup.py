# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskmind.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("taskmind.core.assistant", logging.DEBUG, True),
        ("uvicorn.error", logging.INFO, True),
        ("uvicorn.access", logging.INFO, False),
        ("uvicorn.access", logging.WARNING, True),
        ("httpx", logging.INFO, False),
        ("httpx", logging.ERROR, True),
        ("py.warnings", logging.WARNING, False),
        ("taskmindish", logging.INFO, False),
    ],
)
def test_console_filter(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown


def test_setup_logging_writes_file_and_replaces_handlers(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers)
    saved_level = root.level
    try:
        setup_logging(log_dir=tmp_path)
        log_file = setup_logging(log_dir=tmp_path)
        assert len(root.handlers) == 2

        logging.getLogger("taskmind.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
