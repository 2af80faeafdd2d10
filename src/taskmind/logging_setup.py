# src/taskmind/logging_setup.py

"""
Process-wide logging for taskmind.

stderr shows taskmind's own records plus uvicorn lifecycle lines; the
log file under the data directory keeps everything at DEBUG, including
classifier failures and store migrations.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskmind.log"

# Minimum level shown on stderr per logger name (exact name or dotted prefix).
# Loggers not listed only reach stderr at ERROR.
_CONSOLE_MIN_LEVELS: dict[str, int] = {
    "taskmind": logging.NOTSET,
    "uvicorn.access": logging.WARNING,
    "uvicorn": logging.INFO,
}


def _console_min_level(name: str) -> int:
    best = ""
    for prefix in _CONSOLE_MIN_LEVELS:
        if (name == prefix or name.startswith(prefix + ".")) and len(prefix) > len(best):
            best = prefix
    return _CONSOLE_MIN_LEVELS[best] if best else logging.ERROR


class _ConsoleNoiseFilter(logging.Filter):
    """Drops per-request access lines and third-party chatter from stderr."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= _console_min_level(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskmind",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the stderr and file handlers on the root logger.

    Existing root handlers are replaced, so calling it again reconfigures
    rather than duplicating output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # warnings.warn(...) arrives as 'py.warnings' and is filtered like any other library.
    logging.captureWarnings(True)
    return log_file
