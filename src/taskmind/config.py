# src/taskmind/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASKMIND"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool
    web_enabled: bool

    # ---- Web ----
    web_host: str
    web_port: int
    api_token: Optional[str]

    # ---- LLM / OpenRouter ----
    openrouter_api_key: Optional[str]
    openrouter_base_url: str
    llm_models: List[str]
    extra_headers: Dict[str, str]
    llm_max_tokens: int
    llm_temperature: float
    llm_connect_timeout_seconds: float
    llm_read_timeout_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- UI ----
    status_message_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _first_env(_k("APP_NAME"), default=_env(_k("APP_TITLE"), "taskmind")) or "taskmind"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), False)
        web_enabled = _env_bool(_k("WEB_ENABLED"), True)

        web_host = _env(_k("WEB_HOST"), "127.0.0.1")
        web_port = _env_int(_k("WEB_PORT"), 8000)
        api_token = _first_env(_k("API_TOKEN"), default=None)

        openrouter_api_key = _first_env(_k("OPENROUTER_API_KEY"), "OPENROUTER_API_KEY", default=None)
        openrouter_base_url = _env(_k("OPENROUTER_BASE_URL"), "https://openrouter.ai/api/v1")

        http_referer = _env(_k("HTTP_REFERER"), "https://example.com")
        # Use explicit title header if provided; else fall back to app_name
        title = _env(_k("APP_TITLE"), app_name)

        extra_headers = {
            "HTTP-Referer": http_referer,
            "X-Title": title,
        }

        llm_models = _env_list(
            _k("LLM_MODELS"),
            [
                "anthropic/claude-3-haiku",
                "qwen/qwen-2.5-72b-instruct:free",
            ],
        )
        llm_max_tokens = _env_int(_k("LLM_MAX_TOKENS"), 300)
        llm_temperature = _env_float(_k("LLM_TEMPERATURE"), 0.3)
        llm_connect_timeout_seconds = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        llm_read_timeout_seconds = _env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 30.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskmind"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        status_message_seconds = _env_float(_k("STATUS_MESSAGE_SECONDS"), 5.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            web_enabled=web_enabled,
            web_host=web_host,
            web_port=web_port,
            api_token=api_token,
            openrouter_api_key=openrouter_api_key,
            openrouter_base_url=openrouter_base_url,
            llm_models=llm_models,
            extra_headers=extra_headers,
            llm_max_tokens=llm_max_tokens,
            llm_temperature=llm_temperature,
            llm_connect_timeout_seconds=llm_connect_timeout_seconds,
            llm_read_timeout_seconds=llm_read_timeout_seconds,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            status_message_seconds=status_message_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
