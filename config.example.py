# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Put them in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKMIND_APP_NAME": "App display name (default: taskmind).",
    "TASKMIND_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "TASKMIND_CONSOLE_ENABLED": "Run the interactive console (true/false, default: false).",
    "TASKMIND_WEB_ENABLED": "Serve the HTTP API (true/false, default: true).",
    # Web
    "TASKMIND_WEB_HOST": "Bind address for the HTTP API (default: 127.0.0.1).",
    "TASKMIND_WEB_PORT": "Port for the HTTP API (default: 8000).",
    "TASKMIND_API_TOKEN": "If set, /api routes require 'Authorization: Bearer <token>'.",
    # LLM / OpenRouter
    "TASKMIND_OPENROUTER_API_KEY": "OpenRouter API key. Without it every input gets the default classification.",
    "TASKMIND_OPENROUTER_BASE_URL": "OpenAI-compatible base URL (default: https://openrouter.ai/api/v1).",
    "TASKMIND_LLM_MODELS": "Comma/space separated list of models to try in order.",
    "TASKMIND_LLM_MAX_TOKENS": "Output budget for one classification (default: 300).",
    "TASKMIND_LLM_TEMPERATURE": "Sampling temperature (default: 0.3).",
    "TASKMIND_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "TASKMIND_LLM_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 30).",
    "TASKMIND_HTTP_REFERER": "Optional OpenRouter metadata header.",
    "TASKMIND_APP_TITLE": "Optional OpenRouter metadata header title.",
    # Paths (gitignored)
    "TASKMIND_DATA_DIR": "Local data directory for the DB and log file (default: .local/taskmind).",
    "TASKMIND_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    # UI
    "TASKMIND_STATUS_MESSAGE_SECONDS": "How long a status message stays visible (default: 5).",
}
