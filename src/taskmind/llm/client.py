# src/taskmind/llm/client.py

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import httpx
import openai
from openai import OpenAI

logger = logging.getLogger(__name__)

# How long a model that answered 404 is skipped.
BAD_MODEL_COOLDOWN_SECONDS = 3600.0


class LLMError(RuntimeError):
    """Completion failed on every configured model (or was not configured)."""


def _is_auth_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return True
    return exc.__class__.__name__ in {"UnauthorizedError"}


def _is_rate_limit_error(exc: Exception) -> bool:
    if isinstance(exc, openai.RateLimitError):
        return True
    return exc.__class__.__name__ in {"TooManyRequestsError"}


def _is_connection_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.APIConnectionError, httpx.TimeoutException)):
        return True
    return exc.__class__.__name__ in {"Timeout", "ConnectTimeout", "ReadTimeout", "WriteTimeout"}


def _is_not_found_error(exc: Exception) -> bool:
    return isinstance(exc, openai.NotFoundError)


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM API key is not set" in msg:
        return "LLM is not configured (missing API key). Set TASKMIND_OPENROUTER_API_KEY in .env."
    if "LLM model list is empty" in msg:
        return "LLM is not configured (no models). Set TASKMIND_LLM_MODELS in .env."
    if "LLM base URL is not set" in msg:
        return "LLM is not configured (missing base URL). Set TASKMIND_OPENROUTER_BASE_URL in .env."
    return msg


def _message_text(completion: Any) -> str:
    try:
        content = completion.choices[0].message.content
    except (AttributeError, IndexError, TypeError):
        return ""
    return content or ""


class OpenRouterLLMClient:
    """
    OpenAI-compatible completion client (OpenRouter by default).

    Behavior:
    - Tries models in the order from settings (TASKMIND_LLM_MODELS).
    - 404 (model not available) -> remember for an hour, try next.
    - Rate limit / network issues / empty output -> try next.
    - Auth issues -> fail fast (no retries across models).
    - The SDK's own retries are disabled; one request per model.
    """

    def __init__(self, settings: Any) -> None:
        api_key = getattr(settings, "openrouter_api_key", None)
        base_url = getattr(settings, "openrouter_base_url", "") or ""

        if not api_key or not str(api_key).strip():
            raise LLMError("LLM API key is not set. Set TASKMIND_OPENROUTER_API_KEY in your .env.")
        if not base_url.strip():
            raise LLMError("LLM base URL is not set. Set TASKMIND_OPENROUTER_BASE_URL in your .env.")

        self._models: List[str] = [
            m.strip() for m in (getattr(settings, "llm_models", []) or []) if m and m.strip()
        ]
        self._headers: Dict[str, str] = dict(getattr(settings, "extra_headers", {}) or {})
        self._bad_models: dict[str, float] = {}  # model -> retry_at (monotonic)

        connect_s = float(getattr(settings, "llm_connect_timeout_seconds", 5.0))
        read_s = float(getattr(settings, "llm_read_timeout_seconds", 30.0))
        self._client = OpenAI(
            base_url=str(base_url),
            api_key=str(api_key),
            timeout=httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s),
            max_retries=0,
        )

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        if not self._models:
            raise LLMError("LLM model list is empty. Set TASKMIND_LLM_MODELS in your .env.")

        last_error: Optional[Exception] = None
        now = time.monotonic()

        for model in self._models:
            retry_at = self._bad_models.get(model)
            if retry_at is not None and retry_at > now:
                continue

            logger.info("LLM: trying model=%s", model)
            t0 = time.monotonic()
            try:
                completion = self._client.chat.completions.create(
                    model=model,
                    max_tokens=int(max_tokens),
                    temperature=float(temperature),
                    messages=[{"role": "user", "content": prompt}],
                    extra_headers=self._headers or None,
                )
            except Exception as e:
                last_error = e

                if _is_auth_error(e):
                    raise LLMError(
                        "LLM authentication failed. Check your API key (TASKMIND_OPENROUTER_API_KEY)."
                    ) from e

                if _is_not_found_error(e):
                    self._bad_models[model] = time.monotonic() + BAD_MODEL_COOLDOWN_SECONDS
                    logger.info("LLM: model not available (404): %s", model)
                    continue

                if _is_rate_limit_error(e):
                    logger.info("LLM: rate-limited on model=%s, trying next", model)
                    continue

                if _is_connection_error(e):
                    logger.info("LLM: network/timeout error on model=%s, trying next", model)
                    continue

                logger.info("LLM: error on model=%s (%s), trying next", model, e.__class__.__name__)
                continue

            text = _message_text(completion)
            if text.strip():
                logger.info("LLM: answer from model=%s (%.2fs)", model, time.monotonic() - t0)
                return text

            last_error = LLMError(f"Model returned no content: {model}")

        if last_error is not None:
            if _is_rate_limit_error(last_error):
                raise LLMError("LLM is rate-limited. Try again later.") from last_error
            if _is_connection_error(last_error):
                raise LLMError("LLM network/timeout error. Try again later or change models.") from last_error
            raise LLMError("All LLM models failed.") from last_error

        raise LLMError("All LLM models failed.")
