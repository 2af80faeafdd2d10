# src/taskmind/classifier/intent.py

"""
Intent classifier.

Turns free-form text plus the current active tasks into a Decision by asking
the language model. Which task matches, which workflow fits and whether the
text is a completion at all is left to the model; nothing here overrides it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.ports import ClassificationLog, LLMClient
from ..llm.client import friendly_llm_error_message
from ..tasks.task_models import Task
from ..tasks.task_store import CONTEXT_TASK_PROCESSING
from .decision import (
    ClassificationError,
    Decision,
    DecisionError,
    fallback_decision,
    parse_decision,
    serialize_decision,
)
from .prompt import build_classify_prompt

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 300
DEFAULT_TEMPERATURE = 0.3


@dataclass(frozen=True, slots=True)
class ClassificationOutcome:
    decision: Decision
    # Set when the decision is the fallback default.
    error: str | None = None

    @property
    def degraded(self) -> bool:
        return self.error is not None


def _record(log: ClassificationLog | None, user_input: str, response: str) -> None:
    if log is None:
        return
    try:
        log.record_classification(
            input_text=user_input,
            response=response,
            context_type=CONTEXT_TASK_PROCESSING,
        )
    except Exception:
        logger.exception("Failed to record classification (input=%r)", user_input[:80])


def classify(
    user_input: str,
    active_tasks: Sequence[Task],
    *,
    llm: LLMClient,
    log: ClassificationLog | None = None,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    temperature: float = DEFAULT_TEMPERATURE,
) -> Decision:
    """
    Ask the model for a decision.

    Raises ClassificationError (DecisionError for bad payloads) on any failure.
    Successful decisions are recorded in `log` before returning.
    """
    prompt = build_classify_prompt(user_input, active_tasks)

    try:
        raw = llm.complete(prompt, max_tokens=max_tokens, temperature=temperature)
    except ClassificationError:
        raise
    except Exception as e:
        raise ClassificationError(friendly_llm_error_message(e)) from e

    logger.debug("Classifier raw response: %r", raw)
    decision = parse_decision(raw, user_input=user_input)

    _record(log, user_input, serialize_decision(decision))
    logger.info("Classified input as %s", decision.action)
    return decision


def classify_with_fallback(
    user_input: str,
    active_tasks: Sequence[Task],
    *,
    llm: LLMClient,
    log: ClassificationLog | None = None,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    temperature: float = DEFAULT_TEMPERATURE,
) -> ClassificationOutcome:
    """
    classify(), but never fails: any error becomes the fallback "create" decision
    (first 50 chars as title, Personal, normal) with the error text attached.
    """
    try:
        decision = classify(
            user_input,
            active_tasks,
            llm=llm,
            log=log,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return ClassificationOutcome(decision=decision)
    except ClassificationError as e:
        error = str(e) or e.__class__.__name__
        if isinstance(e, DecisionError):
            logger.warning("Classifier returned an unusable decision: %s", error)
        else:
            logger.warning("Classifier failed: %s", error)

    decision = fallback_decision(user_input)
    _record(log, user_input, serialize_decision(decision, error=error))
    return ClassificationOutcome(decision=decision, error=error)
