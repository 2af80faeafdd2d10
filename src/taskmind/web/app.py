# src/taskmind/web/app.py

"""
HTTP boundary.

Every store mutation goes through this service. When an API token is
configured, all /api routes except /api/health require
`Authorization: Bearer <token>`.
"""

from __future__ import annotations

import hmac
import logging
from typing import Any, List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query, status
from pydantic import BaseModel, Field

from ..classifier.intent import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, classify_with_fallback
from ..core.assistant import AssistantBusyError, complete_task_by_id, process_input
from ..core.state import AppState
from ..tasks.task_api import reload_tasks, urgent_active_tasks
from ..tasks.task_models import Priority, Task, TaskStatus, Workflow

logger = logging.getLogger(__name__)


# ==================== Pydantic Models ====================

class InputRequest(BaseModel):
    input: str = Field(min_length=1)


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    workflow: Workflow
    priority: Priority


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    workflow: Workflow
    priority: Priority
    status: TaskStatus
    created_at: float
    completed_at: Optional[float] = None


class ProcessResponse(BaseModel):
    decision: Optional[dict[str, Any]]
    error: Optional[str]
    message: Optional[str]
    message_ttl_seconds: float
    tasks: List[TaskResponse]
    urgent: List[TaskResponse]


class StatusResponse(BaseModel):
    message: Optional[str]


def _task_response(task: Task) -> TaskResponse:
    return TaskResponse(**task.to_dict())


def create_app(state: AppState) -> FastAPI:
    app = FastAPI(title=str(getattr(state.settings, "app_name", "taskmind")), version="0.1.0")
    app.state.taskmind = state

    def require_token(authorization: Optional[str] = Header(default=None)) -> None:
        expected = getattr(state.settings, "api_token", None)
        if not expected:
            return
        scheme, _, token = (authorization or "").partition(" ")
        if scheme.lower() != "bearer" or not hmac.compare_digest(
            token.strip().encode("utf-8"), str(expected).encode("utf-8")
        ):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API token")

    auth = [Depends(require_token)]

    # ==================== API Routes ====================

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/ai-process", dependencies=auth)
    def ai_process(req: InputRequest) -> dict[str, Any]:
        """
        Classify only. Always 200: on failure the payload is the fallback
        decision with an `error` field next to it.
        """
        user_input = req.input
        if not user_input.strip():
            raise HTTPException(status_code=422, detail="input is blank")

        active = state.task_store.list_tasks(TaskStatus.ACTIVE)
        outcome = classify_with_fallback(
            user_input,
            active,
            llm=state.llm,
            log=state.task_store,
            max_tokens=int(getattr(state.settings, "llm_max_tokens", DEFAULT_MAX_TOKENS)),
            temperature=float(getattr(state.settings, "llm_temperature", DEFAULT_TEMPERATURE)),
        )
        payload = outcome.decision.to_dict()
        if outcome.error is not None:
            logger.info("ai-process degraded to default decision: %s", outcome.error)
            payload["error"] = outcome.error
        return payload

    @app.post("/api/process", response_model=ProcessResponse, dependencies=auth)
    def process(req: InputRequest) -> ProcessResponse:
        try:
            result = process_input(state, req.input)
        except AssistantBusyError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

        if result.skipped:
            raise HTTPException(status_code=422, detail="input is blank")

        tasks = list(state.tasks)
        return ProcessResponse(
            decision=result.decision.to_dict() if result.decision is not None else None,
            error=result.error,
            message=result.message,
            message_ttl_seconds=float(getattr(state.settings, "status_message_seconds", 5.0)),
            tasks=[_task_response(t) for t in tasks],
            urgent=[_task_response(t) for t in urgent_active_tasks(tasks)],
        )

    @app.get("/api/status", response_model=StatusResponse, dependencies=auth)
    def current_status() -> StatusResponse:
        """The last submission's message until it expires, then null."""
        return StatusResponse(message=state.current_status())

    @app.get("/api/tasks", response_model=List[TaskResponse], dependencies=auth)
    def list_tasks(
        status_filter: Optional[TaskStatus] = Query(default=None, alias="status"),
    ) -> List[TaskResponse]:
        if status_filter is not None:
            return [_task_response(t) for t in state.task_store.list_tasks(status_filter)]
        return [_task_response(t) for t in reload_tasks(state)]

    @app.get("/api/tasks/urgent", response_model=List[TaskResponse], dependencies=auth)
    def list_urgent() -> List[TaskResponse]:
        return [_task_response(t) for t in urgent_active_tasks(reload_tasks(state))]

    @app.post(
        "/api/tasks",
        response_model=TaskResponse,
        status_code=status.HTTP_201_CREATED,
        dependencies=auth,
    )
    def create_task(req: TaskCreate) -> TaskResponse:
        title = req.title.strip()
        task = state.task_store.create_task(
            title=title,
            description=req.description.strip() or title,
            workflow=req.workflow,
            priority=req.priority,
        )
        reload_tasks(state)
        return _task_response(task)

    @app.post("/api/tasks/{task_id}/complete", response_model=List[TaskResponse], dependencies=auth)
    def complete_task(task_id: str) -> List[TaskResponse]:
        return [_task_response(t) for t in complete_task_by_id(state, task_id)]

    return app
