"""Task board, status and task assistant routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.models.requests import (
    AssistantRequest,
    AssistantResponse,
    StatusChangeRequest,
    TaskCreateRequest,
    TaskUpdateRequest,
)
from api.utils import get_assistant_backend, get_store
from foundry_ai.assistant import TaskAssistant
from foundry_ai.board import department_board
from foundry_ai.editing import create_task, edit_task
from foundry_ai.guard import change_task_status
from foundry_ai.llm import GenerationBackend
from foundry_ai.logging import format_component
from foundry_ai.models import BoardTask, Task
from foundry_ai.store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Tasks"])


@router.get("/departments/{department_id}/board")
async def api_department_board(department_id: str, store: TaskStore = Depends(get_store)) -> list[BoardTask]:
    """Tasks of a department in dependency order, each flagged blocked or not."""
    return department_board(store, department_id)


@router.post("/departments/{department_id}/tasks", status_code=201)
async def api_create_task(
    department_id: str,
    body: TaskCreateRequest,
    store: TaskStore = Depends(get_store),
) -> Task:
    """Add a pending task to a department."""
    return create_task(store, department_id, body.title, body.description)


@router.patch("/tasks/{task_id}")
async def api_edit_task(
    task_id: str,
    body: TaskUpdateRequest,
    store: TaskStore = Depends(get_store),
) -> Task:
    """
    Edit a task's title, description and/or status.

    A status change is checked like `PATCH /tasks/{id}/status`; when it is
    rejected (**409**) none of the fields are saved.
    """
    return edit_task(store, task_id, title=body.title, description=body.description, status=body.status)


@router.patch("/tasks/{task_id}/status")
async def api_change_task_status(
    task_id: str,
    body: StatusChangeRequest,
    store: TaskStore = Depends(get_store),
) -> Task:
    """
    Change a task's status.

    Moving to `in_progress` or `completed` is rejected with **409** while any
    dependency is incomplete. Moving back to `pending` is always allowed.
    """
    task = change_task_status(store, task_id, body.status)
    logger.info(f"{format_component('API')} Task {task.title!r} -> {task.status.value}")
    return task


@router.post("/tasks/{task_id}/assistant")
async def api_task_assistant(
    task_id: str,
    body: AssistantRequest,
    store: TaskStore = Depends(get_store),
    backend: GenerationBackend = Depends(get_assistant_backend),
) -> AssistantResponse:
    """Chat about a single task. Unavailable (409) while the task is blocked."""
    reply = await TaskAssistant(store, backend).reply(task_id, body.message, body.chat_history)
    return AssistantResponse(response=reply)
