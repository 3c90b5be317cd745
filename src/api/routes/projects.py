"""Project management, plan generation and project assistant routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from api.models.requests import (
    AssistantRequest,
    AssistantResponse,
    GeneratedDepartment,
    GeneratePlanRequest,
    GeneratePlanResponse,
    ProjectCreateRequest,
    ProjectUpdateRequest,
)
from api.utils import get_assistant_backend, get_plan_backend, get_store
from foundry_ai.assistant import ProjectAssistant
from foundry_ai.editing import create_project, delete_project, edit_project
from foundry_ai.llm import GenerationBackend
from foundry_ai.models import ChatMessage, Project
from foundry_ai.planner import generate_project_plan
from foundry_ai.store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.post("", status_code=201)
async def api_create_project(body: ProjectCreateRequest, store: TaskStore = Depends(get_store)) -> Project:
    """Create an empty project. Departments and tasks come from `/generate`."""
    return create_project(store, body.name, body.description)


@router.get("/{project_id}")
async def api_get_project(project_id: str, store: TaskStore = Depends(get_store)) -> Project:
    return store.get_project(project_id)


@router.patch("/{project_id}")
async def api_edit_project(
    project_id: str,
    body: ProjectUpdateRequest,
    store: TaskStore = Depends(get_store),
) -> Project:
    """Rename a project or change its description. A blank description clears it."""
    return edit_project(store, project_id, name=body.name, description=body.description)


@router.delete("/{project_id}", status_code=204)
async def api_delete_project(project_id: str, store: TaskStore = Depends(get_store)) -> Response:
    """Delete a project together with its departments, tasks and messages."""
    delete_project(store, project_id)
    return Response(status_code=204)


@router.post("/{project_id}/generate", status_code=201)
async def api_generate_plan(
    project_id: str,
    body: GeneratePlanRequest,
    store: TaskStore = Depends(get_store),
    backend: GenerationBackend = Depends(get_plan_backend),
) -> GeneratePlanResponse:
    """
    Generate departments, tasks and dependencies from the project idea.

    The idea is saved as the project description. Dependencies only ever point
    at earlier tasks of the same department.
    """
    result = await generate_project_plan(store, backend, project_id, body.user_message)
    return GeneratePlanResponse(
        message=result.message,
        departments=[
            GeneratedDepartment(
                id=d.department.id,
                name=d.department.name,
                task_count=d.task_count,
                dependency_count=d.dependency_count,
            )
            for d in result.departments
        ],
    )


@router.get("/{project_id}/messages")
async def api_project_messages(project_id: str, store: TaskStore = Depends(get_store)) -> list[ChatMessage]:
    """Project assistant conversation, oldest first."""
    return store.list_project_messages(project_id)


@router.post("/{project_id}/assistant")
async def api_project_assistant(
    project_id: str,
    body: AssistantRequest,
    store: TaskStore = Depends(get_store),
    backend: GenerationBackend = Depends(get_assistant_backend),
) -> AssistantResponse:
    """
    Send a message to the project assistant.

    The assistant may create, delete, rename and re-status tasks and edit
    dependencies before answering. When `chatHistory` is omitted the stored
    conversation is used. Both the message and the reply are stored.
    """
    store.get_project(project_id)
    history = body.chat_history if body.chat_history is not None else store.list_project_messages(project_id)
    store.insert_project_message(project_id, ChatMessage(role="user", content=body.message))

    reply = await ProjectAssistant(store, backend).handle_user_message(project_id, body.message, history)

    store.insert_project_message(project_id, ChatMessage(role="assistant", content=reply))
    return AssistantResponse(response=reply)
