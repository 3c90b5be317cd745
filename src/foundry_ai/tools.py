"""Tools the project assistant may call to mutate project state.

Each tool is a registry entry: a name, a description, a pydantic model for its
arguments and a handler. Handlers raise domain exceptions; the registry turns
every outcome (success, domain error, bad arguments, store failure) into a
result record so one failing call never aborts its siblings.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from foundry_ai.context import ProjectContext
from foundry_ai.exceptions import AlreadyExistsError, FoundryError, NotFoundError
from foundry_ai.guard import change_task_status
from foundry_ai.llm import ToolCall
from foundry_ai.logging import format_component
from foundry_ai.models import Task, TaskStatus
from foundry_ai.store import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class ToolRuntime:
    """What a handler can touch while it runs."""

    store: TaskStore
    context: ProjectContext
    enforce_status_guard: bool = False

    def require_task(self, title: str) -> Task:
        task = self.context.find_task(title)
        if task is None:
            raise NotFoundError(f'Task "{title}" not found')
        return task


Handler = Callable[[ToolRuntime, Any], dict[str, Any]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_model: type[BaseModel]
    handler: Handler

    def schema(self) -> dict[str, Any]:
        """OpenAI function-tool definition."""
        parameters = self.args_model.model_json_schema()
        parameters.pop("title", None)
        return {
            "type": "function",
            "function": {"name": self.name, "description": self.description, "parameters": parameters},
        }


class ToolRegistry:
    """Maps tool names to typed handlers."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def tool(self, name: str, description: str, args_model: type[BaseModel]) -> Callable[[Handler], Handler]:
        """Decorator registering ``handler`` under ``name``."""

        def register(handler: Handler) -> Handler:
            self._tools[name] = ToolSpec(name, description, args_model, handler)
            return handler

        return register

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def names(self) -> list[str]:
        return list(self._tools)

    def catalog(self) -> list[dict[str, Any]]:
        return [spec.schema() for spec in self._tools.values()]

    def execute(self, call: ToolCall, runtime: ToolRuntime) -> dict[str, Any]:
        """Run one tool call and return its result record.

        Never raises: failures become ``{"error": ...}`` payloads.
        """
        payload = self._run(call, runtime)
        status = "error" if "error" in payload else "ok"
        logger.info(f"{format_component('TOOL')} {call.name} -> {status}")
        return {"tool_call_id": call.id, "name": call.name, "content": json.dumps(payload)}

    def _run(self, call: ToolCall, runtime: ToolRuntime) -> dict[str, Any]:
        spec = self._tools.get(call.name)
        if spec is None:
            return {"error": f"Unknown tool: {call.name}"}

        try:
            args = spec.args_model.model_validate_json(call.arguments or "{}")
        except ValidationError as e:
            return {"error": f"Invalid arguments for {call.name}: {e.errors(include_url=False)}"}

        try:
            return spec.handler(runtime, args)
        except AlreadyExistsError as e:
            return {"success": False, "message": str(e)}
        except FoundryError as e:
            return {"error": str(e)}
        except Exception as e:
            logger.error(f"Tool {call.name} failed: {e}", exc_info=True)
            return {"error": f"{call.name} failed: {e}"}


registry = ToolRegistry()


# Argument schemas


class CreateTaskArgs(BaseModel):
    department_name: str = Field(..., description="Exact name of the department the task belongs to")
    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(..., description="What needs to be done")


class TaskTitleArgs(BaseModel):
    task_title: str = Field(..., description="Exact title of the task")


class UpdateTaskStatusArgs(BaseModel):
    task_title: str = Field(..., description="Exact title of the task")
    status: Literal["pending", "in_progress", "completed"] = Field(..., description="New status")


class DependencyArgs(BaseModel):
    task_title: str = Field(..., description="Title of the task that waits")
    depends_on_title: str = Field(..., description="Title of the task that must be completed first")


class RenameTaskArgs(BaseModel):
    old_title: str = Field(..., description="Current exact title of the task")
    new_title: str = Field(..., min_length=1, description="New title")


# Handlers


@registry.tool("create_task", "Create a new pending task in a department.", CreateTaskArgs)
def create_task(rt: ToolRuntime, args: CreateTaskArgs) -> dict[str, Any]:
    department = rt.context.find_department(args.department_name)
    if department is None:
        raise NotFoundError(f'Department "{args.department_name}" not found')
    if any(t.title == args.title for t in rt.context.tasks_in(department.id)):
        raise AlreadyExistsError(f'Task "{args.title}" already exists in {department.name}')

    task = rt.store.insert_task(department.id, args.title, args.description, TaskStatus.PENDING.value)
    rt.context.add_task(task)
    return {"success": True, "message": f'Created task "{task.title}" in {department.name}', "task_id": task.id}


@registry.tool("delete_task", "Delete a task and every dependency that references it.", TaskTitleArgs)
def delete_task(rt: ToolRuntime, args: TaskTitleArgs) -> dict[str, Any]:
    task = rt.require_task(args.task_title)
    rt.store.delete_dependencies_touching(task.id)
    rt.store.delete_task(task.id)
    rt.context.drop_task(task.id)
    return {"success": True, "message": f'Deleted task "{task.title}"'}


@registry.tool("update_task_status", "Set a task's status.", UpdateTaskStatusArgs)
def update_task_status(rt: ToolRuntime, args: UpdateTaskStatusArgs) -> dict[str, Any]:
    task = rt.require_task(args.task_title)
    if rt.enforce_status_guard:
        updated = change_task_status(rt.store, task.id, TaskStatus(args.status))
    else:
        updated = rt.store.update_task(task.id, {"status": args.status})
    rt.context.replace_task(updated)
    return {"success": True, "message": f'Task "{task.title}" is now {args.status}'}


@registry.tool("add_dependency", "Make a task depend on another task.", DependencyArgs)
def add_dependency(rt: ToolRuntime, args: DependencyArgs) -> dict[str, Any]:
    task = rt.require_task(args.task_title)
    depends_on = rt.require_task(args.depends_on_title)
    if any(d.task_id == task.id and d.depends_on_task_id == depends_on.id for d in rt.context.dependencies):
        raise AlreadyExistsError(f'"{task.title}" already depends on "{depends_on.title}"')

    edge = rt.store.insert_dependency(task.id, depends_on.id)
    rt.context.add_dependency(edge)
    return {"success": True, "message": f'"{task.title}" now depends on "{depends_on.title}"'}


@registry.tool("remove_dependency", "Remove a dependency between two tasks.", DependencyArgs)
def remove_dependency(rt: ToolRuntime, args: DependencyArgs) -> dict[str, Any]:
    task = rt.context.find_task(args.task_title)
    depends_on = rt.context.find_task(args.depends_on_title)
    if task is None or depends_on is None:
        raise NotFoundError("Task not found")

    rt.store.delete_dependency(task.id, depends_on.id)
    rt.context.drop_dependency(task.id, depends_on.id)
    return {"success": True, "message": f'"{task.title}" no longer depends on "{depends_on.title}"'}


@registry.tool("update_task_name", "Rename a task.", RenameTaskArgs)
def update_task_name(rt: ToolRuntime, args: RenameTaskArgs) -> dict[str, Any]:
    task = rt.require_task(args.old_title)
    updated = rt.store.update_task(task.id, {"title": args.new_title})
    rt.context.replace_task(updated)
    return {"success": True, "message": f'Renamed "{args.old_title}" to "{args.new_title}"'}
