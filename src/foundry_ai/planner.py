"""Generate departments, tasks and dependencies for a project from its idea."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, ValidationError

from foundry_ai.exceptions import BackendError
from foundry_ai.llm import GenerationBackend
from foundry_ai.logging import format_component
from foundry_ai.models import Department, TaskDependency, TaskStatus
from foundry_ai.prompts import PLAN_DEPARTMENTS, PLAN_SYSTEM_PROMPT
from foundry_ai.store import TaskStore

logger = logging.getLogger(__name__)

PLAN_TOOL_NAME = "create_startup_plan"


class PlannedTask(BaseModel):
    title: str = Field(..., min_length=1)
    description: str
    dependsOn: list[float] = Field(
        default_factory=list,
        description="0-based indexes of tasks within this department that this task depends on",
    )


class PlannedDepartment(BaseModel):
    name: str
    tasks: list[PlannedTask]


class StartupPlan(BaseModel):
    departments: list[PlannedDepartment]


class CreatedDepartment(BaseModel):
    department: Department
    task_count: int
    dependency_count: int


class PlanResult(BaseModel):
    departments: list[CreatedDepartment]

    @property
    def message(self) -> str:
        return f"Successfully created {len(self.departments)} departments with tasks!"


def plan_tool() -> dict:
    """Function-tool definition the model is forced to call."""
    return {
        "type": "function",
        "function": {
            "name": PLAN_TOOL_NAME,
            "description": "Generate comprehensive departments and tasks for a startup project",
            "parameters": {
                "type": "object",
                "properties": {
                    "departments": {
                        "type": "array",
                        "minItems": 3,
                        "maxItems": 3,
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string", "enum": PLAN_DEPARTMENTS},
                                "tasks": {
                                    "type": "array",
                                    "minItems": 5,
                                    "maxItems": 8,
                                    "items": {
                                        "type": "object",
                                        "properties": {
                                            "title": {"type": "string"},
                                            "description": {"type": "string"},
                                            "dependsOn": {"type": "array", "items": {"type": "number"}},
                                        },
                                        "required": ["title", "description", "dependsOn"],
                                        "additionalProperties": False,
                                    },
                                },
                            },
                            "required": ["name", "tasks"],
                            "additionalProperties": False,
                        },
                    }
                },
                "required": ["departments"],
                "additionalProperties": False,
            },
        },
    }


def dependency_edges(task_ids: list[str], planned: list[PlannedTask]) -> list[TaskDependency]:
    """Translate ``dependsOn`` indexes into edges.

    Only whole-number references to earlier tasks of the same department are
    kept, which makes generated plans acyclic by construction. Anything else
    (fractions, forward or self references) is dropped, not rejected.
    """
    edges: list[TaskDependency] = []
    for i, task in enumerate(planned):
        for value in dict.fromkeys(task.dependsOn):
            if not value.is_integer():
                continue
            index = int(value)
            if 0 <= index < i and index < len(task_ids):
                edges.append(TaskDependency(task_id=task_ids[i], depends_on_task_id=task_ids[index]))
    return edges


async def generate_project_plan(
    store: TaskStore,
    backend: GenerationBackend,
    project_id: str,
    idea: str,
) -> PlanResult:
    """Ask the backend for a startup plan and persist it under ``project_id``.

    Raises:
        NotFoundError: If the project does not exist
        BackendError: If generation fails or returns no usable plan
    """
    store.get_project(project_id)
    logger.info(f"{format_component('PLAN')} Generating tasks for project {project_id}")

    generation = await backend.generate(
        [{"role": "system", "content": PLAN_SYSTEM_PROMPT}, {"role": "user", "content": idea}],
        tools=[plan_tool()],
        tool_choice={"type": "function", "function": {"name": PLAN_TOOL_NAME}},
    )
    call = next((c for c in generation.tool_calls if c.name == PLAN_TOOL_NAME), None)
    if call is None:
        raise BackendError("No tool call in response")
    try:
        plan = StartupPlan.model_validate_json(call.arguments)
    except ValidationError as e:
        raise BackendError(f"Malformed plan in response: {e.error_count()} error(s)") from e

    try:
        store.update_project(project_id, {"description": idea})
    except Exception as e:
        logger.error(f"Error updating project description: {e}")

    created: list[CreatedDepartment] = []
    for planned_department in plan.departments:
        department = store.insert_department(project_id, planned_department.name)
        tasks = store.insert_tasks(
            [
                {
                    "department_id": department.id,
                    "title": t.title,
                    "description": t.description,
                    "status": TaskStatus.PENDING.value,
                }
                for t in planned_department.tasks
            ]
        )
        logger.info(f"{format_component('PLAN')} Created {len(tasks)} tasks for {department.name}")

        edges = dependency_edges([t.id for t in tasks], planned_department.tasks)
        try:
            store.insert_dependencies(edges)
        except Exception as e:
            logger.error(f"Error creating task dependencies for {department.name}: {e}")
            edges = []

        created.append(CreatedDepartment(department=department, task_count=len(tasks), dependency_count=len(edges)))

    return PlanResult(departments=created)
