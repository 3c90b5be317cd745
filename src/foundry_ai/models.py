"""Domain models for projects, departments, tasks and their dependencies."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    """Lifecycle of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class _Row(BaseModel):
    """Base for models hydrated from store rows; extra columns are dropped."""

    model_config = ConfigDict(extra="ignore")


class Project(_Row):
    """A startup project. The description doubles as the original idea prompt."""

    id: str
    name: str
    description: str | None = None
    generated_code: str | None = None
    deployed_url: str | None = None
    created_at: datetime | None = None


class Department(_Row):
    """Named grouping of tasks within a project."""

    id: str
    name: str
    project_id: str
    created_at: datetime | None = None


class Task(_Row):
    """Atomic unit of work belonging to a department."""

    id: str
    title: str = Field(..., min_length=1)
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    department_id: str
    image_url: str | None = None
    deployed_url: str | None = None
    created_at: datetime | None = None


class TaskDependency(_Row):
    """Directed edge: ``task_id`` cannot proceed until ``depends_on_task_id`` is completed."""

    task_id: str
    depends_on_task_id: str
    id: str | None = None
    created_at: datetime | None = None


class ChatMessage(BaseModel):
    """One turn of an assistant conversation."""

    role: Literal["user", "assistant"]
    content: str


class BoardTask(BaseModel):
    """A task as shown on a department board."""

    task: Task
    blocked: bool
    blockers: list[str] = Field(default_factory=list)
