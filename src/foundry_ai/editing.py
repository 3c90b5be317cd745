"""User-driven edits to projects and tasks (outside the assistant)."""

from __future__ import annotations

import logging
from typing import Any

from foundry_ai.guard import change_task_status
from foundry_ai.logging import format_component
from foundry_ai.models import Project, Task, TaskStatus
from foundry_ai.store import TaskStore

logger = logging.getLogger(__name__)


def create_project(store: TaskStore, name: str, description: str | None = None) -> Project:
    """Create a project. A blank description is stored as null."""
    project = store.insert_project(name.strip(), (description or "").strip() or None)
    logger.info(f"{format_component('STORE')} Created project {project.name!r}")
    return project


def edit_project(
    store: TaskStore,
    project_id: str,
    name: str | None = None,
    description: str | None = None,
) -> Project:
    """Rename and/or re-describe a project.

    Raises:
        NotFoundError: If the project does not exist
    """
    store.get_project(project_id)
    fields: dict[str, Any] = {}
    if name is not None:
        fields["name"] = name.strip()
    if description is not None:
        fields["description"] = description.strip() or None
    if fields:
        store.update_project(project_id, fields)
    return store.get_project(project_id)


def delete_project(store: TaskStore, project_id: str) -> None:
    """Delete a project.

    Raises:
        NotFoundError: If the project does not exist
    """
    project = store.get_project(project_id)
    store.delete_project(project.id)
    logger.info(f"{format_component('STORE')} Deleted project {project.name!r}")


def create_task(store: TaskStore, department_id: str, title: str, description: str) -> Task:
    """Add a pending task to a department.

    Raises:
        NotFoundError: If the department does not exist
    """
    department = store.get_department(department_id)
    return store.insert_task(department.id, title.strip(), description.strip(), TaskStatus.PENDING.value)


def edit_task(
    store: TaskStore,
    task_id: str,
    title: str | None = None,
    description: str | None = None,
    status: TaskStatus | None = None,
) -> Task:
    """Apply an edit from the task dialog.

    A status change goes through the guard before anything is written, so a
    rejected edit leaves the task untouched.

    Raises:
        NotFoundError: If the task does not exist
        BlockedError: If the new status is gated and a dependency is incomplete
    """
    task = store.get_task(task_id)
    if status is not None and TaskStatus(status) != task.status:
        task = change_task_status(store, task.id, status)

    fields: dict[str, Any] = {}
    if title is not None:
        fields["title"] = title.strip()
    if description is not None:
        fields["description"] = description.strip()
    if fields:
        task = store.update_task(task.id, fields)
    return task
