"""
Shared pytest fixtures for FoundryAI tests.

This module provides:
- An in-memory TaskStore so tests never touch Supabase
- A seeded project with departments, tasks and dependencies
- Helpers for building Generation / ToolCall stubs
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from itertools import count
from typing import Any

import pytest

from foundry_ai.exceptions import NotFoundError
from foundry_ai.llm import Generation, ToolCall
from foundry_ai.models import ChatMessage, Department, Project, Task, TaskDependency, TaskStatus


# =============================================================================
# In-memory store
# =============================================================================


class InMemoryStore:
    """TaskStore holding rows in dicts; ids are sequential per table."""

    def __init__(self) -> None:
        self.projects: dict[str, Project] = {}
        self.departments: dict[str, Department] = {}
        self.tasks: dict[str, Task] = {}
        self.dependencies: list[TaskDependency] = []
        self.messages: dict[str, list[ChatMessage]] = {}
        self._ids = count(1)
        self._clock = datetime(2025, 1, 1)

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    # Seeding helpers

    def add_project(self, name: str, description: str = "") -> Project:
        return self.insert_project(name, description)

    def add_task(self, department: Department, title: str, status: TaskStatus = TaskStatus.PENDING) -> Task:
        return self.insert_task(department.id, title, f"{title} description", status.value)

    # TaskStore

    def get_project(self, project_id: str) -> Project:
        if project_id not in self.projects:
            raise NotFoundError(f'Project "{project_id}" not found')
        return self.projects[project_id]

    def insert_project(self, name: str, description: str | None = None) -> Project:
        project = Project(id=self._next_id("project"), name=name, description=description, created_at=self._now())
        self.projects[project.id] = project
        return project

    def update_project(self, project_id: str, fields: dict[str, Any]) -> None:
        project = self.get_project(project_id)
        self.projects[project_id] = project.model_copy(update=fields)

    def delete_project(self, project_id: str) -> None:
        self.projects.pop(project_id, None)
        department_ids = [d.id for d in self.departments.values() if d.project_id == project_id]
        for task in self.list_tasks(department_ids):
            self.delete_dependencies_touching(task.id)
            del self.tasks[task.id]
        for department_id in department_ids:
            del self.departments[department_id]
        self.messages.pop(project_id, None)

    def list_departments(self, project_id: str) -> list[Department]:
        return [d for d in self.departments.values() if d.project_id == project_id]

    def get_department(self, department_id: str) -> Department:
        if department_id not in self.departments:
            raise NotFoundError(f'Department "{department_id}" not found')
        return self.departments[department_id]

    def insert_department(self, project_id: str, name: str) -> Department:
        department = Department(id=self._next_id("dept"), name=name, project_id=project_id, created_at=self._now())
        self.departments[department.id] = department
        return department

    def list_tasks(self, department_ids: list[str]) -> list[Task]:
        return [t for t in self.tasks.values() if t.department_id in department_ids]

    def get_task(self, task_id: str) -> Task:
        if task_id not in self.tasks:
            raise NotFoundError(f'Task "{task_id}" not found')
        return self.tasks[task_id]

    def get_tasks(self, task_ids: list[str]) -> list[Task]:
        return [self.tasks[i] for i in task_ids if i in self.tasks]

    def insert_task(self, department_id: str, title: str, description: str, status: str = "pending") -> Task:
        return self.insert_tasks(
            [{"department_id": department_id, "title": title, "description": description, "status": status}]
        )[0]

    def insert_tasks(self, rows: list[dict[str, Any]]) -> list[Task]:
        created = []
        for row in rows:
            task = Task(id=self._next_id("task"), created_at=self._now(), **row)
            self.tasks[task.id] = task
            created.append(task)
        return created

    def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        task = self.get_task(task_id)
        updated = Task.model_validate({**task.model_dump(), **fields})
        self.tasks[task_id] = updated
        return updated

    def delete_task(self, task_id: str) -> None:
        self.tasks.pop(task_id, None)

    def list_dependencies(self, task_ids: list[str]) -> list[TaskDependency]:
        return [d for d in self.dependencies if d.task_id in task_ids]

    def insert_dependency(self, task_id: str, depends_on_task_id: str) -> TaskDependency:
        edge = TaskDependency(id=self._next_id("dep"), task_id=task_id, depends_on_task_id=depends_on_task_id)
        self.dependencies.append(edge)
        return edge

    def insert_dependencies(self, edges: list[TaskDependency]) -> None:
        for edge in edges:
            self.insert_dependency(edge.task_id, edge.depends_on_task_id)

    def delete_dependency(self, task_id: str, depends_on_task_id: str) -> None:
        self.dependencies = [
            d for d in self.dependencies if not (d.task_id == task_id and d.depends_on_task_id == depends_on_task_id)
        ]

    def delete_dependencies_touching(self, task_id: str) -> None:
        self.dependencies = [d for d in self.dependencies if task_id not in (d.task_id, d.depends_on_task_id)]

    def list_project_messages(self, project_id: str) -> list[ChatMessage]:
        return list(self.messages.get(project_id, []))

    def insert_project_message(self, project_id: str, message: ChatMessage) -> None:
        self.messages.setdefault(project_id, []).append(message)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def seeded(store: InMemoryStore) -> dict[str, Any]:
    """
    A project with two departments:

    Development: "Design schema" (completed) <- "Build API" <- "Write docs"
    Marketing:   "Landing page" (no deps)

    Returns:
        Dict with the store, project, departments and tasks keyed by title
    """
    project = store.add_project("Acme", "A marketplace for spare parts")
    dev = store.insert_department(project.id, "Development")
    marketing = store.insert_department(project.id, "Marketing")

    schema = store.add_task(dev, "Design schema", TaskStatus.COMPLETED)
    api = store.add_task(dev, "Build API")
    docs = store.add_task(dev, "Write docs")
    landing = store.add_task(marketing, "Landing page")

    store.insert_dependency(api.id, schema.id)
    store.insert_dependency(docs.id, api.id)

    return {
        "store": store,
        "project": project,
        "dev": dev,
        "marketing": marketing,
        "tasks": {t.title: t for t in (schema, api, docs, landing)},
    }


# =============================================================================
# Generation helpers
# =============================================================================


def tool_call(call_id: str, name: str, **arguments: Any) -> ToolCall:
    return ToolCall(id=call_id, name=name, arguments=json.dumps(arguments))


def text(content: str) -> Generation:
    return Generation(content=content)


def calls(*tool_calls: ToolCall) -> Generation:
    return Generation(content=None, tool_calls=list(tool_calls))
