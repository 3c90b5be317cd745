"""Task/dependency store interface and its Supabase implementation."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from supabase import Client

from foundry_ai.exceptions import NotFoundError
from foundry_ai.logging import format_component
from foundry_ai.models import ChatMessage, Department, Project, Task, TaskDependency

logger = logging.getLogger(__name__)


class TaskStore(Protocol):
    """Narrow contract the core needs from the relational datastore."""

    def get_project(self, project_id: str) -> Project: ...

    def insert_project(self, name: str, description: str | None = None) -> Project: ...

    def update_project(self, project_id: str, fields: dict[str, Any]) -> None: ...

    def delete_project(self, project_id: str) -> None: ...

    def list_departments(self, project_id: str) -> list[Department]: ...

    def get_department(self, department_id: str) -> Department: ...

    def insert_department(self, project_id: str, name: str) -> Department: ...

    def list_tasks(self, department_ids: list[str]) -> list[Task]: ...

    def get_task(self, task_id: str) -> Task: ...

    def get_tasks(self, task_ids: list[str]) -> list[Task]: ...

    def insert_task(self, department_id: str, title: str, description: str, status: str = "pending") -> Task: ...

    def insert_tasks(self, rows: list[dict[str, Any]]) -> list[Task]: ...

    def update_task(self, task_id: str, fields: dict[str, Any]) -> Task: ...

    def delete_task(self, task_id: str) -> None: ...

    def list_dependencies(self, task_ids: list[str]) -> list[TaskDependency]: ...

    def insert_dependency(self, task_id: str, depends_on_task_id: str) -> TaskDependency: ...

    def insert_dependencies(self, edges: list[TaskDependency]) -> None: ...

    def delete_dependency(self, task_id: str, depends_on_task_id: str) -> None: ...

    def delete_dependencies_touching(self, task_id: str) -> None: ...

    def list_project_messages(self, project_id: str) -> list[ChatMessage]: ...

    def insert_project_message(self, project_id: str, message: ChatMessage) -> None: ...


class SupabaseStore:
    """TaskStore backed by Supabase (PostgREST) tables."""

    def __init__(self, client: Client) -> None:
        self.client = client

    # Projects and departments

    def get_project(self, project_id: str) -> Project:
        response = self.client.table("projects").select("*").eq("id", project_id).limit(1).execute()
        if not response.data:
            raise NotFoundError(f'Project "{project_id}" not found')
        return Project.model_validate(response.data[0])

    def insert_project(self, name: str, description: str | None = None) -> Project:
        response = self.client.table("projects").insert({"name": name, "description": description}).execute()
        return Project.model_validate(response.data[0])

    def update_project(self, project_id: str, fields: dict[str, Any]) -> None:
        self.client.table("projects").update(fields).eq("id", project_id).execute()

    def delete_project(self, project_id: str) -> None:
        # Child rows are left to the foreign keys (ON DELETE CASCADE)
        self.client.table("projects").delete().eq("id", project_id).execute()

    def list_departments(self, project_id: str) -> list[Department]:
        response = (
            self.client.table("departments")
            .select("*")
            .eq("project_id", project_id)
            .order("created_at")  # type: ignore
            .execute()
        )
        return [Department.model_validate(row) for row in response.data]

    def get_department(self, department_id: str) -> Department:
        response = self.client.table("departments").select("*").eq("id", department_id).limit(1).execute()
        if not response.data:
            raise NotFoundError(f'Department "{department_id}" not found')
        return Department.model_validate(response.data[0])

    def insert_department(self, project_id: str, name: str) -> Department:
        response = self.client.table("departments").insert({"project_id": project_id, "name": name}).execute()
        return Department.model_validate(response.data[0])

    # Tasks

    def list_tasks(self, department_ids: list[str]) -> list[Task]:
        if not department_ids:
            return []
        response = (
            self.client.table("tasks")
            .select("*")
            .in_("department_id", department_ids)
            .order("created_at")  # type: ignore
            .execute()
        )
        return [Task.model_validate(row) for row in response.data]

    def get_task(self, task_id: str) -> Task:
        response = self.client.table("tasks").select("*").eq("id", task_id).limit(1).execute()
        if not response.data:
            raise NotFoundError(f'Task "{task_id}" not found')
        return Task.model_validate(response.data[0])

    def get_tasks(self, task_ids: list[str]) -> list[Task]:
        if not task_ids:
            return []
        response = self.client.table("tasks").select("*").in_("id", task_ids).execute()
        return [Task.model_validate(row) for row in response.data]

    def insert_task(self, department_id: str, title: str, description: str, status: str = "pending") -> Task:
        rows = self.insert_tasks(
            [{"department_id": department_id, "title": title, "description": description, "status": status}]
        )
        return rows[0]

    def insert_tasks(self, rows: list[dict[str, Any]]) -> list[Task]:
        if not rows:
            return []
        response = self.client.table("tasks").insert(rows).execute()
        return [Task.model_validate(row) for row in response.data]

    def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        response = self.client.table("tasks").update(fields).eq("id", task_id).execute()
        if not response.data:
            raise NotFoundError(f'Task "{task_id}" not found')
        return Task.model_validate(response.data[0])

    def delete_task(self, task_id: str) -> None:
        self.client.table("tasks").delete().eq("id", task_id).execute()

    # Dependencies

    def list_dependencies(self, task_ids: list[str]) -> list[TaskDependency]:
        if not task_ids:
            return []
        response = self.client.table("task_dependencies").select("*").in_("task_id", task_ids).execute()
        return [TaskDependency.model_validate(row) for row in response.data]

    def insert_dependency(self, task_id: str, depends_on_task_id: str) -> TaskDependency:
        response = (
            self.client.table("task_dependencies")
            .insert({"task_id": task_id, "depends_on_task_id": depends_on_task_id})
            .execute()
        )
        return TaskDependency.model_validate(response.data[0])

    def insert_dependencies(self, edges: list[TaskDependency]) -> None:
        if not edges:
            return
        rows = [{"task_id": e.task_id, "depends_on_task_id": e.depends_on_task_id} for e in edges]
        self.client.table("task_dependencies").insert(rows).execute()

    def delete_dependency(self, task_id: str, depends_on_task_id: str) -> None:
        (
            self.client.table("task_dependencies")
            .delete()
            .eq("task_id", task_id)
            .eq("depends_on_task_id", depends_on_task_id)
            .execute()
        )

    def delete_dependencies_touching(self, task_id: str) -> None:
        self.client.table("task_dependencies").delete().eq("task_id", task_id).execute()
        self.client.table("task_dependencies").delete().eq("depends_on_task_id", task_id).execute()

    # Project chat history

    def list_project_messages(self, project_id: str) -> list[ChatMessage]:
        response = (
            self.client.table("project_ai_messages")
            .select("*")
            .eq("project_id", project_id)
            .order("created_at")  # type: ignore
            .execute()
        )
        return [ChatMessage(role=row["role"], content=row["content"]) for row in response.data]

    def insert_project_message(self, project_id: str, message: ChatMessage) -> None:
        self.client.table("project_ai_messages").insert(
            {"project_id": project_id, "role": message.role, "content": message.content}
        ).execute()
        logger.debug(f"{format_component('STORE')} Stored {message.role} message for project {project_id}")
