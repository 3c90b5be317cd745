"""Per-request snapshot of a project's departments, tasks and dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from foundry_ai.models import Department, Project, Task, TaskDependency, TaskStatus
from foundry_ai.store import TaskStore


@dataclass
class ProjectContext:
    """Everything the assistant knows about a project for one message.

    Loaded once per invocation and never shared between requests. Tools record
    their mutations here so later tools in the same batch see them.
    """

    project: Project
    departments: list[Department]
    tasks: list[Task]
    dependencies: list[TaskDependency] = field(default_factory=list)

    @classmethod
    def load(cls, store: TaskStore, project_id: str) -> ProjectContext:
        project = store.get_project(project_id)
        departments = store.list_departments(project_id)
        tasks = store.list_tasks([d.id for d in departments])
        dependencies = store.list_dependencies([t.id for t in tasks])
        return cls(project=project, departments=departments, tasks=tasks, dependencies=dependencies)

    # Lookups (exact match against the snapshot)

    def find_task(self, title: str) -> Task | None:
        return next((t for t in self.tasks if t.title == title), None)

    def find_department(self, name: str) -> Department | None:
        return next((d for d in self.departments if d.name == name), None)

    def tasks_in(self, department_id: str) -> list[Task]:
        return [t for t in self.tasks if t.department_id == department_id]

    # Bookkeeping after a successful mutation

    def add_task(self, task: Task) -> None:
        self.tasks.append(task)

    def replace_task(self, task: Task) -> None:
        self.tasks = [task if t.id == task.id else t for t in self.tasks]

    def drop_task(self, task_id: str) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]
        self.dependencies = [
            d for d in self.dependencies if d.task_id != task_id and d.depends_on_task_id != task_id
        ]

    def add_dependency(self, edge: TaskDependency) -> None:
        self.dependencies.append(edge)

    def drop_dependency(self, task_id: str, depends_on_task_id: str) -> None:
        self.dependencies = [
            d
            for d in self.dependencies
            if not (d.task_id == task_id and d.depends_on_task_id == depends_on_task_id)
        ]

    def summary(self) -> dict[str, Any]:
        """JSON-ready digest embedded in the assistant's system prompt."""
        by_id = {t.id: t for t in self.tasks}
        return {
            "project": {
                "name": self.project.name,
                "description": self.project.description,
                "created_at": self.project.created_at.isoformat() if self.project.created_at else None,
            },
            "departments": [
                {
                    "name": d.name,
                    "tasks": [
                        {
                            "title": t.title,
                            "description": t.description,
                            "status": t.status.value,
                            "depends_on": [
                                by_id[e.depends_on_task_id].title
                                for e in self.dependencies
                                if e.task_id == t.id and e.depends_on_task_id in by_id
                            ],
                        }
                        for t in self.tasks_in(d.id)
                    ],
                }
                for d in self.departments
            ],
            "statistics": {
                "totalDepartments": len(self.departments),
                "totalTasks": len(self.tasks),
                "completedTasks": sum(1 for t in self.tasks if t.status == TaskStatus.COMPLETED),
                "inProgressTasks": sum(1 for t in self.tasks if t.status == TaskStatus.IN_PROGRESS),
                "pendingTasks": sum(1 for t in self.tasks if t.status == TaskStatus.PENDING),
            },
        }
