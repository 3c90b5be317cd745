"""Department board: tasks in dependency order with their blocked state."""

from __future__ import annotations

from foundry_ai.graph import blocker_tasks_of, is_blocked, order_tasks
from foundry_ai.models import BoardTask
from foundry_ai.store import TaskStore


def department_board(store: TaskStore, department_id: str) -> list[BoardTask]:
    """Load a department's tasks and annotate them for display.

    Blockers may live in other departments of the project, so their targets
    are fetched by id rather than taken from the department's own tasks.
    """
    department = store.get_department(department_id)
    tasks = store.list_tasks([department.id])
    edges = store.list_dependencies([t.id for t in tasks])

    known = {t.id for t in tasks}
    outside = sorted({e.depends_on_task_id for e in edges} - known)
    all_tasks = tasks + store.get_tasks(outside)

    return [
        BoardTask(
            task=task,
            blocked=is_blocked(task, edges, all_tasks),
            blockers=[b.title for b in blocker_tasks_of(task, edges, all_tasks)],
        )
        for task in order_tasks(tasks, edges)
    ]
