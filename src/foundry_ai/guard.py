"""Status transition guard: tasks cannot start or finish while blocked."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from foundry_ai.exceptions import BlockedError
from foundry_ai.graph import incomplete_blockers
from foundry_ai.logging import format_component
from foundry_ai.models import Task, TaskDependency, TaskStatus
from foundry_ai.store import TaskStore

logger = logging.getLogger(__name__)

GATED_STATUSES = frozenset({TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED})


def check_status_transition(
    task: Task,
    new_status: TaskStatus,
    edges: Iterable[TaskDependency],
    all_tasks: Iterable[Task],
) -> None:
    """Raise BlockedError if ``task`` may not move to ``new_status``.

    Moving back to pending is always allowed.
    """
    if TaskStatus(new_status) not in GATED_STATUSES:
        return
    blockers = incomplete_blockers(task, edges, all_tasks)
    if blockers:
        raise BlockedError(blockers=[b.title for b in blockers])


def change_task_status(store: TaskStore, task_id: str, new_status: TaskStatus) -> Task:
    """Apply a status change after re-checking dependencies against the store.

    Everything is read at call time, so a dependency completed (or reopened)
    since the caller last looked is taken into account.

    Raises:
        NotFoundError: If the task does not exist
        BlockedError: If the transition is gated and a dependency is incomplete
    """
    new_status = TaskStatus(new_status)
    task = store.get_task(task_id)
    if new_status in GATED_STATUSES:
        edges = store.list_dependencies([task.id])
        targets = store.get_tasks([edge.depends_on_task_id for edge in edges])
        try:
            check_status_transition(task, new_status, edges, targets)
        except BlockedError as e:
            logger.info(
                f"{format_component('GUARD')} Rejected {task.title!r} -> {new_status.value}: "
                f"waiting on {', '.join(e.blockers)}"
            )
            raise

    return store.update_task(task.id, {"status": new_status.value})
