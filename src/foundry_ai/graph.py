"""Dependency graph engine: display ordering and blocked-state derivation.

Pure functions over already-loaded tasks and edges. Nothing here performs I/O
or raises on malformed input: edges that point at unknown tasks are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from foundry_ai.models import Task, TaskDependency, TaskStatus


def _outgoing(task_id: str, edges: Iterable[TaskDependency]) -> list[str]:
    return [edge.depends_on_task_id for edge in edges if edge.task_id == task_id]


def order_tasks(tasks: Sequence[Task], edges: Iterable[TaskDependency]) -> list[Task]:
    """Return ``tasks`` so that every task follows the tasks it depends on.

    Depth-first post-order walk with an explicit stack. Roots are taken in input
    order and dependencies in edge order, so the result is deterministic and
    stable for unrelated tasks. An edge that reaches a task already on the
    stack closes a cycle and is skipped; every task is still emitted once.

    Args:
        tasks: Tasks of one department
        edges: Dependency edges; those leaving the task set are ignored

    Returns:
        A permutation of ``tasks``
    """
    by_id = {task.id: task for task in tasks}
    depends_on: dict[str, list[str]] = {task_id: [] for task_id in by_id}
    for edge in edges:
        if edge.task_id in by_id and edge.depends_on_task_id in by_id:
            depends_on[edge.task_id].append(edge.depends_on_task_id)

    finished: set[str] = set()
    in_progress: set[str] = set()
    ordered: list[Task] = []

    for root in by_id:
        if root in finished:
            continue

        in_progress.add(root)
        stack: list[tuple[str, Iterator[str]]] = [(root, iter(depends_on[root]))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                if dep in finished or dep in in_progress:
                    continue
                in_progress.add(dep)
                stack.append((dep, iter(depends_on[dep])))
                break
            else:
                stack.pop()
                in_progress.discard(node)
                finished.add(node)
                ordered.append(by_id[node])

    return ordered


def blocker_tasks_of(task: Task, edges: Iterable[TaskDependency], all_tasks: Iterable[Task]) -> list[Task]:
    """Resolve the tasks ``task`` depends on, in edge order. Dangling edges are skipped."""
    by_id = {t.id: t for t in all_tasks}
    return [by_id[dep] for dep in _outgoing(task.id, edges) if dep in by_id]


def incomplete_blockers(task: Task, edges: Iterable[TaskDependency], all_tasks: Iterable[Task]) -> list[Task]:
    """The subset of :func:`blocker_tasks_of` that is not completed yet."""
    return [t for t in blocker_tasks_of(task, edges, all_tasks) if t.status != TaskStatus.COMPLETED]


def is_blocked(task: Task, edges: Iterable[TaskDependency], all_tasks: Iterable[Task]) -> bool:
    """True iff some dependency of ``task`` resolves to a task that is not completed."""
    return bool(incomplete_blockers(task, edges, all_tasks))
