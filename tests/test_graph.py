"""Unit tests for dependency ordering and blocked-state derivation."""

from __future__ import annotations

import random

import pytest

from foundry_ai.graph import blocker_tasks_of, incomplete_blockers, is_blocked, order_tasks
from foundry_ai.models import Task, TaskDependency, TaskStatus


def make_task(task_id: str, status: TaskStatus = TaskStatus.PENDING) -> Task:
    return Task(id=task_id, title=task_id.upper(), status=status, department_id="dept")


def edge(task_id: str, depends_on: str) -> TaskDependency:
    return TaskDependency(task_id=task_id, depends_on_task_id=depends_on)


def ids(tasks: list[Task]) -> list[str]:
    return [t.id for t in tasks]


class TestOrderTasks:
    """Tests for order_tasks."""

    def test_dependency_comes_first(self) -> None:
        t1, t2 = make_task("t1"), make_task("t2")

        assert ids(order_tasks([t2, t1], [edge("t2", "t1")])) == ["t1", "t2"]

    def test_independent_tasks_keep_input_order(self) -> None:
        tasks = [make_task("c"), make_task("a"), make_task("b")]

        assert ids(order_tasks(tasks, [])) == ["c", "a", "b"]

    def test_chain_and_diamond(self) -> None:
        tasks = [make_task(x) for x in ("d", "c", "b", "a")]
        edges = [edge("d", "b"), edge("d", "c"), edge("b", "a"), edge("c", "a")]

        assert ids(order_tasks(tasks, edges)) == ["a", "b", "c", "d"]

    def test_two_cycle_terminates_with_each_task_once(self) -> None:
        t1, t2 = make_task("t1"), make_task("t2")

        result = order_tasks([t1, t2], [edge("t1", "t2"), edge("t2", "t1")])

        assert sorted(ids(result)) == ["t1", "t2"]

    def test_self_dependency_is_ignored(self) -> None:
        t1, t2 = make_task("t1"), make_task("t2")

        assert ids(order_tasks([t1, t2], [edge("t1", "t1")])) == ["t1", "t2"]

    def test_cycle_with_tail_keeps_acyclic_part_ordered(self) -> None:
        tasks = [make_task(x) for x in ("a", "b", "c", "d")]
        # a -> b -> c -> a is a cycle, d depends on a
        edges = [edge("a", "b"), edge("b", "c"), edge("c", "a"), edge("d", "a")]

        result = ids(order_tasks(tasks, edges))

        assert sorted(result) == ["a", "b", "c", "d"]
        assert result.index("a") < result.index("d")

    def test_edges_outside_the_task_set_are_ignored(self) -> None:
        t1, t2 = make_task("t1"), make_task("t2")
        edges = [edge("t1", "elsewhere"), edge("ghost", "t2"), edge("t2", "t1")]

        assert ids(order_tasks([t2, t1], edges)) == ["t1", "t2"]

    def test_empty_input(self) -> None:
        assert order_tasks([], [edge("a", "b")]) == []

    def test_long_chain_does_not_hit_recursion_limit(self) -> None:
        tasks = [make_task(f"t{i}") for i in range(5000)]
        edges = [edge(f"t{i}", f"t{i - 1}") for i in range(1, 5000)]

        result = order_tasks(list(reversed(tasks)), edges)

        assert ids(result) == [f"t{i}" for i in range(5000)]

    def test_idempotent(self) -> None:
        tasks = [make_task(x) for x in ("a", "b", "c", "d")]
        edges = [edge("a", "c"), edge("b", "a"), edge("d", "b")]

        assert ids(order_tasks(tasks, edges)) == ids(order_tasks(tasks, edges))

    @pytest.mark.parametrize("seed", range(20))
    def test_random_dag_respects_every_edge(self, seed: int) -> None:
        rng = random.Random(seed)
        size = rng.randint(1, 25)
        names = [f"t{i}" for i in range(size)]
        # Edges only point to lower indexes, so the graph is acyclic
        edges = [edge(names[i], names[j]) for i in range(size) for j in range(i) if rng.random() < 0.2]
        shuffled = [make_task(n) for n in names]
        rng.shuffle(shuffled)

        result = ids(order_tasks(shuffled, edges))

        assert sorted(result) == sorted(names)
        position = {task_id: i for i, task_id in enumerate(result)}
        for e in edges:
            assert position[e.depends_on_task_id] < position[e.task_id]

    @pytest.mark.parametrize("seed", range(10))
    def test_random_graph_with_cycles_is_a_permutation(self, seed: int) -> None:
        rng = random.Random(seed)
        names = [f"t{i}" for i in range(rng.randint(2, 15))]
        edges = [edge(rng.choice(names), rng.choice(names)) for _ in range(len(names) * 2)]

        result = ids(order_tasks([make_task(n) for n in names], edges))

        assert len(result) == len(names)
        assert set(result) == set(names)


class TestBlockedState:
    """Tests for is_blocked, blocker_tasks_of and incomplete_blockers."""

    def test_blocked_until_dependency_completed(self) -> None:
        t1, t2 = make_task("t1"), make_task("t2")
        edges = [edge("t2", "t1")]

        assert is_blocked(t2, edges, [t1, t2]) is True

        done = t1.model_copy(update={"status": TaskStatus.COMPLETED})
        assert is_blocked(t2, edges, [done, t2]) is False

    def test_in_progress_dependency_still_blocks(self) -> None:
        t1, t2 = make_task("t1", TaskStatus.IN_PROGRESS), make_task("t2")

        assert is_blocked(t2, [edge("t2", "t1")], [t1, t2]) is True

    def test_no_dependencies_means_not_blocked(self) -> None:
        t1, t2 = make_task("t1"), make_task("t2")

        assert is_blocked(t1, [edge("t2", "t1")], [t1, t2]) is False

    def test_dangling_edge_does_not_block(self) -> None:
        t1 = make_task("t1")

        assert is_blocked(t1, [edge("t1", "missing")], [t1]) is False

    def test_blocker_tasks_resolve_in_edge_order(self) -> None:
        a = make_task("a", TaskStatus.COMPLETED)
        b = make_task("b")
        c = make_task("c")
        edges = [edge("c", "b"), edge("c", "missing"), edge("c", "a")]

        assert ids(blocker_tasks_of(c, edges, [a, b, c])) == ["b", "a"]
        assert ids(incomplete_blockers(c, edges, [a, b, c])) == ["b"]
