"""Project and task assistants backed by a text-generation backend."""

from __future__ import annotations

import asyncio
import logging
import weakref
from contextlib import AsyncExitStack
from typing import Any

from foundry_ai.context import ProjectContext
from foundry_ai.exceptions import BlockedError
from foundry_ai.graph import incomplete_blockers
from foundry_ai.llm import GenerationBackend
from foundry_ai.logging import format_component
from foundry_ai.models import ChatMessage
from foundry_ai.prompts import build_project_assistant_prompt, build_task_assistant_prompt
from foundry_ai.settings import settings
from foundry_ai.store import TaskStore
from foundry_ai.tools import ToolRegistry, ToolRuntime, registry as default_registry

logger = logging.getLogger(__name__)

EMPTY_REPLY = "Done. Let me know if you need anything else."

# In-process only; separate workers are not coordinated. An entry lives only
# while some call holds or waits on its lock.
_project_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()


def _history_messages(chat_history: list[ChatMessage] | None) -> list[dict[str, Any]]:
    return [{"role": m.role, "content": m.content} for m in chat_history or []]


class ProjectAssistant:
    """Answers a user message about a project, applying tool calls along the way.

    Flow per message: compose the prompt from a fresh project snapshot, ask the
    backend once with the tool catalog, run every requested tool (each failure
    is reported back as data), then ask the backend once more with the results
    and return its text. Backend errors in either round propagate to the caller.
    """

    store: TaskStore
    backend: GenerationBackend
    registry: ToolRegistry
    enforce_status_guard: bool
    serialize_per_project: bool

    def __init__(
        self,
        store: TaskStore,
        backend: GenerationBackend,
        registry: ToolRegistry | None = None,
        enforce_status_guard: bool | None = None,
        serialize_per_project: bool | None = None,
    ) -> None:
        """Initialize assistant.

        Args:
            store: Task/dependency store
            backend: Text-generation backend
            registry: Tool registry (defaults to the built-in project tools)
            enforce_status_guard: Re-check dependencies in update_task_status
                (defaults to settings.assistant_enforce_status_guard)
            serialize_per_project: Handle one message per project at a time
                (defaults to settings.assistant_serialize_per_project)
        """
        self.store = store
        self.backend = backend
        self.registry = registry or default_registry
        self.enforce_status_guard = (
            settings.assistant_enforce_status_guard if enforce_status_guard is None else enforce_status_guard
        )
        self.serialize_per_project = (
            settings.assistant_serialize_per_project if serialize_per_project is None else serialize_per_project
        )

    async def handle_user_message(
        self,
        project_id: str,
        message: str,
        chat_history: list[ChatMessage] | None = None,
    ) -> str:
        """Return the assistant's reply to ``message``.

        Raises:
            NotFoundError: If the project does not exist
            BackendError: If either generation round fails
        """
        async with AsyncExitStack() as stack:
            if self.serialize_per_project:
                lock = _project_locks.setdefault(project_id, asyncio.Lock())
                await stack.enter_async_context(lock)
            return await self._handle(project_id, message, chat_history)

    async def _handle(self, project_id: str, message: str, chat_history: list[ChatMessage] | None) -> str:
        context = ProjectContext.load(self.store, project_id)
        messages: list[dict[str, Any]] = [
            {"role": "system", "content": build_project_assistant_prompt(context)},
            *_history_messages(chat_history),
            {"role": "user", "content": message},
        ]

        logger.info(f"{format_component('ASSISTANT')} Sending request with project context for {context.project.name!r}")
        first = await self.backend.generate(messages, tools=self.registry.catalog())
        if not first.tool_calls:
            return first.content or ""

        runtime = ToolRuntime(store=self.store, context=context, enforce_status_guard=self.enforce_status_guard)
        results = [self.registry.execute(call, runtime) for call in first.tool_calls]
        logger.info(f"{format_component('ASSISTANT')} Executed {len(results)} tool call(s); requesting final reply")

        follow_up = [
            *messages,
            first.to_message(),
            *({"role": "tool", **result} for result in results),
        ]
        second = await self.backend.generate(follow_up)
        return second.content or EMPTY_REPLY


class TaskAssistant:
    """Single-round chat about one task, available only while the task is unblocked."""

    def __init__(self, store: TaskStore, backend: GenerationBackend) -> None:
        self.store = store
        self.backend = backend

    async def reply(self, task_id: str, message: str, chat_history: list[ChatMessage] | None = None) -> str:
        """Return the assistant's reply about ``task_id``.

        Raises:
            NotFoundError: If the task or its department/project is missing
            BlockedError: If the task has incomplete dependencies; ``blockers``
                lists their titles
            BackendError: If generation fails
        """
        task = self.store.get_task(task_id)
        edges = self.store.list_dependencies([task.id])
        targets = self.store.get_tasks([edge.depends_on_task_id for edge in edges])
        blockers = incomplete_blockers(task, edges, targets)
        if blockers:
            titles = [b.title for b in blockers]
            raise BlockedError(
                f'"{task.title}" is blocked by incomplete dependencies: {", ".join(titles)}',
                blockers=titles,
            )

        department = self.store.get_department(task.department_id)
        project = self.store.get_project(department.project_id)
        departments = self.store.list_departments(project.id)

        messages = [
            {"role": "system", "content": build_task_assistant_prompt(project, departments, task, department.name)},
            *_history_messages(chat_history),
            {"role": "user", "content": message},
        ]
        generation = await self.backend.generate(messages)
        return generation.content or ""
