"""FoundryAI core - task dependency graph and project assistant."""

from foundry_ai.assistant import ProjectAssistant, TaskAssistant
from foundry_ai.board import department_board
from foundry_ai.context import ProjectContext
from foundry_ai.editing import create_project, create_task, delete_project, edit_project, edit_task
from foundry_ai.exceptions import (
    AlreadyExistsError,
    BackendError,
    BackendPaymentRequiredError,
    BackendRateLimitedError,
    BlockedError,
    FoundryError,
    NotFoundError,
)
from foundry_ai.graph import blocker_tasks_of, incomplete_blockers, is_blocked, order_tasks
from foundry_ai.guard import change_task_status, check_status_transition
from foundry_ai.llm import Generation, GenerationBackend, OpenAIBackend, ToolCall
from foundry_ai.models import (
    BoardTask,
    ChatMessage,
    Department,
    Project,
    Task,
    TaskDependency,
    TaskStatus,
)
from foundry_ai.planner import PlanResult, generate_project_plan
from foundry_ai.settings import Settings, settings
from foundry_ai.store import SupabaseStore, TaskStore
from foundry_ai.tools import ToolRegistry, ToolRuntime, registry

__all__ = [
    # Assistants
    "ProjectAssistant",
    "TaskAssistant",
    "ProjectContext",
    # Graph
    "order_tasks",
    "is_blocked",
    "blocker_tasks_of",
    "incomplete_blockers",
    "department_board",
    # Guard
    "check_status_transition",
    "change_task_status",
    # User edits
    "create_project",
    "edit_project",
    "delete_project",
    "create_task",
    "edit_task",
    # Planner
    "generate_project_plan",
    "PlanResult",
    # Backend
    "Generation",
    "GenerationBackend",
    "OpenAIBackend",
    "ToolCall",
    # Tools
    "ToolRegistry",
    "ToolRuntime",
    "registry",
    # Models
    "BoardTask",
    "ChatMessage",
    "Department",
    "Project",
    "Task",
    "TaskDependency",
    "TaskStatus",
    # Store
    "SupabaseStore",
    "TaskStore",
    # Settings
    "Settings",
    "settings",
    # Exceptions
    "FoundryError",
    "NotFoundError",
    "AlreadyExistsError",
    "BlockedError",
    "BackendError",
    "BackendRateLimitedError",
    "BackendPaymentRequiredError",
]
