"""Request and response payloads for the REST API."""

from pydantic import BaseModel, ConfigDict, Field

from foundry_ai.models import ChatMessage, TaskStatus


class StatusChangeRequest(BaseModel):
    """Body for a quick status change."""

    status: TaskStatus


class AssistantRequest(BaseModel):
    """Body for a chat message to an assistant."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1)
    chat_history: list[ChatMessage] | None = Field(None, alias="chatHistory")


class AssistantResponse(BaseModel):
    response: str


class GeneratePlanRequest(BaseModel):
    """Body for plan generation; ``user_message`` is the startup idea."""

    model_config = ConfigDict(populate_by_name=True)

    user_message: str = Field(..., min_length=1, alias="userMessage")


class GeneratedDepartment(BaseModel):
    id: str
    name: str
    task_count: int
    dependency_count: int


class GeneratePlanResponse(BaseModel):
    success: bool = True
    message: str
    departments: list[GeneratedDepartment]


class ProjectCreateRequest(BaseModel):
    """Body for creating a project."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    description: str | None = None


class ProjectUpdateRequest(BaseModel):
    """Body for editing a project; omitted fields are left as they are."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1)
    description: str | None = None


class TaskCreateRequest(BaseModel):
    """Body for adding a task by hand. New tasks always start pending."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class TaskUpdateRequest(BaseModel):
    """Body for editing a task from the task dialog."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
