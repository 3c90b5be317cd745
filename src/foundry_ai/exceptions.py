"""Exceptions for foundry-ai."""

from __future__ import annotations


class FoundryError(Exception):
    """Base exception for domain errors."""

    pass


class NotFoundError(FoundryError):
    """Raised when a named project, department or task does not exist."""

    pass


class AlreadyExistsError(FoundryError):
    """Raised when an entity with the same name already exists.

    Informational: callers report it back instead of failing the request.
    """

    pass


class BlockedError(FoundryError):
    """Raised when a task cannot move forward because of incomplete dependencies."""

    def __init__(self, message: str = "blocked by incomplete dependencies", blockers: list[str] | None = None) -> None:
        super().__init__(message)
        self.blockers = blockers or []


class BackendError(FoundryError):
    """Raised when the text-generation backend fails."""

    user_message = "Failed to get AI response"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message or self.user_message)
        self.status_code = status_code


class BackendRateLimitedError(BackendError):
    """Raised when the backend answers 429."""

    user_message = "Rate limit exceeded. Please try again in a moment."


class BackendPaymentRequiredError(BackendError):
    """Raised when the backend answers 402 (quota or credits exhausted)."""

    user_message = "AI service requires payment. Please add credits to continue."
