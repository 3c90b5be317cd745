"""Text-generation backend used by the assistants and the plan generator."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from openai import APIError, APIStatusError, AsyncOpenAI, RateLimitError
from pydantic import BaseModel, Field

from foundry_ai.exceptions import BackendError, BackendPaymentRequiredError, BackendRateLimitedError
from foundry_ai.settings import settings

logger = logging.getLogger(__name__)


class ToolCall(BaseModel):
    """A model-declared request to run a named tool."""

    id: str
    name: str
    arguments: str = Field("{}", description="Raw JSON arguments as produced by the model")


class Generation(BaseModel):
    """One backend response: either text, tool calls, or both."""

    content: str | None = None
    tool_calls: list[ToolCall] = Field(default_factory=list)

    def to_message(self) -> dict[str, Any]:
        """Render as the assistant message echoed back in a follow-up request."""
        message: dict[str, Any] = {"role": "assistant", "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [
                {"id": call.id, "type": "function", "function": {"name": call.name, "arguments": call.arguments}}
                for call in self.tool_calls
            ]
        return message


class GenerationBackend(Protocol):
    """Anything that can turn chat messages into a Generation."""

    async def generate(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        tool_choice: dict[str, Any] | str | None = None,
    ) -> Generation: ...


def classify_status(status_code: int | None) -> BackendError:
    """Map an HTTP status from the gateway to a BackendError subclass."""
    if status_code == 429:
        return BackendRateLimitedError(status_code=status_code)
    if status_code == 402:
        return BackendPaymentRequiredError(status_code=status_code)
    return BackendError(status_code=status_code)


class OpenAIBackend:
    """GenerationBackend over any OpenAI-compatible chat completions endpoint."""

    client: AsyncOpenAI
    model: str

    def __init__(self, model: str, client: AsyncOpenAI | None = None) -> None:
        """Initialize backend.

        Args:
            model: Model identifier understood by the gateway
            client: Preconfigured client (defaults to one built from settings)
        """
        self.model = model
        self.client = client or get_gateway_client()

    async def generate(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        tool_choice: dict[str, Any] | str | None = None,
    ) -> Generation:
        kwargs: dict[str, Any] = {"model": self.model, "messages": messages}
        if tools:
            kwargs["tools"] = tools
        if tool_choice is not None:
            kwargs["tool_choice"] = tool_choice

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except RateLimitError as e:
            logger.warning(f"AI gateway rate limited: {e}")
            raise classify_status(429) from e
        except APIStatusError as e:
            logger.error(f"AI gateway error: {e.status_code} {e.message}")
            raise classify_status(e.status_code) from e
        except APIError as e:
            logger.error(f"AI gateway unreachable: {e}")
            raise BackendError() from e

        message = response.choices[0].message
        tool_calls = [
            ToolCall(id=call.id, name=call.function.name, arguments=call.function.arguments or "{}")
            for call in message.tool_calls or []
        ]
        return Generation(content=message.content, tool_calls=tool_calls)


def uses_gateway() -> bool:
    """True when requests go through the configured gateway rather than OpenAI directly."""
    return bool(settings.openrouter_api_key)


def select_model(gateway_model: str, openai_model: str) -> str:
    """Pick the model id matching the endpoint ``get_gateway_client`` talks to."""
    return gateway_model if uses_gateway() else openai_model


def get_gateway_client() -> AsyncOpenAI:
    """Get a client for the configured AI gateway.

    An OpenRouter key selects ``ai_gateway_base_url``. With only an OpenAI key
    set, requests go straight to ``openai_base_url``.
    """
    if settings.openrouter_api_key:
        return AsyncOpenAI(base_url=settings.ai_gateway_base_url, api_key=settings.openrouter_api_key, max_retries=0)
    if settings.openai_api_key:
        return AsyncOpenAI(base_url=settings.openai_base_url, api_key=settings.openai_api_key, max_retries=0)
    raise BackendError("AI gateway API key not configured")
