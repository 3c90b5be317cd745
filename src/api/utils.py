"""Shared dependencies for API routes."""

from __future__ import annotations

from supabase import Client, create_client

from foundry_ai import settings
from foundry_ai.llm import GenerationBackend, OpenAIBackend, select_model
from foundry_ai.store import SupabaseStore, TaskStore


def get_supabase() -> Client:
    """Get Supabase client instance."""
    key = settings.supabase_service_role_key or settings.supabase_anon_key
    return create_client(settings.supabase_url, key)


def get_store() -> TaskStore:
    """Store used by request handlers."""
    return SupabaseStore(get_supabase())


def get_assistant_backend() -> GenerationBackend:
    """Backend for the project and task assistants."""
    return OpenAIBackend(select_model(settings.assistant_model, settings.openai_assistant_model))


def get_plan_backend() -> GenerationBackend:
    """Backend for plan generation."""
    return OpenAIBackend(select_model(settings.plan_model, settings.openai_plan_model))
