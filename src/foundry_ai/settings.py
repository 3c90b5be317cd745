"""Application settings using Pydantic BaseSettings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase Configuration
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_service_role_key: str | None = None

    # AI gateway (OpenRouter or any OpenAI-compatible endpoint)
    openrouter_api_key: str | None = None
    ai_gateway_base_url: str | None = "https://openrouter.ai/api/v1"

    # Direct OpenAI, used only when no gateway key is set
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"

    # Model Configuration (gateway ids, then plain OpenAI ids)
    assistant_model: str = "google/gemini-2.5-flash"
    plan_model: str = "openai/gpt-5-mini"
    openai_assistant_model: str = "gpt-4o-mini"
    openai_plan_model: str = "gpt-5-mini"

    # Assistant behaviour
    assistant_enforce_status_guard: bool = False
    assistant_serialize_per_project: bool = False

    # Server
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]


# Global settings instance
settings = Settings()
