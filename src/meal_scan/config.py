"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    vision_provider: str = "gemini"
    vision_model: str = "gemini-3-pro-preview"
    gemini_api_key: str | None = None
    openai_api_key: str | None = None
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    analysis_language: str = "Simplified Chinese"
    image_bucket: str = "food-images"
    meal_history_limit: int = 50
    critical_deviation_threshold_percent: float = 20.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_bearer_token(raw: str | None) -> str | None:
    """Extract the token from an Authorization header value."""
    if raw is None:
        return None
    scheme, _, token = raw.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    cleaned = token.strip()
    return cleaned or None
