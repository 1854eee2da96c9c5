"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_scan.adapters.gemini_vision_client import GeminiVisionClient
from meal_scan.adapters.openai_vision_client import OpenAIVisionClient
from meal_scan.adapters.supabase_critical_sample_repository import (
    SupabaseCriticalSampleRepository,
)
from meal_scan.adapters.supabase_identity_resolver import SupabaseIdentityResolver
from meal_scan.adapters.supabase_image_store import SupabaseImageStore
from meal_scan.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_scan.adapters.supabase_staple_repository import SupabaseStapleRepository
from meal_scan.config import Settings
from meal_scan.services.food_log import FoodLogService
from meal_scan.services.vision import VisionClient, VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    vision_service: VisionService
    food_log_service: Callable[[str | None], FoodLogService]
    close_resources: Callable[[], Awaitable[None]]


def build_vision_client(settings: Settings) -> VisionClient:
    """Create the vision client for the configured provider."""
    if settings.vision_provider == "gemini":
        if not settings.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is required for the gemini provider")
        return GeminiVisionClient.create(settings.gemini_api_key)
    if settings.vision_provider == "openai":
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY is required for the openai provider")
        return OpenAIVisionClient.create(
            settings.openai_api_key,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        )
    raise ValueError(f"Unknown vision provider: {settings.vision_provider}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    staple_repository = SupabaseStapleRepository(supabase_client)
    sample_repository = SupabaseCriticalSampleRepository(supabase_client)
    image_store = SupabaseImageStore(
        supabase_client, bucket=resolved_settings.image_bucket
    )
    vision_client = build_vision_client(resolved_settings)
    vision_service = VisionService(
        client=vision_client,
        model=resolved_settings.vision_model,
        language=resolved_settings.analysis_language,
    )

    def food_log_service(access_token: str | None) -> FoodLogService:
        return FoodLogService(
            identity=SupabaseIdentityResolver(supabase_client, access_token),
            meals=meal_repository,
            staples=staple_repository,
            samples=sample_repository,
            images=image_store,
            history_limit=resolved_settings.meal_history_limit,
        )

    async def close_resources() -> None:
        if isinstance(vision_client, OpenAIVisionClient):
            await vision_client.close()

    return AppContainer(
        settings=resolved_settings,
        vision_service=vision_service,
        food_log_service=food_log_service,
        close_resources=close_resources,
    )
