"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from bottle_tracker.adapters.openai_insights_client import OpenAIInsightsClient
from bottle_tracker.adapters.supabase_blob_store import SupabaseBlobStore
from bottle_tracker.config import Settings
from bottle_tracker.services.analysis import AnalysisOptions, FeedAnalysisService
from bottle_tracker.services.insights import InsightsService
from bottle_tracker.services.uploads import UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: FeedAnalysisService
    insights_service: InsightsService
    upload_service: UploadService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    blob_store = SupabaseBlobStore(
        client=supabase_client, bucket=resolved_settings.storage_bucket
    )
    analysis_service = FeedAnalysisService(
        blob_store=blob_store,
        file_name=resolved_settings.data_file_name,
        options=AnalysisOptions(
            baby_weight_kg=resolved_settings.default_baby_weight_kg,
            ml_per_kg_per_day=resolved_settings.ml_per_kg_per_day,
        ),
    )
    openai_client = OpenAIInsightsClient.create(
        resolved_settings.openai_api_key,
        timeout=resolved_settings.openai_timeout_seconds,
    )
    insights_service = InsightsService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    upload_service = UploadService(
        blob_store=blob_store,
        file_name=resolved_settings.data_file_name,
        max_bytes=resolved_settings.max_upload_bytes,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        insights_service=insights_service,
        upload_service=upload_service,
        close_resources=close_resources,
    )
