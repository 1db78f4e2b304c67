"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

import pytest

from bottle_tracker.config import Settings
from bottle_tracker.containers import AppContainer
from bottle_tracker.domain.feeding import BlobMetadata
from bottle_tracker.services.analysis import (
    AnalysisOptions,
    BlobStore,
    FeedAnalysisService,
)
from bottle_tracker.services.insights import InsightsClient, InsightsService
from bottle_tracker.services.uploads import UploadService

HEADER = "Type,Start,End,Duration,Start Location,End Condition,Notes"
DATA_FILE = "feeding-data.csv"


def feed_row(start: str, amount: str, location: str = "Bottle") -> str:
    """Build a log row in the export column order used by HEADER."""
    return f"Feed,{start},,,{location},{amount},"


def build_log(rows: list[str], header: str = HEADER) -> str:
    return "\n".join([header, *rows]) + "\n"


def daily_log(amounts: list[int], first_day: date = date(2024, 1, 1)) -> str:
    """Build a log with one 08:00 bottle feed per consecutive day."""
    rows = []
    for offset, ml in enumerate(amounts):
        day = first_day + timedelta(days=offset)
        rows.append(feed_row(f"{day.isoformat()} 08:00", f"{ml}ml"))
    return build_log(rows)


@dataclass
class InMemoryBlobStore(BlobStore):
    """In-memory blob store for tests."""

    objects: dict[str, bytes] = field(default_factory=dict)
    content_types: dict[str, str] = field(default_factory=dict)
    modified_at: datetime = field(
        default_factory=lambda: datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    )

    def get_text(self, name: str) -> str | None:
        data = self.objects.get(name)
        return data.decode("utf-8") if data is not None else None

    def get_metadata(self, name: str) -> BlobMetadata | None:
        data = self.objects.get(name)
        if data is None:
            return None
        return BlobMetadata(name=name, size=len(data), last_modified=self.modified_at)

    def put(self, name: str, data: bytes, content_type: str) -> None:
        self.objects[name] = data
        self.content_types[name] = content_type


@dataclass
class FakeInsightsClient(InsightsClient):
    """Fake insights client returning fixed text or raising."""

    output: str = (
        '{"weekSummary": "Steady week.", "dayComparison": "Similar to yesterday.",'
        ' "milestones": "Longer night stretches."}'
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
        data_file_name=DATA_FILE,
    )


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def insights_client() -> FakeInsightsClient:
    return FakeInsightsClient()


@pytest.fixture
def container(
    settings: Settings,
    blob_store: InMemoryBlobStore,
    insights_client: FakeInsightsClient,
) -> AppContainer:
    analysis_service = FeedAnalysisService(
        blob_store=blob_store,
        file_name=settings.data_file_name,
        options=AnalysisOptions(
            baby_weight_kg=settings.default_baby_weight_kg,
            ml_per_kg_per_day=settings.ml_per_kg_per_day,
        ),
    )
    insights_service = InsightsService(
        client=insights_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    upload_service = UploadService(
        blob_store=blob_store,
        file_name=settings.data_file_name,
        max_bytes=settings.max_upload_bytes,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        insights_service=insights_service,
        upload_service=upload_service,
        close_resources=close_resources,
    )
