"""Feeding log analysis pipeline and service."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from bottle_tracker.domain.errors import DataFileNotFoundError
from bottle_tracker.domain.feeding import (
    AnalysisResult,
    BlobMetadata,
    DateRange,
    OverallStats,
)
from bottle_tracker.services.aggregation import (
    aggregate_daily,
    aggregate_time_slots,
    round1,
)
from bottle_tracker.services.parsing import extract_feed_events
from bottle_tracker.services.trends import WINDOW_DAYS, recent_trend, trend_history

DEFAULT_BABY_WEIGHT_KG = 4.0
DEFAULT_ML_PER_KG_PER_DAY = 150

_logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Storage interface for the raw feeding log."""

    def get_text(self, name: str) -> str | None:
        """Return the object's text, or None when it does not exist."""

    def get_metadata(self, name: str) -> BlobMetadata | None:
        """Return size and modification time, or None when missing."""

    def put(self, name: str, data: bytes, content_type: str) -> None:
        """Create or replace an object."""


@dataclass(frozen=True)
class AnalysisOptions:
    """Body-weight settings used for the recommended intake."""

    baby_weight_kg: float = DEFAULT_BABY_WEIGHT_KG
    ml_per_kg_per_day: float = DEFAULT_ML_PER_KG_PER_DAY


def analyze_feeding_log(
    text: str,
    options: AnalysisOptions | None = None,
    generated_at: datetime | None = None,
) -> AnalysisResult:
    """Turn a raw feeding log export into a statistical summary."""
    resolved = options or AnalysisOptions()
    events = extract_feed_events(text)
    all_stats = aggregate_daily(events)
    total_amount = sum(event.amount for event in events)

    overall = OverallStats(
        total_bottle_feeds=len(events),
        date_range=DateRange(start=events[0].date, end=events[-1].date),
        average_daily_feeds=round1(len(events) / len(all_stats)),
        average_feed_size=round1(total_amount / len(events)),
    )
    return AnalysisResult(
        overall_stats=overall,
        recent_trend=recent_trend(all_stats),
        daily_stats=all_stats[-WINDOW_DAYS:],
        all_stats=all_stats,
        time_stats=aggregate_time_slots(events),
        raw_feeds=events,
        trend_history=trend_history(all_stats),
        baby_weight=resolved.baby_weight_kg,
        recommended_intake=resolved.baby_weight_kg * resolved.ml_per_kg_per_day,
        timestamp=generated_at or datetime.now(tz=UTC),
    )


@dataclass
class FeedAnalysisService:
    """Service that loads the stored feeding log and analyzes it."""

    blob_store: BlobStore
    file_name: str
    options: AnalysisOptions = field(default_factory=AnalysisOptions)

    def analyze(self, baby_weight_kg: float | None = None) -> AnalysisResult:
        """Analyze the stored log, optionally with a per-request weight."""
        text = self.load_text()
        options = self.options
        if baby_weight_kg is not None:
            options = AnalysisOptions(
                baby_weight_kg=baby_weight_kg,
                ml_per_kg_per_day=self.options.ml_per_kg_per_day,
            )
        result = analyze_feeding_log(text, options)
        _logger.info(
            "Analyzed feeding log: feeds=%s days=%s trend_days=%s",
            result.overall_stats.total_bottle_feeds,
            len(result.all_stats),
            len(result.trend_history),
        )
        return result

    def load_text(self) -> str:
        """Fetch the raw feeding log from the blob store."""
        text = self.blob_store.get_text(self.file_name)
        if text is None:
            raise DataFileNotFoundError(self.file_name)
        _logger.info(
            "Loaded feeding log %s (%s characters)", self.file_name, len(text)
        )
        return text

    def file_metadata(self) -> BlobMetadata:
        """Return metadata for the stored feeding log."""
        metadata = self.blob_store.get_metadata(self.file_name)
        if metadata is None:
            raise DataFileNotFoundError(self.file_name)
        return metadata
