"""Tests for the feeding analysis pipeline and service."""

from datetime import UTC, datetime

import pytest

from bottle_tracker.domain.errors import (
    DataFileNotFoundError,
    EmptyResultError,
    StructuralError,
)
from bottle_tracker.services.analysis import (
    AnalysisOptions,
    FeedAnalysisService,
    analyze_feeding_log,
)
from tests.conftest import DATA_FILE, InMemoryBlobStore, build_log, daily_log, feed_row

SCENARIO_A = (
    "Type,Start,Start Location,End Condition\n"
    "Feed,2023-03-01 08:00,Bottle,120ml\n"
    "Feed,2023-03-01 12:30,Bottle,150ml\n"
)


def test_analyze_single_day_summary() -> None:
    result = analyze_feeding_log(SCENARIO_A)

    assert len(result.all_stats) == 1
    day = result.all_stats[0]
    assert (day.date, day.feed_count, day.total_amount, day.average_amount) == (
        "2023-03-01",
        2,
        270,
        135.0,
    )
    assert result.recent_trend is None
    assert result.trend_history == []
    assert result.overall_stats.total_bottle_feeds == 2
    assert result.overall_stats.date_range.start == "2023-03-01"
    assert result.overall_stats.date_range.end == "2023-03-01"
    assert result.overall_stats.average_daily_feeds == 2.0
    assert result.overall_stats.average_feed_size == 135.0
    assert result.baby_weight == 4.0
    assert result.recommended_intake == 600.0


def test_analyze_two_weeks_of_constant_feeds() -> None:
    result = analyze_feeding_log(daily_log([100] * 14))

    assert result.recent_trend is not None
    assert result.recent_trend.percent_change == 0
    assert len(result.trend_history) == 1
    assert len(result.daily_stats) == 7
    assert result.daily_stats == result.all_stats[-7:]
    assert result.overall_stats.date_range.start == "2024-01-01"
    assert result.overall_stats.date_range.end == "2024-01-14"


def test_analyze_totals_are_consistent() -> None:
    rows = [
        feed_row("2024-01-01 02:00", "60ml"),
        feed_row("2024-01-01 14:00", "90ml"),
        feed_row("2024-01-02 07:15", "100ml"),
        feed_row("2024-01-02 19:45", "110ml"),
        feed_row("2024-01-03 21:00", "95ml", location="Breast"),
    ]

    result = analyze_feeding_log(build_log(rows))

    raw_total = sum(feed.amount for feed in result.raw_feeds)
    assert raw_total == 360
    assert sum(day.total_amount for day in result.all_stats) == raw_total
    assert sum(slot.count for slot in result.time_stats) == len(result.raw_feeds)
    assert result.overall_stats.average_daily_feeds == 2.0
    assert result.overall_stats.average_feed_size == 90.0


def test_analyze_uses_configured_weight() -> None:
    options = AnalysisOptions(baby_weight_kg=3.9, ml_per_kg_per_day=160)

    result = analyze_feeding_log(SCENARIO_A, options)

    assert result.baby_weight == 3.9
    assert result.recommended_intake == pytest.approx(624.0)


def test_analyze_is_deterministic_apart_from_timestamp() -> None:
    text = daily_log([90, 100, 110] * 6)

    first = analyze_feeding_log(text, generated_at=datetime(2024, 1, 1, tzinfo=UTC))
    second = analyze_feeding_log(text, generated_at=datetime(2024, 2, 1, tzinfo=UTC))

    assert first.timestamp != second.timestamp
    assert first.all_stats == second.all_stats
    assert first.trend_history == second.trend_history
    assert first.time_stats == second.time_stats
    assert first.raw_feeds == second.raw_feeds
    assert first.overall_stats == second.overall_stats


def test_analyze_propagates_structural_errors() -> None:
    with pytest.raises(StructuralError):
        analyze_feeding_log("Type,Start,Location,Condition\nFeed,2024-01-01,Bottle,1")
    with pytest.raises(EmptyResultError):
        analyze_feeding_log(build_log([feed_row("2024-01-01 08:00", "Refused")]))


def test_service_loads_from_blob_store() -> None:
    store = InMemoryBlobStore(objects={DATA_FILE: SCENARIO_A.encode()})
    service = FeedAnalysisService(blob_store=store, file_name=DATA_FILE)

    result = service.analyze()

    assert result.overall_stats.total_bottle_feeds == 2


def test_service_weight_override_keeps_intake_rate() -> None:
    store = InMemoryBlobStore(objects={DATA_FILE: SCENARIO_A.encode()})
    service = FeedAnalysisService(
        blob_store=store,
        file_name=DATA_FILE,
        options=AnalysisOptions(baby_weight_kg=4.0, ml_per_kg_per_day=150),
    )

    result = service.analyze(baby_weight_kg=5.0)

    assert result.baby_weight == 5.0
    assert result.recommended_intake == 750.0
    assert service.analyze().baby_weight == 4.0


def test_service_raises_when_file_missing() -> None:
    service = FeedAnalysisService(blob_store=InMemoryBlobStore(), file_name=DATA_FILE)

    with pytest.raises(DataFileNotFoundError):
        service.analyze()
    with pytest.raises(DataFileNotFoundError):
        service.file_metadata()


def test_service_file_metadata() -> None:
    store = InMemoryBlobStore(objects={DATA_FILE: b"abc"})
    service = FeedAnalysisService(blob_store=store, file_name=DATA_FILE)

    metadata = service.file_metadata()

    assert metadata.name == DATA_FILE
    assert metadata.size == 3
    assert metadata.last_modified == store.modified_at
