"""Domain models for bottle feeding statistics."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FeedEvent:
    """Single bottle feed extracted from a log row."""

    date: str
    time: str
    hour: int
    amount: int


@dataclass(frozen=True)
class DailyStat:
    """Feed totals for one calendar day."""

    date: str
    feed_count: int
    total_amount: int
    average_amount: float


@dataclass(frozen=True)
class TrendPoint:
    """Comparison of two adjacent seven-day windows."""

    recent_average: float
    older_average: float
    percent_change: float


@dataclass(frozen=True)
class TrendHistoryEntry:
    """Trend anchored to the last day of its recent window."""

    date: str
    value: float | None
    recent_avg: float
    older_avg: float


@dataclass(frozen=True)
class TimeSlotStat:
    """Feed totals for one six-hour bucket of the day."""

    label: str
    count: int
    total_amount: int
    average_amount: float
    percentage: float


@dataclass(frozen=True)
class DateRange:
    """First and last feed dates."""

    start: str
    end: str


@dataclass(frozen=True)
class OverallStats:
    """Totals across the whole feeding log."""

    total_bottle_feeds: int
    date_range: DateRange
    average_daily_feeds: float
    average_feed_size: float


@dataclass(frozen=True)
class AnalysisResult:
    """Full statistical summary of a feeding log."""

    overall_stats: OverallStats
    recent_trend: TrendPoint | None
    daily_stats: list[DailyStat]
    all_stats: list[DailyStat]
    time_stats: list[TimeSlotStat]
    raw_feeds: list[FeedEvent]
    trend_history: list[TrendHistoryEntry]
    baby_weight: float
    recommended_intake: float
    timestamp: datetime


@dataclass(frozen=True)
class BlobMetadata:
    """Size and modification time of a stored object."""

    name: str
    size: int
    last_modified: datetime | None
