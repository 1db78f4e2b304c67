"""JSON payload builders for analysis results."""

from bottle_tracker.domain.feeding import (
    AnalysisResult,
    BlobMetadata,
    DailyStat,
    FeedEvent,
    TimeSlotStat,
    TrendHistoryEntry,
    TrendPoint,
)


def analysis_payload(result: AnalysisResult) -> dict[str, object]:
    """Build the camelCase JSON object returned to dashboard clients."""
    overall = result.overall_stats
    return {
        "overallStats": {
            "totalBottleFeeds": overall.total_bottle_feeds,
            "dateRange": {
                "start": overall.date_range.start,
                "end": overall.date_range.end,
            },
            "averageDailyFeeds": overall.average_daily_feeds,
            "averageFeedSize": overall.average_feed_size,
        },
        "recentTrend": trend_payload(result.recent_trend),
        "dailyStats": [daily_stat_payload(day) for day in result.daily_stats],
        "allStats": [daily_stat_payload(day) for day in result.all_stats],
        "timeStats": [time_slot_payload(slot) for slot in result.time_stats],
        "rawFeeds": [feed_payload(feed) for feed in result.raw_feeds],
        "trendHistory": [history_payload(entry) for entry in result.trend_history],
        "babyWeight": result.baby_weight,
        "recommendedIntake": result.recommended_intake,
        "timestamp": result.timestamp.isoformat(),
    }


def daily_stat_payload(day: DailyStat) -> dict[str, object]:
    return {
        "date": day.date,
        "feedCount": day.feed_count,
        "totalAmount": day.total_amount,
        "averageAmount": day.average_amount,
    }


def trend_payload(trend: TrendPoint | None) -> dict[str, object] | None:
    if trend is None:
        return None
    return {
        "recentAverage": trend.recent_average,
        "olderAverage": trend.older_average,
        "percentChange": trend.percent_change,
    }


def history_payload(entry: TrendHistoryEntry) -> dict[str, object]:
    return {
        "date": entry.date,
        "value": entry.value,
        "recentAvg": entry.recent_avg,
        "olderAvg": entry.older_avg,
    }


def time_slot_payload(slot: TimeSlotStat) -> dict[str, object]:
    # Existing dashboards read the bucket label from "hour".
    return {
        "hour": slot.label,
        "count": slot.count,
        "totalAmount": slot.total_amount,
        "averageAmount": slot.average_amount,
        "percentage": slot.percentage,
    }


def feed_payload(feed: FeedEvent) -> dict[str, object]:
    return {
        "date": feed.date,
        "time": feed.time,
        "hour": feed.hour,
        "amount": feed.amount,
    }


def metadata_payload(metadata: BlobMetadata) -> dict[str, object]:
    """Build the file metadata JSON object."""
    return {
        "fileName": metadata.name,
        "lastModified": (
            metadata.last_modified.isoformat() if metadata.last_modified else None
        ),
        "size": metadata.size,
    }
