"""Week-over-week trends of average feed size."""

from collections.abc import Sequence

from bottle_tracker.domain.feeding import DailyStat, TrendHistoryEntry, TrendPoint
from bottle_tracker.services.aggregation import round1

WINDOW_DAYS = 7
MIN_TREND_DAYS = WINDOW_DAYS * 2


def compare_windows(
    recent: Sequence[DailyStat], older: Sequence[DailyStat]
) -> TrendPoint | None:
    """Compare mean daily averages of two windows.

    Returns ``None`` when either window is empty or the older mean is zero,
    since no percentage change is defined then.
    """
    if not recent or not older:
        return None
    recent_avg = _mean_average(recent)
    older_avg = _mean_average(older)
    if older_avg == 0:
        return None
    return TrendPoint(
        recent_average=round1(recent_avg),
        older_average=round1(older_avg),
        percent_change=round1((recent_avg - older_avg) / older_avg * 100),
    )


def recent_trend(daily: Sequence[DailyStat]) -> TrendPoint | None:
    """Compare the last seven days with the seven days before them."""
    if len(daily) < MIN_TREND_DAYS:
        return None
    return compare_windows(
        daily[-WINDOW_DAYS:], daily[-MIN_TREND_DAYS:-WINDOW_DAYS]
    )


def trend_history(daily: Sequence[DailyStat]) -> list[TrendHistoryEntry]:
    """Return the rolling trend for every day with two full windows behind it."""
    history: list[TrendHistoryEntry] = []
    for index in range(MIN_TREND_DAYS - 1, len(daily)):
        recent = daily[index - WINDOW_DAYS + 1 : index + 1]
        older = daily[index - MIN_TREND_DAYS + 1 : index - WINDOW_DAYS + 1]
        point = compare_windows(recent, older)
        history.append(
            TrendHistoryEntry(
                date=daily[index].date,
                value=point.percent_change if point else None,
                recent_avg=round1(_mean_average(recent)),
                older_avg=round1(_mean_average(older)),
            )
        )
    return history


def _mean_average(days: Sequence[DailyStat]) -> float:
    return sum(day.average_amount for day in days) / len(days)
