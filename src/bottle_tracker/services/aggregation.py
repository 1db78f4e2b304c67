"""Daily and time-of-day aggregation of bottle feeds."""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from bottle_tracker.domain.feeding import DailyStat, FeedEvent, TimeSlotStat
from bottle_tracker.services.parsing import parse_feed_date

TIME_SLOTS: tuple[tuple[str, int, int], ...] = (
    ("12am-6am", 0, 6),
    ("6am-12pm", 6, 12),
    ("12pm-6pm", 12, 18),
    ("6pm-12am", 18, 24),
)

_ONE_DECIMAL = Decimal("0.1")


@dataclass
class _Totals:
    count: int = 0
    amount: int = 0

    def add(self, amount: int) -> None:
        self.count += 1
        self.amount += amount


def round1(value: float) -> float:
    """Round to one decimal place, ties away from zero."""
    return float(Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def aggregate_daily(events: list[FeedEvent]) -> list[DailyStat]:
    """Group feeds by calendar date, labelled with the first spelling seen."""
    labels: dict[date, str] = {}
    by_day: dict[date, _Totals] = {}
    for event in events:
        day = parse_feed_date(event.date)
        labels.setdefault(day, event.date)
        by_day.setdefault(day, _Totals()).add(event.amount)

    return [
        DailyStat(
            date=labels[day],
            feed_count=totals.count,
            total_amount=totals.amount,
            average_amount=round1(totals.amount / totals.count),
        )
        for day, totals in sorted(by_day.items())
    ]


def aggregate_time_slots(events: list[FeedEvent]) -> list[TimeSlotStat]:
    """Distribute feeds over the four six-hour buckets of the day."""
    by_slot = {label: _Totals() for label, _, _ in TIME_SLOTS}
    for event in events:
        by_slot[slot_for_hour(event.hour)].add(event.amount)

    total_count = len(events)
    stats = []
    for label, _, _ in TIME_SLOTS:
        totals = by_slot[label]
        stats.append(
            TimeSlotStat(
                label=label,
                count=totals.count,
                total_amount=totals.amount,
                average_amount=(
                    round1(totals.amount / totals.count) if totals.count else 0.0
                ),
                percentage=(
                    round1(totals.count / total_count * 100) if total_count else 0.0
                ),
            )
        )
    return stats


def slot_for_hour(hour: int) -> str:
    """Return the bucket label for an hour of the day."""
    for label, start, end in TIME_SLOTS:
        if start <= hour < end:
            return label
    raise ValueError(f"Hour out of range: {hour}")
