"""Parsing of exported feeding logs into bottle feed events."""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime

from bottle_tracker.domain.errors import EmptyResultError, StructuralError
from bottle_tracker.domain.feeding import FeedEvent

TYPE_COLUMN = "Type"
START_COLUMN = "Start"
START_LOCATION_COLUMN = "Start Location"
END_CONDITION_COLUMN = "End Condition"

BOTTLE_MARKER = "Bottle"
DEFAULT_TIME = "00:00"

_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%m/%d/%y")
_DIGITS = re.compile(r"\d+")
_MAX_HOUR = 23
_MIN_ROWS = 2

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedLogColumns:
    """Positions of the required columns within a row."""

    type_index: int
    start_index: int
    start_location_index: int
    end_condition_index: int

    @property
    def max_index(self) -> int:
        return max(
            self.type_index,
            self.start_index,
            self.start_location_index,
            self.end_condition_index,
        )


def split_csv_line(line: str) -> list[str]:
    """Split a row on commas that are not inside double quotes."""
    if not line or not line.strip():
        return []
    fields: list[str] = []
    start = 0
    in_quotes = False
    for position, char in enumerate(line):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(_clean_field(line[start:position]))
            start = position + 1
    fields.append(_clean_field(line[start:]))
    return fields


def locate_columns(header_line: str) -> FeedLogColumns:
    """Find the required columns in a header row by exact name."""
    headers = split_csv_line(header_line)
    required = (TYPE_COLUMN, START_COLUMN, START_LOCATION_COLUMN, END_CONDITION_COLUMN)
    missing = [name for name in required if name not in headers]
    if missing:
        raise StructuralError(
            "Required columns not found in CSV data: " + ", ".join(missing)
        )
    return FeedLogColumns(
        type_index=headers.index(TYPE_COLUMN),
        start_index=headers.index(START_COLUMN),
        start_location_index=headers.index(START_LOCATION_COLUMN),
        end_condition_index=headers.index(END_CONDITION_COLUMN),
    )


def extract_feed_events(text: str) -> list[FeedEvent]:
    """Return bottle feeds from a feeding log, oldest first.

    Rows that are short, not bottle feeds, have no volume, or carry a date
    that cannot be read are skipped. Raises ``StructuralError`` when the log
    has no data rows or lacks a required column, and ``EmptyResultError``
    when nothing usable remains.
    """
    lines = text.split("\n")
    if len(lines) < _MIN_ROWS:
        raise StructuralError("CSV data appears to be empty or invalid")
    columns = locate_columns(lines[0])

    keyed: list[tuple[tuple[date, tuple[int, ...]], FeedEvent]] = []
    skipped = 0
    for line in lines[1:]:
        if not line.strip():
            continue
        values = split_csv_line(line)
        if len(values) <= columns.max_index:
            skipped += 1
            continue
        if BOTTLE_MARKER not in values[columns.start_location_index]:
            continue
        amount = extract_amount(values[columns.end_condition_index])
        start = values[columns.start_index]
        if not start or not amount:
            skipped += 1
            continue
        try:
            event, sort_key = _build_event(start, amount)
        except ValueError:
            _logger.debug("Skipping entry with invalid date/time: %s", start)
            skipped += 1
            continue
        keyed.append((sort_key, event))

    if not keyed:
        raise EmptyResultError("No valid bottle feeds found in the CSV data")
    if skipped:
        _logger.info("Skipped %s unusable bottle feed rows", skipped)
    keyed.sort(key=lambda item: item[0])
    return [event for _, event in keyed]


def extract_amount(condition: str) -> int:
    """Return the first run of digits in a free-text volume, or 0."""
    match = _DIGITS.search(condition or "")
    if match is None:
        return 0
    return int(match.group())


def parse_feed_date(value: str) -> date:
    """Parse a log date in one of the supported calendar formats."""
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {value!r}")


def _build_event(
    start: str, amount: int
) -> tuple[FeedEvent, tuple[date, tuple[int, ...]]]:
    date_part, _, time_part = start.partition(" ")
    time_part = time_part.strip() or DEFAULT_TIME
    if not date_part:
        raise ValueError("Missing date")
    day = parse_feed_date(date_part)
    hour_text, *rest = time_part.split(":")
    hour = int(hour_text)
    if not 0 <= hour <= _MAX_HOUR:
        raise ValueError(f"Hour out of range: {hour}")
    clock = [hour]
    for part in rest:
        digits = _DIGITS.match(part)
        clock.append(int(digits.group()) if digits else 0)
    event = FeedEvent(date=date_part, time=time_part, hour=hour, amount=amount)
    return event, (day, tuple(clock))


def _clean_field(raw: str) -> str:
    value = raw.strip()
    value = value.removeprefix('"').removesuffix('"')
    return value.strip()
