"""Calendar event shapes, month filtering and per-month presence maps."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any

from calendar_logic import sunday_weekday

logger = logging.getLogger(__name__)


class InvalidRange(ValueError):
    """A range event ends before it starts."""

    def __init__(self, event: RangeEvent) -> None:
        super().__init__(f"event range ends on {event.end} before it starts on {event.start}")
        self.event = event


@dataclass(frozen=True)
class DateEvent:
    date: date | None
    is_recurrent: bool = False
    renderer: Any = None


@dataclass(frozen=True)
class RangeEvent:
    start: date | None
    end: date | None
    is_recurrent: bool = False
    renderer: Any = None


Event = DateEvent | RangeEvent


@dataclass
class NormalizedEvents:
    """Which weekdays and which days of one month an event touches."""

    recurrent_by_weekday: set[int] = field(default_factory=set)  # 0 = Sunday
    dates_by_day: set[int] = field(default_factory=set)

    def touches(self, weekday: int, day: int) -> bool:
        return weekday in self.recurrent_by_weekday or day in self.dates_by_day


# ------------------------------------------------------------------
# Coercion
# ------------------------------------------------------------------

def _as_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            if "T" in value:
                return datetime.fromisoformat(value).date()
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def _from_mapping(data: Mapping) -> Event | None:
    flag = data.get("isRecurrent", data.get("is_recurrent", data.get("recurrent", False)))
    recurrent = flag if isinstance(flag, bool) else False
    renderer = data.get("renderer")
    day = _as_date(data.get("date"))
    if day is not None:
        return DateEvent(day, recurrent, renderer)
    start, end = _as_date(data.get("start")), _as_date(data.get("end"))
    if start is not None and end is not None:
        return RangeEvent(start, end, recurrent, renderer)
    return None


def as_event(raw: Any) -> Event | None:
    """Return a clean Event for raw input, or None if it has no usable dates.

    Accepts DateEvent/RangeEvent instances and mappings shaped like
    ``{"date": ...}`` or ``{"start": ..., "end": ...}`` with an optional
    ``isRecurrent`` flag. Datetimes and ISO strings are reduced to dates.
    """
    if isinstance(raw, Mapping):
        return _from_mapping(raw)
    if isinstance(raw, DateEvent):
        day = _as_date(raw.date)
        if day is None:
            return None
        return raw if type(raw.date) is date else replace(raw, date=day)
    if isinstance(raw, RangeEvent):
        start, end = _as_date(raw.start), _as_date(raw.end)
        if start is None or end is None:
            return None
        if type(raw.start) is date and type(raw.end) is date:
            return raw
        return replace(raw, start=start, end=end)
    return None


def anchor_date(event: Event) -> date:
    """Return the date an event is ordered by: its date, or its start."""
    return event.date if isinstance(event, DateEvent) else event.start


def month_key(d: date) -> tuple[int, int]:
    """Return (year, zero-based month) for ordering dates by month."""
    return d.year, d.month - 1


def is_reversed(event: Event) -> bool:
    return isinstance(event, RangeEvent) and event.end < event.start


def touches_month(event: RangeEvent, target: tuple[int, int]) -> bool:
    """Return True if a range, in either direction, reaches the target month."""
    low, high = sorted((month_key(event.start), month_key(event.end)))
    return low <= target <= high


# ------------------------------------------------------------------
# Filtering
# ------------------------------------------------------------------

def filter_events(month: int, year: int, events: Iterable[Any]) -> list[Event]:
    """Return the events that show up in the given zero-based month.

    Recurring events always apply. Dated events must fall in the month and
    ranges must overlap it. Records without usable dates are dropped. A
    range that ends before it starts raises InvalidRange when it reaches the
    month (recurring ranges reach every month) and is dropped otherwise.
    """
    target = (year, month)
    result: list[Event] = []
    for raw in events:
        event = as_event(raw)
        if event is None:
            logger.debug("Dropping event without usable dates: %r", raw)
            continue
        if is_reversed(event):
            if event.is_recurrent or touches_month(event, target):
                raise InvalidRange(event)
            logger.debug("Dropping reversed range outside %04d-%02d: %r", year, month + 1, event)
            continue
        if event.is_recurrent:
            result.append(event)
        elif isinstance(event, DateEvent):
            if month_key(event.date) == target:
                result.append(event)
        elif month_key(event.start) <= target <= month_key(event.end):
            result.append(event)
    return result


# ------------------------------------------------------------------
# Normalization
# ------------------------------------------------------------------

def clip_to_month(event: RangeEvent, month: int, year: int, max_day: int) -> tuple[int, int]:
    """Return the first and last day of the month covered by a range."""
    target = (year, month)
    first = event.start.day if month_key(event.start) >= target else 1
    last = event.end.day if month_key(event.end) <= target else max_day
    return first, last


def normalize_events(
    events: Iterable[Event], month: int, year: int, max_day: int,
) -> NormalizedEvents:
    """Reduce filtered events to weekday and day-of-month presence sets."""
    normalized = NormalizedEvents()
    for event in events:
        if event.is_recurrent:
            if isinstance(event, DateEvent):
                normalized.recurrent_by_weekday.add(sunday_weekday(event.date))
            else:
                # A recurring range is a sub-range of the week, not a date span
                a, b = sunday_weekday(event.start), sunday_weekday(event.end)
                normalized.recurrent_by_weekday.update(range(min(a, b), max(a, b) + 1))
        elif isinstance(event, DateEvent):
            normalized.dates_by_day.add(event.date.day)
        else:
            first, last = clip_to_month(event, month, year, max_day)
            normalized.dates_by_day.update(range(first, last + 1))
    return normalized
