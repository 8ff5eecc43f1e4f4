"""Month grid layout: day cells plus event bars, as one ordered cell list.

``compute_month_cells`` is the single entry point. It is a pure function of
(month, year, events): event bars come first so a renderer can put them
behind the day numbers, followed by the plain day grid in row-major order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from calendar_logic import (
    WEEKDAY_BY_COLUMN,
    days_in_month,
    first_weekday,
    prev_month,
    weekday_column,
)
from events import (
    DateEvent,
    Event,
    InvalidRange,
    NormalizedEvents,
    anchor_date,
    clip_to_month,
    filter_events,
    normalize_events,
)

logger = logging.getLogger(__name__)

MAX_ROWS = 6
COLUMNS = 7


@dataclass
class Cell:
    """One positioned item of a month view: a day number or an event bar."""

    value: str
    row: int
    col: int
    is_current_month: bool = False
    is_event: bool = False
    with_event: bool = False
    col_span: int | None = None
    # Event payload, set on event bars only
    date: date | None = None
    start: date | None = None
    end: date | None = None
    is_recurrent: bool | None = None
    renderer: Any = None

    def as_dict(self) -> dict[str, Any]:
        """Return the camelCase mapping handed to rendering layers."""
        data: dict[str, Any] = {
            "value": self.value,
            "row": self.row,
            "col": self.col,
            "isCurrentMonth": self.is_current_month,
            "isEvent": self.is_event,
            "withEvent": self.with_event,
        }
        optional = {
            "colSpan": self.col_span,
            "date": self.date,
            "start": self.start,
            "end": self.end,
            "isRecurrent": self.is_recurrent,
            "renderer": self.renderer,
        }
        data.update((k, v) for k, v in optional.items() if v is not None)
        return data


def leading_days(first_day: int) -> int:
    """Return how many previous-month cells precede day 1 (Sunday-based input)."""
    return (first_day + 6) % 7


# ------------------------------------------------------------------
# Grid
# ------------------------------------------------------------------

def generate_month_grid(
    max_day: int, first_day: int, days_in_prev: int, normalized: NormalizedEvents,
) -> list[list[Cell]]:
    """Build the Monday-first day grid for one month.

    Rows are only started while month days remain, so the grid holds four to
    six rows. The row with the last day is padded with next-month days.
    """
    lead = leading_days(first_day)
    grid: list[list[Cell]] = []
    day = 1
    next_day = 1
    for row in range(MAX_ROWS):
        if day > max_day:
            break
        cells: list[Cell] = []
        for col, weekday in enumerate(WEEKDAY_BY_COLUMN):
            if row == 0 and col < lead:
                cell = Cell(str(days_in_prev - lead + col + 1), row, col)
            elif day > max_day:
                cell = Cell(str(next_day), row, col)
                next_day += 1
            else:
                cell = Cell(
                    str(day), row, col,
                    is_current_month=True,
                    with_event=normalized.touches(weekday, day),
                )
                day += 1
            cells.append(cell)
        grid.append(cells)
    return grid


# ------------------------------------------------------------------
# Event bars
# ------------------------------------------------------------------

def _bar(cell: Cell, col_span: int, event: Event) -> Cell:
    payload: dict[str, Any] = {"is_recurrent": event.is_recurrent, "renderer": event.renderer}
    if isinstance(event, DateEvent):
        payload["date"] = event.date
    else:
        payload["start"] = event.start
        payload["end"] = event.end
    return replace(cell, is_event=True, with_event=False, col_span=col_span, **payload)


def _recurring_span(row: list[Cell], event: Event) -> tuple[int, int]:
    if isinstance(event, DateEvent):
        return weekday_column(event.date), 1
    col = weekday_column(event.start)
    max_col = weekday_column(event.end)
    while col < max_col and not row[col].is_current_month:
        col += 1
    span = 1 + sum(1 for cell in row[col + 1:max_col + 1] if cell.is_current_month)
    return col, span


def _range_segments(
    grid: list[list[Cell]], lead: int, first: int, last: int, event: Event,
) -> list[Cell]:
    if last < first:
        raise InvalidRange(event)
    segments: list[Cell] = []
    day = first
    while day <= last:
        row, col = divmod(lead + day - 1, COLUMNS)
        span = min(COLUMNS - col, last - day + 1)
        segments.append(_bar(grid[row][col], span, event))
        day += span
    return segments


def event_cells(
    events: Iterable[Event],
    grid: list[list[Cell]],
    month: int,
    year: int,
    max_day: int,
) -> list[Cell]:
    """Return the event bars for a month grid.

    Recurring bars come first, row by row and ordered by column; then the
    dated bars in start-date order, ranges split into one segment per row.
    Bars are only anchored on current-month cells.
    """
    events = list(events)
    recurrent = sorted(
        (e for e in events if e.is_recurrent),
        key=lambda e: weekday_column(anchor_date(e)),
    )
    dated = sorted((e for e in events if not e.is_recurrent), key=anchor_date)

    cells: list[Cell] = []
    for row in grid:
        for event in recurrent:
            col, span = _recurring_span(row, event)
            if row[col].is_current_month:
                cells.append(_bar(row[col], span, event))

    lead = next(i for i, cell in enumerate(grid[0]) if cell.is_current_month)
    for event in dated:
        if isinstance(event, DateEvent):
            row, col = divmod(lead + event.date.day - 1, COLUMNS)
            cells.append(_bar(grid[row][col], 1, event))
        else:
            first, last = clip_to_month(event, month, year, max_day)
            cells.extend(_range_segments(grid, lead, first, last, event))
    return cells


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------

def compute_month_cells(month: int, year: int, events: Iterable[Any] = ()) -> list[Cell]:
    """Return event bars followed by the day grid for a zero-based month.

    ``events`` may hold DateEvent/RangeEvent instances or equivalent
    mappings. Malformed records are skipped; reversed ranges raise
    InvalidRange.
    """
    if not 0 <= month <= 11:
        raise ValueError(f"month must be in 0..11, got {month}")

    max_day = days_in_month(month, year)
    first_day = first_weekday(month, year)
    days_in_prev = days_in_month(*prev_month(month, year))

    filtered = filter_events(month, year, events)
    normalized = normalize_events(filtered, month, year, max_day)
    grid = generate_month_grid(max_day, first_day, days_in_prev, normalized)
    bars = event_cells(filtered, grid, month, year, max_day)

    logger.debug(
        "Laid out %04d-%02d: %d rows, %d event bars from %d events",
        year, month + 1, len(grid), len(bars), len(filtered),
    )
    return bars + [cell for row in grid for cell in row]
