"""Month-to-month navigation over the stateless month layout."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any, NamedTuple

from calendar_logic import minus_month, plus_month
from month_cells import Cell, compute_month_cells

logger = logging.getLogger(__name__)


class MonthTriple(NamedTuple):
    prev: list[Cell]
    current: list[Cell]
    next: list[Cell]


def month_cells_for(d: date, events: Iterable[Any] = ()) -> list[Cell]:
    """Return the cells of the month that contains d."""
    return compute_month_cells(d.month - 1, d.year, events)


def month_triple(anchor: date, events: Iterable[Any] = ()) -> MonthTriple:
    """Lay out the anchor's month together with its two neighbours."""
    events = list(events)
    return MonthTriple(
        month_cells_for(minus_month(anchor), events),
        month_cells_for(anchor, events),
        month_cells_for(plus_month(anchor), events),
    )


class CalendarPager:
    """Displayed month plus event list; every move recomputes the layout."""

    def __init__(self, anchor: date | None = None, events: Iterable[Any] = ()) -> None:
        self.date = anchor or date.today()
        self.events = list(events)

    def triple(self) -> MonthTriple:
        return month_triple(self.date, self.events)

    def show_prev(self) -> MonthTriple:
        self.date = minus_month(self.date)
        logger.debug("Showing %04d-%02d", self.date.year, self.date.month)
        return self.triple()

    def show_next(self) -> MonthTriple:
        self.date = plus_month(self.date)
        logger.debug("Showing %04d-%02d", self.date.year, self.date.month)
        return self.triple()

    def set_events(self, events: Iterable[Any]) -> MonthTriple:
        self.events = list(events)
        return self.triple()
