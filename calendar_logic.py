"""Pure calendar calculations with no UI dependencies.

Months are zero-based (0 = January) everywhere in this module.
"""

import calendar
from datetime import date, timedelta

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Sunday-based weekday (0 = Sunday) shown in each Monday-first column
WEEKDAY_BY_COLUMN = (1, 2, 3, 4, 5, 6, 0)


def days_in_month(month: int, year: int) -> int:
    """Return the number of days in the given zero-based month."""
    return calendar.monthrange(year, month + 1)[1]


def first_weekday(month: int, year: int) -> int:
    """Return the weekday of day 1, counted from Sunday (0) to Saturday (6)."""
    return sunday_weekday(date(year, month + 1, 1))


def sunday_weekday(d: date) -> int:
    return d.isoweekday() % 7


def weekday_column(d: date) -> int:
    """Return the Monday-first grid column (Mon=0 … Sun=6) for a date."""
    return d.weekday()


def minus_month(d: date) -> date:
    """Return day 0 of d's month, i.e. the last day of the previous month."""
    return d.replace(day=1) - timedelta(days=1)


def plus_month(d: date) -> date:
    """Return day 32 of d's month, which always lands in the next month."""
    return d.replace(day=1) + timedelta(days=31)


def prev_month(month: int, year: int) -> tuple[int, int]:
    """Return (month, year) for one month earlier."""
    d = minus_month(date(year, month + 1, 1))
    return d.month - 1, d.year


def next_month(month: int, year: int) -> tuple[int, int]:
    """Return (month, year) for one month later."""
    d = plus_month(date(year, month + 1, 1))
    return d.month - 1, d.year
