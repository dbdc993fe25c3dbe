"""Month calendar layout: titles, navigation and the weekday grid."""

from __future__ import annotations

import calendar
from datetime import date

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def month_title(day: date) -> str:
    """Window title for the month containing ``day``, e.g. ``March 2024``."""
    return f"{calendar.month_name[day.month]} {day.year}"


def previous_month(day: date) -> date:
    """First day of the month before the one containing ``day``."""
    if day.month == 1:
        return date(day.year - 1, 12, 1)
    return date(day.year, day.month - 1, 1)


def next_month(day: date) -> date:
    """First day of the month after the one containing ``day``."""
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def days_in_month(day: date) -> int:
    """Number of days in the month containing ``day``."""
    first = day.replace(day=1)
    return (next_month(day) - first).days


def month_grid(day: date) -> list[list[date | None]]:
    """Rows of a Monday-first grid for the month of ``day``.

    Cells before the first of the month are ``None``; the last row is not padded.
    """
    first = day.replace(day=1)
    cells: list[date | None] = [None] * first.weekday()
    cells.extend(first.replace(day=n) for n in range(1, days_in_month(day) + 1))
    return [cells[start:start + 7] for start in range(0, len(cells), 7)]