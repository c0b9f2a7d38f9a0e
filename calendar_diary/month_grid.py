from __future__ import annotations

import calendar
from datetime import date

WEEKDAY_HEADERS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
GRID_ROWS = 6


def month_weeks(year: int, month: int) -> list[list[date | None]]:
    """Weeks of ``month`` padded to six rows, Monday first; ``None`` pads."""
    weeks: list[list[date | None]] = []
    for week in calendar.Calendar(firstweekday=0).monthdayscalendar(year, month):
        weeks.append([date(year, month, day) if day else None for day in week])
    while len(weeks) < GRID_ROWS:
        weeks.append([None] * 7)
    return weeks


def shift_month(first_of_month: date, delta: int) -> date:
    year = first_of_month.year + (first_of_month.month + delta - 1) // 12
    month = (first_of_month.month + delta - 1) % 12 + 1
    return date(year, month, 1)
