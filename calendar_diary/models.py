from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

# Storage and highlight parsing must share this format.
DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class DiaryEntry:
    id: int
    day: str
    text: str


def format_day(day: date | str) -> str:
    """Canonical ``YYYY-MM-DD`` key for ``day``.

    Strings are parsed and re-formatted, so ``"2024-3-1"`` becomes
    ``"2024-03-01"``; anything unparseable raises ``ValueError``.
    """
    if isinstance(day, str):
        day = datetime.strptime(day.strip(), DATE_FORMAT).date()
    return day.strftime(DATE_FORMAT)


def parse_day(value: str | None) -> date | None:
    """Parse a stored key; only the exact canonical form is accepted."""
    if not value:
        return None
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None
    if parsed.strftime(DATE_FORMAT) != value:
        return None
    return parsed
