from __future__ import annotations

import logging
from datetime import date

from .models import parse_day
from .store import EntryStore

logger = logging.getLogger(__name__)

HAS_ENTRY_BACKGROUND = "#8fd694"


class HighlightSynchronizer:
    """Keep calendar styling a pure function of the store contents.

    ``calendar`` is anything with ``clear_date_formats()`` and
    ``set_date_format(day, background)``; the tkinter month grid in
    ``calendar_widget`` is the production one.
    """

    def __init__(self, store: EntryStore, calendar, background: str = HAS_ENTRY_BACKGROUND):
        self._store = store
        self._calendar = calendar
        self._background = background

    def refresh(self) -> set[date]:
        # Read before clearing so a failing query leaves the old highlights.
        raw_dates = self._store.list_dates()
        self._calendar.clear_date_formats()

        highlighted: set[date] = set()
        for raw in raw_dates:
            day = parse_day(raw)
            if day is None:
                logger.debug("Skipping highlight for unparseable date %r", raw)
                continue
            self._calendar.set_date_format(day, self._background)
            highlighted.add(day)
        return highlighted
