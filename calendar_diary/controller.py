from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from .highlight import HighlightSynchronizer
from .models import format_day
from .store import EntryStore, EntryStoreError

logger = logging.getLogger(__name__)

SELECTION_CHANGED = "selection-changed"
ADD_CLICKED = "add-clicked"
UPDATE_CLICKED = "update-clicked"
REMOVE_CLICKED = "remove-clicked"
TRAY_ACTIVATED = "tray-activated"

REMOVE_CONFIRM_TITLE = "Confirm"
REMOVE_CONFIRM_MESSAGE = "Are you sure you want to remove this entry?"

Handler = Callable[..., None]


class DiaryController:
    """Routes user actions between the window, the store and the calendar.

    ``view`` must provide ``selected_date()``, ``get_text()``,
    ``set_text(value)``, ``confirm(title, message)``,
    ``show_error(title, message)`` and ``append_log(message)``.
    """

    def __init__(self, store: EntryStore, highlighter: HighlightSynchronizer, view):
        self._store = store
        self._highlighter = highlighter
        self._view = view
        self.handlers: dict[str, Handler] = {
            SELECTION_CHANGED: self.show_entry,
            ADD_CLICKED: self.add_entry,
            UPDATE_CLICKED: self.update_entry,
            REMOVE_CLICKED: self.confirm_remove_entry,
        }

    def register(self, event: str, handler: Handler) -> None:
        self.handlers[event] = handler

    def dispatch(self, event: str, *args) -> None:
        try:
            handler = self.handlers[event]
        except KeyError:
            raise KeyError(f"No handler registered for event {event!r}") from None
        handler(*args)

    def start(self) -> None:
        self.refresh_highlights()
        self.show_entry(self._view.selected_date())

    def show_entry(self, day: date | None = None) -> None:
        if day is None:
            day = self._view.selected_date()
        key = format_day(day)
        try:
            text = self._store.get(key)
        except EntryStoreError as exc:
            self._report_failure("Show entry", exc)
            return
        self._view.set_text(text or "")

    def add_entry(self) -> None:
        key = format_day(self._view.selected_date())
        try:
            self._store.insert(key, self._view.get_text())
        except EntryStoreError as exc:
            self._report_failure("Add entry", exc)
            return
        self._log(f"Diary entry added for {key}.")
        self.refresh_highlights()

    def update_entry(self) -> None:
        key = format_day(self._view.selected_date())
        try:
            changed = self._store.update(key, self._view.get_text())
        except EntryStoreError as exc:
            self._report_failure("Update entry", exc)
            return
        if changed:
            self._log(f"Diary entry updated for {key}.")
        else:
            self._log(f"No diary entry for {key}; nothing to update.")
        self.refresh_highlights()

    def confirm_remove_entry(self) -> None:
        if not self._view.confirm(REMOVE_CONFIRM_TITLE, REMOVE_CONFIRM_MESSAGE):
            return
        self.remove_entry()

    def remove_entry(self) -> None:
        key = format_day(self._view.selected_date())
        try:
            removed = self._store.remove(key)
        except EntryStoreError as exc:
            self._report_failure("Remove entry", exc)
            return
        self._log(f"Removed {removed} diary entr{'y' if removed == 1 else 'ies'} for {key}.")
        self._view.set_text("")
        self.refresh_highlights()

    def refresh_highlights(self) -> bool:
        try:
            self._highlighter.refresh()
        except EntryStoreError as exc:
            self._report_failure("Highlight entries", exc)
            return False
        return True

    def _log(self, message: str) -> None:
        logger.info(message)
        self._view.append_log(message)

    def _report_failure(self, title: str, exc: EntryStoreError) -> None:
        logger.error("%s failed: %s", title, exc)
        self._view.append_log(f"{title} failed: {exc}")
        self._view.show_error(title, str(exc))
