from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date

from .database import DiaryDatabase
from .models import DiaryEntry, format_day

logger = logging.getLogger(__name__)


class EntryStoreError(Exception):
    def __init__(self, operation: str, day: str | None, reason: str):
        self.operation = operation
        self.day = day
        self.reason = reason
        where = f" for {day}" if day else ""
        super().__init__(f"Could not {operation}{where}: {reason}")


class EntryStore:
    """Diary entries keyed by canonical ``YYYY-MM-DD`` date strings.

    Dates are not unique: ``get`` returns the oldest row for a date while
    ``update`` and ``remove`` act on every row that matches it.
    """

    def __init__(self, db: DiaryDatabase):
        self._db = db
        self.ensure_schema()

    @property
    def database(self) -> DiaryDatabase:
        return self._db

    def ensure_schema(self) -> None:
        with self._wrap("create diary schema", None) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS diary (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date TEXT,
                    entry TEXT
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_diary_date ON diary(date)")

    def get(self, day: date | str) -> str | None:
        entry = self.get_entry(day)
        if entry is None:
            return None
        return entry.text

    def get_entry(self, day: date | str) -> DiaryEntry | None:
        key = self._key("read diary entry", day)
        with self._wrap("read diary entry", key) as conn:
            row = conn.execute(
                """
                SELECT id, date, entry
                FROM diary
                WHERE date = ?
                ORDER BY id ASC
                LIMIT 1
                """,
                (key,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_entry(row)

    def insert(self, day: date | str, text: str) -> int:
        key = self._key("add diary entry", day)
        with self._wrap("add diary entry", key) as conn:
            cursor = conn.execute(
                "INSERT INTO diary(date, entry) VALUES (?, ?)",
                (key, text or ""),
            )
            row_id = int(cursor.lastrowid)
        logger.debug("Inserted diary row %s for %s", row_id, key)
        return row_id

    def update(self, day: date | str, text: str) -> int:
        """Rewrite every entry for ``day``; returns the number of rows changed.

        A date with no entry is not an error and returns 0.
        """
        key = self._key("update diary entry", day)
        with self._wrap("update diary entry", key) as conn:
            cursor = conn.execute(
                "UPDATE diary SET entry = ? WHERE date = ?",
                (text or "", key),
            )
            return int(cursor.rowcount)

    def remove(self, day: date | str) -> int:
        key = self._key("remove diary entry", day)
        with self._wrap("remove diary entry", key) as conn:
            cursor = conn.execute("DELETE FROM diary WHERE date = ?", (key,))
            return int(cursor.rowcount)

    def list_dates(self) -> list[str]:
        with self._wrap("list diary dates", None) as conn:
            rows = conn.execute("SELECT DISTINCT date FROM diary").fetchall()
        return [str(row["date"]) for row in rows if row["date"] is not None]

    def list_entries(self) -> list[DiaryEntry]:
        with self._wrap("list diary entries", None) as conn:
            rows = conn.execute(
                """
                SELECT id, date, entry
                FROM diary
                ORDER BY date ASC, id ASC
                """
            ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    @staticmethod
    def _key(operation: str, day: date | str) -> str:
        try:
            return format_day(day)
        except ValueError as exc:
            raise EntryStoreError(operation, str(day), f"not a YYYY-MM-DD date ({exc})") from exc

    @contextmanager
    def _wrap(self, operation: str, day: str | None):
        try:
            with self._db.transaction() as conn:
                yield conn
        except sqlite3.Error as exc:
            raise EntryStoreError(operation, day, str(exc)) from exc

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> DiaryEntry:
        return DiaryEntry(
            id=int(row["id"]),
            day=str(row["date"]),
            text=str(row["entry"] or ""),
        )

