from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


class DiaryDatabase:
    """Process-wide SQLite handle.

    Opened once at startup and closed at shutdown. Use it as a context
    manager so the connection is released even when the main loop raises.
    """

    def __init__(self, db_file: Path | str):
        self._db_file = Path(db_file)
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        return self._db_file

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "DiaryDatabase":
        if self._conn is not None:
            return self
        self._db_file.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._db_file, timeout=30)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA synchronous=NORMAL")
        self._conn = conn
        logger.info("Opened diary database at %s", self._db_file)
        return self

    def close(self) -> None:
        with self._lock:
            conn = self._conn
            self._conn = None
        if conn is not None:
            conn.close()
            logger.info("Closed diary database at %s", self._db_file)

    def __enter__(self) -> "DiaryDatabase":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def transaction(self):
        """Yield the connection and commit on success, roll back on error."""
        with self._lock:
            if self._conn is None:
                raise sqlite3.ProgrammingError("diary database is not open")
            conn = self._conn
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise
