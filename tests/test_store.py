from __future__ import annotations

import tempfile
import unittest
from datetime import date
from pathlib import Path

from calendar_diary.database import DiaryDatabase
from calendar_diary.store import EntryStore, EntryStoreError


class EntryStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.db = DiaryDatabase(Path(self._tmp.name) / "diary.db").open()
        self.store = EntryStore(self.db)

    def tearDown(self) -> None:
        self.db.close()
        self._tmp.cleanup()

    def test_insert_and_get_round_trip(self) -> None:
        self.store.insert("2024-03-01", "hello")
        self.assertEqual(self.store.get("2024-03-01"), "hello")
        self.assertEqual(self.store.list_dates(), ["2024-03-01"])

    def test_accepts_date_objects(self) -> None:
        self.store.insert(date(2024, 3, 2), "from a date")
        self.assertEqual(self.store.get("2024-03-02"), "from a date")
        self.assertEqual(self.store.get(date(2024, 3, 2)), "from a date")

    def test_get_missing_returns_none(self) -> None:
        self.assertIsNone(self.store.get("2024-03-01"))
        self.assertIsNone(self.store.get_entry("2024-03-01"))

    def test_empty_text_is_stored(self) -> None:
        self.store.insert("2024-03-01", "")
        self.assertEqual(self.store.get("2024-03-01"), "")
        self.assertEqual(self.store.list_dates(), ["2024-03-01"])

    def test_duplicate_dates_return_first_and_remove_all(self) -> None:
        first_id = self.store.insert("2024-03-01", "a")
        second_id = self.store.insert("2024-03-01", "b")
        self.assertGreater(second_id, first_id)
        self.assertEqual(self.store.get("2024-03-01"), "a")
        self.assertEqual(self.store.list_dates(), ["2024-03-01"])

        removed = self.store.remove("2024-03-01")
        self.assertEqual(removed, 2)
        self.assertIsNone(self.store.get("2024-03-01"))
        self.assertEqual(self.store.list_dates(), [])

    def test_update_rewrites_all_rows_for_date(self) -> None:
        self.store.insert("2024-03-01", "a")
        self.store.insert("2024-03-01", "b")
        self.assertEqual(self.store.update("2024-03-01", "c"), 2)
        self.assertEqual([e.text for e in self.store.list_entries()], ["c", "c"])

    def test_update_on_absent_date_is_success_and_no_op(self) -> None:
        self.store.insert("2024-03-02", "keep")
        changed = self.store.update("2024-03-01", "ignored")
        self.assertEqual(changed, 0)
        self.assertIsNone(self.store.get("2024-03-01"))
        self.assertEqual(self.store.list_dates(), ["2024-03-02"])

    def test_remove_on_empty_date_is_success(self) -> None:
        self.store.insert("2024-03-02", "keep")
        self.assertEqual(self.store.remove("2024-03-01"), 0)
        self.assertEqual(self.store.list_dates(), ["2024-03-02"])

    def test_ids_are_not_reused_after_remove(self) -> None:
        first_id = self.store.insert("2024-03-01", "a")
        self.store.remove("2024-03-01")
        second_id = self.store.insert("2024-03-01", "b")
        self.assertGreater(second_id, first_id)

    def test_ensure_schema_is_idempotent(self) -> None:
        self.store.insert("2024-03-01", "hello")
        self.store.ensure_schema()
        EntryStore(self.db)
        self.assertEqual(self.store.get("2024-03-01"), "hello")

    def test_entries_persist_across_reopen(self) -> None:
        self.store.insert("2024-03-01", "durable")
        self.db.close()
        with DiaryDatabase(self.db.path) as reopened:
            self.assertEqual(EntryStore(reopened).get("2024-03-01"), "durable")

    def test_list_entries_orders_by_date_then_id(self) -> None:
        self.store.insert("2024-03-05", "later")
        self.store.insert("2024-03-01", "first")
        self.store.insert("2024-03-01", "second")
        entries = self.store.list_entries()
        self.assertEqual(
            [(e.day, e.text) for e in entries],
            [("2024-03-01", "first"), ("2024-03-01", "second"), ("2024-03-05", "later")],
        )

    def test_string_dates_are_canonicalized(self) -> None:
        self.store.insert("2024-3-1", "unpadded")
        self.store.insert(" 2024-03-02 ", "padded with spaces")
        self.assertEqual(sorted(self.store.list_dates()), ["2024-03-01", "2024-03-02"])
        self.assertEqual(self.store.get(date(2024, 3, 1)), "unpadded")
        self.assertEqual(self.store.get("2024-03-02"), "padded with spaces")
        self.assertEqual(self.store.remove(date(2024, 3, 1)), 1)
        self.assertEqual(self.store.list_dates(), ["2024-03-02"])

    def test_invalid_date_string_raises_store_error(self) -> None:
        for raw in ("2024/03/01", "01-03-2024", "2024-02-30", ""):
            with self.subTest(raw=raw):
                with self.assertRaises(EntryStoreError) as ctx:
                    self.store.insert(raw, "nope")
                self.assertEqual(ctx.exception.operation, "add diary entry")
        with self.assertRaises(EntryStoreError):
            self.store.get("2024/03/01")
        with self.assertRaises(EntryStoreError):
            self.store.update("yesterday", "x")
        with self.assertRaises(EntryStoreError):
            self.store.remove("2024-13-01")
        self.assertEqual(self.store.list_dates(), [])

    def test_closed_database_raises_store_error(self) -> None:
        self.db.close()
        with self.assertRaises(EntryStoreError) as ctx:
            self.store.insert("2024-03-01", "lost")
        self.assertEqual(ctx.exception.operation, "add diary entry")
        self.assertEqual(ctx.exception.day, "2024-03-01")
        self.assertIn("2024-03-01", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
