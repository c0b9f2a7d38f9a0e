from __future__ import annotations

import os
import unittest
from datetime import date
from unittest import mock

from calendar_diary.month_grid import month_weeks, shift_month
from calendar_diary.models import format_day, parse_day
from calendar_diary.paths import DATABASE_FILENAME, database_path, data_directory


class CalendarGridTests(unittest.TestCase):
    def test_month_grid_has_six_weeks_starting_monday(self) -> None:
        weeks = month_weeks(2024, 3)
        self.assertEqual(len(weeks), 6)
        self.assertTrue(all(len(week) == 7 for week in weeks))
        # March 1st 2024 was a Friday.
        self.assertEqual(weeks[0][4], date(2024, 3, 1))
        self.assertIsNone(weeks[0][0])
        days = [day for week in weeks for day in week if day is not None]
        self.assertEqual(len(days), 31)
        self.assertEqual(days[-1], date(2024, 3, 31))

    def test_shift_month_wraps_years(self) -> None:
        self.assertEqual(shift_month(date(2024, 12, 1), 1), date(2025, 1, 1))
        self.assertEqual(shift_month(date(2024, 1, 1), -1), date(2023, 12, 1))
        self.assertEqual(shift_month(date(2024, 3, 1), 14), date(2025, 5, 1))


class DateFormatTests(unittest.TestCase):
    def test_format_and_parse_share_canonical_form(self) -> None:
        self.assertEqual(format_day(date(2024, 3, 1)), "2024-03-01")
        self.assertEqual(parse_day("2024-03-01"), date(2024, 3, 1))
        self.assertEqual(format_day("2024-03-01"), "2024-03-01")
        self.assertEqual(format_day("2024-3-1"), "2024-03-01")
        self.assertEqual(format_day(" 2024-03-01\n"), "2024-03-01")

    def test_format_rejects_non_dates(self) -> None:
        for raw in ("2024/03/01", "March 1", "2024-02-30", ""):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    format_day(raw)

    def test_parse_rejects_other_forms(self) -> None:
        self.assertIsNone(parse_day("2024/03/01"))
        self.assertIsNone(parse_day("01-03-2024"))
        self.assertIsNone(parse_day("2024-3-1"))
        self.assertIsNone(parse_day(" 2024-03-01"))
        self.assertIsNone(parse_day("2024-03-01 "))
        self.assertIsNone(parse_day(""))
        self.assertIsNone(parse_day(None))


class PathTests(unittest.TestCase):
    @unittest.skipIf(os.name == "nt", "XDG lookup only applies outside Windows")
    def test_xdg_data_home_is_respected(self) -> None:
        with mock.patch.dict(os.environ, {"XDG_DATA_HOME": "/tmp/xdg"}):
            self.assertEqual(str(data_directory()), os.path.join("/tmp/xdg", "calendar-diary"))
            self.assertEqual(database_path().name, DATABASE_FILENAME)


if __name__ == "__main__":
    unittest.main()
