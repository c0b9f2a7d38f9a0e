from __future__ import annotations

import tkinter as tk
from datetime import date
from tkinter import ttk
from typing import Callable

from .month_grid import GRID_ROWS, WEEKDAY_HEADERS, month_weeks, shift_month

CELL_BG = "#fff7eb"
CELL_FG = "#4c4038"
TODAY_FG = "#b0542c"
SELECTED_BORDER = "#6b4d37"
EMPTY_BG = "#f8e9d8"

SelectCallback = Callable[[date], None]


class CalendarWidget(tk.Frame):
    """Month grid with per-date background formats and a selected date."""

    def __init__(
        self,
        master: tk.Misc,
        on_select: SelectCallback | None = None,
        selected: date | None = None,
    ):
        super().__init__(master, bg=EMPTY_BG)
        self._on_select = on_select
        self._selected = selected or date.today()
        self._month = self._selected.replace(day=1)
        self._formats: dict[date, str] = {}
        self._cells: list[tk.Label] = []
        self._cell_dates: list[date | None] = []
        self.month_var = tk.StringVar()

        self._build()
        self._render()

    def _build(self) -> None:
        header = ttk.Frame(self, padding=(4, 4))
        header.grid(row=0, column=0, columnspan=7, sticky="ew")
        header.columnconfigure(2, weight=1)
        ttk.Button(header, text="<", width=3, command=lambda: self.show_month(-1)).grid(row=0, column=0)
        ttk.Button(header, text=">", width=3, command=lambda: self.show_month(1)).grid(row=0, column=1, padx=(4, 0))
        ttk.Label(header, textvariable=self.month_var, anchor="center").grid(row=0, column=2, sticky="ew")
        ttk.Button(header, text="Today", command=self.go_today).grid(row=0, column=3)

        for col, name in enumerate(WEEKDAY_HEADERS):
            tk.Label(self, text=name, bg=EMPTY_BG, fg="#6f655d", font=("Segoe UI", 9)).grid(
                row=1, column=col, sticky="nsew"
            )
            self.columnconfigure(col, weight=1, uniform="calendar")

        for index in range(GRID_ROWS * 7):
            row, col = divmod(index, 7)
            cell = tk.Label(
                self,
                width=4,
                height=2,
                bd=0,
                highlightthickness=2,
                font=("Segoe UI", 10),
                cursor="hand2",
            )
            cell.grid(row=row + 2, column=col, sticky="nsew", padx=1, pady=1)
            cell.bind("<Button-1>", lambda _event, i=index: self._on_cell_click(i))
            self._cells.append(cell)
            self._cell_dates.append(None)

        for row in range(GRID_ROWS):
            self.rowconfigure(row + 2, weight=1, uniform="calendar_rows")

    def selected_date(self) -> date:
        return self._selected

    def set_selected_date(self, day: date, notify: bool = True) -> None:
        self._selected = day
        self._month = day.replace(day=1)
        self._render()
        if notify and self._on_select is not None:
            self._on_select(day)

    def go_today(self) -> None:
        self.set_selected_date(date.today())

    def show_month(self, delta: int) -> None:
        self._month = shift_month(self._month, delta)
        self._render()

    def set_date_format(self, day: date, background: str) -> None:
        self._formats[day] = background
        if day.year == self._month.year and day.month == self._month.month:
            self._render()

    def clear_date_formats(self) -> None:
        self._formats.clear()
        self._render()

    def date_format(self, day: date) -> str | None:
        return self._formats.get(day)

    def _on_cell_click(self, index: int) -> None:
        day = self._cell_dates[index]
        if day is None:
            return
        self.set_selected_date(day)

    def _render(self) -> None:
        self.month_var.set(self._month.strftime("%B %Y"))
        today = date.today()
        flat = [day for week in month_weeks(self._month.year, self._month.month) for day in week]
        for index, (cell, day) in enumerate(zip(self._cells, flat)):
            self._cell_dates[index] = day
            if day is None:
                cell.configure(text="", bg=EMPTY_BG, highlightbackground=EMPTY_BG, cursor="")
                continue
            background = self._formats.get(day, CELL_BG)
            border = SELECTED_BORDER if day == self._selected else background
            cell.configure(
                text=str(day.day),
                bg=background,
                fg=TODAY_FG if day == today else CELL_FG,
                highlightbackground=border,
                highlightcolor=border,
                cursor="hand2",
            )
