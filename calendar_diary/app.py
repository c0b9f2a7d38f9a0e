from __future__ import annotations

import argparse
import logging
import sqlite3
import tkinter as tk
from datetime import date, datetime
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from tkinter.scrolledtext import ScrolledText

from . import __version__
from .calendar_widget import CalendarWidget
from .controller import (
    ADD_CLICKED,
    REMOVE_CLICKED,
    SELECTION_CHANGED,
    TRAY_ACTIVATED,
    UPDATE_CLICKED,
    DiaryController,
)
from .database import DiaryDatabase
from .export import export_markdown
from .highlight import HighlightSynchronizer
from .models import format_day
from .paths import database_path, ensure_directories
from .store import EntryStore, EntryStoreError

logger = logging.getLogger(__name__)

APP_TITLE = "Calendar Diary"


class DiaryApp(tk.Tk):
    def __init__(self, store: EntryStore, use_tray: bool = True):
        super().__init__()
        self.title(APP_TITLE)
        self.geometry("920x640")
        self.minsize(720, 520)
        self.configure(bg="#f7e3cb")

        self.store = store
        self.tray = None
        self.status_var = tk.StringVar(value="Status: Ready")

        self._configure_style()
        self._build_shell()

        self.highlighter = HighlightSynchronizer(store, self.calendar)
        self.controller = DiaryController(store, self.highlighter, self)
        self.controller.register(TRAY_ACTIVATED, self._toggle_window)

        if use_tray:
            self._start_tray()

        self.controller.start()
        self._update_status(self.calendar.selected_date())
        self.append_log(f"Calendar Diary started ({store.database.path}).")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _configure_style(self) -> None:
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass
        style.configure("TFrame", background="#f8d9b9")
        style.configure("TLabel", background="#f8d9b9", foreground="#4e4138")
        style.configure("TLabelframe", background="#f8d9b9", bordercolor="#efd8c2")
        style.configure("TLabelframe.Label", background="#f8d9b9", foreground="#6f655d")
        style.configure("TButton", padding=(10, 5))
        style.configure("Title.TLabel", font=("Georgia", 22), foreground="#2f2a27", background="#f8d9b9")
        style.configure("Subtle.TLabel", font=("Segoe UI", 10), foreground="#6f655d", background="#f8d9b9")

    def _build_shell(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        shell = ttk.Frame(self, padding=14)
        shell.grid(row=0, column=0, sticky="nsew")
        shell.columnconfigure(1, weight=1)
        shell.rowconfigure(1, weight=1)

        header = ttk.Frame(shell)
        header.grid(row=0, column=0, columnspan=2, sticky="ew", pady=(0, 10))
        ttk.Label(header, text=APP_TITLE, style="Title.TLabel").pack(side="left")
        ttk.Label(header, textvariable=self.status_var, style="Subtle.TLabel").pack(side="right")

        self.calendar = CalendarWidget(shell, on_select=self._on_date_selected)
        self.calendar.grid(row=1, column=0, sticky="nsew", padx=(0, 12))

        editor = ttk.LabelFrame(shell, text="Entry", padding=8)
        editor.grid(row=1, column=1, sticky="nsew")
        editor.columnconfigure(0, weight=1)
        editor.rowconfigure(0, weight=1)

        self.entry_text = ScrolledText(
            editor,
            wrap=tk.WORD,
            height=12,
            font=("Segoe UI", 11),
            bg="#fff7eb",
            fg="#4c4038",
            relief=tk.FLAT,
        )
        self.entry_text.grid(row=0, column=0, sticky="nsew")

        buttons = ttk.Frame(editor)
        buttons.grid(row=1, column=0, sticky="ew", pady=(8, 0))
        self.add_button = ttk.Button(
            buttons, text="Add Entry", command=lambda: self.controller.dispatch(ADD_CLICKED)
        )
        self.add_button.pack(side="left", padx=(0, 6))
        self.update_button = ttk.Button(
            buttons, text="Update Entry", command=lambda: self.controller.dispatch(UPDATE_CLICKED)
        )
        self.update_button.pack(side="left", padx=(0, 6))
        self.remove_button = ttk.Button(
            buttons, text="Remove Entry", command=lambda: self.controller.dispatch(REMOVE_CLICKED)
        )
        self.remove_button.pack(side="left", padx=(0, 6))
        ttk.Button(buttons, text="Export Markdown", command=self._export_markdown).pack(side="right")

        log_frame = ttk.LabelFrame(shell, text="Activity", padding=6)
        log_frame.grid(row=2, column=0, columnspan=2, sticky="ew", pady=(10, 0))
        log_frame.columnconfigure(0, weight=1)
        self.log_output = ScrolledText(
            log_frame,
            height=5,
            font=("Consolas", 9),
            bg="#fff7eb",
            fg="#6f655d",
            relief=tk.FLAT,
            state="disabled",
        )
        self.log_output.grid(row=0, column=0, sticky="ew")

    def _start_tray(self) -> None:
        try:
            from .tray import TrayIcon

            self.tray = TrayIcon(
                self,
                on_toggle=lambda: self.controller.dispatch(TRAY_ACTIVATED),
                on_show=self._show_window,
                on_quit=self._quit,
            )
            self.tray.run()
        except Exception as exc:  # noqa: BLE001
            self.tray = None
            logger.warning("System tray unavailable: %s", exc)
            self.append_log(f"System tray unavailable: {exc}")

    def _on_date_selected(self, day: date) -> None:
        self._update_status(day)
        self.controller.dispatch(SELECTION_CHANGED, day)

    def _update_status(self, day: date) -> None:
        self.status_var.set(f"Selected: {format_day(day)}")

    def _export_markdown(self) -> None:
        target = filedialog.asksaveasfilename(
            title="Export Diary as Markdown",
            defaultextension=".md",
            initialfile=f"diary-{date.today().isoformat()}.md",
            filetypes=[("Markdown", "*.md"), ("All files", "*.*")],
        )
        if not target:
            return
        try:
            entries = self.store.list_entries()
            export_markdown(entries, target)
        except (EntryStoreError, OSError) as exc:
            logger.error("Export failed: %s", exc)
            self.append_log(f"Export failed: {exc}")
            self.show_error("Export Markdown", str(exc))
            return
        self.append_log(f"Exported {len(entries)} entries to {target}")

    def _toggle_window(self) -> None:
        if self.state() in ("withdrawn", "iconic"):
            self._show_window()
        else:
            self.withdraw()

    def _show_window(self) -> None:
        self.deiconify()
        self.lift()
        self.focus_force()

    def _on_close(self) -> None:
        if self.tray is not None and self.tray.is_running:
            self.withdraw()
            self.append_log("Minimized to tray.")
            return
        self._quit()

    def _quit(self) -> None:
        if self.tray is not None:
            self.tray.stop()
        self.destroy()

    # View interface used by DiaryController.
    def selected_date(self) -> date:
        return self.calendar.selected_date()

    def get_text(self) -> str:
        return self.entry_text.get("1.0", "end-1c")

    def set_text(self, value: str) -> None:
        self.entry_text.delete("1.0", "end")
        self.entry_text.insert("end", value or "")

    def confirm(self, title: str, message: str) -> bool:
        return bool(messagebox.askyesno(title, message, parent=self))

    def show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self)

    def append_log(self, message: str) -> None:
        self.log_output.configure(state="normal")
        self.log_output.insert("end", f"[{_now_stamp()}] {message}\n")
        self.log_output.see("end")
        self.log_output.configure(state="disabled")


def _now_stamp() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _show_startup_error(message: str) -> None:
    try:
        root = tk.Tk()
    except tk.TclError:
        return
    root.withdraw()
    messagebox.showerror(APP_TITLE, message, parent=root)
    root.destroy()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="calendar_diary")
    parser.add_argument("--db", help="Path to the diary database file")
    parser.add_argument("--no-tray", action="store_true", help="Run without the system tray icon")
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--version", action="store_true", help="Print app version and exit")
    args = parser.parse_args(argv)
    if args.version:
        print(__version__)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.db:
        db_file = Path(args.db)
    else:
        ensure_directories()
        db_file = database_path()

    db = DiaryDatabase(db_file)
    try:
        db.open()
        store = EntryStore(db)
    except (sqlite3.Error, OSError, EntryStoreError) as exc:
        db.close()
        logger.error("Unable to open diary database %s: %s", db_file, exc)
        _show_startup_error(f"Unable to open diary database:\n{db_file}\n\n{exc}")
        return 1

    with db:
        app = DiaryApp(store, use_tray=not args.no_tray)
        app.mainloop()
    return 0
