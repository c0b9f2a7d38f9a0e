from __future__ import annotations

import os
from pathlib import Path

APP_DIR_NAME = "CalendarDiary"
XDG_DIR_NAME = "calendar-diary"
DATABASE_FILENAME = "diary.db"


def data_directory() -> Path:
    if os.name == "nt":
        local_appdata = os.environ.get("LOCALAPPDATA")
        if local_appdata:
            base = Path(local_appdata)
        else:
            base = Path.home() / "AppData" / "Local"
        return base / APP_DIR_NAME

    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / XDG_DIR_NAME
    return Path.home() / ".local" / "share" / XDG_DIR_NAME


def database_path() -> Path:
    return data_directory() / DATABASE_FILENAME


def ensure_directories() -> None:
    data_directory().mkdir(parents=True, exist_ok=True)
