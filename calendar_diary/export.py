from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .models import DiaryEntry


def render_markdown(entries: Sequence[DiaryEntry]) -> str:
    lines: list[str] = ["# Diary", ""]
    if not entries:
        lines.extend(["_No entries yet._", ""])
    for entry in sorted(entries, key=lambda row: (row.day, row.id)):
        lines.extend([f"## {entry.day}", ""])
        body = entry.text.strip()
        lines.append(body if body else "_(empty)_")
        lines.append("")
    return "\n".join(lines)


def export_markdown(entries: Sequence[DiaryEntry], target: Path | str) -> Path:
    path = Path(target)
    path.write_text(render_markdown(entries), encoding="utf-8")
    return path
