from __future__ import annotations

"""Plain-text rendering of session snapshots for a terminal."""

import os
import sys
from typing import Sequence

from pomors.core.scheduler import Phase
from pomors.core.session import SessionSnapshot, SessionStatus
from pomors.data.storage import SessionRow

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"

CLEAR_SCREEN = "\033[H\033[2J"
BAR_WIDTH = 40


def color_enabled(stream=None) -> bool:
    """Colour only on a TTY; NO_COLOR disables, FORCE_COLOR forces."""
    if os.environ.get("NO_COLOR") is not None:
        return False
    if os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}:
        return True
    stream = stream or sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


def _paint(text: str, use_color: bool, *styles: str) -> str:
    if not use_color:
        return text
    return "".join(styles) + text + RESET


def phase_color(phase: Phase) -> str:
    return GREEN if phase.is_break else RED


def format_remaining(minutes: int, seconds: int) -> str:
    return f"{minutes:02d}:{seconds:02d}"


def format_elapsed(seconds: float) -> str:
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes:02d}m"
    return f"{minutes}m {secs:02d}s"


def progress_bar(progress: float, width: int = BAR_WIDTH) -> str:
    progress = max(0.0, min(1.0, progress))
    filled = int(progress * width)
    return "[" + "#" * filled + "-" * (width - filled) + f"] {int(progress * 100):3d}%"


def render_snapshot(snapshot: SessionSnapshot, use_color: bool = False) -> str:
    tint = phase_color(snapshot.phase)
    if snapshot.remaining_seconds > 0:
        remaining = format_remaining(*snapshot.remaining_display)
    else:
        remaining = f"{snapshot.phase.label} completed"

    title = f" {snapshot.phase.label} "
    if snapshot.status is SessionStatus.PAUSED:
        title += "(paused) "
    elif snapshot.status is SessionStatus.ENDED:
        title += "(ended) "

    lines = [
        _paint(title, use_color, BOLD, tint),
        _paint(remaining, use_color, tint) + f"   cycles: {snapshot.cycle_count}",
        _paint(progress_bar(snapshot.progress), use_color, tint),
        "",
        _paint(" Task list ", use_color, BOLD),
    ]
    if not snapshot.tasks:
        lines.append(_paint("  (no tasks)", use_color, DIM))
    for index, record in enumerate(snapshot.tasks):
        is_current = index == snapshot.current_index
        marker = ">> " if is_current else "   "
        check = "[x]" if record.completed else "[ ]"
        text = f"{marker}{check} {record.name} : {format_elapsed(record.elapsed)} · {record.pomodoros}"
        style = (GREEN,) if record.completed else (RED,)
        if is_current:
            style += (BOLD,)
        lines.append(_paint(text, use_color, *style))
    lines.append("")
    lines.append(_paint("p pause/resume · d done · q quit · h help", use_color, DIM))
    return "\n".join(lines)


HELP_TEXT = """Commands (type, then Enter):
  p   pause or resume the timer
  d   mark the current task done and move to the next one
  q   save and quit
  h   show this help"""


def render_history(today: int, streak: int, rows: Sequence[SessionRow], totals: Sequence[tuple[str, int]]) -> str:
    lines = [
        f"Work sessions today: {today}",
        f"Current streak: {streak} day{'s' if streak != 1 else ''}",
    ]
    if totals:
        lines.append("")
        lines.append("Time per task:")
        for name, seconds in totals:
            lines.append(f"  {name}: {format_elapsed(seconds)}")
    if rows:
        lines.append("")
        lines.append("Recent work sessions:")
        for row in rows:
            minutes = row.duration_sec // 60
            task = f" · {row.task_name}" if row.task_name else ""
            lines.append(f"  {row.started_at} · {minutes}m{task}")
    return "\n".join(lines)


def render_records_summary(records) -> str:
    done = sum(1 for r in records if r.completed)
    lines = [f"{done}/{len(records)} tasks completed."]
    for record in records:
        check = "x" if record.completed else " "
        lines.append(f"  [{check}] {record.name} : {format_elapsed(record.elapsed)} · {record.pomodoros}")
    return "\n".join(lines)
