from __future__ import annotations

"""Точка входа pomors.

Разбирает аргументы, читает конфиг, собирает сессию и запускает цикл Qt.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from PyQt6.QtCore import QCoreApplication

from pomors.core.app_state import AppState
from pomors.core.errors import PomodoroError
from pomors.core.session import SessionController
from pomors.core.tasks import TaskQueue
from pomors.data.config import CONFIG_FILENAME, HISTORY_FILENAME, default_config_dir, load_config
from pomors.data.storage import Storage
from pomors.logging_setup import setup_logging
from pomors.ui.render import render_history, render_records_summary
from pomors.ui.terminal import TerminalSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pomors", description="Pomodoro timer with a task list")
    p.add_argument("tasks", nargs="*", help="task names, in the order you will work on them")
    p.add_argument(
        "-t",
        "--task-list",
        dest="task_list",
        nargs="+",
        action="extend",
        default=[],
        metavar="TASK",
        help="task names follow; each may also be a comma-separated list",
    )
    p.add_argument("-l", "--length", type=float, help="length of one pomodoro [min]")
    p.add_argument("-s", "--short-break", type=float, help="short break [min]")
    p.add_argument("-L", "--long-break", type=float, help="long break [min]")
    p.add_argument("-c", "--cycles", type=int, help="pomodoros before a long break")
    p.add_argument("--until-done", action="store_true", help="end the session once every task is done")
    p.add_argument("--auto-advance", action="store_true", help="move to the next task after each pomodoro")
    p.add_argument("-o", "--save", type=Path, help="write final task results to this file")
    p.add_argument("--config", type=Path, help="config file (default: ~/.config/pomors/config.json)")
    p.add_argument("--no-history", action="store_true", help="do not log finished pomodoros")
    p.add_argument("--history", action="store_true", help="print pomodoro history and exit")
    p.add_argument("--no-bell", action="store_true", help="no terminal bell on phase change")
    p.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    return p


def parse_task_names(values: Iterable[str]) -> list[str]:
    names: list[str] = []
    for value in values:
        for part in value.split(","):
            name = part.strip()
            if name:
                names.append(name)
    return names


def _show_history(storage: Storage) -> None:
    print(
        render_history(
            today=storage.work_sessions_today(),
            streak=storage.current_streak_days(),
            rows=[row for row in storage.list_sessions(limit=20) if row.phase == "work"],
            totals=storage.task_totals(),
        )
    )


def main(argv: list[str] | None = None) -> int:
    """Создает зависимости приложения и запускает цикл сессии."""
    args = build_parser().parse_args(argv)

    config_path = args.config or default_config_dir() / CONFIG_FILENAME
    setup_logging(config_path.parent, verbose=args.verbose)
    history_path = config_path.parent / HISTORY_FILENAME

    if args.history:
        storage = Storage(history_path)
        storage.init_db()
        _show_history(storage)
        return 0

    config = load_config(config_path).with_overrides(
        work_minutes=args.length,
        short_break_minutes=args.short_break,
        long_break_minutes=args.long_break,
        cycles_before_long_break=args.cycles,
        end_when_all_done=True if args.until_done else None,
        auto_advance=True if args.auto_advance else None,
        bell=False if args.no_bell else None,
        history=False if args.no_history else None,
    )

    try:
        tasks = TaskQueue(parse_task_names([*args.tasks, *args.task_list]))
        if config.end_when_all_done:
            tasks.require_tasks()
        controller = SessionController(
            config.schedule(),
            tasks,
            end_when_all_done=config.end_when_all_done,
            auto_advance=config.auto_advance,
        )
    except (PomodoroError, ValueError) as exc:
        logger.error("%s", exc)
        print(f"pomors: error: {exc}", file=sys.stderr)
        return 1

    storage = None
    if config.history:
        storage = Storage(history_path)
        storage.init_db()

    app = QCoreApplication(sys.argv[:1])
    app_state = AppState(controller, storage=storage, results_path=args.save)
    session = TerminalSession(app_state, tick_ms=config.tick_ms, bell=config.bell)
    session.start()
    code = app.exec()

    if app_state.final_records is not None:
        print(render_records_summary(app_state.final_records))
        if args.save and session.exit_code == 0:
            print(f"Results saved to {args.save}")
    return code or session.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
