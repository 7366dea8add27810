from __future__ import annotations

"""SQLite-журнал завершённых фаз и статистика по нему."""

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Iterator


SCHEMA_VERSION = 1


@dataclass(frozen=True)
class SessionRow:
    id: int
    started_at: str
    phase: str
    duration_sec: int
    task_name: str | None


class Storage:
    """Инкапсулирует подключение к SQLite и транзакционные операции."""
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode = WAL;")
        except sqlite3.DatabaseError:
            pass
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Создает таблицы при первом запуске."""
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sessions(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    started_at TEXT NOT NULL,
                    phase TEXT NOT NULL,
                    duration_sec INTEGER NOT NULL,
                    task_name TEXT
                )
                """
            )

    def insert_session(
        self,
        phase: str,
        duration_sec: int,
        task_name: str | None = None,
        started_at: str | None = None,
    ) -> int:
        started_at = started_at or datetime.now().isoformat(timespec="seconds")
        with self._transaction() as conn:
            cursor = conn.execute(
                """
                INSERT INTO sessions(started_at, phase, duration_sec, task_name)
                VALUES (?, ?, ?, ?)
                """,
                (started_at, phase, int(duration_sec), task_name),
            )
            return int(cursor.lastrowid)

    def list_sessions(self, limit: int = 100) -> list[SessionRow]:
        """Возвращает последние записи в обратном хронологическом порядке."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, started_at, phase, duration_sec, task_name FROM sessions ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [
            SessionRow(
                id=row["id"],
                started_at=row["started_at"],
                phase=row["phase"],
                duration_sec=row["duration_sec"],
                task_name=row["task_name"],
            )
            for row in rows
        ]

    def work_sessions_today(self) -> int:
        today = date.today().isoformat()
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT COUNT(*) AS c
                FROM sessions
                WHERE phase = 'work' AND date(started_at) = ?
                """,
                (today,),
            ).fetchone()
        return int(row["c"] if row else 0)

    def current_streak_days(self) -> int:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT DISTINCT date(started_at) AS d
                FROM sessions
                WHERE phase = 'work'
                ORDER BY d DESC
                """
            ).fetchall()
        if not rows:
            return 0

        work_days = {date.fromisoformat(row["d"]) for row in rows}
        cursor = date.today()
        streak = 0
        while cursor in work_days:
            streak += 1
            cursor -= timedelta(days=1)
        return streak

    def task_totals(self) -> list[tuple[str, int]]:
        """Суммарное рабочее время по задачам, по убыванию."""
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT task_name, SUM(duration_sec) AS total
                FROM sessions
                WHERE phase = 'work' AND task_name IS NOT NULL
                GROUP BY task_name
                ORDER BY total DESC, task_name ASC
                """
            ).fetchall()
        return [(row["task_name"], int(row["total"])) for row in rows]
