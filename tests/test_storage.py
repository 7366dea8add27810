from datetime import date, timedelta

from pomors.data.storage import Storage


def test_init_db_creates_file(tmp_path) -> None:
    db = tmp_path / "nested" / "history.db"
    storage = Storage(db)
    storage.init_db()
    storage.init_db()
    assert db.exists()


def test_insert_and_list_sessions(tmp_path) -> None:
    storage = Storage(tmp_path / "history.db")
    storage.init_db()
    first = storage.insert_session("work", 1500, "Write report", "2026-01-01T10:00:00")
    second = storage.insert_session("short_break", 300, None, "2026-01-01T10:25:00")

    rows = storage.list_sessions()
    assert [row.id for row in rows] == [second, first]
    assert rows[1].task_name == "Write report"
    assert rows[0].task_name is None
    assert len(storage.list_sessions(limit=1)) == 1


def test_today_and_streak(tmp_path) -> None:
    storage = Storage(tmp_path / "history.db")
    storage.init_db()
    today = date.today()
    for offset in (0, 1, 2, 4):
        day = (today - timedelta(days=offset)).isoformat()
        storage.insert_session("work", 1500, "A", f"{day}T09:00:00")
    storage.insert_session("short_break", 300, "A", f"{today.isoformat()}T09:25:00")
    storage.insert_session("work", 1500, "B", f"{today.isoformat()}T10:00:00")

    assert storage.work_sessions_today() == 2
    assert storage.current_streak_days() == 3


def test_streak_empty(tmp_path) -> None:
    storage = Storage(tmp_path / "history.db")
    storage.init_db()
    assert storage.current_streak_days() == 0
    assert storage.work_sessions_today() == 0


def test_task_totals(tmp_path) -> None:
    storage = Storage(tmp_path / "history.db")
    storage.init_db()
    storage.insert_session("work", 1500, "A")
    storage.insert_session("work", 1500, "A")
    storage.insert_session("work", 600, "B")
    storage.insert_session("long_break", 900, "B")
    storage.insert_session("work", 1500, None)

    assert storage.task_totals() == [("A", 3000), ("B", 600)]
