from pomors.core.app_state import AppState
from pomors.core.scheduler import Phase, ScheduleConfig
from pomors.core.session import SessionController, SessionStatus
from pomors.core.tasks import TaskQueue
from pomors.data.results import read_results
from pomors.data.storage import Storage


def make_state(tmp_path, names=("Task A", "Task B"), **kwargs) -> AppState:
    controller = SessionController(ScheduleConfig(60, 10, 30, 2), TaskQueue(names), **kwargs)
    storage = Storage(tmp_path / "history.db")
    storage.init_db()
    return AppState(controller, storage=storage, results_path=tmp_path / "results.tsv")


def test_tick_emits_snapshot_and_phase_changes(tmp_path) -> None:
    state = make_state(tmp_path)
    snapshots, changes = [], []
    state.snapshot_changed.connect(snapshots.append)
    state.phase_changed.connect(changes.append)

    state.tick(30)
    state.tick(30)

    assert len(snapshots) == 2
    assert snapshots[-1].phase == Phase.SHORT_BREAK
    assert [c.finished for c in changes] == [Phase.WORK]


def test_finished_work_is_logged_to_history(tmp_path) -> None:
    state = make_state(tmp_path)

    state.tick(60)
    state.tick(10)
    state.skip_task()
    state.tick(60)

    rows = state._storage.list_sessions()  # noqa: SLF001 - tests may inspect storage directly
    assert [(r.phase, r.duration_sec, r.task_name) for r in rows] == [
        ("work", 60, "Task B"),
        ("work", 60, "Task A"),
    ]


def test_tick_is_ignored_while_paused(tmp_path) -> None:
    state = make_state(tmp_path)
    state.toggle_pause()

    state.tick(120)

    assert state.controller.status == SessionStatus.PAUSED
    assert state.snapshot().remaining_seconds == 60


def test_end_writes_results_once(tmp_path) -> None:
    state = make_state(tmp_path)
    ended = []
    state.session_ended.connect(ended.append)

    state.tick(60)
    state.tick(10)
    state.skip_task()
    records = state.end()
    again = state.end()

    assert again is records
    assert len(ended) == 1
    assert read_results(tmp_path / "results.tsv") == list(records)
    assert records[0].completed is True
    assert records[0].elapsed == 60


def test_all_done_policy_ends_through_state(tmp_path) -> None:
    state = make_state(tmp_path, names=("Only",), end_when_all_done=True)
    ended = []
    state.session_ended.connect(ended.append)

    state.skip_task()

    assert state.is_ended
    assert len(ended) == 1
    assert (tmp_path / "results.tsv").exists()
