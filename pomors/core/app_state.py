from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSignal

from pomors.core.scheduler import Phase
from pomors.core.session import PhaseChange, SessionController, SessionSnapshot, SessionStatus
from pomors.core.tasks import TaskRecord
from pomors.data.results import write_results
from pomors.data.storage import Storage

logger = logging.getLogger(__name__)


class AppState(QObject):
    """Qt-facing owner of the session; the front end only talks to this."""

    snapshot_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(object)
    session_ended = pyqtSignal(object)

    def __init__(
        self,
        controller: SessionController,
        storage: Storage | None = None,
        results_path: str | Path | None = None,
    ) -> None:
        super().__init__()
        self.controller = controller
        self._storage = storage
        self._results_path = Path(results_path) if results_path else None
        self.final_records: tuple[TaskRecord, ...] | None = None

    @property
    def is_ended(self) -> bool:
        return self.controller.status is SessionStatus.ENDED

    def snapshot(self) -> SessionSnapshot:
        return self.controller.snapshot()

    def tick(self, elapsed: float) -> None:
        if self.controller.status is not SessionStatus.RUNNING:
            return
        for change in self.controller.tick(elapsed):
            self._record_phase(change)
            self.phase_changed.emit(change)
        self.snapshot_changed.emit(self.controller.snapshot())
        if self.is_ended:
            self.end()

    def toggle_pause(self) -> SessionStatus:
        status = self.controller.toggle_pause()
        self.snapshot_changed.emit(self.controller.snapshot())
        return status

    def skip_task(self) -> bool:
        moved = self.controller.skip_to_next_task()
        self.snapshot_changed.emit(self.controller.snapshot())
        if self.is_ended:
            self.end()
        return moved

    def end(self) -> tuple[TaskRecord, ...]:
        if self.final_records is not None:
            return self.final_records
        records = self.controller.end()
        self.final_records = records
        if self._results_path is not None:
            write_results(self._results_path, records)
        self.session_ended.emit(records)
        return records

    def _record_phase(self, change: PhaseChange) -> None:
        if self._storage is None or change.finished != Phase.WORK:
            return
        duration = self.controller.config.duration_for(change.finished)
        self._storage.insert_session(
            phase=change.finished.value,
            duration_sec=int(duration),
            task_name=change.task_name,
        )
