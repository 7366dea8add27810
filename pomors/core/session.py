from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pomors.core.errors import InvalidTransition
from pomors.core.scheduler import Phase, ScheduleConfig, SchedulerState, next_phase
from pomors.core.tasks import TaskQueue, TaskRecord
from pomors.core.timer import Countdown

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


@dataclass(frozen=True)
class PhaseChange:
    finished: Phase
    started: Phase
    duration: float
    task_name: str | None


@dataclass(frozen=True)
class SessionSnapshot:
    phase: Phase
    status: SessionStatus
    remaining_display: tuple[int, int]
    remaining_seconds: float
    progress: float
    current_task_name: str | None
    current_index: int | None
    cycle_count: int
    tasks: tuple[TaskRecord, ...]


class SessionController:
    """Drives the work/break cycle and credits finished work to the current task."""

    def __init__(
        self,
        config: ScheduleConfig,
        tasks: TaskQueue,
        *,
        end_when_all_done: bool = False,
        auto_advance: bool = False,
    ) -> None:
        self._config = config
        self._tasks = tasks
        self._end_when_all_done = end_when_all_done
        self._auto_advance = auto_advance
        self._scheduler_state = SchedulerState()
        self._phase = Phase.WORK
        self._countdown = Countdown.start(config.work_duration)
        self._status = SessionStatus.RUNNING

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def countdown(self) -> Countdown:
        return self._countdown

    @property
    def scheduler_state(self) -> SchedulerState:
        return self._scheduler_state

    @property
    def tasks(self) -> TaskQueue:
        return self._tasks

    @property
    def config(self) -> ScheduleConfig:
        return self._config

    def tick(self, elapsed: float) -> list[PhaseChange]:
        """Feed `elapsed` seconds into the running phase.

        Time left over after a phase completes carries into the following
        phases. Returns one PhaseChange per completed phase.
        """
        self._require(SessionStatus.RUNNING, "tick")
        changes: list[PhaseChange] = []
        left = max(0.0, float(elapsed))
        while True:
            before = self._countdown.remaining
            self._countdown = self._countdown.tick(left)
            left -= before
            if not self._countdown.is_complete():
                break
            changes.append(self._complete_phase())
            if self._status is SessionStatus.ENDED or left <= 0:
                break
        return changes

    def pause(self) -> None:
        self._require(SessionStatus.RUNNING, "pause")
        self._status = SessionStatus.PAUSED

    def resume(self) -> None:
        self._require(SessionStatus.PAUSED, "resume")
        self._status = SessionStatus.RUNNING

    def toggle_pause(self) -> SessionStatus:
        if self._status is SessionStatus.RUNNING:
            self.pause()
        else:
            self.resume()
        return self._status

    def skip_to_next_task(self) -> bool:
        """Mark the current task done and move to the next one.

        Only acts during a Work phase with a current task; the phase and
        countdown are left alone.
        """
        if self._status is SessionStatus.ENDED:
            raise InvalidTransition("skip to next task", self._status.value)
        task = self._tasks.current()
        if self._phase != Phase.WORK or task is None:
            return False
        self._tasks.advance()
        logger.info("Task %r marked done", task.name)
        self._end_if_all_done()
        return True

    def end(self) -> tuple[TaskRecord, ...]:
        if self._status is not SessionStatus.ENDED:
            self._status = SessionStatus.ENDED
            logger.info(
                "Session ended after %d work cycles",
                self._scheduler_state.completed_work_cycles,
            )
        return self._tasks.records()

    def snapshot(self) -> SessionSnapshot:
        task = self._tasks.current()
        return SessionSnapshot(
            phase=self._phase,
            status=self._status,
            remaining_display=self._countdown.remaining_as_display(),
            remaining_seconds=self._countdown.remaining,
            progress=self._countdown.progress,
            current_task_name=task.name if task else None,
            current_index=self._tasks.cursor,
            cycle_count=self._scheduler_state.completed_work_cycles,
            tasks=self._tasks.records(),
        )

    def _complete_phase(self) -> PhaseChange:
        finished = self._phase
        task = self._tasks.current()
        task_name = task.name if task else None
        if finished == Phase.WORK:
            self._tasks.accumulate_elapsed(self._countdown.total)
            if self._auto_advance:
                self._tasks.advance()
        phase, duration, self._scheduler_state = next_phase(
            finished, self._scheduler_state, self._config
        )
        self._start_phase(phase, duration)
        logger.info("Phase %s finished, starting %s", finished.value, phase.value)
        if finished == Phase.WORK and self._auto_advance:
            self._end_if_all_done()
        return PhaseChange(finished=finished, started=phase, duration=duration, task_name=task_name)

    def _start_phase(self, phase: Phase, duration: float) -> None:
        self._phase = phase
        self._countdown = Countdown.start(duration)

    def _end_if_all_done(self) -> None:
        if self._end_when_all_done and len(self._tasks) and self._tasks.all_completed():
            self.end()

    def _require(self, expected: SessionStatus, action: str) -> None:
        if self._status is not expected:
            raise InvalidTransition(action, self._status.value)
