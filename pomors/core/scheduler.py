from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from pomors.core.errors import InvalidDuration


class Phase(str, Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not Phase.WORK

    @property
    def label(self) -> str:
        return {
            Phase.WORK: "Work",
            Phase.SHORT_BREAK: "Short break",
            Phase.LONG_BREAK: "Long break",
        }[self]


@dataclass(frozen=True)
class ScheduleConfig:
    """Phase durations in seconds; validated once on construction."""

    work_duration: float = 25 * 60
    short_break_duration: float = 5 * 60
    long_break_duration: float = 15 * 60
    cycles_before_long_break: int = 4

    def __post_init__(self) -> None:
        for name in ("work_duration", "short_break_duration", "long_break_duration"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidDuration(value, name)
        if self.cycles_before_long_break < 1:
            raise ValueError("cycles_before_long_break must be at least 1")

    @classmethod
    def from_minutes(
        cls,
        work: float,
        short_break: float,
        long_break: float,
        cycles: int,
    ) -> ScheduleConfig:
        return cls(
            work_duration=work * 60,
            short_break_duration=short_break * 60,
            long_break_duration=long_break * 60,
            cycles_before_long_break=cycles,
        )

    def duration_for(self, phase: Phase) -> float:
        if phase == Phase.WORK:
            return self.work_duration
        if phase == Phase.SHORT_BREAK:
            return self.short_break_duration
        return self.long_break_duration


@dataclass(frozen=True)
class SchedulerState:
    completed_work_cycles: int = 0


def next_phase(
    current: Phase,
    state: SchedulerState,
    config: ScheduleConfig,
) -> tuple[Phase, float, SchedulerState]:
    """Return the phase that follows `current`, its duration and the new state."""
    if current == Phase.WORK:
        state = replace(state, completed_work_cycles=state.completed_work_cycles + 1)
        if state.completed_work_cycles % config.cycles_before_long_break == 0:
            return Phase.LONG_BREAK, config.long_break_duration, state
        return Phase.SHORT_BREAK, config.short_break_duration, state
    return Phase.WORK, config.work_duration, state
