from __future__ import annotations

from dataclasses import dataclass

from pomors.core.errors import InvalidDuration


@dataclass(frozen=True)
class Countdown:
    """Single-phase countdown detached from any clock.

    The caller measures wall-clock time and feeds it in through `tick`.
    """

    total: float
    remaining: float

    def __post_init__(self) -> None:
        if self.total <= 0:
            raise InvalidDuration(self.total)
        if not 0 <= self.remaining <= self.total:
            raise ValueError(f"remaining must be within [0, {self.total}], got {self.remaining!r}")

    @classmethod
    def start(cls, total: float) -> Countdown:
        return cls(total=float(total), remaining=float(total))

    def tick(self, elapsed: float) -> Countdown:
        step = max(0.0, float(elapsed))
        return Countdown(total=self.total, remaining=max(0.0, self.remaining - step))

    def is_complete(self) -> bool:
        return self.remaining == 0

    @property
    def elapsed(self) -> float:
        return self.total - self.remaining

    @property
    def progress(self) -> float:
        return max(0.0, min(1.0, self.elapsed / self.total))

    def remaining_as_display(self) -> tuple[int, int]:
        minutes, seconds = divmod(int(self.remaining), 60)
        return minutes, seconds
