from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from pomors.core.errors import EmptyTaskList


@dataclass
class Task:
    name: str
    elapsed: float = 0.0
    completed: bool = False
    pomodoros: int = 0

    def record(self) -> TaskRecord:
        return TaskRecord(
            name=self.name,
            completed=self.completed,
            elapsed=self.elapsed,
            pomodoros=self.pomodoros,
        )


@dataclass(frozen=True)
class TaskRecord:
    name: str
    completed: bool
    elapsed: float
    pomodoros: int = 0


class TaskQueue:
    """Ordered tasks with a cursor on the one being worked on.

    The cursor is either None or a valid index. Once it walks off the end it
    stays None; nothing moves it backwards.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._tasks: list[Task] = [Task(name=name) for name in names]
        self._cursor: int | None = 0 if self._tasks else None

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def cursor(self) -> int | None:
        return self._cursor

    def current(self) -> Task | None:
        if self._cursor is None:
            return None
        return self._tasks[self._cursor]

    def accumulate_elapsed(self, amount: float) -> None:
        task = self.current()
        if task is None:
            return
        task.elapsed += amount
        task.pomodoros += 1

    def advance(self) -> None:
        task = self.current()
        if task is None:
            return
        task.completed = True
        next_index = self._cursor + 1
        self._cursor = next_index if next_index < len(self._tasks) else None

    def all_completed(self) -> bool:
        return all(task.completed for task in self._tasks)

    def require_tasks(self) -> None:
        if not self._tasks:
            raise EmptyTaskList()

    def records(self) -> tuple[TaskRecord, ...]:
        return tuple(task.record() for task in self._tasks)
