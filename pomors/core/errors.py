from __future__ import annotations


class PomodoroError(Exception):
    """Base class for timer and session errors."""


class InvalidDuration(PomodoroError, ValueError):
    def __init__(self, value: float, what: str = "duration") -> None:
        super().__init__(f"{what} must be positive, got {value!r}")
        self.value = value


class InvalidTransition(PomodoroError, RuntimeError):
    def __init__(self, action: str, state: str) -> None:
        super().__init__(f"cannot {action} while session is {state}")
        self.action = action
        self.state = state


class EmptyTaskList(PomodoroError, ValueError):
    def __init__(self) -> None:
        super().__init__("at least one task name is required")
