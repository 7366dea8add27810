from __future__ import annotations

import logging
import signal
import sys
from typing import TextIO

from PyQt6.QtCore import QCoreApplication, QElapsedTimer, QObject, QSocketNotifier, QTimer

from pomors.core.app_state import AppState
from pomors.core.errors import InvalidTransition
from pomors.core.session import PhaseChange, SessionSnapshot
from pomors.ui.render import CLEAR_SCREEN, HELP_TEXT, color_enabled, render_snapshot

logger = logging.getLogger(__name__)


class TerminalSession(QObject):
    """Redraws the session on every tick and reads one-letter commands from stdin."""

    def __init__(
        self,
        app_state: AppState,
        tick_ms: int = 250,
        bell: bool = True,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        super().__init__()
        self.app_state = app_state
        self.bell = bell
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.use_color = color_enabled(self.stdout)
        self.exit_code = 0
        self._message = ""

        self.elapsed = QElapsedTimer()
        self.last_ms = 0

        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(max(10, int(tick_ms)))
        self.tick_timer.timeout.connect(self._on_tick)

        self.notifier: QSocketNotifier | None = None
        self._previous_sigint = None

        self.app_state.snapshot_changed.connect(self._draw)
        self.app_state.phase_changed.connect(self._on_phase_changed)
        self.app_state.session_ended.connect(self._on_session_ended)

    def start(self) -> None:
        self.elapsed.start()
        self.last_ms = self.elapsed.elapsed()
        if not self.stdin.closed:
            self.notifier = QSocketNotifier(self.stdin.fileno(), QSocketNotifier.Type.Read, self)
            self.notifier.activated.connect(self._on_stdin)
        self._previous_sigint = signal.signal(signal.SIGINT, self._on_sigint)
        self.tick_timer.start()
        self._draw(self.app_state.snapshot())

    def stop(self) -> None:
        self.tick_timer.stop()
        if self.notifier is not None:
            self.notifier.setEnabled(False)
        if self._previous_sigint is not None:
            signal.signal(signal.SIGINT, self._previous_sigint)
            self._previous_sigint = None

    def _on_tick(self) -> None:
        now_ms = self.elapsed.elapsed()
        dt = max(0.0, (now_ms - self.last_ms) / 1000.0)
        self.last_ms = now_ms
        try:
            self.app_state.tick(dt)
        except OSError as exc:
            self._save_failed(exc)

    def _on_stdin(self, *_args) -> None:
        line = self.stdin.readline()
        if not line:
            # EOF: keep the timer running, stop listening
            if self.notifier is not None:
                self.notifier.setEnabled(False)
            return
        self.handle_command(line.strip().lower())

    def handle_command(self, command: str) -> None:
        self._message = ""
        try:
            if command in {"p", "pause", "resume", "space"}:
                status = self.app_state.toggle_pause()
                logger.info("Session %s", status.value)
            elif command in {"d", "done", "n", "next"}:
                if not self.app_state.skip_task():
                    self._message = "Nothing to mark done (tasks advance only during work)."
            elif command in {"q", "quit", "exit"}:
                self.quit()
                return
            elif command in {"h", "help", "?"}:
                self._message = HELP_TEXT
            elif command:
                self._message = "Unknown command. Type 'h' for help."
        except InvalidTransition as exc:
            logger.warning("Rejected command %r: %s", command, exc)
            self._message = str(exc)
        except OSError as exc:
            self._save_failed(exc)
            return
        if not self.app_state.is_ended:
            self._draw(self.app_state.snapshot())

    def quit(self) -> None:
        try:
            self.app_state.end()
        except OSError as exc:
            self._save_failed(exc)

    def _save_failed(self, exc: OSError) -> None:
        logger.error("Could not save results: %s", exc)
        self.exit_code = 1
        self._finish()

    def _on_sigint(self, *_args) -> None:
        logger.info("Interrupted")
        self.quit()

    def _on_phase_changed(self, change: PhaseChange) -> None:
        if self.bell:
            self.stdout.write("\a")
        self._message = f"{change.finished.label} finished. {change.started.label} started."

    def _on_session_ended(self, records) -> None:
        self._finish()

    def _finish(self) -> None:
        self.stop()
        app = QCoreApplication.instance()
        if app is not None:
            app.exit(self.exit_code)

    def _draw(self, snapshot: SessionSnapshot) -> None:
        text = render_snapshot(snapshot, self.use_color)
        if self._message:
            text += "\n\n" + self._message
        self.stdout.write(CLEAR_SCREEN + text + "\n")
        self.stdout.flush()
