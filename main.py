"""Application entrypoint."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from clock import IntervalClock
from config import JsonConfigStore
from errors import INVALID_CONFIG, PacingError
from formatters import format_duration, format_score, truncate_text
from hotkey import GlobalHotkeyAdapter
from models import PacingConfig, RecordingSession, Script, SessionState, SessionSummary
from pacing import estimate_duration_seconds
from recorder import SoundDeviceRecorder
from scoring import SimulatedScorer
from session_controller import SessionController
from takes import TakeSink
from teleprompter_window import TeleprompterWindow

try:
    from PySide6.QtCore import QObject, QSize, QTimer, Signal
    from PySide6.QtGui import QAction, QBrush, QColor, QIcon, QPainter, QPixmap
    from PySide6.QtWidgets import QApplication, QFileDialog, QInputDialog, QMenu, QSystemTrayIcon
except Exception as exc:  # pragma: no cover
    raise SystemExit(f"PySide6 is required to run the desktop app: {exc}")

SAMPLE_SCRIPT = (
    "Fellow students, teachers, and parents. Today marks the end of a long journey, "
    "but also the beginning of an exciting new one. We arrived here as strangers "
    "and we leave as friends, ready for whatever comes next."
)


def _create_icon(color: str = "#888888", size: int = 22) -> QIcon:
    """Generate a simple circular tray icon with the given color."""
    pixmap = QPixmap(QSize(size, size))
    pixmap.fill(QColor(0, 0, 0, 0))
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setBrush(QBrush(QColor(color)))
    painter.setPen(QColor(color))
    painter.drawEllipse(2, 2, size - 4, size - 4)
    painter.end()
    return QIcon(pixmap)


ICON_IDLE = "#888888"
ICON_COUNTDOWN = "#FFB300"
ICON_RECORDING = "#FF4444"
ICON_PAUSED = "#4FC3F7"


def load_script(path: Path | None) -> Script:
    if path is None:
        return Script.from_text(SAMPLE_SCRIPT, title="Graduation Speech", script_id="sample")
    text = path.read_text(encoding="utf-8")
    return Script.from_text(text, title=path.stem, script_id=str(path))


class UIBridge(QObject):
    state_signal = Signal(str, str)
    tick_signal = Signal()
    finished_signal = Signal(object)
    error_signal = Signal(str)


class App:
    def __init__(self, script_path: Path | None = None) -> None:
        self.app = QApplication(sys.argv)
        self.app.setQuitOnLastWindowClosed(False)
        self.config_store = JsonConfigStore()
        self.take_sink = TakeSink(SimulatedScorer(), self.config_store.get_recordings_dir())
        self.recorder = SoundDeviceRecorder(max_duration_s=self.config_store.get_max_duration_s())

        self.ui = UIBridge()
        self.ui.state_signal.connect(self._on_state_change_ui)
        self.ui.tick_signal.connect(self._refresh)
        self.ui.finished_signal.connect(self._on_finished_ui)
        self.ui.error_signal.connect(self._on_error_ui)

        self.window = TeleprompterWindow(font_size=self.config_store.get_font_size())
        self.controller = SessionController(
            script=load_script(script_path),
            clock=IntervalClock(interval_s=1.0),
            recorder=self.recorder,
            pacing=PacingConfig(self.config_store.get_words_per_minute()),
            countdown_seconds=self.config_store.get_countdown_seconds(),
            max_duration_s=self.config_store.get_max_duration_s(),
            sample_rate=self.recorder.sample_rate,
            on_state_change=self._on_state_change,
            on_tick=self._on_tick,
            on_finished=self._on_finished,
            on_error=self._on_error,
        )
        self.hotkey = GlobalHotkeyAdapter(
            {
                self.config_store.get_hotkey(): self._on_record_hotkey,
                self.config_store.get_pause_hotkey(): self._on_pause_hotkey,
                self.config_store.get_restart_hotkey(): self._on_restart,
            }
        )

        # Presentation-only refresh of the level meter.
        self.level_timer = QTimer()
        self.level_timer.setInterval(100)
        self.level_timer.timeout.connect(lambda: self.window.set_level(self.recorder.level))

        self.tray = QSystemTrayIcon()
        self.tray.setIcon(_create_icon(ICON_IDLE))
        self.tray.setToolTip("Teleprompter — Ready")
        self._setup_menu()
        self.tray.show()

        self._show_script()
        self.window.show()

    def _setup_menu(self) -> None:
        menu = QMenu()

        wpm_action = QAction("Set Words Per Minute", menu)
        wpm_action.triggered.connect(self._set_wpm)
        menu.addAction(wpm_action)

        font_action = QAction("Set Font Size", menu)
        font_action.triggered.connect(self._set_font_size)
        menu.addAction(font_action)

        restart_action = QAction("Restart Take", menu)
        restart_action.triggered.connect(self._on_restart)
        menu.addAction(restart_action)

        open_action = QAction("Open Script", menu)
        open_action.triggered.connect(self._open_script)
        menu.addAction(open_action)

        menu.addSeparator()
        quit_action = QAction("Quit", menu)
        quit_action.triggered.connect(self.quit)
        menu.addAction(quit_action)

        self.tray.setContextMenu(menu)

    def _set_wpm(self) -> None:
        value, ok = QInputDialog.getInt(
            None, "Pace", "Words per minute", self.controller.words_per_minute, 60, 200, 5
        )
        if not ok:
            return
        try:
            self.controller.set_words_per_minute(value)
        except PacingError as exc:
            self._on_error(INVALID_CONFIG, exc.detail)
            return
        self.config_store.set_words_per_minute(value)
        self._show_script()

    def _set_font_size(self) -> None:
        value, ok = QInputDialog.getInt(
            None, "Font Size", "Script font size", self.config_store.get_font_size(), 12, 24, 2
        )
        if not ok:
            return
        self.config_store.set_font_size(value)
        self.window.set_font_size(self.config_store.get_font_size())
        self._refresh()

    def _open_script(self) -> None:
        path, _ = QFileDialog.getOpenFileName(None, "Open Script", "", "Text files (*.txt)")
        if not path:
            return
        self.controller.set_script(load_script(Path(path)))
        self._show_script()

    # ------------------------------------------------------------------
    # Callbacks (called from clock/hotkey threads → emit signals for UI thread)
    # ------------------------------------------------------------------

    def _on_state_change(self, from_state: SessionState, to_state: SessionState) -> None:
        self.ui.state_signal.emit(from_state.value, to_state.value)

    def _on_tick(self, session: RecordingSession, highlight_index: int) -> None:
        self.ui.tick_signal.emit()

    def _on_finished(self, summary: SessionSummary) -> None:
        self.ui.finished_signal.emit(summary)

    def _on_error(self, code: str, message: str) -> None:
        self.ui.error_signal.emit(f"{code}: {message}")

    # ------------------------------------------------------------------
    # UI thread handlers (safe for Qt)
    # ------------------------------------------------------------------

    def _show_script(self) -> None:
        script = self.controller.script
        estimate = estimate_duration_seconds(script.words, self.controller.words_per_minute)
        self.window.set_title(
            f"{truncate_text(script.title, 40)} · {len(script.words)} words · ~{format_duration(estimate)} "
            f"at {self.controller.words_per_minute} wpm"
        )
        self._refresh()

    def _refresh(self) -> None:
        session = self.controller.session
        if session.state == SessionState.COUNTING_DOWN:
            self.window.set_status(str(session.countdown_remaining))
        elif session.state == SessionState.PAUSED:
            self.window.set_status(f"Paused {format_duration(session.elapsed_seconds)}")
        elif session.state in (SessionState.RECORDING, SessionState.STOPPED):
            self.window.set_status(format_duration(session.elapsed_seconds))
        else:
            self.window.set_status("Press the hotkey to start")
        self.window.set_words(self.controller.highlighted_words())

    def _on_state_change_ui(self, from_state: str, to_state: str) -> None:
        if to_state == SessionState.COUNTING_DOWN.value:
            self.tray.setIcon(_create_icon(ICON_COUNTDOWN))
            self.tray.setToolTip("Teleprompter — Get ready...")
            self.window.clear_result()
        elif to_state == SessionState.RECORDING.value:
            self.tray.setIcon(_create_icon(ICON_RECORDING))
            self.tray.setToolTip("Teleprompter — Recording...")
            self.level_timer.start()
        elif to_state == SessionState.PAUSED.value:
            self.tray.setIcon(_create_icon(ICON_PAUSED))
            self.tray.setToolTip("Teleprompter — Paused")
        else:
            self.tray.setIcon(_create_icon(ICON_IDLE))
            self.tray.setToolTip("Teleprompter — Ready")
            self.level_timer.stop()
            self.window.set_level(0.0)
        self._refresh()

    def _on_finished_ui(self, summary: SessionSummary) -> None:
        outcome = self.take_sink.finish(summary)
        result = outcome.result
        self.window.show_result(
            f"{format_score(result.score)} · {result.message}", tone=result.tone
        )
        if outcome.error:
            self.window.show_error(f"{outcome.error_code}: {outcome.error}")

    def _on_error_ui(self, msg: str) -> None:
        self.window.show_error(msg)

    # ------------------------------------------------------------------
    # Hotkey handlers
    # ------------------------------------------------------------------

    def _on_record_hotkey(self) -> None:
        state = self.controller.state
        try:
            if state in (SessionState.IDLE, SessionState.STOPPED):
                self.controller.start_session()
            elif state == SessionState.COUNTING_DOWN:
                self.controller.restart_session()
            else:
                self.controller.stop_session()
        except PacingError as exc:
            self._on_error(exc.code, exc.user_message)

    def _on_pause_hotkey(self) -> None:
        self.controller.toggle_pause()

    def _on_restart(self) -> None:
        # Discards the current take without scoring it.
        self.controller.restart_session()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> int:
        try:
            self.hotkey.start()
        except Exception as exc:
            self.window.show_error(f"Hotkey disabled: {exc}")
        return self.app.exec()

    def quit(self) -> None:
        self.hotkey.stop()
        self.controller.restart_session()
        self.app.quit()


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    script_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    app = App(script_path=script_path)
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
