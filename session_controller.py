"""Drives the session state machine from a clock and wires its collaborators."""

from __future__ import annotations

import functools
import logging
import threading
from typing import Callable, Optional

import session_machine
from errors import AUDIO_DEVICE_ERROR, PERMISSION_DENIED
from interfaces import Clock, Recorder
from models import (
    DEFAULT_COUNTDOWN_SECONDS,
    HighlightedWord,
    PacingConfig,
    RecordingSession,
    Script,
    SessionState,
    SessionSummary,
)
from pacing import classify_words, compute_highlight

logger = logging.getLogger(__name__)

StateCallback = Callable[[SessionState, SessionState], None]
TickCallback = Callable[[RecordingSession, int], None]
FinishedCallback = Callable[[SessionSummary], None]
ErrorCallback = Callable[[str, str], None]


class SessionController:
    def __init__(
        self,
        script: Script,
        clock: Clock,
        recorder: Optional[Recorder] = None,
        pacing: Optional[PacingConfig] = None,
        countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS,
        max_duration_s: Optional[int] = None,
        sample_rate: int = 16000,
        on_state_change: Optional[StateCallback] = None,
        on_tick: Optional[TickCallback] = None,
        on_finished: Optional[FinishedCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._script = script
        self._clock = clock
        self._recorder = recorder
        self._pacing = pacing or PacingConfig()
        self._countdown_seconds = countdown_seconds
        self._max_duration_s = max_duration_s
        self._sample_rate = sample_rate
        self._on_state_change = on_state_change
        self._on_tick = on_tick
        self._on_finished = on_finished
        self._on_error = on_error

        self._lock = threading.RLock()
        self._session = RecordingSession()
        self._recorder_running = False
        # Bumped on every start, stop and restart; ticks carry the value they were issued under.
        self._generation = 0

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def session(self) -> RecordingSession:
        return self._session

    @property
    def script(self) -> Script:
        return self._script

    @property
    def words_per_minute(self) -> int:
        return self._pacing.words_per_minute

    @property
    def highlight_index(self) -> int:
        with self._lock:
            return compute_highlight(
                self._script.words,
                self._session.elapsed_seconds,
                self._pacing.words_per_minute,
            )

    def highlighted_words(self) -> list[HighlightedWord]:
        with self._lock:
            return classify_words(self._script.words, self.highlight_index, self._session.state)

    def set_words_per_minute(self, value: int) -> None:
        with self._lock:
            self._pacing = PacingConfig(words_per_minute=value)
            logger.debug("pace set to %d wpm", value)

    def set_script(self, script: Script) -> None:
        with self._lock:
            if session_machine.is_active(self._session):
                self.restart_session()
            self._script = script

    def start_session(self) -> None:
        with self._lock:
            self._apply(session_machine.start(self._session, self._countdown_seconds))
            self._generation += 1
            self._clock.start(functools.partial(self.handle_tick, self._generation))

    def handle_tick(self, generation: Optional[int] = None) -> None:
        with self._lock:
            if generation is not None and generation != self._generation:
                logger.debug("dropping stale tick from generation %d", generation)
                return
            self._apply(session_machine.tick(self._session))
            if self._on_tick:
                self._on_tick(self._session, self.highlight_index)
            if self._reached_max_duration():
                logger.info("max duration of %ss reached, stopping", self._max_duration_s)
                self.stop_session()

    def pause(self) -> None:
        with self._lock:
            self._apply(session_machine.pause(self._session))

    def resume(self) -> None:
        with self._lock:
            self._apply(session_machine.resume(self._session))

    def toggle_pause(self) -> None:
        with self._lock:
            if self._session.state == SessionState.PAUSED:
                self.resume()
            else:
                self.pause()

    def stop_session(self) -> SessionSummary:
        with self._lock:
            stopped = session_machine.stop(self._session)
            self._generation += 1
            self._safe_stop_clock()
            self._apply(stopped)
            highlight = self.highlight_index
            pcm = self._safe_stop_recorder()
            summary = SessionSummary(
                elapsed_seconds=stopped.elapsed_seconds,
                highlight_index=highlight,
                word_count=len(self._script.words),
                words_per_minute=self._pacing.words_per_minute,
                audio_pcm=pcm,
                sample_rate=self._sample_rate,
            )
            logger.info(
                "session finished after %ss at word %d/%d",
                summary.elapsed_seconds,
                summary.highlight_index,
                summary.word_count,
            )
            if self._on_finished:
                self._on_finished(summary)
            return summary

    def restart_session(self) -> None:
        with self._lock:
            if self._session.state == SessionState.IDLE:
                return
            self._generation += 1
            self._safe_stop_clock()
            self._safe_stop_recorder()
            self._apply(session_machine.restart(self._session))

    def _reached_max_duration(self) -> bool:
        return (
            self._max_duration_s is not None
            and self._session.state == SessionState.RECORDING
            and self._session.elapsed_seconds >= self._max_duration_s
        )

    def _apply(self, next_session: RecordingSession) -> None:
        from_state = self._session.state
        self._session = next_session
        to_state = next_session.state
        if from_state == to_state:
            return
        logger.debug("session %s -> %s", from_state.value, to_state.value)
        self._drive_recorder(from_state, to_state)
        if self._on_state_change:
            self._on_state_change(from_state, to_state)

    def _drive_recorder(self, from_state: SessionState, to_state: SessionState) -> None:
        if self._recorder is None:
            return
        try:
            if from_state == SessionState.COUNTING_DOWN and to_state == SessionState.RECORDING:
                self._recorder.start()
                self._recorder_running = True
            elif to_state == SessionState.PAUSED and self._recorder_running:
                self._recorder.pause()
            elif from_state == SessionState.PAUSED and to_state == SessionState.RECORDING:
                if self._recorder_running:
                    self._recorder.resume()
        except Exception as exc:
            self._recorder_running = False
            logger.warning("recorder failed: %s", exc)
            self._emit_error(_recorder_error_code(exc), str(exc))

    def _emit_error(self, code: str, message: str) -> None:
        if self._on_error:
            self._on_error(code, message)

    def _safe_stop_recorder(self) -> bytes:
        if self._recorder is None or not self._recorder_running:
            return b""
        self._recorder_running = False
        try:
            return self._recorder.stop()
        except Exception as exc:
            logger.warning("recorder stop failed: %s", exc)
            self._emit_error(AUDIO_DEVICE_ERROR, str(exc))
            return b""

    def _safe_stop_clock(self) -> None:
        try:
            self._clock.stop()
        except Exception as exc:  # pragma: no cover
            logger.warning("clock stop failed: %s", exc)


def _recorder_error_code(exc: Exception) -> str:
    if isinstance(exc, PermissionError) or "permission" in str(exc).lower():
        return PERMISSION_DENIED
    return AUDIO_DEVICE_ERROR
