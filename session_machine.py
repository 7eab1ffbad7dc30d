"""Pure transition table for a recording session.

Each transition takes a ``RecordingSession`` value and returns the next
one. The machine owns no timer and performs no I/O; ticks are delivered
by whoever drives it (see ``clock``).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Tuple

from errors import InvalidTransition
from models import DEFAULT_COUNTDOWN_SECONDS, RecordingSession, SessionEvent, SessionState

Handler = Callable[[RecordingSession, int], RecordingSession]


def _begin_countdown(session: RecordingSession, countdown_seconds: int) -> RecordingSession:
    return RecordingSession(
        state=SessionState.COUNTING_DOWN,
        elapsed_seconds=0,
        countdown_remaining=countdown_seconds,
    )


def _countdown_tick(session: RecordingSession, countdown_seconds: int) -> RecordingSession:
    if session.countdown_remaining > 0:
        return replace(session, countdown_remaining=session.countdown_remaining - 1)
    return RecordingSession(state=SessionState.RECORDING, elapsed_seconds=0, countdown_remaining=0)


def _recording_tick(session: RecordingSession, countdown_seconds: int) -> RecordingSession:
    return replace(session, elapsed_seconds=session.elapsed_seconds + 1)


def _to(state: SessionState) -> Handler:
    def handler(session: RecordingSession, countdown_seconds: int) -> RecordingSession:
        return replace(session, state=state)

    return handler


def _reset(session: RecordingSession, countdown_seconds: int) -> RecordingSession:
    return RecordingSession()


def _unchanged(session: RecordingSession, countdown_seconds: int) -> RecordingSession:
    return session


_S = SessionState
_E = SessionEvent

TRANSITIONS: Dict[Tuple[SessionState, SessionEvent], Handler] = {
    (_S.IDLE, _E.START): _begin_countdown,
    (_S.STOPPED, _E.START): _begin_countdown,
    (_S.COUNTING_DOWN, _E.TICK): _countdown_tick,
    (_S.RECORDING, _E.TICK): _recording_tick,
    (_S.RECORDING, _E.PAUSE): _to(_S.PAUSED),
    (_S.PAUSED, _E.RESUME): _to(_S.RECORDING),
    (_S.RECORDING, _E.STOP): _to(_S.STOPPED),
    (_S.PAUSED, _E.STOP): _to(_S.STOPPED),
    (_S.COUNTING_DOWN, _E.RESTART): _reset,
    (_S.RECORDING, _E.RESTART): _reset,
    (_S.PAUSED, _E.RESTART): _reset,
    (_S.STOPPED, _E.RESTART): _reset,
}

# Events that are silently ignored when the table has no entry.
_NOOP_EVENTS = frozenset({_E.TICK, _E.PAUSE, _E.RESUME, _E.RESTART})


def transition(
    session: RecordingSession,
    event: SessionEvent,
    countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS,
) -> RecordingSession:
    handler = TRANSITIONS.get((session.state, event))
    if handler is None:
        if event in _NOOP_EVENTS:
            return _unchanged(session, countdown_seconds)
        raise InvalidTransition(session.state.value, event.value)
    return handler(session, countdown_seconds)


def start(
    session: RecordingSession,
    countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS,
) -> RecordingSession:
    return transition(session, SessionEvent.START, countdown_seconds)


def tick(session: RecordingSession) -> RecordingSession:
    return transition(session, SessionEvent.TICK)


def pause(session: RecordingSession) -> RecordingSession:
    return transition(session, SessionEvent.PAUSE)


def resume(session: RecordingSession) -> RecordingSession:
    return transition(session, SessionEvent.RESUME)


def stop(session: RecordingSession) -> RecordingSession:
    return transition(session, SessionEvent.STOP)


def restart(session: RecordingSession) -> RecordingSession:
    return transition(session, SessionEvent.RESTART)


def is_active(session: RecordingSession) -> bool:
    return session.state in (_S.COUNTING_DOWN, _S.RECORDING, _S.PAUSED)
