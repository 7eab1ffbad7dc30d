"""Core data models for the teleprompter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from errors import InvalidConfig

DEFAULT_WORDS_PER_MINUTE = 120
DEFAULT_COUNTDOWN_SECONDS = 3


class SessionState(str, Enum):
    IDLE = "IDLE"
    COUNTING_DOWN = "COUNTING_DOWN"
    RECORDING = "RECORDING"
    PAUSED = "PAUSED"
    STOPPED = "STOPPED"


class SessionEvent(str, Enum):
    START = "start"
    TICK = "tick"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"
    RESTART = "restart"


class WordStatus(str, Enum):
    SPOKEN = "spoken"
    CURRENT = "current"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class Script:
    words: tuple[str, ...]
    title: str = ""
    script_id: str = ""

    @classmethod
    def from_text(cls, text: str, title: str = "", script_id: str = "") -> "Script":
        return cls(words=tuple(text.split()), title=title, script_id=script_id)


@dataclass(frozen=True)
class PacingConfig:
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE

    def __post_init__(self) -> None:
        if self.words_per_minute <= 0:
            raise InvalidConfig(f"words_per_minute must be positive, got {self.words_per_minute}")


@dataclass(frozen=True)
class RecordingSession:
    """One practice attempt. Only ``session_machine`` produces new values."""

    state: SessionState = SessionState.IDLE
    elapsed_seconds: int = 0
    countdown_remaining: int = 0


@dataclass(frozen=True)
class HighlightedWord:
    index: int
    text: str
    status: WordStatus


@dataclass(frozen=True)
class SessionSummary:
    elapsed_seconds: int
    highlight_index: int
    word_count: int
    words_per_minute: int
    audio_pcm: bytes = field(default=b"", repr=False)
    sample_rate: int = 16000


@dataclass(frozen=True)
class ScoreResult:
    score: float
    message: str
    tone: str


@dataclass
class AudioFrame:
    pcm16_bytes: bytes
    sample_rate: int = 16000
    channels: int = 1
    timestamp_ms: int = 0
