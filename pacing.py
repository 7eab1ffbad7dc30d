"""Words-per-minute pacing and teleprompter word highlighting.

Everything here is pure: the highlight index is recomputed from the
elapsed recording time on every call instead of being accumulated, so it
stays correct across pause/resume as long as elapsed time is frozen while
paused.
"""

from __future__ import annotations

import math
from typing import Sequence

from errors import InvalidConfig
from models import HighlightedWord, SessionState, WordStatus


def tokenize(text: str) -> tuple[str, ...]:
    return tuple(text.split())


def words_per_second(words_per_minute: int) -> float:
    if words_per_minute <= 0:
        raise InvalidConfig(f"words_per_minute must be positive, got {words_per_minute}")
    return words_per_minute / 60


def compute_highlight(
    words: Sequence[str],
    elapsed_seconds: float,
    words_per_minute: int,
) -> int:
    """Return the index of the word the speaker should be on.

    Returns 0 for an empty script; callers must check for that case since
    there is no word to highlight.
    """
    rate = words_per_second(words_per_minute)
    if not words:
        return 0
    index = math.floor(elapsed_seconds * rate)
    return max(0, min(index, len(words) - 1))


def classify_word(position: int, index: int, state: SessionState) -> WordStatus:
    if position < index:
        return WordStatus.SPOKEN
    if position == index and state == SessionState.RECORDING:
        return WordStatus.CURRENT
    return WordStatus.UPCOMING


def classify_words(
    words: Sequence[str],
    index: int,
    state: SessionState,
) -> list[HighlightedWord]:
    return [
        HighlightedWord(index=i, text=word, status=classify_word(i, index, state))
        for i, word in enumerate(words)
    ]


def estimate_duration_seconds(words: Sequence[str], words_per_minute: int) -> float:
    """Time needed to read every word at the given rate."""
    return len(words) / words_per_second(words_per_minute)
