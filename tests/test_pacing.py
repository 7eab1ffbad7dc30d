from __future__ import annotations

import pytest

from errors import InvalidConfig
from models import SessionState, WordStatus
from pacing import (
    classify_word,
    classify_words,
    compute_highlight,
    estimate_duration_seconds,
    tokenize,
    words_per_second,
)

FIVE = ["one", "two", "three", "four", "five"]


def test_one_word_per_second_lands_on_fourth_word() -> None:
    assert compute_highlight(FIVE, 3, 60) == 3
    assert FIVE[compute_highlight(FIVE, 3, 60)] == "four"


def test_index_clamped_to_last_word() -> None:
    assert compute_highlight(["a", "b", "c"], 2, 120) == 2


def test_fractional_elapsed_is_floored() -> None:
    assert compute_highlight(FIVE, 1.9, 60) == 1


def test_empty_script_returns_zero() -> None:
    assert compute_highlight([], 30, 120) == 0


def test_negative_elapsed_clamps_to_first_word() -> None:
    assert compute_highlight(FIVE, -4, 60) == 0


@pytest.mark.parametrize("wpm", [0, -60])
def test_non_positive_rate_is_rejected(wpm: int) -> None:
    with pytest.raises(InvalidConfig):
        compute_highlight(FIVE, 1, wpm)
    with pytest.raises(InvalidConfig):
        words_per_second(wpm)


@pytest.mark.parametrize("wpm", [1, 45, 60, 130, 200, 999])
def test_highlight_is_non_decreasing_and_in_range(wpm: int) -> None:
    words = tokenize("the quick brown fox jumps over the lazy dog " * 3)
    previous = 0
    for tenths in range(0, 1200):
        index = compute_highlight(words, tenths / 10, wpm)
        assert 0 <= index <= len(words) - 1
        assert index >= previous
        previous = index


def test_classification_while_recording() -> None:
    statuses = [w.status for w in classify_words(FIVE, 2, SessionState.RECORDING)]
    assert statuses == [
        WordStatus.SPOKEN,
        WordStatus.SPOKEN,
        WordStatus.CURRENT,
        WordStatus.UPCOMING,
        WordStatus.UPCOMING,
    ]


def test_current_word_only_while_recording() -> None:
    assert classify_word(2, 2, SessionState.PAUSED) == WordStatus.UPCOMING
    assert classify_word(0, 0, SessionState.IDLE) == WordStatus.UPCOMING
    assert classify_word(1, 2, SessionState.PAUSED) == WordStatus.SPOKEN


def test_classify_words_keeps_text_and_position() -> None:
    words = classify_words(["hi", "there"], 0, SessionState.RECORDING)
    assert [(w.index, w.text) for w in words] == [(0, "hi"), (1, "there")]


def test_tokenize_splits_on_any_whitespace() -> None:
    assert tokenize("  hello\tworld\n again ") == ("hello", "world", "again")


def test_estimate_duration() -> None:
    assert estimate_duration_seconds(FIVE, 60) == 5
    assert estimate_duration_seconds(["w"] * 240, 120) == 120
