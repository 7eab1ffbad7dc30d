from __future__ import annotations

import random
import wave
from datetime import datetime
from pathlib import Path

from errors import SAVE_FAILED
from models import SessionSummary
from scoring import SimulatedScorer
from takes import TakeSink


def _summary(pcm: bytes = b"\x01\x00" * 160) -> SessionSummary:
    return SessionSummary(
        elapsed_seconds=4,
        highlight_index=8,
        word_count=20,
        words_per_minute=120,
        audio_pcm=pcm,
        sample_rate=16000,
    )


def _sink(recordings_dir: Path) -> TakeSink:
    return TakeSink(
        SimulatedScorer(rng=random.Random(3)),
        recordings_dir,
        now=lambda: datetime(2026, 10, 18, 9, 30, 5),
    )


def test_take_is_scored_and_saved(tmp_path: Path) -> None:
    outcome = _sink(tmp_path / "takes").finish(_summary())

    assert outcome.path == tmp_path / "takes" / "take-20261018-093005.wav"
    assert outcome.error == ""
    assert 0.6 <= outcome.result.score <= 1.0
    with wave.open(str(outcome.path), "rb") as wf:
        assert wf.getnframes() == 160


def test_take_without_audio_is_scored_but_not_saved(tmp_path: Path) -> None:
    outcome = _sink(tmp_path / "takes").finish(_summary(pcm=b""))

    assert outcome.path is None
    assert not (tmp_path / "takes").exists()


def test_unwritable_recordings_dir_is_reported(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")

    outcome = _sink(blocker / "takes").finish(_summary())

    assert outcome.path is None
    assert outcome.error_code == SAVE_FAILED
    assert outcome.error
    assert 0.6 <= outcome.result.score <= 1.0
