"""Placeholder scoring for finished sessions.

Real pronunciation scoring lives in an external service; this scorer only
stands in for it on the result screen. Randomness comes from an injected
``random.Random`` so results are reproducible in tests.
"""

from __future__ import annotations

import random
from typing import Optional

from formatters import score_message, score_tone
from models import ScoreResult, SessionSummary


class SimulatedScorer:
    def __init__(self, rng: Optional[random.Random] = None, low: float = 0.6, high: float = 1.0) -> None:
        self._rng = rng or random.Random()
        self._low = low
        self._high = high

    def score(self, summary: SessionSummary) -> ScoreResult:
        if summary.elapsed_seconds <= 0 or summary.word_count == 0:
            value = 0.0
        else:
            value = round(self._rng.uniform(self._low, self._high), 2)
        return ScoreResult(score=value, message=score_message(value), tone=score_tone(value))
