"""Session sink for the desktop app: score the take and keep its audio."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from errors import SAVE_FAILED
from models import ScoreResult, SessionSummary
from recorder import save_wav
from scoring import SimulatedScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TakeOutcome:
    result: ScoreResult
    path: Optional[Path] = None
    error_code: str = ""
    error: str = ""


class TakeSink:
    def __init__(
        self,
        scorer: SimulatedScorer,
        recordings_dir: Path,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._scorer = scorer
        self._recordings_dir = recordings_dir
        self._now = now

    def finish(self, summary: SessionSummary) -> TakeOutcome:
        result = self._scorer.score(summary)
        if not summary.audio_pcm:
            return TakeOutcome(result=result)
        path = self._recordings_dir / f"take-{self._now():%Y%m%d-%H%M%S}.wav"
        try:
            save_wav(path, summary.audio_pcm, sample_rate=summary.sample_rate)
        except OSError as exc:
            logger.warning("could not save recording to %s: %s", path, exc)
            return TakeOutcome(result=result, error_code=SAVE_FAILED, error=str(exc))
        logger.info("saved recording to %s", path)
        return TakeOutcome(result=result, path=path)
