"""Display formatting for durations and scores."""

from __future__ import annotations

import math


def format_duration(seconds: float) -> str:
    """Format seconds as ``m:ss``."""
    seconds = max(0.0, seconds)
    mins = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    return f"{mins}:{secs:02d}"


def format_score(score: float, decimals: int = 0) -> str:
    """Format a 0..1 score as a percentage."""
    return f"{score * 100:.{decimals}f}%"


def truncate_text(text: str, max_length: int = 50) -> str:
    if not text or len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def score_message(score: float) -> str:
    if score >= 0.9:
        return "Excellent! Perfect pronunciation!"
    if score >= 0.8:
        return "Great job! Very good pronunciation!"
    if score >= 0.7:
        return "Good effort! Keep practicing!"
    if score >= 0.6:
        return "Not bad! Try again for better results."
    return "Keep practicing! You'll get better."


def score_tone(score: float) -> str:
    if score >= 0.8:
        return "success"
    if score >= 0.6:
        return "warning"
    return "error"
