"""Teleprompter window showing the script with the current word highlighted."""

from __future__ import annotations

import html
from typing import Sequence

from models import HighlightedWord, WordStatus

try:
    from PySide6.QtCore import Qt
    from PySide6.QtWidgets import QLabel, QProgressBar, QTextBrowser, QVBoxLayout, QWidget
except Exception:  # pragma: no cover
    Qt = None  # type: ignore
    QLabel = None  # type: ignore
    QProgressBar = None  # type: ignore
    QTextBrowser = None  # type: ignore
    QVBoxLayout = None  # type: ignore
    QWidget = object  # type: ignore

WORD_STYLES = {
    WordStatus.SPOKEN: "color: #7a7a7a;",
    WordStatus.CURRENT: "color: #111111; background: #FFD54F; border-radius: 4px;",
    WordStatus.UPCOMING: "color: #f5f5f5;",
}

TONE_COLORS = {
    "success": "#4CAF50",
    "warning": "#FFB300",
    "error": "#FF6B6B",
}


def render_words_html(words: Sequence[HighlightedWord], font_size: int = 16) -> str:
    spans = [
        f'<span style="{WORD_STYLES[word.status]}">{html.escape(word.text)}</span>'
        for word in words
    ]
    return (
        f'<div style="font-size: {font_size}px; line-height: 160%;">'
        + " ".join(spans)
        + "</div>"
    )


class TeleprompterWindow(QWidget):
    def __init__(self, font_size: int = 16) -> None:
        if Qt is None:
            raise RuntimeError("PySide6 is not installed")
        super().__init__()
        self.setWindowTitle("Teleprompter")
        self.setWindowFlags(Qt.WindowStaysOnTopHint)
        self.resize(720, 480)
        self.setStyleSheet("background: #1e1e1e; color: white;")
        self._font_size = font_size

        self._title = QLabel("")
        self._title.setStyleSheet("font-size: 20px; font-weight: bold; padding: 8px;")
        self._status = QLabel("Press the hotkey to start")
        self._status.setAlignment(Qt.AlignCenter)
        self._status.setStyleSheet("font-size: 28px; padding: 8px;")

        self._script = QTextBrowser()
        self._script.setStyleSheet("border: none; padding: 12px;")

        self._level = QProgressBar()
        self._level.setRange(0, 100)
        self._level.setTextVisible(False)
        self._level.setFixedHeight(6)

        self._result = QLabel("")
        self._result.setAlignment(Qt.AlignCenter)
        self._result.setStyleSheet("font-size: 18px; padding: 8px;")

        layout = QVBoxLayout()
        layout.addWidget(self._title)
        layout.addWidget(self._status)
        layout.addWidget(self._script, stretch=1)
        layout.addWidget(self._level)
        layout.addWidget(self._result)
        self.setLayout(layout)

    def set_font_size(self, font_size: int) -> None:
        self._font_size = font_size

    def set_title(self, text: str) -> None:
        self._title.setText(text)

    def set_status(self, text: str) -> None:
        self._status.setText(text)

    def set_words(self, words: Sequence[HighlightedWord]) -> None:
        self._script.setHtml(render_words_html(words, self._font_size))
        current = next((w for w in words if w.status == WordStatus.CURRENT), None)
        if current is not None:
            # Keep the current word roughly in view while reading.
            ratio = current.index / max(1, len(words) - 1)
            bar = self._script.verticalScrollBar()
            bar.setValue(int(bar.maximum() * ratio))

    def set_level(self, level: float) -> None:
        self._level.setValue(int(max(0.0, min(1.0, level)) * 100))

    def show_result(self, text: str, tone: str = "success") -> None:
        color = TONE_COLORS.get(tone, TONE_COLORS["success"])
        self._result.setStyleSheet(f"color: {color}; font-size: 18px; padding: 8px;")
        self._result.setText(text)

    def show_error(self, text: str) -> None:
        self.show_result(f"⚠️ {text}", tone="error")

    def clear_result(self) -> None:
        self._result.setText("")
