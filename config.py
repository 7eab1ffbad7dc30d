"""Simple JSON-based config store."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from models import DEFAULT_COUNTDOWN_SECONDS, DEFAULT_WORDS_PER_MINUTE

logger = logging.getLogger(__name__)

MIN_FONT_SIZE = 12
MAX_FONT_SIZE = 24
DEFAULT_FONT_SIZE = 16
DEFAULT_MAX_DURATION_S = 60


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path.home() / ".config" / "teleprompter" / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def get_words_per_minute(self) -> int:
        return self._get_positive_int("words_per_minute", DEFAULT_WORDS_PER_MINUTE)

    def set_words_per_minute(self, value: int) -> None:
        self._set("words_per_minute", int(value))

    def get_font_size(self) -> int:
        size = self._get_positive_int("font_size", DEFAULT_FONT_SIZE)
        return max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, size))

    def set_font_size(self, value: int) -> None:
        self._set("font_size", max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, int(value))))

    def get_countdown_seconds(self) -> int:
        data = self._read_all()
        value = data.get("countdown_seconds", DEFAULT_COUNTDOWN_SECONDS)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return DEFAULT_COUNTDOWN_SECONDS
        return value

    def get_max_duration_s(self) -> int:
        return self._get_positive_int("max_duration_s", DEFAULT_MAX_DURATION_S)

    def get_hotkey(self) -> str:
        data = self._read_all()
        return str(data.get("hotkey", "Key.space"))

    def set_hotkey(self, hotkey: str) -> None:
        self._set("hotkey", hotkey)

    def get_pause_hotkey(self) -> str:
        data = self._read_all()
        return str(data.get("pause_hotkey", "Key.alt_l"))

    def get_restart_hotkey(self) -> str:
        data = self._read_all()
        return str(data.get("restart_hotkey", "Key.esc"))

    def get_recordings_dir(self) -> Path:
        data = self._read_all()
        default = Path.home() / ".local" / "share" / "teleprompter" / "recordings"
        return Path(data.get("recordings_dir") or default)

    def _get_positive_int(self, key: str, default: int) -> int:
        value = self._read_all().get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            logger.warning("ignoring invalid %s=%r, using %d", key, value, default)
            return default
        return value

    def _set(self, key: str, value: object) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("config %s unreadable: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
