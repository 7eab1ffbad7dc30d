from __future__ import annotations

import json
from pathlib import Path

from config import JsonConfigStore


def test_config_read_write(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    store = JsonConfigStore(path=path)

    assert store.get_words_per_minute() == 120
    assert store.get_font_size() == 16
    assert store.get_countdown_seconds() == 3
    assert store.get_max_duration_s() == 60
    assert store.get_hotkey() == "Key.space"
    assert store.get_pause_hotkey() == "Key.alt_l"
    assert store.get_restart_hotkey() == "Key.esc"

    store.set_words_per_minute(150)
    store.set_font_size(20)
    store.set_hotkey("Key.f8")

    reloaded = JsonConfigStore(path=path)
    assert reloaded.get_words_per_minute() == 150
    assert reloaded.get_font_size() == 20
    assert reloaded.get_hotkey() == "Key.f8"


def test_config_invalid_json_fallback(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{invalid", encoding="utf-8")

    store = JsonConfigStore(path=path)
    assert store.get_words_per_minute() == 120
    assert store.get_hotkey() == "Key.space"


def test_invalid_stored_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"words_per_minute": 0, "max_duration_s": "long", "countdown_seconds": -1}),
        encoding="utf-8",
    )

    store = JsonConfigStore(path=path)
    assert store.get_words_per_minute() == 120
    assert store.get_max_duration_s() == 60
    assert store.get_countdown_seconds() == 3


def test_font_size_is_clamped(tmp_path: Path) -> None:
    store = JsonConfigStore(path=tmp_path / "config.json")

    store.set_font_size(40)
    assert store.get_font_size() == 24

    store.set_font_size(2)
    assert store.get_font_size() == 12


def test_recordings_dir_override(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"recordings_dir": str(tmp_path / "takes")}), encoding="utf-8")

    assert JsonConfigStore(path=path).get_recordings_dir() == tmp_path / "takes"


def test_restart_hotkey_override(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"restart_hotkey": "Key.f9"}), encoding="utf-8")

    assert JsonConfigStore(path=path).get_restart_hotkey() == "Key.f9"
