from __future__ import annotations

import pytest

import hotkey
from hotkey import GlobalHotkeyAdapter


def test_press_fires_once_until_release() -> None:
    fired: list[str] = []
    adapter = GlobalHotkeyAdapter({"Key.space": lambda: fired.append("record")})

    adapter._on_press("Key.space")
    adapter._on_press("Key.space")
    adapter._on_release("Key.space")
    adapter._on_press("Key.space")

    assert fired == ["record", "record"]


def test_unbound_keys_are_ignored() -> None:
    fired: list[str] = []
    adapter = GlobalHotkeyAdapter({"Key.space": lambda: fired.append("record")})

    adapter._on_press("Key.enter")
    adapter._on_release("Key.enter")

    assert fired == []


def test_start_raises_without_pynput(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(hotkey, "keyboard", None)
    adapter = GlobalHotkeyAdapter({})
    with pytest.raises(RuntimeError, match="pynput is not installed"):
        adapter.start()
