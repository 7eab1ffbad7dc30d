"""Protocol interfaces used by SessionController."""

from __future__ import annotations

from typing import Callable, Protocol


class Clock(Protocol):
    def start(self, on_tick: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class Recorder(Protocol):
    def start(self) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def stop(self) -> bytes: ...

    @property
    def level(self) -> float: ...

