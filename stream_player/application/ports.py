"""Application-level ports for the media primitive and timers."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from ..domain.events import MediaEventListener


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Single-shot timer source; ``asyncio`` event loops satisfy it."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class MediaPrimitive(Protocol):
    """Opaque playback engine driven by the controller."""

    def load(self, url: str) -> None: ...

    async def play(self) -> None:
        """Start playback; raise on failure."""

    def pause(self) -> None: ...

    def seek(self, seconds: float) -> None: ...

    def set_volume(self, volume: float) -> None: ...

    def set_event_listener(self, listener: MediaEventListener | None) -> None: ...
