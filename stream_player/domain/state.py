"""Controller state records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import PlaybackErrorKind


class Lifecycle(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"
    ERROR = "error"


@dataclass(frozen=True)
class TrackInfo:
    """Identity and display labels of the bound source."""

    url: str
    title: str = ""
    source: str = ""


@dataclass(slots=True)
class ControllerState:
    """Mutable state owned by a single PlaybackController."""

    lifecycle: Lifecycle = Lifecycle.IDLE
    is_force_play: bool = False
    current_time: float = 0.0
    duration: float | None = None
    volume: float = 1.0
    error_message: str | None = None
    error_kind: PlaybackErrorKind | None = None
    retry_count: int = 0

    def reset_for_track(self) -> None:
        """Return to initial values; the volume preference is kept."""
        self.lifecycle = Lifecycle.IDLE
        self.is_force_play = False
        self.current_time = 0.0
        self.duration = None
        self.error_message = None
        self.error_kind = None
        self.retry_count = 0


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only view of ControllerState handed to the UI."""

    lifecycle: Lifecycle
    is_force_play: bool
    current_time: float
    duration: float | None
    volume: float
    error_message: str | None
    error_kind: PlaybackErrorKind | None
    retry_count: int
    max_retries: int

    @property
    def is_playing(self) -> bool:
        return self.lifecycle is Lifecycle.PLAYING

    @property
    def is_loading(self) -> bool:
        return self.lifecycle is Lifecycle.LOADING
