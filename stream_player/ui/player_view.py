"""Render-ready values derived from a controller snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.errors import PlaybackErrorKind
from ..domain.state import Lifecycle, PlayerSnapshot, TrackInfo
from ..domain.time_format import format_time


@dataclass(frozen=True)
class PlayerView:
    title: str
    source: str
    progress_percentage: float
    show_loading_spinner: bool
    loading_text: str
    error_text: str | None
    show_force_play_hint: bool
    play_button_label: str
    play_button_enabled: bool
    current_time_label: str
    total_time_label: str
    volume: float


def progress_percentage(current_time: float, duration: float | None) -> float:
    if duration is None or duration <= 0:
        return 0.0
    return max(0.0, min(100.0, (current_time / duration) * 100.0))


def build_player_view(snapshot: PlayerSnapshot, track: TrackInfo | None = None) -> PlayerView:
    loading = snapshot.lifecycle is Lifecycle.LOADING
    error_text = snapshot.error_message
    show_force_play_hint = error_text is not None and (
        snapshot.retry_count >= snapshot.max_retries
        or snapshot.error_kind is PlaybackErrorKind.LOAD_TIMEOUT
    )
    return PlayerView(
        title=track.title if track is not None else "",
        source=track.source if track is not None else "",
        progress_percentage=progress_percentage(snapshot.current_time, snapshot.duration),
        show_loading_spinner=loading,
        loading_text="Force playing..." if snapshot.is_force_play else "Loading audio...",
        error_text=error_text,
        show_force_play_hint=show_force_play_hint,
        play_button_label="Pause" if snapshot.is_playing else "Play",
        play_button_enabled=track is not None and not loading,
        current_time_label=format_time(snapshot.current_time),
        total_time_label=format_time(snapshot.duration),
        volume=snapshot.volume,
    )
