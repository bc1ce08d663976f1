"""Presentation helpers consumed by host UIs."""

from .player_view import PlayerView, build_player_view, progress_percentage

__all__ = ["PlayerView", "build_player_view", "progress_percentage"]
