"""Application layer orchestration."""

from .bootstrap import PlayerServices, initialize_player_services
from .controller import PlaybackController
from .gesture_policy import PlayGesturePolicy
from .player_hooks import PlayerHooks
from .ports import MediaPrimitive, Scheduler, TimerHandle

__all__ = [
    "MediaPrimitive",
    "PlayGesturePolicy",
    "PlaybackController",
    "PlayerHooks",
    "PlayerServices",
    "Scheduler",
    "TimerHandle",
    "initialize_player_services",
]
