"""Domain types for the playback controller."""

from .errors import (
    AutoplayBlockedError,
    PlaybackError,
    PlaybackErrorKind,
    TransientPlaybackError,
    UnsupportedFormatError,
    classify_failure,
    error_message_for,
)
from .events import (
    CanPlay,
    CanPlayThrough,
    Ended,
    MediaEvent,
    MediaEventListener,
    MetadataReady,
    PrimitiveError,
    TimeUpdate,
)
from .state import ControllerState, Lifecycle, PlayerSnapshot, TrackInfo
from .time_format import format_time

__all__ = [
    "AutoplayBlockedError",
    "CanPlay",
    "CanPlayThrough",
    "ControllerState",
    "Ended",
    "Lifecycle",
    "MediaEvent",
    "MediaEventListener",
    "MetadataReady",
    "PlaybackError",
    "PlaybackErrorKind",
    "PlayerSnapshot",
    "PrimitiveError",
    "TimeUpdate",
    "TrackInfo",
    "TransientPlaybackError",
    "UnsupportedFormatError",
    "classify_failure",
    "error_message_for",
    "format_time",
]
