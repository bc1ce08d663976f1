"""Closed classification of playback failures."""

from __future__ import annotations

from enum import Enum
from typing import Any


class PlaybackErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    FORMAT_UNSUPPORTED = "format_unsupported"
    LOAD_TIMEOUT = "load_timeout"
    TRANSIENT = "transient"


ERROR_MESSAGES: dict[PlaybackErrorKind, str] = {
    PlaybackErrorKind.PERMISSION_DENIED: (
        "Playback was blocked. Please allow audio playback and press play again."
    ),
    PlaybackErrorKind.FORMAT_UNSUPPORTED: "Audio format not supported.",
    PlaybackErrorKind.LOAD_TIMEOUT: "Audio loading timeout. Force play is available.",
    PlaybackErrorKind.TRANSIENT: "Failed to play audio. Press play again to retry.",
}

# Identifiers reported by browser-style media engines.
_LEGACY_ERROR_NAMES = {
    "notallowederror": PlaybackErrorKind.PERMISSION_DENIED,
    "notsupportederror": PlaybackErrorKind.FORMAT_UNSUPPORTED,
}


class PlaybackError(Exception):
    """Base error raised by media primitives; carries its classification."""

    kind = PlaybackErrorKind.TRANSIENT


class AutoplayBlockedError(PlaybackError):
    kind = PlaybackErrorKind.PERMISSION_DENIED


class UnsupportedFormatError(PlaybackError):
    kind = PlaybackErrorKind.FORMAT_UNSUPPORTED


class TransientPlaybackError(PlaybackError):
    kind = PlaybackErrorKind.TRANSIENT


def classify_failure(raw: Any) -> PlaybackErrorKind:
    """Map a raw primitive failure onto a PlaybackErrorKind.

    Accepts an already classified kind, an exception, or a string identifier
    such as ``"NotAllowedError"``. Anything unrecognised is transient.
    """
    if isinstance(raw, PlaybackErrorKind):
        return raw
    if isinstance(raw, PlaybackError):
        return raw.kind
    if isinstance(raw, PermissionError):
        return PlaybackErrorKind.PERMISSION_DENIED
    if isinstance(raw, BaseException):
        raw = type(raw).__name__
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in _LEGACY_ERROR_NAMES:
            return _LEGACY_ERROR_NAMES[normalized]
        for kind in PlaybackErrorKind:
            if normalized == kind.value:
                return kind
    return PlaybackErrorKind.TRANSIENT


def error_message_for(kind: PlaybackErrorKind) -> str:
    return ERROR_MESSAGES[kind]
