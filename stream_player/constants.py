"""Playback policy defaults shared by config and controller."""

DEFAULT_MAX_RETRIES = 3
DEFAULT_LOADING_TIMEOUT_SECONDS = 10.0

LOGGER_NAME = "stream_player"
