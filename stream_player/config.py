"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .constants import (
    DEFAULT_LOADING_TIMEOUT_SECONDS,
    DEFAULT_MAX_RETRIES,
    LOGGER_NAME,
)
from .utils import parse_float_env, parse_int_env, resolve_path


@dataclass(frozen=True)
class PlayerConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    loading_timeout_seconds: float = DEFAULT_LOADING_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    default_volume: float = 1.0
    vlc_network_caching_ms: int = 1000
    logger_name: str = LOGGER_NAME


def load_config() -> PlayerConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    file_log_level = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"player_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    loading_timeout_seconds = parse_float_env(
        "PLAYER_LOADING_TIMEOUT_SECONDS",
        DEFAULT_LOADING_TIMEOUT_SECONDS,
        min_value=0.5,
        max_value=300.0,
    )
    max_retries = parse_int_env(
        "PLAYER_MAX_RETRIES", DEFAULT_MAX_RETRIES, min_value=0, max_value=20
    )
    default_volume = parse_float_env(
        "PLAYER_DEFAULT_VOLUME", 1.0, min_value=0.0, max_value=1.0
    )
    vlc_network_caching_ms = parse_int_env(
        "VLC_NETWORK_CACHING_MS", 1000, min_value=0, max_value=60000
    )
    return PlayerConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        loading_timeout_seconds=loading_timeout_seconds,
        max_retries=max_retries,
        default_volume=default_volume,
        vlc_network_caching_ms=vlc_network_caching_ms,
    )
