"""Time label formatting."""

from __future__ import annotations

import math


def format_time(seconds: float | None) -> str:
    """Render seconds as ``m:ss`` with truncation; invalid input renders ``0:00``."""
    try:
        value = float(seconds) if seconds is not None else 0.0
    except (TypeError, ValueError):
        value = 0.0
    if not math.isfinite(value) or value < 0:
        value = 0.0
    minutes, secs = divmod(int(value), 60)
    return f"{minutes}:{secs:02d}"
