"""Lifecycle callbacks exposed to the host UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class PlayerHooks:
    on_play: Optional[Callable[[], None]] = None
    on_pause: Optional[Callable[[], None]] = None
    on_ended: Optional[Callable[[], None]] = None
