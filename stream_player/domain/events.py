"""Events emitted by media primitives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class MetadataReady:
    duration: float


@dataclass(frozen=True)
class TimeUpdate:
    position: float


@dataclass(frozen=True)
class Ended:
    pass


@dataclass(frozen=True)
class PrimitiveError:
    # Raw failure as observed; classified by the controller.
    reason: Any = None


@dataclass(frozen=True)
class CanPlay:
    pass


@dataclass(frozen=True)
class CanPlayThrough:
    pass


MediaEvent = Union[MetadataReady, TimeUpdate, Ended, PrimitiveError, CanPlay, CanPlayThrough]
MediaEventListener = Callable[[MediaEvent], None]
