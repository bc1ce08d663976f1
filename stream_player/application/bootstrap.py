"""Application bootstrap assembly for the controller and its primitive."""
from __future__ import annotations

from dataclasses import dataclass

from ..config import PlayerConfig
from ..integrations.vlc_backend import VlcMediaPrimitive
from .controller import PlaybackController
from .gesture_policy import PlayGesturePolicy
from .player_hooks import PlayerHooks
from .ports import MediaPrimitive, Scheduler


@dataclass(frozen=True)
class PlayerServices:
    primitive: MediaPrimitive
    controller: PlaybackController
    gesture_policy: PlayGesturePolicy


def initialize_player_services(
    *,
    config: PlayerConfig,
    logger,
    primitive: MediaPrimitive | None = None,
    hooks: PlayerHooks | None = None,
    scheduler: Scheduler | None = None,
) -> PlayerServices:
    if primitive is None:
        primitive = VlcMediaPrimitive(
            network_caching_ms=config.vlc_network_caching_ms,
            logger=logger,
        )
    controller = PlaybackController(
        primitive,
        scheduler=scheduler,
        hooks=hooks,
        logger=logger,
        loading_timeout_seconds=config.loading_timeout_seconds,
        max_retries=config.max_retries,
        initial_volume=config.default_volume,
    )
    logger.debug(
        "Player services ready: timeout=%.1fs max_retries=%s",
        config.loading_timeout_seconds,
        config.max_retries,
    )
    return PlayerServices(
        primitive=primitive,
        controller=controller,
        gesture_policy=PlayGesturePolicy(controller, logger=logger),
    )
