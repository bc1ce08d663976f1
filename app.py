"""Command-line entrypoint for playing a single streaming audio source."""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from stream_player.application import (
    MediaPrimitive,
    PlayerHooks,
    PlayerServices,
    initialize_player_services,
)
from stream_player.config import PlayerConfig, load_config
from stream_player.domain.state import Lifecycle
from stream_player.logging_config import setup_logging
from stream_player.ui.player_view import build_player_view

PROGRESS_LOG_INTERVAL_SECONDS = 5.0
GESTURE_RETRY_PAUSE_SECONDS = 1.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stream_player",
        description="Play a streaming audio source (HTTP, HLS playlist or local file).",
    )
    parser.add_argument("url", help="Source URL or path.")
    parser.add_argument("--title", default="", help="Title shown in log output.")
    parser.add_argument("--source", default="", help="Source label shown in log output.")
    parser.add_argument(
        "--volume",
        type=float,
        default=None,
        help="Initial volume between 0 and 1 (defaults to PLAYER_DEFAULT_VOLUME).",
    )
    return parser


async def _press_play_until_started(services: PlayerServices, logger, max_gestures: int) -> bool:
    controller = services.controller
    for gesture in range(1, max_gestures + 1):
        if await services.gesture_policy.on_play_button():
            return True
        logger.warning(
            "Play gesture %s/%s failed: %s",
            gesture,
            max_gestures,
            controller.state.error_message,
        )
        await asyncio.sleep(GESTURE_RETRY_PAUSE_SECONDS)
    return False


async def run_player(
    url: str,
    *,
    config: PlayerConfig,
    logger,
    title: str = "",
    source: str = "",
    volume: float | None = None,
    primitive: MediaPrimitive | None = None,
) -> int:
    finished = asyncio.Event()

    def on_ended() -> None:
        logger.info("Audio finished playing")
        finished.set()

    hooks = PlayerHooks(
        on_play=lambda: logger.info("Audio started playing"),
        on_pause=lambda: logger.info("Audio paused"),
        on_ended=on_ended,
    )
    services = initialize_player_services(
        config=config, logger=logger, primitive=primitive, hooks=hooks
    )
    controller = services.controller
    try:
        controller.bind_track(url, title=title, source=source)
        if volume is not None:
            controller.set_volume(volume)
        if not await _press_play_until_started(services, logger, config.max_retries + 1):
            logger.error("Giving up on %s", url)
            return 1
        while not finished.is_set():
            try:
                await asyncio.wait_for(finished.wait(), timeout=PROGRESS_LOG_INTERVAL_SECONDS)
            except asyncio.TimeoutError:
                pass
            if controller.lifecycle is Lifecycle.ERROR:
                logger.error("Playback stopped: %s", controller.state.error_message)
                return 1
            view = build_player_view(controller.snapshot(), controller.track)
            logger.info(
                "%s %s / %s",
                view.title or url,
                view.current_time_label,
                view.total_time_label,
            )
        return 0
    finally:
        controller.dispose()
        release = getattr(services.primitive, "release", None)
        if callable(release):
            release()


def launch(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    logger = setup_logging(config)
    logger.info("Log file: %s", config.log_file)
    try:
        return asyncio.run(
            run_player(
                args.url,
                config=config,
                logger=logger,
                title=args.title,
                source=args.source,
                volume=args.volume,
            )
        )
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    raise SystemExit(launch())
