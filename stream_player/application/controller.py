"""Playback controller state machine for a single streaming source."""
from __future__ import annotations

import asyncio
import logging
import math

from ..constants import (
    DEFAULT_LOADING_TIMEOUT_SECONDS,
    DEFAULT_MAX_RETRIES,
    LOGGER_NAME,
)
from ..domain.errors import PlaybackErrorKind, classify_failure, error_message_for
from ..domain.events import (
    CanPlay,
    CanPlayThrough,
    Ended,
    MediaEvent,
    MetadataReady,
    PrimitiveError,
    TimeUpdate,
)
from ..domain.state import ControllerState, Lifecycle, PlayerSnapshot, TrackInfo
from ..utils import coerce_float
from .player_hooks import PlayerHooks
from .ports import MediaPrimitive, Scheduler, TimerHandle

_PAUSE_NOOP_STATES = {Lifecycle.IDLE, Lifecycle.PAUSED, Lifecycle.ENDED}


class PlaybackController:
    """Drives a media primitive through play/pause/seek/volume.

    Owns the ControllerState, the loading-timeout timer and the reserved
    force-play timer slot. Failures coming from the primitive are classified
    once and surfaced through ``error_message``; nothing is raised to callers.
    """

    def __init__(
        self,
        primitive: MediaPrimitive,
        *,
        scheduler: Scheduler | None = None,
        hooks: PlayerHooks | None = None,
        logger=None,
        loading_timeout_seconds: float = DEFAULT_LOADING_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_volume: float = 1.0,
    ) -> None:
        self.primitive = primitive
        self.hooks = hooks or PlayerHooks()
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.loading_timeout_seconds = max(0.0, float(loading_timeout_seconds))
        self.max_retries = max(0, int(max_retries))
        self.state = ControllerState(
            volume=coerce_float(initial_volume, default=1.0, min_value=0.0, max_value=1.0)
        )
        self.track: TrackInfo | None = None
        self._scheduler = scheduler
        self._loading_timer: TimerHandle | None = None
        # Reserved slot; cancelled with the other timers but never armed.
        self._force_play_timer: TimerHandle | None = None
        self._timeout_listener = None
        self._generation = 0
        self._attempt = 0
        self._disposed = False
        self.primitive.set_event_listener(self.handle_event)

    @property
    def lifecycle(self) -> Lifecycle:
        return self.state.lifecycle

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def set_loading_timeout_listener(self, listener) -> None:
        """Register a no-argument callable run after a load timeout enters ERROR.

        The timed-out play attempt keeps running; callers waiting on it use
        this to stop waiting.
        """
        self._timeout_listener = listener

    def snapshot(self) -> PlayerSnapshot:
        state = self.state
        return PlayerSnapshot(
            lifecycle=state.lifecycle,
            is_force_play=state.is_force_play,
            current_time=state.current_time,
            duration=state.duration,
            volume=state.volume,
            error_message=state.error_message,
            error_kind=state.error_kind,
            retry_count=state.retry_count,
            max_retries=self.max_retries,
        )

    def bind_track(self, url: str, *, title: str = "", source: str = "") -> None:
        if self._disposed:
            self.logger.warning("Ignoring track bind on a disposed controller")
            return
        url = str(url or "").strip()
        if not url:
            raise ValueError("Track URL must not be empty.")
        if self.track is not None and self.track.url == url:
            return
        self._cancel_timers()
        self._generation += 1
        self._attempt += 1
        self.state.reset_for_track()
        self.track = TrackInfo(url=url, title=str(title or ""), source=str(source or ""))
        self.logger.info("Bound track %s", url)
        try:
            self.primitive.load(url)
            self.primitive.set_volume(self.state.volume)
        except Exception as exc:
            self.logger.exception("Failed to load media source: %s", url)
            self._enter_error(classify_failure(exc))

    async def request_play(self, force: bool = False) -> bool:
        """Start playback and wait for the primitive's outcome.

        Returns True once playing and False when the attempt failed, was
        superseded, or there is nothing to play.
        """
        if self._disposed or self.track is None:
            self.logger.debug("Play requested without a bound track")
            return False
        if self.state.lifecycle is Lifecycle.PLAYING:
            return True

        self._clear_error()
        self.state.lifecycle = Lifecycle.LOADING
        self.state.is_force_play = bool(force)
        self._attempt += 1
        attempt = self._attempt
        generation = self._generation
        self._arm_loading_timer(attempt, generation)
        self.logger.debug("Play attempt %s started (force=%s)", attempt, bool(force))

        try:
            await self.primitive.play()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if not self._is_current(attempt, generation):
                self.logger.debug("Discarding failure of superseded attempt %s", attempt)
                return False
            self._cancel_loading_timer()
            kind = classify_failure(exc)
            self.logger.warning("Play attempt %s failed (%s): %s", attempt, kind.value, exc)
            self._enter_error(kind)
            return False

        if not self._is_current(attempt, generation):
            self.logger.debug("Discarding success of superseded attempt %s", attempt)
            if generation == self._generation and self.state.lifecycle is Lifecycle.PAUSED:
                self._pause_primitive()
            return False
        self._cancel_loading_timer()
        if self.state.lifecycle is Lifecycle.ERROR:
            self.logger.info("Play attempt %s succeeded after %s", attempt, self.state.error_kind)
        self._clear_error()
        self.state.lifecycle = Lifecycle.PLAYING
        self.state.is_force_play = False
        self.state.retry_count = 0
        self._fire(self.hooks.on_play, "on_play")
        return True

    def request_pause(self) -> None:
        if self._disposed or self.track is None:
            return
        if self.state.lifecycle in _PAUSE_NOOP_STATES:
            return
        self._attempt += 1
        self._pause_primitive()
        self._cancel_loading_timer()
        self._clear_error()
        self.state.lifecycle = Lifecycle.PAUSED
        self.state.is_force_play = False
        self._fire(self.hooks.on_pause, "on_pause")

    def seek(self, fraction: float) -> bool:
        if self._disposed or self.track is None:
            return False
        duration = self.state.duration
        if duration is None or duration <= 0:
            self.logger.debug("Seek ignored: duration unknown")
            return False
        ratio = coerce_float(fraction, default=0.0, min_value=0.0, max_value=1.0)
        return self._seek_to(ratio * duration)

    def seek_relative(self, delta_seconds: float) -> bool:
        if self._disposed or self.track is None:
            return False
        duration = self.state.duration
        if duration is None or duration <= 0:
            return False
        delta = coerce_float(delta_seconds, default=0.0)
        target = max(0.0, min(duration, self.state.current_time + delta))
        return self._seek_to(target)

    def set_volume(self, volume: float) -> float:
        value = coerce_float(volume, default=self.state.volume, min_value=0.0, max_value=1.0)
        self.state.volume = value
        if self._disposed:
            return value
        try:
            self.primitive.set_volume(value)
        except Exception:
            self.logger.exception("Failed to update primitive volume")
        return value

    def reset_retry_count(self) -> None:
        self.state.retry_count = 0

    def increment_retry_count(self) -> int:
        self.state.retry_count += 1
        return self.state.retry_count

    def dispose(self) -> None:
        if self._disposed:
            return
        self._cancel_timers()
        self._disposed = True
        self._generation += 1
        try:
            self.primitive.set_event_listener(None)
        except Exception:
            self.logger.exception("Failed to detach primitive event listener")
        self.logger.debug("Controller disposed")

    # Primitive events

    def handle_event(self, event: MediaEvent) -> None:
        if self._disposed:
            return
        if isinstance(event, TimeUpdate):
            self.on_time_update(event.position)
        elif isinstance(event, MetadataReady):
            self.on_metadata_ready(event.duration)
        elif isinstance(event, Ended):
            self.on_ended()
        elif isinstance(event, PrimitiveError):
            self.on_primitive_error(event.reason)
        elif isinstance(event, CanPlay):
            self.on_can_play()
        elif isinstance(event, CanPlayThrough):
            self.on_can_play_through()
        else:
            self.logger.debug("Unhandled media event: %r", event)

    def on_metadata_ready(self, duration: float) -> None:
        value = coerce_float(duration, default=0.0, min_value=0.0)
        # Live streams report an infinite or zero length.
        self.state.duration = value if math.isfinite(value) and value > 0 else None
        if self.state.duration is not None:
            self.state.current_time = min(self.state.current_time, self.state.duration)
        self._clear_error()

    def on_time_update(self, position: float) -> None:
        value = coerce_float(position, default=self.state.current_time, min_value=0.0)
        if not math.isfinite(value):
            return
        if self.state.duration is not None:
            value = min(value, self.state.duration)
        self.state.current_time = value

    def on_ended(self) -> None:
        if self.state.lifecycle is not Lifecycle.PLAYING:
            self.logger.debug("Ignoring ended event in state %s", self.state.lifecycle.value)
            return
        self._cancel_timers()
        self.state.lifecycle = Lifecycle.ENDED
        self.state.current_time = 0.0
        self.state.is_force_play = False
        self._fire(self.hooks.on_ended, "on_ended")

    def on_primitive_error(self, reason=None) -> None:
        kind = classify_failure(reason)
        self.logger.warning("Media primitive reported an error (%s): %s", kind.value, reason)
        self._cancel_timers()
        self._enter_error(kind)

    def on_can_play(self) -> None:
        self._clear_error()

    def on_can_play_through(self) -> None:
        self._clear_error()

    # Internals

    def _is_current(self, attempt: int, generation: int) -> bool:
        return not self._disposed and generation == self._generation and attempt == self._attempt

    def _enter_error(self, kind: PlaybackErrorKind) -> None:
        self.state.lifecycle = Lifecycle.ERROR
        self.state.error_kind = kind
        self.state.error_message = error_message_for(kind)
        self.state.is_force_play = False

    def _clear_error(self) -> None:
        self.state.error_message = None
        self.state.error_kind = None
        if self.state.lifecycle is Lifecycle.ERROR:
            self.state.lifecycle = (
                Lifecycle.PAUSED if self.state.current_time > 0 else Lifecycle.IDLE
            )

    def _seek_to(self, target: float) -> bool:
        try:
            self.primitive.seek(target)
        except Exception:
            self.logger.exception("Failed to seek media primitive")
            return False
        self.state.current_time = target
        return True

    def _pause_primitive(self) -> None:
        try:
            self.primitive.pause()
        except Exception:
            self.logger.exception("Failed to pause media primitive")

    def _fire(self, callback, name: str) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception:
            self.logger.exception("Player %s callback failed", name)

    def _resolve_scheduler(self) -> Scheduler:
        if self._scheduler is None:
            self._scheduler = asyncio.get_running_loop()
        return self._scheduler

    def _arm_loading_timer(self, attempt: int, generation: int) -> None:
        self._cancel_loading_timer()
        self._loading_timer = self._resolve_scheduler().call_later(
            self.loading_timeout_seconds, self._on_loading_timeout, attempt, generation
        )

    def _on_loading_timeout(self, attempt: int, generation: int) -> None:
        if not self._is_current(attempt, generation):
            return
        self._loading_timer = None
        if self.state.lifecycle is not Lifecycle.LOADING:
            return
        self.logger.warning(
            "Loading timed out after %.1fs; force play is available",
            self.loading_timeout_seconds,
        )
        self._enter_error(PlaybackErrorKind.LOAD_TIMEOUT)
        if self._timeout_listener is not None:
            try:
                self._timeout_listener()
            except Exception:
                self.logger.exception("Loading timeout listener failed")

    def _cancel_loading_timer(self) -> None:
        if self._loading_timer is None:
            return
        self._loading_timer.cancel()
        self._loading_timer = None

    def _cancel_timers(self) -> None:
        self._cancel_loading_timer()
        if self._force_play_timer is not None:
            self._force_play_timer.cancel()
            self._force_play_timer = None
