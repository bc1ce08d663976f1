"""Retry and force-play policy for user play gestures."""
from __future__ import annotations

import asyncio

from ..domain.state import Lifecycle
from .controller import PlaybackController


class PlayGesturePolicy:
    """Decides how a play-button press is executed by the controller.

    The controller never counts retries; this policy increments the counter
    once per gesture whose attempt failed or timed out, and escalates to a
    forced attempt once ``max_retries`` failures have accumulated. A forced
    attempt that fails starts a fresh cycle.

    A gesture resolves as soon as its attempt has an outcome. On a load
    timeout that is before the primitive answers: the attempt keeps running
    in the background and a late success still starts playback.
    """

    def __init__(self, controller: PlaybackController, logger=None) -> None:
        self.controller = controller
        self.logger = logger or controller.logger
        self._forced_attempt_failed = False
        # Gesture waiters in start order, mapped to whether the attempt was forced.
        self._waiters: dict[asyncio.Future, bool] = {}
        self._background: set[asyncio.Task] = set()
        controller.set_loading_timeout_listener(self._on_loading_timeout)

    @property
    def is_busy(self) -> bool:
        return bool(self._waiters)

    def should_force(self) -> bool:
        state = self.controller.state
        return state.retry_count >= self.controller.max_retries or state.is_force_play

    async def on_play_button(self) -> bool:
        controller = self.controller
        if controller.is_disposed or controller.track is None:
            return False
        state = controller.state
        if state.lifecycle is Lifecycle.PLAYING:
            controller.request_pause()
            return False
        if state.lifecycle is Lifecycle.LOADING or self.is_busy:
            self.logger.debug("Play gesture ignored while loading")
            return False

        if state.is_force_play or self._forced_attempt_failed:
            controller.reset_retry_count()
            self._forced_attempt_failed = False
        return await self._attempt(self.should_force())

    async def on_force_play_button(self) -> bool:
        if self.controller.is_disposed or self.controller.track is None:
            return False
        if self.controller.state.lifecycle is Lifecycle.PLAYING:
            return True
        return await self._attempt(True)

    async def _attempt(self, force: bool) -> bool:
        timed_out = asyncio.get_running_loop().create_future()
        self._waiters[timed_out] = force
        play = asyncio.ensure_future(self.controller.request_play(force))
        try:
            await asyncio.wait({play, timed_out}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            play.cancel()
            raise
        finally:
            self._waiters.pop(timed_out, None)

        if timed_out.done():
            if play.done():
                self._on_background_done(play)
            else:
                self._background.add(play)
                play.add_done_callback(self._on_background_done)
            if not play.done() or play.cancelled() or play.exception() is not None:
                return False
            return bool(play.result())

        if play.result():
            self._forced_attempt_failed = False
            return True
        if self.controller.state.lifecycle is Lifecycle.ERROR:
            self._record_failure(force)
        return False

    def _record_failure(self, force: bool) -> None:
        retries = self.controller.increment_retry_count()
        if force:
            self._forced_attempt_failed = True
        self.logger.info(
            "Play gesture failed (retry %s/%s, forced=%s)",
            retries,
            self.controller.max_retries,
            force,
        )

    def _on_loading_timeout(self) -> None:
        if not self._waiters:
            return
        waiters = list(self._waiters.items())
        self._waiters.clear()
        # Only the newest gesture owns the attempt that timed out.
        self._record_failure(waiters[-1][1])
        for waiter, _force in waiters:
            if not waiter.done():
                waiter.set_result(None)

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error("Timed-out play attempt raised: %s", error)
            return
        if task.result():
            self._forced_attempt_failed = False
