"""Shared fakes for controller, policy and runner tests."""

from __future__ import annotations

import asyncio

import pytest

from stream_player.application.controller import PlaybackController
from stream_player.application.gesture_policy import PlayGesturePolicy
from stream_player.application.player_hooks import PlayerHooks


class RecordingLogger:
    def __init__(self):
        self.debugs = []
        self.infos = []
        self.warnings = []
        self.errors = []
        self.exceptions = []

    def debug(self, message, *args):
        self.debugs.append(message % args if args else message)

    def info(self, message, *args):
        self.infos.append(message % args if args else message)

    def warning(self, message, *args):
        self.warnings.append(message % args if args else message)

    def error(self, message, *args):
        self.errors.append(message % args if args else message)

    def exception(self, message, *args):
        self.exceptions.append(message % args if args else message)


class ManualTimer:
    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Deterministic clock standing in for ``loop.call_later``."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def call_later(self, delay, callback, *args):
        timer = ManualTimer(self.now + delay, callback, args)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [timer for timer in self.timers if not timer.cancelled and not timer.fired]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = sorted(
                (timer for timer in self.pending if timer.when <= target),
                key=lambda timer: timer.when,
            )
            if not due:
                break
            timer = due[0]
            self.now = timer.when
            timer.fired = True
            timer.callback(*timer.args)
        self.now = target


class FakePrimitive:
    """Media primitive whose play outcomes are scripted per call.

    Each queued outcome is ``None`` (success), an exception to raise, or
    ``PENDING`` to park the call on a future the test resolves later.
    """

    PENDING = "pending"

    def __init__(self):
        self.calls = []
        self.listener = None
        self.play_outcomes = []
        self.pending = []
        self.volume = None
        self.fail_on = {}

    def _record(self, name, *args):
        self.calls.append((name, *args))
        error = self.fail_on.get(name)
        if error is not None:
            raise error

    def load(self, url):
        self._record("load", url)

    async def play(self):
        self._record("play")
        outcome = self.play_outcomes.pop(0) if self.play_outcomes else None
        if outcome == self.PENDING:
            future = asyncio.get_running_loop().create_future()
            self.pending.append(future)
            await future
            return
        if isinstance(outcome, BaseException):
            raise outcome

    def pause(self):
        self._record("pause")

    def seek(self, seconds):
        self._record("seek", seconds)

    def set_volume(self, volume):
        self._record("set_volume", volume)
        self.volume = volume

    def set_event_listener(self, listener):
        self.listener = listener

    def emit(self, event):
        assert self.listener is not None
        self.listener(event)

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)


class HookRecorder:
    def __init__(self):
        self.events = []

    def hooks(self):
        return PlayerHooks(
            on_play=lambda: self.events.append("play"),
            on_pause=lambda: self.events.append("pause"),
            on_ended=lambda: self.events.append("ended"),
        )


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def primitive():
    return FakePrimitive()


@pytest.fixture
def recorder():
    return HookRecorder()


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def controller(primitive, scheduler, recorder, logger):
    return PlaybackController(
        primitive,
        scheduler=scheduler,
        hooks=recorder.hooks(),
        logger=logger,
        loading_timeout_seconds=10.0,
        max_retries=3,
    )


@pytest.fixture
def policy(controller):
    return PlayGesturePolicy(controller)
