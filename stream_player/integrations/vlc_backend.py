"""libVLC-backed media primitive for network streams."""

from __future__ import annotations

import asyncio
import logging
import sys

from ..constants import LOGGER_NAME
from ..domain.errors import TransientPlaybackError
from ..domain.events import (
    CanPlay,
    CanPlayThrough,
    Ended,
    MediaEvent,
    MediaEventListener,
    MetadataReady,
    PrimitiveError,
    TimeUpdate,
)

try:
    import vlc as _vlc
except Exception:  # pragma: no cover - dependency optional at import time
    _vlc = None


class VlcMediaPrimitive:
    """Thin libVLC wrapper for audio-only streaming playback.

    libVLC delivers events on its own threads; they are marshalled onto the
    asyncio loop that awaited ``play()`` (or the one given at construction)
    before reaching the listener.
    """

    def __init__(
        self,
        *,
        vlc_module=None,
        platform_name: str | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        network_caching_ms: int = 1000,
        logger=None,
    ) -> None:
        self._vlc = vlc_module if vlc_module is not None else _vlc
        if self._vlc is None:
            raise RuntimeError("python-vlc is not available")
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        platform_value = platform_name if platform_name is not None else sys.platform
        args = ["--no-xlib"] if str(platform_value).startswith("linux") else []
        args.extend(["--no-video", f"--network-caching={max(0, int(network_caching_ms))}"])
        self.instance = self._vlc.Instance(args)
        self.player = self.instance.media_player_new()
        self.media = None
        self._loop = loop
        self._listener: MediaEventListener | None = None
        self._pending_play: asyncio.Future[None] | None = None
        self._can_play_sent = False
        self._can_play_through_sent = False
        self._attached: list[tuple[object, object]] = []
        self._attach_events()

    def _attach_events(self) -> None:
        event_type = self._vlc.EventType
        manager = self.player.event_manager()
        bindings = (
            (event_type.MediaPlayerPlaying, self._on_vlc_playing),
            (event_type.MediaPlayerEncounteredError, self._on_vlc_error),
            (event_type.MediaPlayerEndReached, self._on_vlc_end_reached),
            (event_type.MediaPlayerTimeChanged, self._on_vlc_time_changed),
            (event_type.MediaPlayerLengthChanged, self._on_vlc_length_changed),
            (event_type.MediaPlayerBuffering, self._on_vlc_buffering),
        )
        for kind, callback in bindings:
            manager.event_attach(kind, callback)
            self._attached.append((kind, callback))

    def set_event_listener(self, listener: MediaEventListener | None) -> None:
        self._listener = listener

    def load(self, url: str) -> None:
        if self.media is not None:
            try:
                self.media.release()
            except Exception:
                pass
            self.media = None
        self._fail_pending_play("Media source changed before playback started.")
        self._can_play_sent = False
        self._can_play_through_sent = False
        media = self.instance.media_new(url)
        self.player.set_media(media)
        self.media = media

    async def play(self) -> None:
        loop = asyncio.get_running_loop()
        self._loop = loop
        if self.media is None:
            raise TransientPlaybackError("No media loaded.")
        future = self._pending_play
        if future is None or future.done():
            future = loop.create_future()
            self._pending_play = future
            rc = int(self.player.play())
            if rc == -1:
                self._pending_play = None
                raise TransientPlaybackError("VLC failed to start playback.")
        await asyncio.shield(future)

    def pause(self) -> None:
        self._fail_pending_play("Playback paused before it started.")
        self.player.set_pause(1)

    def seek(self, seconds: float) -> None:
        self.player.set_time(int(max(0.0, float(seconds)) * 1000.0))

    def set_volume(self, volume: float) -> None:
        self.player.audio_set_volume(max(0, min(100, int(round(float(volume) * 100.0)))))

    def release(self) -> None:
        self._fail_pending_play("Player released.")
        self._listener = None
        try:
            manager = self.player.event_manager()
            for kind, _callback in self._attached:
                manager.event_detach(kind)
        except Exception:
            pass
        self._attached = []
        try:
            self.player.stop()
        except Exception:
            pass
        if self.media is not None:
            try:
                self.media.release()
            except Exception:
                pass
            self.media = None
        try:
            self.player.release()
        except Exception:
            pass
        try:
            self.instance.release()
        except Exception:
            pass

    # libVLC callback threads

    def _post(self, callback, *args) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(callback, *args)

    def _on_vlc_playing(self, _event) -> None:
        self._post(self._resolve_pending_play)

    def _on_vlc_error(self, _event) -> None:
        self._post(self._handle_error)

    def _on_vlc_end_reached(self, _event) -> None:
        self._post(self._emit, Ended())

    def _on_vlc_time_changed(self, event) -> None:
        self._post(self._emit, TimeUpdate(float(event.u.new_time) / 1000.0))

    def _on_vlc_length_changed(self, event) -> None:
        self._post(self._emit, MetadataReady(float(event.u.new_length) / 1000.0))

    def _on_vlc_buffering(self, event) -> None:
        self._post(self._handle_buffering, float(event.u.new_cache))

    # Event loop thread

    def _resolve_pending_play(self) -> None:
        future = self._pending_play
        if future is not None and not future.done():
            future.set_result(None)
        self._pending_play = None

    def _fail_pending_play(self, message: str) -> bool:
        future = self._pending_play
        self._pending_play = None
        if future is None or future.done():
            return False
        future.set_exception(TransientPlaybackError(message))
        return True

    def _handle_error(self) -> None:
        if self._fail_pending_play("libVLC reported a playback error."):
            return
        self._emit(PrimitiveError(TransientPlaybackError("libVLC reported a playback error.")))

    def _handle_buffering(self, cache_percent: float) -> None:
        if not self._can_play_sent:
            self._can_play_sent = True
            self._emit(CanPlay())
        if cache_percent >= 100.0 and not self._can_play_through_sent:
            self._can_play_through_sent = True
            self._emit(CanPlayThrough())

    def _emit(self, event: MediaEvent) -> None:
        listener = self._listener
        if listener is None:
            return
        try:
            listener(event)
        except Exception:
            self.logger.exception("Media event listener failed for %r", event)
