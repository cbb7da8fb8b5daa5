"""The terminal interface: drawing, background polling and the event loop."""

from __future__ import annotations

import argparse
import curses
import io
import os
import queue
import sys
import threading
import time
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar, Union

from PIL import Image

from vibecast.api import Song, SomaFmClient
from vibecast.app import App
from vibecast.artwork_cache import ImageCache
from vibecast.keys import handle_key
from vibecast.player import MpvError
from vibecast.terminal import CursesTerminal
from vibecast.ui.canvas import Buffer, Constraint, Direction, split
from vibecast.ui.header import render_header
from vibecast.ui.help import render_help
from vibecast.ui.now_playing import render_now_playing
from vibecast.ui.song_history import render_song_history
from vibecast.ui.station_list import render_station_list
from vibecast.ui.status_bar import render_status_bar
from vibecast.ui.visualizer import Visualizer

T = TypeVar("T")

TICK_RATE = 0.016
METADATA_INTERVAL = 10.0
AUDIO_INTERVAL = 0.05
FETCH_TIMEOUT = 5.0
HISTORY_LENGTH = 5


@dataclass(frozen=True)
class MetadataRequest:
    channel_id: str | None
    image_url: str | None
    show_artwork: bool


@dataclass
class SongsUpdate:
    channel_id: str
    current_song: Song | None
    history: list[Song]


@dataclass
class StreamTitleUpdate:
    channel_id: str | None
    title: str | None


@dataclass
class ArtworkUpdate:
    channel_id: str
    image: Image.Image
    url: str


AppUpdate = Union[SongsUpdate, StreamTitleUpdate, ArtworkUpdate]


class _Watch(Generic[T]):
    """The latest value of something, with a version that grows on every send."""

    def __init__(self, value: T) -> None:
        self._cond = threading.Condition()
        self._value = value
        self._version = 0
        self._closed = False

    def send(self, value: T) -> None:
        with self._cond:
            self._value = value
            self._version += 1
            self._cond.notify_all()

    def get(self) -> tuple[int, T]:
        with self._cond:
            return self._version, self._value

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def wait(self, since: int | None, timeout: float) -> tuple[int, T] | None:
        """The current value once it differs from `since` or the timeout ends; None once closed."""
        with self._cond:
            self._cond.wait_for(lambda: self._closed or self._version != since, timeout)
            if self._closed:
                return None
            return self._version, self._value


@dataclass
class _PlayerHandle:
    """The player together with the lock that serialises its use."""

    controller: Any
    lock: threading.Lock


def build_metadata_request(app: App) -> MetadataRequest:
    channel = app.current_channel()
    if channel is None:
        return MetadataRequest(None, None, app.show_artwork)
    image_url = channel.xlimage if channel.xlimage is not None else channel.largeimage
    return MetadataRequest(channel.id, image_url, app.show_artwork)


def _current_id(app: App) -> str | None:
    channel = app.current_channel()
    return channel.id if channel is not None else None


def apply_update(app: App, update: AppUpdate) -> None:
    """Apply a background result if it still concerns the current station."""
    current_id = _current_id(app)
    if isinstance(update, SongsUpdate):
        if current_id is not None and update.channel_id == current_id:
            app.current_song = update.current_song
            app.song_history = list(update.history)
    elif isinstance(update, StreamTitleUpdate):
        if update.channel_id == current_id and update.title is not None:
            app.stream_title = update.title
    elif isinstance(update, ArtworkUpdate):
        if app.show_artwork and current_id is not None and update.channel_id == current_id:
            app.artwork_state.set_image(update.image, update.url)


def draw(app: App, buf: Buffer) -> None:
    """Lay out and draw the whole screen into the buffer."""
    area = buf.area
    theme = app.theme
    header_area, content_area, status_area = split(
        area, [Constraint.length(3), Constraint.min(10), Constraint.length(1)]
    )

    channel = app.current_channel()
    render_header(buf, header_area, channel.title if channel else None, theme)

    list_area, right_area = split(
        content_area,
        [Constraint.percentage(35), Constraint.percentage(65)],
        Direction.HORIZONTAL,
    )
    render_station_list(
        buf,
        list_area,
        app.sorted_channels(),
        app.favorites.favorites,
        channel.id if channel else None,
        True,
        theme,
        app.list_state,
    )

    show_history = app.show_history and bool(app.song_history)
    now_area, history_area, visualizer_area = split(
        right_area,
        [
            Constraint.min(8),
            Constraint.length(8 if show_history else 0),
            Constraint.length(12 if app.show_visualizer else 0),
        ],
    )
    state = app.playback_state
    render_now_playing(
        buf,
        now_area,
        app.artwork_state,
        channel,
        app.current_song,
        app.stream_title,
        state.paused,
        app.audio_quality,
        app.show_artwork,
        theme,
    )
    if show_history:
        render_song_history(buf, history_area, app.song_history, theme)
    if app.show_visualizer:
        Visualizer(
            app.spectrum_data,
            state.playing,
            state.paused,
            app.visualization_mode,
            app.frame,
            theme,
        ).render(buf, visualizer_area)

    render_status_bar(
        buf,
        status_area,
        state.playing,
        state.paused,
        0 if app.is_muted else state.volume,
        app.theme_type.label(),
        theme,
    )
    if app.show_help:
        render_help(buf, area, theme)


def _refresh_metadata(
    request: MetadataRequest,
    api_client: Any,
    image_cache: Any,
    player: _PlayerHandle,
    updates: "queue.Queue[AppUpdate]",
    last_artwork_url: str | None,
) -> str | None:
    """Fetch songs, artwork and the stream title once; return the artwork URL now shown."""
    channel_id = request.channel_id
    if channel_id is None:
        return None

    try:
        songs: Sequence[Song] = api_client.get_songs(channel_id)
    except Exception:
        songs = None  # type: ignore[assignment]
    if songs is not None:
        songs = list(songs)
        updates.put(
            SongsUpdate(
                channel_id,
                songs[0] if songs else None,
                songs[1 : 1 + HISTORY_LENGTH],
            )
        )

    if request.show_artwork:
        image_url = request.image_url
        if image_url is not None and image_url != last_artwork_url:
            last_artwork_url = image_url
            try:
                data = image_cache.get_or_fetch(image_url, channel_id)
                image = Image.open(io.BytesIO(data))
                image.load()
            except Exception:
                pass
            else:
                updates.put(ArtworkUpdate(channel_id, image, image_url))
    else:
        last_artwork_url = None

    if player.lock.acquire(blocking=False):
        try:
            metadata = None
            if player.controller.state.playing:
                try:
                    metadata = player.controller.get_metadata()
                except (MpvError, OSError):
                    metadata = None
        finally:
            player.lock.release()
        if metadata is not None:
            artist, title = metadata
            if title:
                stream_title = f"{artist} - {title}" if artist else title
                updates.put(StreamTitleUpdate(channel_id, stream_title))

    return last_artwork_url


def metadata_worker(
    requests: _Watch[MetadataRequest],
    player: _PlayerHandle,
    updates: "queue.Queue[AppUpdate]",
    stop: threading.Event,
) -> None:
    """Poll station metadata every few seconds and whenever the request changes."""
    api_client: SomaFmClient | None = None
    image_cache: ImageCache | None = None
    last_artwork_url: str | None = None
    seen: int | None = None

    while not stop.is_set():
        received = requests.wait(seen, METADATA_INTERVAL)
        if received is None or stop.is_set():
            break
        seen, request = received
        if request.channel_id is None:
            last_artwork_url = None
            continue
        if api_client is None:
            api_client = SomaFmClient(timeout=FETCH_TIMEOUT)
        if image_cache is None:
            image_cache = ImageCache(timeout=FETCH_TIMEOUT)
        last_artwork_url = _refresh_metadata(
            request, api_client, image_cache, player, updates, last_artwork_url
        )


def audio_worker(
    player: _PlayerHandle,
    levels: _Watch[tuple[float, float] | None],
    stop: threading.Event,
) -> None:
    """Publish the player's audio levels about twenty times a second."""
    while not stop.wait(AUDIO_INTERVAL):
        if not player.lock.acquire(blocking=False):
            continue
        try:
            state = player.controller.state
            if not state.playing or state.paused:
                stats = None
            else:
                stats = player.controller.get_audio_stats()
        finally:
            player.lock.release()
        levels.send(stats)


def run_app(app: App, terminal: Any) -> None:
    """Load stations, start the background workers and run until the user quits."""
    app.init()

    handle = _PlayerHandle(app.player, app.player_lock)
    last_request = build_metadata_request(app)
    requests: _Watch[MetadataRequest] = _Watch(last_request)
    updates: queue.Queue[AppUpdate] = queue.Queue()
    levels: _Watch[tuple[float, float] | None] = _Watch(None)
    stop = threading.Event()

    workers = [
        threading.Thread(
            target=metadata_worker, args=(requests, handle, updates, stop), daemon=True
        ),
        threading.Thread(target=audio_worker, args=(handle, levels, stop), daemon=True),
    ]
    for worker in workers:
        worker.start()

    seen_levels, _ = levels.get()
    last_tick = time.monotonic()
    try:
        while True:
            while True:
                try:
                    update = updates.get_nowait()
                except queue.Empty:
                    break
                apply_update(app, update)

            version, value = levels.get()
            if version != seen_levels:
                seen_levels = version
                app.audio_levels = value

            width, height = terminal.size()
            buf = Buffer(max(width, 0), max(height, 0))
            draw(app, buf)
            terminal.draw(buf)

            timeout = max(TICK_RATE - (time.monotonic() - last_tick), 0.0)
            key = terminal.read_key(timeout)
            if key is not None:
                action = handle_key(key, app.show_help)
                if action is not None:
                    app.handle_action(action)
                    next_request = build_metadata_request(app)
                    if next_request != last_request:
                        requests.send(next_request)
                        last_request = next_request

            if time.monotonic() - last_tick >= TICK_RATE:
                app.update_spectrum()
                last_tick = time.monotonic()

            if app.should_quit:
                break
    finally:
        stop.set()
        requests.close()
        levels.close()
        for worker in workers:
            worker.join(timeout=1.0)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="vibecast", description="A terminal internet radio player."
    )
    parser.parse_args(argv)

    os.environ.setdefault("ESCDELAY", "25")

    def session(screen: Any) -> None:
        app = App()
        try:
            run_app(app, CursesTerminal(screen))
        finally:
            app.player.close()

    try:
        curses.wrapper(session)
    except Exception as err:
        print(f"Error: {err}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())