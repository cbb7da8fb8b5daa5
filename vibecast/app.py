"""Application state and the effect of each user action."""

from __future__ import annotations

import enum
import threading
from dataclasses import replace
from typing import Any

from vibecast.api import AudioQuality, Channel, SomaFmClient, Song
from vibecast.keys import Action
from vibecast.player import MpvController, PlaybackState
from vibecast.spectrum import SpectrumAnalyzer
from vibecast.storage import ConfigStore, FavoritesStore
from vibecast.ui.artwork import ArtworkState
from vibecast.ui.station_list import ListState
from vibecast.ui.theme import Theme

_FRAME_MODULUS = 2**64


class SortMode(enum.Enum):
    FAVORITES_THEN_LISTENERS = "favorites"
    ALPHABETICAL = "alphabetical"
    LISTENERS_ONLY = "listeners"

    def next(self) -> "SortMode":
        members = list(SortMode)
        return members[(members.index(self) + 1) % len(members)]


def _load_config() -> ConfigStore:
    try:
        return ConfigStore.load()
    except OSError:
        return ConfigStore()


def _load_favorites() -> FavoritesStore:
    try:
        return FavoritesStore.load()
    except OSError:
        return FavoritesStore()


class App:
    """Everything the interface shows, and the actions that change it."""

    def __init__(
        self,
        config: ConfigStore | None = None,
        favorites: FavoritesStore | None = None,
        player: Any = None,
        api_client: Any = None,
    ) -> None:
        self.config = config if config is not None else _load_config()
        self.favorites = favorites if favorites is not None else _load_favorites()
        self.player = player if player is not None else MpvController()
        self.player_lock = threading.Lock()
        self.api_client = api_client if api_client is not None else SomaFmClient()

        self.channels: list[Channel] = []
        self.sorted_indices: list[int] = []
        self.list_state = ListState()
        self.current_channel_index: int | None = None
        self.current_song: Song | None = None
        self.song_history: list[Song] = []
        self.stream_title: str | None = None
        self.sort_mode = SortMode.FAVORITES_THEN_LISTENERS
        self.show_help = False
        self.show_visualizer = True
        self.show_artwork = True
        self.show_history = True
        self.audio_quality = AudioQuality.HIGHEST
        self.playback_state = PlaybackState()
        self.should_quit = False
        self.last_volume = 80
        self.is_muted = False
        self.artwork_state = ArtworkState()
        self.spectrum_analyzer = SpectrumAnalyzer()
        self.spectrum_data = self.spectrum_analyzer.get_data()
        self.audio_levels: tuple[float, float] | None = None
        self.visualization_mode = self.config.visualization_mode()
        self.frame = 0
        self.theme_type = self.config.theme_type()
        self.theme = Theme.from_type(self.theme_type)

    def _save_config(self) -> None:
        try:
            self.config.save()
        except OSError:
            pass

    def cycle_theme(self) -> None:
        self.theme_type = self.theme_type.next()
        self.theme = Theme.from_type(self.theme_type)
        self.config.set_theme(self.theme_type)
        self._save_config()

    def init(self) -> None:
        """Fetch the station list and select its first entry."""
        self.channels = list(self.api_client.get_channels())
        self.update_sorted_indices()
        if self.sorted_indices:
            self.list_state.select(0)

    def update_sorted_indices(self) -> None:
        indices = range(len(self.channels))
        channels = self.channels
        if self.sort_mode is SortMode.FAVORITES_THEN_LISTENERS:
            favorites = self.favorites.favorites
            ordered = sorted(
                indices,
                key=lambda i: (channels[i].id not in favorites, -channels[i].listeners),
            )
        elif self.sort_mode is SortMode.ALPHABETICAL:
            ordered = sorted(indices, key=lambda i: channels[i].title)
        else:
            ordered = sorted(indices, key=lambda i: -channels[i].listeners)
        self.sorted_indices = ordered

    def sorted_channels(self) -> list[Channel]:
        return [self.channels[i] for i in self.sorted_indices]

    def selected_channel_index(self) -> int | None:
        selected = self.list_state.selected
        if selected is None or not 0 <= selected < len(self.sorted_indices):
            return None
        return self.sorted_indices[selected]

    def selected_channel(self) -> Channel | None:
        index = self.selected_channel_index()
        return None if index is None else self.channels[index]

    def current_channel(self) -> Channel | None:
        index = self.current_channel_index
        if index is None or not 0 <= index < len(self.channels):
            return None
        return self.channels[index]

    def _sync_state(self) -> None:
        self.playback_state = replace(self.player.state)

    def _play_selected(self) -> None:
        channel = self.selected_channel()
        if channel is None:
            return
        url = channel.stream_url(self.audio_quality)
        index = self.selected_channel_index()
        with self.player_lock:
            self.player.play(url)
            self._sync_state()
        self.current_channel_index = index
        self.stream_title = None
        self.current_song = None
        self.song_history.clear()
        self.artwork_state.clear()
        self.audio_levels = None

    def _set_volume(self, volume: int) -> None:
        with self.player_lock:
            self.player.set_volume(volume)
            self._sync_state()

    def _change_quality(self, quality: AudioQuality) -> None:
        if quality == self.audio_quality:
            return
        self.audio_quality = quality
        channel = self.current_channel()
        if self.playback_state.playing and channel is not None:
            with self.player_lock:
                self.player.play(channel.stream_url(self.audio_quality))
                self._sync_state()
            self.audio_levels = None

    def _quit(self) -> None:
        self.should_quit = True
        with self.player_lock:
            self.player.stop()
            self._sync_state()
        self.audio_levels = None

    def _toggle_play_pause(self) -> None:
        if self.playback_state.playing:
            with self.player_lock:
                self.player.toggle_pause()
                self._sync_state()
        else:
            self._play_selected()

    def _volume_up(self) -> None:
        if self.is_muted:
            self.is_muted = False
            self._set_volume(self.last_volume)
        else:
            with self.player_lock:
                self.player.volume_up()
                self._sync_state()

    def _volume_down(self) -> None:
        with self.player_lock:
            self.player.volume_down()
            self._sync_state()

    def _toggle_mute(self) -> None:
        if self.is_muted:
            self.is_muted = False
            self._set_volume(self.last_volume)
        else:
            self.last_volume = self.playback_state.volume
            self.is_muted = True
            self._set_volume(0)

    def _toggle_favorite(self) -> None:
        channel = self.selected_channel()
        if channel is None:
            return
        self.favorites.toggle(channel.id)
        try:
            self.favorites.save()
        except OSError:
            pass
        self.update_sorted_indices()

    def _next_station(self) -> None:
        count = len(self.sorted_indices)
        if count:
            current = self.list_state.selected or 0
            self.list_state.select((current + 1) % count)

    def _prev_station(self) -> None:
        count = len(self.sorted_indices)
        if count:
            current = self.list_state.selected or 0
            self.list_state.select(current - 1 if current > 0 else count - 1)

    def _go_to_top(self) -> None:
        if self.sorted_indices:
            self.list_state.select(0)

    def _go_to_bottom(self) -> None:
        if self.sorted_indices:
            self.list_state.select(len(self.sorted_indices) - 1)

    def _toggle_sort_mode(self) -> None:
        self.sort_mode = self.sort_mode.next()
        self.update_sorted_indices()

    def _toggle_visualizer(self) -> None:
        self.show_visualizer = not self.show_visualizer

    def _cycle_visualization(self) -> None:
        self.visualization_mode = self.visualization_mode.next()
        self.config.set_visualization(self.visualization_mode)
        self._save_config()

    def _toggle_artwork(self) -> None:
        self.show_artwork = not self.show_artwork
        if not self.show_artwork:
            self.artwork_state.clear()

    def _toggle_history(self) -> None:
        self.show_history = not self.show_history

    def _toggle_help(self) -> None:
        self.show_help = not self.show_help

    def _close_overlay(self) -> None:
        self.show_help = False

    def _refresh(self) -> None:
        try:
            channels = list(self.api_client.get_channels())
        except Exception:
            return
        self.channels = channels
        self.update_sorted_indices()

    def handle_action(self, action: Action) -> None:
        """Apply one user action; player failures propagate."""
        handlers = {
            Action.QUIT: self._quit,
            Action.TOGGLE_PLAY_PAUSE: self._toggle_play_pause,
            Action.SELECT_STATION: self._play_selected,
            Action.VOLUME_UP: self._volume_up,
            Action.VOLUME_DOWN: self._volume_down,
            Action.TOGGLE_MUTE: self._toggle_mute,
            Action.TOGGLE_FAVORITE: self._toggle_favorite,
            Action.NEXT_STATION: self._next_station,
            Action.PREV_STATION: self._prev_station,
            Action.GO_TO_TOP: self._go_to_top,
            Action.GO_TO_BOTTOM: self._go_to_bottom,
            Action.TOGGLE_SORT_MODE: self._toggle_sort_mode,
            Action.TOGGLE_VISUALIZER: self._toggle_visualizer,
            Action.CYCLE_VISUALIZATION: self._cycle_visualization,
            Action.TOGGLE_ARTWORK: self._toggle_artwork,
            Action.TOGGLE_HISTORY: self._toggle_history,
            Action.QUALITY_UP: lambda: self._change_quality(self.audio_quality.higher()),
            Action.QUALITY_DOWN: lambda: self._change_quality(self.audio_quality.lower()),
            Action.TOGGLE_THEME: self.cycle_theme,
            Action.TOGGLE_HELP: self._toggle_help,
            Action.CLOSE_OVERLAY: self._close_overlay,
            Action.REFRESH: self._refresh,
        }
        handlers[action]()

    def update_spectrum(self) -> None:
        """Advance the animation frame and refresh the visualizer data."""
        self.frame = (self.frame + 1) % _FRAME_MODULUS
        state = self.playback_state
        if self.audio_levels is not None and state.playing and not state.paused:
            rms_db, peak_db = self.audio_levels
            self.spectrum_analyzer.update_from_levels(rms_db, peak_db)
        else:
            self.spectrum_analyzer.animate(state.playing, state.paused)
        self.spectrum_data = self.spectrum_analyzer.get_data()