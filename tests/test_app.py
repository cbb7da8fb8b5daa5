import json

import pytest

from vibecast.api import AudioQuality, Channel
from vibecast.app import App, SortMode
from vibecast.keys import Action
from vibecast.player import PlaybackState
from vibecast.storage import ConfigStore, FavoritesStore
from vibecast.ui.theme import ThemeType
from vibecast.ui.visualizer import VisualizationMode


def make_channel(channel_id, title, listeners, playlists=None):
    return Channel.from_dict(
        {
            "id": channel_id,
            "title": title,
            "description": "desc",
            "genre": "genre",
            "dj": "Host",
            "djmail": "host@example.com",
            "listeners": str(listeners),
            "image": "https://example.com/s.png",
            "largeimage": "https://example.com/l.png",
            "xlimage": "https://example.com/xl.png",
            "lastPlaying": "",
            "playlists": playlists
            if playlists is not None
            else [
                {
                    "url": f"https://example.com/{channel_id}-aac.pls",
                    "format": "aac",
                    "quality": "highest",
                },
                {
                    "url": f"https://example.com/{channel_id}-mp3.pls",
                    "format": "mp3",
                    "quality": "high",
                },
            ],
        }
    )


class FakePlayer:
    def __init__(self):
        self.state = PlaybackState()
        self.urls = []

    def play(self, url):
        self.urls.append(url)
        self.state.playing = True
        self.state.paused = False

    def stop(self):
        self.state.playing = False
        self.state.paused = False

    def toggle_pause(self):
        if self.state.playing:
            self.state.paused = not self.state.paused

    def set_volume(self, volume):
        self.state.volume = min(max(volume, 0), 100)

    def volume_up(self):
        self.set_volume(self.state.volume + 5)

    def volume_down(self):
        self.set_volume(self.state.volume - 5)


class FakeApi:
    def __init__(self, channels):
        self.channels = channels
        self.fail = False

    def get_channels(self):
        if self.fail:
            raise ConnectionError("offline")
        return list(self.channels)


@pytest.fixture
def channels():
    return [
        make_channel("alpha", "Zeta Sounds", 100),
        make_channel("beta", "Alpha Beats", 300),
        make_channel("gamma", "Middle Air", 200),
    ]


@pytest.fixture
def app(tmp_path, channels):
    instance = App(
        config=ConfigStore(tmp_path / "config.json"),
        favorites=FavoritesStore(tmp_path / "favorites.json"),
        player=FakePlayer(),
        api_client=FakeApi(channels),
    )
    instance.init()
    return instance


def ids(app):
    return [channel.id for channel in app.sorted_channels()]


def test_sort_mode_cycles():
    mode = SortMode.FAVORITES_THEN_LISTENERS
    assert mode.next() is SortMode.ALPHABETICAL
    assert mode.next().next() is SortMode.LISTENERS_ONLY
    assert mode.next().next().next() is mode


def test_init_sorts_by_listeners_and_selects_first(app):
    assert ids(app) == ["beta", "gamma", "alpha"]
    assert app.list_state.selected == 0
    assert app.selected_channel().id == "beta"


def test_toggle_favorite_moves_to_top_and_saves(app, tmp_path):
    app.handle_action(Action.GO_TO_BOTTOM)
    assert app.selected_channel().id == "alpha"
    app.handle_action(Action.TOGGLE_FAVORITE)
    assert ids(app)[0] == "alpha"
    saved = json.loads((tmp_path / "favorites.json").read_text())
    assert saved == ["alpha"]


def test_sort_mode_alphabetical(app):
    app.handle_action(Action.TOGGLE_SORT_MODE)
    titles = [channel.title for channel in app.sorted_channels()]
    assert titles == sorted(titles)


def test_navigation_wraps(app):
    app.handle_action(Action.PREV_STATION)
    assert app.list_state.selected == 2
    app.handle_action(Action.NEXT_STATION)
    assert app.list_state.selected == 0
    app.handle_action(Action.GO_TO_BOTTOM)
    app.handle_action(Action.GO_TO_TOP)
    assert app.list_state.selected == 0


def test_select_station_plays_selected(app):
    app.handle_action(Action.SELECT_STATION)
    assert app.player.urls == [app.selected_channel().stream_url(app.audio_quality)]
    assert app.current_channel().id == "beta"
    assert app.playback_state.playing


def test_play_pause_toggles(app):
    app.handle_action(Action.TOGGLE_PLAY_PAUSE)
    assert app.playback_state.playing and not app.playback_state.paused
    app.handle_action(Action.TOGGLE_PLAY_PAUSE)
    assert app.playback_state.paused


def test_quit_stops_player(app):
    app.handle_action(Action.SELECT_STATION)
    app.handle_action(Action.QUIT)
    assert app.should_quit
    assert not app.playback_state.playing


def test_mute_and_unmute_restores_volume(app):
    app.handle_action(Action.VOLUME_DOWN)
    before = app.playback_state.volume
    app.handle_action(Action.TOGGLE_MUTE)
    assert app.is_muted
    assert app.playback_state.volume == 0
    app.handle_action(Action.VOLUME_UP)
    assert not app.is_muted
    assert app.playback_state.volume == before


def test_quality_down_restarts_stream(app):
    app.handle_action(Action.SELECT_STATION)
    app.handle_action(Action.QUALITY_DOWN)
    assert app.audio_quality == AudioQuality.HIGHEST.lower()
    assert app.player.urls[-1] == app.current_channel().stream_url(app.audio_quality)
    assert len(app.player.urls) == 2


def test_quality_up_at_max_does_nothing(app):
    app.handle_action(Action.SELECT_STATION)
    app.handle_action(Action.QUALITY_UP)
    assert app.audio_quality == AudioQuality.HIGHEST
    assert len(app.player.urls) == 1


def test_cycle_theme_saves_preference(app, tmp_path):
    start = app.theme_type
    app.handle_action(Action.TOGGLE_THEME)
    assert app.theme_type == start.next()
    saved = json.loads((tmp_path / "config.json").read_text())
    assert saved["theme"] == start.next().label()
    assert ConfigStore.load(tmp_path / "config.json").theme_type() == start.next()


def test_default_theme_and_visualization(app):
    assert app.theme_type == ThemeType.CYBERPUNK
    assert app.visualization_mode == VisualizationMode.SPIRAL


def test_cycle_visualization_saves(app, tmp_path):
    app.handle_action(Action.CYCLE_VISUALIZATION)
    assert app.visualization_mode == VisualizationMode.SPIRAL.next()
    stored = ConfigStore.load(tmp_path / "config.json")
    assert stored.visualization_mode() == app.visualization_mode


def test_refresh_failure_keeps_channels(app):
    app.api_client.fail = True
    app.handle_action(Action.REFRESH)
    assert ids(app) == ["beta", "gamma", "alpha"]


def test_refresh_replaces_channels(app):
    app.api_client.channels = [make_channel("delta", "Delta", 5)]
    app.handle_action(Action.REFRESH)
    assert ids(app) == ["delta"]


def test_help_toggle_and_close(app):
    app.handle_action(Action.TOGGLE_HELP)
    assert app.show_help
    app.handle_action(Action.CLOSE_OVERLAY)
    assert not app.show_help


def test_toggle_artwork_and_panels(app):
    app.handle_action(Action.TOGGLE_ARTWORK)
    app.handle_action(Action.TOGGLE_VISUALIZER)
    app.handle_action(Action.TOGGLE_HISTORY)
    assert (app.show_artwork, app.show_visualizer, app.show_history) == (False, False, False)
    assert not app.artwork_state.has_image()


def test_update_spectrum_uses_levels_when_playing(app):
    app.handle_action(Action.SELECT_STATION)
    app.audio_levels = (-6.0, -6.0)
    app.update_spectrum()
    assert app.frame == 1
    assert app.spectrum_data.rms > 0.0


def test_update_spectrum_decays_when_stopped(app):
    app.update_spectrum()
    app.update_spectrum()
    assert app.frame == 2
    assert app.spectrum_data.rms == 0.0


def test_no_channels_selects_nothing(tmp_path):
    empty = App(
        config=ConfigStore(tmp_path / "c.json"),
        favorites=FavoritesStore(tmp_path / "f.json"),
        player=FakePlayer(),
        api_client=FakeApi([]),
    )
    empty.init()
    empty.handle_action(Action.NEXT_STATION)
    empty.handle_action(Action.SELECT_STATION)
    assert empty.selected_channel() is None
    assert empty.player.urls == []