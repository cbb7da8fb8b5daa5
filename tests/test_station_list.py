from vibecast.api import Channel
from vibecast.ui.canvas import Buffer, Rect
from vibecast.ui.station_list import ListState, render_station_list, station_line
from vibecast.ui.theme import Theme

THEME = Theme.default()


def make_channel(channel_id, title, listeners=10):
    return Channel(
        id=channel_id,
        title=title,
        description="",
        genre="",
        dj="",
        listeners=listeners,
        image="",
        largeimage="",
        last_playing="",
    )


def text(line):
    return "".join(span.content for span in line.spans)


def test_station_line_favorite_and_playing():
    channel = make_channel("groove", "Groove Salad", 1500)
    line = station_line(channel, True, True, THEME)
    assert text(line) == "▶ ★ Groove Salad " + channel.format_listeners()
    assert line.spans[1].style == THEME.favorite_style()
    assert line.spans[2].style == THEME.playing_style()


def test_station_line_plain():
    channel = make_channel("drone", "Drone Zone", 42)
    line = station_line(channel, False, False, THEME)
    assert text(line) == "  Drone Zone 42"
    assert line.spans[1].style == THEME.muted_style()
    assert line.spans[2].style == THEME.normal_style()


def test_render_marks_selected_row():
    channels = [make_channel(f"c{i}", f"Station {i}") for i in range(3)]
    buf = Buffer(40, 6)
    state = ListState()
    state.select(1)
    render_station_list(buf, Rect(0, 0, 40, 6), channels, {"c0"}, "c2", True, THEME, state)
    rows = buf.text_rows()
    assert " Stations " in rows[0]
    assert rows[2][1:3] == "│ "
    assert rows[1][1:3] == "  "
    assert "Station 1" in rows[2]
    assert "★ Station 0" in rows[1]
    assert "▶ " in rows[3]
    assert buf.cell(10, 2).style.bg == THEME.primary


def test_render_without_selection_has_no_symbol_column():
    channels = [make_channel("a", "Alpha")]
    buf = Buffer(30, 4)
    render_station_list(buf, Rect(0, 0, 30, 4), channels, set(), None, True, THEME, ListState())
    assert buf.text_rows()[1][1:].startswith("  Alpha")


def test_border_follows_focus():
    channels = [make_channel("a", "Alpha")]
    focused = Buffer(30, 4)
    render_station_list(focused, Rect(0, 0, 30, 4), channels, set(), None, True, THEME, ListState())
    unfocused = Buffer(30, 4)
    render_station_list(
        unfocused, Rect(0, 0, 30, 4), channels, set(), None, False, THEME, ListState()
    )
    assert focused.cell(0, 0).style.fg == THEME.primary
    assert unfocused.cell(0, 0).style.fg == THEME.muted


def test_empty_list_clears_selection():
    state = ListState(selected=3, offset=2)
    render_station_list(Buffer(20, 5), Rect(0, 0, 20, 5), [], set(), None, True, THEME, state)
    assert state.selected is None
    assert state.offset == 0


def test_selection_is_clamped():
    channels = [make_channel(f"c{i}", f"Station {i}") for i in range(3)]
    state = ListState()
    state.select(10)
    render_station_list(Buffer(30, 8), Rect(0, 0, 30, 8), channels, set(), None, True, THEME, state)
    assert state.selected == len(channels) - 1


def test_scrolls_to_keep_selection_visible():
    channels = [make_channel(f"c{i}", f"Station {i}") for i in range(10)]
    buf = Buffer(30, 5)
    state = ListState()
    state.select(7)
    render_station_list(buf, Rect(0, 0, 30, 5), channels, set(), None, True, THEME, state)
    visible = 3
    assert state.offset <= 7 < state.offset + visible
    rows = buf.text_rows()[1:4]
    assert any("Station 7" in row for row in rows)
    assert all("Station 0" not in row for row in rows)

    state.select(0)
    buf = Buffer(30, 5)
    render_station_list(buf, Rect(0, 0, 30, 5), channels, set(), None, True, THEME, state)
    assert state.offset == 0
    assert "Station 0" in buf.text_rows()[1]


def test_list_state_select_none_resets_offset():
    state = ListState(selected=4, offset=3)
    state.select(None)
    assert (state.selected, state.offset) == (None, 0)