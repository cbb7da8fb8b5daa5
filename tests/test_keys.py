import pytest

from vibecast.keys import DOWN, ENTER, ESC, UP, Action, KeyEvent, handle_key


@pytest.mark.parametrize(
    "code, action",
    [
        ("q", Action.QUIT),
        (ESC, Action.QUIT),
        ("p", Action.TOGGLE_PLAY_PAUSE),
        (" ", Action.TOGGLE_PLAY_PAUSE),
        (ENTER, Action.SELECT_STATION),
        ("+", Action.VOLUME_UP),
        ("=", Action.VOLUME_UP),
        ("-", Action.VOLUME_DOWN),
        ("_", Action.VOLUME_DOWN),
        ("m", Action.TOGGLE_MUTE),
        (DOWN, Action.NEXT_STATION),
        ("j", Action.NEXT_STATION),
        (UP, Action.PREV_STATION),
        ("k", Action.PREV_STATION),
        ("g", Action.GO_TO_TOP),
        ("G", Action.GO_TO_BOTTOM),
        ("f", Action.TOGGLE_FAVORITE),
        ("s", Action.TOGGLE_SORT_MODE),
        ("t", Action.TOGGLE_THEME),
        ("v", Action.CYCLE_VISUALIZATION),
        ("V", Action.TOGGLE_VISUALIZER),
        ("a", Action.TOGGLE_ARTWORK),
        ("r", Action.TOGGLE_HISTORY),
        (">", Action.QUALITY_UP),
        (".", Action.QUALITY_UP),
        ("<", Action.QUALITY_DOWN),
        (",", Action.QUALITY_DOWN),
        ("R", Action.REFRESH),
        ("?", Action.TOGGLE_HELP),
    ],
)
def test_bindings(code, action):
    assert handle_key(KeyEvent(code), False) is action


def test_ctrl_c_quits():
    assert handle_key(KeyEvent("c", ctrl=True), False) is Action.QUIT


def test_plain_c_unbound():
    assert handle_key(KeyEvent("c"), False) is None


@pytest.mark.parametrize("code", ["x", "Z", "1", "Tab"])
def test_unbound_keys(code):
    assert handle_key(KeyEvent(code), False) is None


@pytest.mark.parametrize("code", ["q", "x", ESC, "?"])
def test_help_shown_any_key_closes(code):
    assert handle_key(KeyEvent(code), True) is Action.CLOSE_OVERLAY