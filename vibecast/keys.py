"""Keyboard input and the actions it triggers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ESC = "Esc"
ENTER = "Enter"
UP = "Up"
DOWN = "Down"


class Action(enum.Enum):
    QUIT = enum.auto()
    TOGGLE_PLAY_PAUSE = enum.auto()
    VOLUME_UP = enum.auto()
    VOLUME_DOWN = enum.auto()
    TOGGLE_MUTE = enum.auto()
    TOGGLE_FAVORITE = enum.auto()
    NEXT_STATION = enum.auto()
    PREV_STATION = enum.auto()
    SELECT_STATION = enum.auto()
    GO_TO_TOP = enum.auto()
    GO_TO_BOTTOM = enum.auto()
    TOGGLE_SORT_MODE = enum.auto()
    TOGGLE_VISUALIZER = enum.auto()
    CYCLE_VISUALIZATION = enum.auto()
    TOGGLE_ARTWORK = enum.auto()
    TOGGLE_HISTORY = enum.auto()
    QUALITY_UP = enum.auto()
    QUALITY_DOWN = enum.auto()
    TOGGLE_HELP = enum.auto()
    TOGGLE_THEME = enum.auto()
    REFRESH = enum.auto()
    CLOSE_OVERLAY = enum.auto()


@dataclass(frozen=True)
class KeyEvent:
    """A key press: a single character or one of ESC, ENTER, UP, DOWN."""

    code: str
    ctrl: bool = False


_BINDINGS: dict[str, Action] = {
    "q": Action.QUIT,
    ESC: Action.QUIT,
    "p": Action.TOGGLE_PLAY_PAUSE,
    " ": Action.TOGGLE_PLAY_PAUSE,
    ENTER: Action.SELECT_STATION,
    "+": Action.VOLUME_UP,
    "=": Action.VOLUME_UP,
    "-": Action.VOLUME_DOWN,
    "_": Action.VOLUME_DOWN,
    "m": Action.TOGGLE_MUTE,
    DOWN: Action.NEXT_STATION,
    "j": Action.NEXT_STATION,
    UP: Action.PREV_STATION,
    "k": Action.PREV_STATION,
    "g": Action.GO_TO_TOP,
    "G": Action.GO_TO_BOTTOM,
    "f": Action.TOGGLE_FAVORITE,
    "s": Action.TOGGLE_SORT_MODE,
    "t": Action.TOGGLE_THEME,
    "v": Action.CYCLE_VISUALIZATION,
    "V": Action.TOGGLE_VISUALIZER,
    "a": Action.TOGGLE_ARTWORK,
    "r": Action.TOGGLE_HISTORY,
    ">": Action.QUALITY_UP,
    ".": Action.QUALITY_UP,
    "<": Action.QUALITY_DOWN,
    ",": Action.QUALITY_DOWN,
    "R": Action.REFRESH,
    "?": Action.TOGGLE_HELP,
}


def handle_key(key: KeyEvent, show_help: bool) -> Action | None:
    """Map a key press to an action; while help is shown any key closes it."""
    if show_help:
        return Action.CLOSE_OVERLAY
    if key.code == "c" and key.ctrl:
        return Action.QUIT
    return _BINDINGS.get(key.code)