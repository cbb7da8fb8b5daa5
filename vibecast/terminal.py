"""Drawing cell buffers to a curses screen and reading keys from it."""

from __future__ import annotations

import curses
import dataclasses
from typing import Any

from vibecast.keys import DOWN, ENTER, ESC, UP, KeyEvent
from vibecast.ui.canvas import Buffer
from vibecast.ui.theme import Color, Modifier, Style

_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def _rgb(color: Color) -> tuple[int, int, int]:
    if dataclasses.is_dataclass(color) and not isinstance(color, type):
        values = dataclasses.astuple(color)
    else:
        values = tuple(color)  # type: ignore[arg-type]
    r, g, b = (int(v) for v in values[:3])
    return r, g, b


def _nearest_level(value: int) -> int:
    return min(range(len(_CUBE_LEVELS)), key=lambda i: abs(_CUBE_LEVELS[i] - value))


def _distance(a: tuple[int, int, int], b: tuple[int, int, int]) -> int:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def rgb_to_xterm256(color: Color) -> int:
    """The closest colour of the xterm 256-colour palette (cube or grey ramp)."""
    rgb = _rgb(color)
    ri, gi, bi = (_nearest_level(v) for v in rgb)
    cube_index = 16 + 36 * ri + 6 * gi + bi
    cube_rgb = (_CUBE_LEVELS[ri], _CUBE_LEVELS[gi], _CUBE_LEVELS[bi])

    average = sum(rgb) // 3
    step = min(max((average - 8 + 5) // 10, 0), 23)
    grey = 8 + 10 * step
    if _distance((grey, grey, grey), rgb) < _distance(cube_rgb, rgb):
        return 232 + step
    return cube_index


def translate_key(code: str | int) -> KeyEvent | None:
    """Turn what curses reports for a key press into a KeyEvent."""
    if isinstance(code, int):
        special = {
            curses.KEY_UP: KeyEvent(UP),
            curses.KEY_DOWN: KeyEvent(DOWN),
            curses.KEY_ENTER: KeyEvent(ENTER),
        }
        return special.get(code)
    if code in ("\n", "\r"):
        return KeyEvent(ENTER)
    if code == "\x1b":
        return KeyEvent(ESC)
    if code == "\x03":
        return KeyEvent("c", ctrl=True)
    if len(code) == 1 and code.isprintable():
        return KeyEvent(code)
    return None


class CursesTerminal:
    """A curses screen that shows whole cell buffers and yields key events."""

    def __init__(self, screen: Any) -> None:
        self._screen = screen
        self._pairs: dict[tuple[int, int], int] = {}
        self._colors = False
        self._default_colors = False

        for setup in (lambda: curses.curs_set(0), curses.raw):
            try:
                setup()
            except curses.error:
                pass
        screen.keypad(True)

        try:
            if curses.has_colors():
                curses.start_color()
                try:
                    curses.use_default_colors()
                    self._default_colors = True
                except curses.error:
                    pass
                self._colors = curses.COLORS >= 256
        except curses.error:
            self._colors = False

    def size(self) -> tuple[int, int]:
        """The screen's (width, height)."""
        height, width = self._screen.getmaxyx()
        return width, height

    def _color_index(self, color: Color | None, foreground: bool) -> int:
        if color is None:
            if self._default_colors:
                return -1
            return curses.COLOR_WHITE if foreground else curses.COLOR_BLACK
        return rgb_to_xterm256(color)

    def _pair(self, fg: int, bg: int) -> int:
        key = (fg, bg)
        if key in self._pairs:
            return self._pairs[key]
        number = len(self._pairs) + 1
        if number >= curses.COLOR_PAIRS:
            return 0
        try:
            curses.init_pair(number, fg, bg)
        except curses.error:
            return 0
        self._pairs[key] = number
        return number

    def _attr(self, style: Style) -> int:
        attr = 0
        if self._colors:
            pair = self._pair(
                self._color_index(style.fg, True), self._color_index(style.bg, False)
            )
            attr |= curses.color_pair(pair)
        if style.modifiers & Modifier.BOLD:
            attr |= curses.A_BOLD
        return attr

    def _put(self, y: int, x: int, text: str, attr: int) -> None:
        try:
            self._screen.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen.
            pass

    def draw(self, buf: Buffer) -> None:
        """Copy the buffer onto the screen and refresh it."""
        height, width = self._screen.getmaxyx()
        for y in range(min(buf.area.height, height)):
            run_x = 0
            run_attr: int | None = None
            run_text: list[str] = []
            for x in range(min(buf.area.width, width)):
                cell = buf.cell(x, y)
                if cell is None or cell.char == "":
                    continue
                attr = self._attr(cell.style)
                if run_text and attr == run_attr:
                    run_text.append(cell.char)
                    continue
                if run_text and run_attr is not None:
                    self._put(y, run_x, "".join(run_text), run_attr)
                run_x, run_attr, run_text = x, attr, [cell.char]
            if run_text and run_attr is not None:
                self._put(y, run_x, "".join(run_text), run_attr)
        self._screen.refresh()

    def read_key(self, timeout: float) -> KeyEvent | None:
        """Wait up to `timeout` seconds for a key press."""
        self._screen.timeout(max(int(timeout * 1000), 0))
        try:
            code = self._screen.get_wch()
        except curses.error:
            return None
        return translate_key(code)