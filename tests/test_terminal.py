import curses

from vibecast.keys import DOWN, ENTER, ESC, UP, Action, KeyEvent, handle_key
from vibecast.terminal import CursesTerminal, rgb_to_xterm256, translate_key
from vibecast.ui.canvas import Buffer
from vibecast.ui.theme import Color, Modifier, Style


class FakeScreen:
    def __init__(self, width=4, height=2, keys=None):
        self.width = width
        self.height = height
        self.grid = [[" "] * width for _ in range(height)]
        self.attrs = {}
        self.keys = list(keys or [])
        self.timeouts = []
        self.refreshed = 0
        self.keypad_enabled = False

    def keypad(self, flag):
        self.keypad_enabled = flag

    def getmaxyx(self):
        return self.height, self.width

    def addstr(self, y, x, text, attr=0):
        for offset, ch in enumerate(text):
            self.grid[y][x + offset] = ch
            self.attrs[(x + offset, y)] = attr

    def refresh(self):
        self.refreshed += 1

    def timeout(self, ms):
        self.timeouts.append(ms)

    def get_wch(self):
        if not self.keys:
            raise curses.error("no input")
        return self.keys.pop(0)


def test_xterm_pure_colours():
    assert rgb_to_xterm256(Color(0, 0, 0)) == 16
    assert rgb_to_xterm256(Color(255, 255, 255)) == 231
    assert rgb_to_xterm256(Color(255, 0, 0)) == 196


def test_xterm_grey_uses_ramp():
    index = rgb_to_xterm256(Color(128, 128, 128))
    assert 232 <= index <= 255


def test_xterm_results_in_extended_range():
    for rgb in [(10, 200, 30), (255, 100, 200), (0, 255, 65), (70, 100, 130)]:
        assert 16 <= rgb_to_xterm256(Color(*rgb)) <= 255


def test_translate_printable():
    assert translate_key("q") == KeyEvent("q")
    assert translate_key(" ") == KeyEvent(" ")
    assert translate_key("G") == KeyEvent("G")


def test_translate_special_keys():
    assert translate_key(curses.KEY_UP) == KeyEvent(UP)
    assert translate_key(curses.KEY_DOWN) == KeyEvent(DOWN)
    assert translate_key("\n") == KeyEvent(ENTER)
    assert translate_key("\r") == KeyEvent(ENTER)
    assert translate_key(curses.KEY_ENTER) == KeyEvent(ENTER)
    assert translate_key("\x1b") == KeyEvent(ESC)


def test_translate_ctrl_c_quits():
    key = translate_key("\x03")
    assert key == KeyEvent("c", ctrl=True)
    assert handle_key(key, False) is Action.QUIT


def test_translate_unknown_is_none():
    assert translate_key(curses.KEY_RESIZE) is None
    assert translate_key("\x07") is None


def test_size_is_width_then_height():
    terminal = CursesTerminal(FakeScreen(width=30, height=12))
    assert terminal.size() == (30, 12)


def test_draw_copies_buffer():
    screen = FakeScreen(width=4, height=2)
    terminal = CursesTerminal(screen)
    buf = Buffer(4, 2)
    buf.set_string(0, 0, "hi")
    buf.set_string(1, 1, "ok")
    terminal.draw(buf)
    assert ["".join(row) for row in screen.grid] == buf.text_rows()
    assert screen.refreshed == 1


def test_draw_bold_attribute():
    screen = FakeScreen(width=4, height=1)
    terminal = CursesTerminal(screen)
    buf = Buffer(4, 1)
    buf.set_string(0, 0, "ab", Style(modifiers=Modifier.BOLD))
    terminal.draw(buf)
    assert "".join(screen.grid[0]) == "ab  "
    assert (screen.attrs[(0, 0)] & curses.A_BOLD) == curses.A_BOLD
    assert (screen.attrs[(1, 0)] & curses.A_BOLD) == curses.A_BOLD
    assert (screen.attrs[(2, 0)] & curses.A_BOLD) == 0


def test_draw_clips_to_screen():
    screen = FakeScreen(width=3, height=1)
    terminal = CursesTerminal(screen)
    buf = Buffer(6, 2)
    buf.set_string(0, 0, "abcdef")
    terminal.draw(buf)
    assert "".join(screen.grid[0]) == "abc"


def test_read_key_translates_and_sets_timeout():
    screen = FakeScreen(keys=["j"])
    terminal = CursesTerminal(screen)
    assert terminal.read_key(0.016) == KeyEvent("j")
    assert screen.timeouts == [16]


def test_read_key_without_input_is_none():
    screen = FakeScreen()
    terminal = CursesTerminal(screen)
    assert terminal.read_key(0) is None
    assert screen.timeouts == [0]