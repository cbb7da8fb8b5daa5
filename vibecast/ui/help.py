"""The keyboard shortcut overlay."""

from __future__ import annotations

from vibecast.ui.canvas import (
    Buffer,
    Constraint,
    Direction,
    Line,
    Rect,
    Span,
    draw_block,
    render_paragraph,
    split,
)
from vibecast.ui.theme import Modifier, Style, Theme

_KEY_COLUMN = 12

# Sections start with "# Name"; entries are "keys :: description".
_SHORTCUT_TABLE = """
# Playback
p / Space :: Play / Pause
Enter :: Play selected station
q / Esc :: Quit
# Navigation
j / Down :: Move down
k / Up :: Move up
g :: Go to top
G :: Go to bottom
# Volume
+ / = :: Volume up
- / _ :: Volume down
m :: Mute / Unmute
# Stations
f :: Toggle favorite
s :: Cycle sort mode
R :: Refresh stations
# Display
v :: Cycle visualization style
V :: Show/hide visualizer
a :: Toggle artwork
r :: Toggle recently played
t :: Cycle color theme
# Audio
< / , :: Lower audio quality
> / . :: Higher audio quality
? :: Toggle this help
"""


def _parse_shortcuts(table: str) -> tuple[tuple[str, tuple[tuple[str, str], ...]], ...]:
    sections: list[tuple[str, list[tuple[str, str]]]] = []
    for raw in filter(None, (line.strip() for line in table.splitlines())):
        if raw.startswith("#"):
            sections.append((raw.lstrip("# ").strip(), []))
        else:
            key, _, desc = raw.partition(" :: ")
            sections[-1][1].append((key, desc))
    return tuple((name, tuple(items)) for name, items in sections)


SHORTCUTS = _parse_shortcuts(_SHORTCUT_TABLE)


def centered_rect(percent_x: int, percent_y: int, area: Rect) -> Rect:
    """A rectangle of the given percentages centred in the area."""

    def thirds(percent: int) -> list[Constraint]:
        margin = (100 - percent) // 2
        return [Constraint.percentage(p) for p in (margin, percent, margin)]

    middle_row = split(area, thirds(percent_y), Direction.VERTICAL)[1]
    return split(middle_row, thirds(percent_x), Direction.HORIZONTAL)[1]


def _entry_line(key: str, desc: str, theme: Theme) -> Line:
    return Line(
        [
            Span(f"  {key.ljust(_KEY_COLUMN)}", theme.highlight_style()),
            Span("  "),
            Span(desc, theme.normal_style()),
        ]
    )


def help_lines(theme: Theme) -> list[Line]:
    """The overlay's text: each section's heading, its shortcuts, then a closing hint."""
    heading_style = theme.selected_style().add_modifier(Modifier.BOLD)
    lines: list[Line] = []
    for section, items in SHORTCUTS:
        lines += [Line(Span(section, heading_style)), Line("")]
        lines += [_entry_line(key, desc, theme) for key, desc in items]
        lines.append(Line(""))
    lines.append(Line(Span("Press any key to close", theme.muted_style())))
    return lines


def render_help(buf: Buffer, area: Rect, theme: Theme) -> None:
    """Draw the overlay centred over the given area."""
    popup = centered_rect(60, 70, area)
    buf.clear(popup)
    inner = draw_block(
        buf,
        popup,
        border_style=theme.active_border_style(),
        title=" Keyboard Shortcuts ",
        title_style=theme.title_style(),
        background=Style(bg=theme.background),
    )
    render_paragraph(buf, inner, help_lines(theme))