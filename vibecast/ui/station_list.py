"""The scrollable list of stations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Sequence

from vibecast.api import Channel
from vibecast.ui.canvas import Buffer, Line, Span, Rect, draw_block
from vibecast.ui.theme import Theme

HIGHLIGHT_SYMBOL = "│ "


@dataclass
class ListState:
    """The selected row and the first visible row of a list."""

    selected: int | None = None
    offset: int = 0

    def select(self, index: int | None) -> None:
        self.selected = index
        if index is None:
            self.offset = 0


def station_line(channel: Channel, is_favorite: bool, is_playing: bool, theme: Theme) -> Line:
    star_style = theme.favorite_style() if is_favorite else theme.muted_style()
    title_style = theme.playing_style() if is_playing else theme.normal_style()
    return Line(
        [
            Span("▶ " if is_playing else "", theme.playing_style()),
            Span("★ " if is_favorite else "  ", star_style),
            Span(channel.title, title_style),
            Span(f" {channel.format_listeners()}", theme.muted_style()),
        ]
    )


def _visible_offset(state: ListState, count: int, height: int) -> int:
    offset = min(state.offset, count - 1)
    selected = state.selected
    if selected is not None:
        if selected >= offset + height:
            offset = selected - height + 1
        elif selected < offset:
            offset = selected
    return offset


def render_station_list(
    buf: Buffer,
    area: Rect,
    channels: Sequence[Channel],
    favorites: Collection[str],
    current_station: str | None,
    is_focused: bool,
    theme: Theme,
    state: ListState,
) -> None:
    """Draw the stations in a box, keeping the selected one in view."""
    border = theme.active_border_style() if is_focused else theme.border_style()
    inner = draw_block(
        buf, area, border_style=border, title=" Stations ", title_style=theme.title_style()
    )
    if not channels:
        state.select(None)
        return
    if state.selected is not None:
        state.selected = min(state.selected, len(channels) - 1)
    if inner.width <= 0 or inner.height <= 0:
        return

    state.offset = _visible_offset(state, len(channels), inner.height)
    has_selection = state.selected is not None
    highlight = theme.highlight_style()

    for row, channel in enumerate(channels[state.offset : state.offset + inner.height]):
        y = inner.y + row
        is_selected = state.offset + row == state.selected
        x = inner.x
        if has_selection:
            symbol = HIGHLIGHT_SYMBOL if is_selected else " " * len(HIGHLIGHT_SYMBOL)
            x = buf.set_string(x, y, symbol, None, inner.width)
        line = station_line(
            channel, channel.id in favorites, channel.id == current_station, theme
        )
        buf.set_line(x, y, line, max(inner.right - x, 0))
        if is_selected:
            for cx in range(inner.x, inner.right):
                cell = buf.cell(cx, y)
                if cell is not None:
                    cell.set(style=highlight)