"""The list of recently played songs."""

from __future__ import annotations

from typing import Sequence

from wcwidth import wcwidth

from vibecast.api import Song
from vibecast.ui.canvas import Buffer, Line, Rect, Span, draw_block, render_paragraph
from vibecast.ui.theme import Theme

_ELLIPSIS = "..."


def _width(text: str) -> int:
    return sum(max(wcwidth(ch), 0) for ch in text)


def truncate_to_width(text: str, max_width: int) -> str:
    """Cut text to a display width, ending with an ellipsis when shortened."""
    if max_width <= 0:
        return ""
    if _width(text) <= max_width:
        return text
    if max_width <= len(_ELLIPSIS):
        return _ELLIPSIS[:max_width]

    target = max_width - len(_ELLIPSIS)
    width = 0
    out = []
    for ch in text:
        ch_width = max(wcwidth(ch), 0)
        if width + ch_width > target:
            break
        width += ch_width
        out.append(ch)
    return "".join(out) + _ELLIPSIS


def render_song_history(buf: Buffer, area: Rect, songs: Sequence[Song], theme: Theme) -> None:
    inner = draw_block(
        buf,
        area,
        border_style=theme.border_style(),
        title=" Previously Played ",
        title_style=theme.title_style(),
    )
    if inner.height < 1 or inner.width < 10:
        return

    if not songs:
        render_paragraph(buf, inner, [Line(Span("No history available", theme.muted_style()))])
        return

    max_width = max(inner.width - 4, 0)
    lines = []
    for i, song in enumerate(songs[: inner.height]):
        display = song.title if not song.artist else f"{song.artist} - {song.title}"
        style = theme.normal_style() if i == 0 else theme.muted_style()
        lines.append(Line([Span("  ", style), Span(truncate_to_width(display, max_width), style)]))
    render_paragraph(buf, inner, lines)