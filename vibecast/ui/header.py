"""The title bar across the top of the screen."""

from __future__ import annotations

from vibecast.ui.canvas import Alignment, Buffer, Line, Rect, Span, draw_block, render_paragraph
from vibecast.ui.theme import Modifier, Style, Theme

TITLE = "VIBECAST"


def render_header(buf: Buffer, area: Rect, station_name: str | None, theme: Theme) -> None:
    """Draw the banded title on the left and the current station on the right."""
    inner = draw_block(buf, area, border_style=theme.border_style())

    colors = (theme.primary, theme.secondary, theme.accent)
    title = Line(
        [
            Span(ch, Style(fg=colors[i % len(colors)], modifiers=Modifier.BOLD))
            for i, ch in enumerate(TITLE)
        ]
    )
    render_paragraph(
        buf, Rect(inner.x + 1, inner.y, max(inner.width - 2, 0), 1), [title]
    )

    right_text = f"Now Playing: {station_name}" if station_name is not None else ""
    if right_text and inner.width > 30:
        right = Line(Span(right_text, theme.selected_style()))
        right_len = right.width()
        right_x = inner.x + max(inner.width - (right_len + 1), 0)
        width = min(right_len, inner.right - right_x)
        render_paragraph(buf, Rect(right_x, inner.y, width, 1), [right], Alignment.RIGHT)