"""The one-line status bar at the bottom of the screen."""

from __future__ import annotations

from vibecast.ui.canvas import Buffer, Line, Rect, Span, render_paragraph
from vibecast.ui.theme import Theme


def volume_bar(volume: int) -> str:
    """A ten-cell bar showing the volume percentage."""
    filled = min(volume * 10 // 100, 10)
    return "█" * filled + "░" * (10 - filled)


def status_line(
    is_playing: bool, is_paused: bool, volume: int, theme_name: str, theme: Theme
) -> Line:
    if not is_playing:
        icon, text, status_style = "■", "Stopped", theme.muted_style()
    elif is_paused:
        icon, text, status_style = "⏸", "Paused ", theme.paused_style()
    else:
        icon, text, status_style = "▶", "Playing", theme.playing_style()

    muted = theme.muted_style()
    selected = theme.selected_style()
    separator = Span(" │ ", muted)
    return Line(
        [
            Span(f" {icon} ", status_style),
            Span(text, status_style),
            separator,
            Span("Vol: ", muted),
            Span(volume_bar(volume), theme.normal_style()),
            Span(f" {volume:>3}%", muted),
            separator,
            Span(f"{theme_name:<10}", selected),
            separator,
            Span("[p]", selected),
            Span("lay ", muted),
            Span("[f]", selected),
            Span("av ", muted),
            Span("[v]", selected),
            Span("iz ", muted),
            Span("[?]", selected),
            Span("help", muted),
        ]
    )


def render_status_bar(
    buf: Buffer,
    area: Rect,
    is_playing: bool,
    is_paused: bool,
    volume: int,
    theme_name: str,
    theme: Theme,
) -> None:
    render_paragraph(
        buf, area, [status_line(is_playing, is_paused, volume, theme_name, theme)]
    )