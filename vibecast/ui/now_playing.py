"""The panel describing the station and song currently playing."""

from __future__ import annotations

from vibecast.api import AudioQuality, Channel, Song
from vibecast.ui.artwork import ArtworkState
from vibecast.ui.canvas import (
    Buffer,
    Constraint,
    Line,
    Rect,
    Span,
    draw_block,
    render_paragraph,
    split,
)
from vibecast.ui.theme import Modifier, Style, Theme

ART_WIDTH = 16
ART_MAX_HEIGHT = 8


def song_lines(
    song: Song | None, stream_title: str | None, has_channel: bool, theme: Theme
) -> list[Line]:
    """The lines describing the current song, from listings or the stream title."""
    note = Span("♫ ", Style(fg=theme.accent))
    bold = theme.normal_style().add_modifier(Modifier.BOLD)
    artist_style = Style(fg=theme.secondary)

    if song is not None:
        lines = [
            Line([note, Span(song.title, bold)]),
            Line([Span("  by ", theme.muted_style()), Span(song.artist, artist_style)]),
        ]
        if song.album:
            lines.append(
                Line([Span("  from ", theme.muted_style()), Span(song.album, theme.muted_style())])
            )
        return lines

    if stream_title is not None:
        artist, sep, title = stream_title.partition(" - ")
        if sep:
            return [
                Line([note, Span(title, bold)]),
                Line([Span("  by ", theme.muted_style()), Span(artist, artist_style)]),
            ]
        return [Line([note, Span(stream_title, theme.normal_style())])]

    if has_channel:
        return [Line(Span("Loading song info...", theme.muted_style()))]
    return []


def _render_content(
    buf: Buffer,
    area: Rect,
    channel: Channel | None,
    song: Song | None,
    stream_title: str | None,
    is_paused: bool,
    audio_quality: AudioQuality,
    theme: Theme,
) -> None:
    if area.height < 3 or area.width < 15:
        return

    station_area, _separator, song_area = split(
        area, [Constraint.length(2), Constraint.length(1), Constraint.min(3)]
    )

    if channel is not None:
        status = "⏸" if is_paused else "▶"
        status_style = theme.paused_style() if is_paused else theme.playing_style()
        station = Line(
            [
                Span(f"{status} ", status_style),
                Span(channel.title, theme.selected_style()),
                Span(" ", theme.muted_style()),
                Span(f"[{audio_quality.label()}]", Style(fg=theme.accent)),
            ]
        )
        render_paragraph(buf, station_area, [station])

        if station_area.height > 1:
            muted = theme.muted_style()
            genre = Line(
                [
                    Span("  ", muted),
                    Span(channel.genre, muted),
                    Span(" • ", muted),
                    Span(f"{channel.listeners} listeners", muted),
                ]
            )
            genre_area = Rect(station_area.x, station_area.y + 1, station_area.width, 1)
            render_paragraph(buf, genre_area, [genre])
    else:
        render_paragraph(
            buf, station_area, [Line(Span("No station selected", theme.muted_style()))]
        )

    lines = song_lines(song, stream_title, channel is not None, theme)
    if lines:
        render_paragraph(buf, song_area, lines)


def render_now_playing(
    buf: Buffer,
    area: Rect,
    artwork: ArtworkState,
    channel: Channel | None,
    song: Song | None,
    stream_title: str | None,
    is_paused: bool,
    audio_quality: AudioQuality,
    show_artwork: bool,
    theme: Theme,
) -> None:
    """Draw the boxed panel, with artwork on the left when there is room."""
    inner = draw_block(
        buf,
        area,
        border_style=theme.border_style(),
        title=" Now Playing ",
        title_style=theme.title_style(),
    )
    if inner.height < 4 or inner.width < 20:
        return

    content_area = inner
    if show_artwork and artwork.has_image() and inner.width >= 40:
        art_area = Rect(inner.x, inner.y, ART_WIDTH, min(inner.height, ART_MAX_HEIGHT))
        artwork.render(buf, art_area)
        content_area = Rect(
            inner.x + ART_WIDTH + 1,
            inner.y,
            max(inner.width - (ART_WIDTH + 1), 0),
            inner.height,
        )

    _render_content(
        buf, content_area, channel, song, stream_title, is_paused, audio_quality, theme
    )