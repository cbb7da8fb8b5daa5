"""Colour themes and text styles."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int


class Modifier(enum.Flag):
    NONE = 0
    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    REVERSED = enum.auto()


@dataclass(frozen=True)
class Style:
    """Foreground, background and modifiers; None colours inherit."""

    fg: Color | None = None
    bg: Color | None = None
    modifiers: Modifier = field(default=Modifier.NONE)

    def fg_color(self, color: Color) -> "Style":
        return replace(self, fg=color)

    def bg_color(self, color: Color) -> "Style":
        return replace(self, bg=color)

    def add_modifier(self, modifier: Modifier) -> "Style":
        return replace(self, modifiers=self.modifiers | modifier)


class ThemeType(enum.Enum):
    SYNTHWAVE = "Synthwave"
    OCEAN = "Ocean"
    FOREST = "Forest"
    SUNSET = "Sunset"
    MONOCHROME = "Mono"
    CYBERPUNK = "Cyberpunk"

    def next(self) -> "ThemeType":
        members = list(ThemeType)
        return members[(members.index(self) + 1) % len(members)]

    def label(self) -> str:
        return self.value


_PALETTES: dict[ThemeType, tuple[tuple[int, int, int], ...]] = {
    # background, foreground, primary, secondary, accent, muted, highlight, success, warning
    ThemeType.SYNTHWAVE: (
        (20, 12, 28), (255, 230, 250), (255, 0, 128), (0, 255, 255), (255, 100, 200),
        (120, 80, 140), (255, 220, 0), (0, 255, 180), (255, 180, 0),
    ),
    ThemeType.OCEAN: (
        (10, 25, 47), (200, 220, 240), (100, 180, 255), (0, 200, 180), (150, 220, 255),
        (70, 100, 130), (255, 200, 100), (80, 220, 150), (255, 180, 80),
    ),
    ThemeType.FOREST: (
        (15, 25, 15), (220, 235, 210), (120, 200, 80), (180, 140, 80), (200, 230, 150),
        (80, 100, 70), (255, 200, 80), (100, 220, 100), (220, 180, 60),
    ),
    ThemeType.SUNSET: (
        (30, 15, 25), (255, 240, 230), (255, 100, 50), (255, 180, 100), (255, 80, 120),
        (140, 90, 100), (255, 220, 100), (150, 230, 120), (255, 200, 80),
    ),
    ThemeType.MONOCHROME: (
        (15, 15, 15), (220, 220, 220), (255, 255, 255), (180, 180, 180), (200, 200, 200),
        (100, 100, 100), (255, 255, 255), (180, 255, 180), (255, 220, 150),
    ),
    ThemeType.CYBERPUNK: (
        (10, 10, 20), (0, 255, 65), (0, 255, 65), (255, 0, 100), (0, 200, 255),
        (0, 100, 40), (255, 255, 0), (0, 255, 100), (255, 150, 0),
    ),
}


@dataclass(frozen=True)
class Theme:
    name: str
    background: Color
    foreground: Color
    primary: Color
    secondary: Color
    accent: Color
    muted: Color
    highlight: Color
    success: Color
    warning: Color

    @classmethod
    def from_type(cls, theme_type: ThemeType) -> "Theme":
        colors = [Color(*rgb) for rgb in _PALETTES[theme_type]]
        return cls(theme_type.label(), *colors)

    @classmethod
    def default(cls) -> "Theme":
        return cls.from_type(ThemeType.CYBERPUNK)

    def title_style(self) -> Style:
        return Style(fg=self.primary, modifiers=Modifier.BOLD)

    def normal_style(self) -> Style:
        return Style(fg=self.foreground)

    def muted_style(self) -> Style:
        return Style(fg=self.muted)

    def highlight_style(self) -> Style:
        return Style(fg=self.background, bg=self.primary, modifiers=Modifier.BOLD)

    def selected_style(self) -> Style:
        return Style(fg=self.accent, modifiers=Modifier.BOLD)

    def favorite_style(self) -> Style:
        return Style(fg=self.highlight)

    def playing_style(self) -> Style:
        return Style(fg=self.success, modifiers=Modifier.BOLD)

    def paused_style(self) -> Style:
        return Style(fg=self.warning, modifiers=Modifier.BOLD)

    def border_style(self) -> Style:
        return Style(fg=self.muted)

    def active_border_style(self) -> Style:
        return Style(fg=self.primary)

    def spectrum_colors(self) -> tuple[Color, Color, Color, Color]:
        """Visualizer colours from low to high."""
        return (self.secondary, self.primary, self.accent, self.highlight)