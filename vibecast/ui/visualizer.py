"""Animated visualizations driven by the current audio energy."""

from __future__ import annotations

import enum
import math

from vibecast.spectrum import SpectrumData
from vibecast.ui.canvas import Buffer, Rect, draw_block
from vibecast.ui.theme import Color, Style, Theme

_SPIRO_CHARS = "·•○●◉★✦✧"
_SPIRAL_CHARS = "·•○●◉"
_RAIN_CHARS = "│┃|¦:"
_HEART = (
    " ♥♥ ♥♥ ",
    "♥♥♥♥♥♥♥",
    "♥♥♥♥♥♥♥",
    " ♥♥♥♥♥ ",
    "  ♥♥♥  ",
    "   ♥   ",
)
_TAU = math.pi * 2.0


class VisualizationMode(enum.Enum):
    SPIROGRAPH = "Spirograph"
    PULSE = "Pulse"
    WAVE = "Wave"
    BOUNCE = "Bounce"
    STARFIELD = "Stars"
    HEART = "Heart"
    SPIRAL = "Spiral"
    RAIN = "Rain"

    def next(self) -> "VisualizationMode":
        members = list(VisualizationMode)
        return members[(members.index(self) + 1) % len(members)]

    def label(self) -> str:
        return self.value


def _to_u16(value: float) -> int:
    """Saturating float-to-cell-coordinate conversion."""
    if math.isnan(value):
        return 0
    return int(min(max(value, 0.0), 65535.0))


def _fg(color: Color) -> Style:
    return Style(fg=color)


class Visualizer:
    """Draws one visualization mode into a bordered box."""

    def __init__(
        self,
        spectrum: SpectrumData,
        is_playing: bool,
        is_paused: bool,
        mode: VisualizationMode,
        frame: int,
        theme: Theme,
    ) -> None:
        self.spectrum = spectrum
        self.is_playing = is_playing
        self.is_paused = is_paused
        self.mode = mode
        self.frame = frame
        self.theme = theme

    def energy(self) -> float:
        value = self.spectrum.rms * 0.5 + self.spectrum.peak * 0.5
        return min(max(value, 0.0), 1.0)

    @staticmethod
    def _put(buf: Buffer, x: int, y: int, ch: str, style: Style) -> None:
        cell = buf.cell(x, y)
        if cell is not None:
            cell.set(ch, style)

    def _spirograph(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        energy = self.energy()
        time = self.frame * 0.03
        cx = area.x + area.width / 2.0
        cy = area.y + area.height / 2.0
        scale_x = area.width / 2.5
        scale_y = area.height / 2.5

        configs = (
            (5.0, 3.0, 2.5, theme.accent, 1.0),
            (7.0, 2.0, 1.5, theme.primary, -0.7),
            (6.0, 4.0, 3.0, theme.secondary, 0.5),
        )
        last_char = len(_SPIRO_CHARS) - 1
        for big_r, small_r, pen_d, base_color, rot_speed in configs:
            r_ratio = big_r / small_r
            d = pen_d * (0.5 + energy * 0.8)
            num_points = 200 + int(energy * 300.0)
            diff = big_r - small_r
            for i in range(num_points):
                fraction = i / num_points
                t = fraction * _TAU * r_ratio * 3.0
                animated_t = t + time * rot_speed * (1.0 + energy)
                x = diff * math.cos(animated_t) + d * math.cos(diff * animated_t / small_r)
                y = diff * math.sin(animated_t) - d * math.sin(diff * animated_t / small_r)
                px = _to_u16(cx + x * scale_x * 0.15)
                py = _to_u16(cy + y * scale_y * 0.3)
                if not area.contains(px, py):
                    continue
                intensity = math.fmod(fraction + energy, 1.0)
                char_idx = min(int(intensity * last_char), last_char)
                if intensity > 0.8:
                    color = theme.highlight
                elif intensity > 0.5:
                    color = base_color
                else:
                    color = theme.muted
                self._put(buf, px, py, _SPIRO_CHARS[char_idx], _fg(color))

        if energy > 0.6:
            center_char = "◉"
        elif energy > 0.3:
            center_char = "●"
        else:
            center_char = "○"
        center_x, center_y = _to_u16(cx), _to_u16(cy)
        if area.contains(center_x, center_y):
            self._put(buf, center_x, center_y, center_char, _fg(theme.highlight))

    def _pulse(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        cx = area.x + area.width // 2
        cy = area.y + area.height // 2
        energy = self.energy()
        speed = 0.05 + energy * 0.35
        time = self.frame * speed
        num_rings = 3 + int(energy * 4.0)
        colors = (theme.accent, theme.primary, theme.secondary, theme.highlight)
        steps = 48

        for ring in range(num_rings):
            ring_spacing = 1.0 + energy * 0.5
            phase = math.fmod(time + ring * ring_spacing, 8.0)
            max_expansion = 2.0 + energy * 4.0
            radius = phase * max_expansion
            intensity = (1.0 - phase / 8.0) * (0.2 + energy * 0.8)
            if intensity < 0.05:
                continue
            style = _fg(colors[ring % len(colors)])
            if intensity > 0.7:
                ch = "█"
            elif intensity > 0.5:
                ch = "●"
            elif intensity > 0.3:
                ch = "○"
            else:
                ch = "·"
            for step in range(steps):
                angle = step / steps * _TAU
                xi = _to_u16(cx + math.cos(angle) * radius * 2.0)
                yi = _to_u16(cy + math.sin(angle) * radius)
                if area.contains(xi, yi):
                    self._put(buf, xi, yi, ch, style)

    def _wave(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        energy = self.energy()
        time = self.frame * 0.2
        mid_y = area.y + area.height // 2
        style = _fg(theme.highlight if energy > 0.5 else theme.accent)
        trail_style = _fg(theme.primary)
        bottom = area.y + area.height - 1

        for x in range(area.x, area.right):
            pos = (x - area.x) / area.width
            wave1 = math.sin(pos * 8.0 + time)
            wave2 = math.sin(pos * 12.0 - time * 1.3) * 0.5
            wave3 = math.cos(pos * 4.0 + time * 0.7) * 0.3
            combined = (wave1 + wave2 + wave3) / 1.8
            amplitude = (area.height / 2.0 - 1.0) * (0.2 + energy * 0.8)
            y_offset = int(combined * amplitude)
            y = min(max(mid_y + y_offset, area.y), bottom)

            self._put(buf, x, y, "█", style)
            if y > area.y:
                self._put(buf, x, y - 1, "▄", trail_style)
            if y < bottom:
                self._put(buf, x, y + 1, "▀", trail_style)

    def _bounce(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        energy = self.energy()
        time = self.frame * 0.1
        balls = (
            ("●", 0.0, theme.accent, 1.0, 0.15),
            ("◉", 1.3, theme.primary, 1.2, 0.25),
            ("○", 2.6, theme.secondary, 0.9, 0.35),
            ("◆", 3.9, theme.highlight, 1.1, 0.45),
            ("★", 5.2, theme.accent, 0.8, 0.55),
            ("♦", 6.5, theme.primary, 1.3, 0.65),
            ("●", 7.8, theme.secondary, 1.0, 0.75),
            ("◉", 9.1, theme.highlight, 0.85, 0.85),
        )
        last_row = area.y + area.height - 1

        for ch, phase_offset, color, speed_mult, x_pos in balls:
            bounce_height = (area.height - 2.0) * (0.3 + energy * 0.7)
            bounce = _to_u16(abs(math.sin(time * speed_mult + phase_offset)) * bounce_height)
            base_x = area.x + area.width * x_pos
            x_wave = math.sin(time * 0.5 + phase_offset) * (area.width * 0.08)
            x = _to_u16(min(max(base_x + x_wave, float(area.x)), float(area.right - 1)))
            y = last_row - min(bounce, area.height - 1)

            if area.contains(x, y):
                self._put(buf, x, y, ch, _fg(color))

            if area.height > 2:
                shadow_char = "." if bounce > area.height // 2 else "─"
                if area.x <= x < area.right:
                    self._put(buf, x, last_row, shadow_char, _fg(theme.muted))

    def _starfield(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        energy = self.energy()
        time = float(self.frame)
        cx = area.width / 2.0
        cy = area.height / 2.0
        reach = max(cx, cy) * 1.5

        for i in range(120):
            seed = (i * 7919 + 1) % 10000
            angle = seed / 10000.0 * _TAU
            base_dist = ((seed * 3) % 10000) / 10000.0
            speed = 0.1 + energy * 0.2
            dist = math.fmod(base_dist + time * speed * 0.005, 1.0) * reach

            x = area.x + _to_u16(cx + math.cos(angle) * dist * 2.0)
            y = area.y + _to_u16(cy + math.sin(angle) * dist)
            if not area.contains(x, y):
                continue
            brightness = dist / reach
            if brightness > 0.7:
                ch, color = "★", theme.highlight
            elif brightness > 0.4:
                ch, color = "✦", theme.accent
            elif brightness > 0.2:
                ch, color = "·", theme.primary
            else:
                ch, color = ".", theme.muted
            self._put(buf, x, y, ch, _fg(color))

    def _heart(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        energy = self.energy()
        time = self.frame * 0.15
        heart_height = len(_HEART)
        heart_width = max(len(row) for row in _HEART)
        configs = (
            (area.width // 6, theme.accent, 0.0),
            (area.width // 2, theme.primary, 1.0),
            (area.width * 5 // 6, theme.secondary, 2.0),
        )
        cy = area.y + area.height // 2

        for x_offset, base_color, phase_offset in configs:
            pulse = (math.sin(time + phase_offset) * 0.5 + 0.5) * energy
            if pulse > 0.6:
                style = _fg(theme.highlight)
            elif pulse > 0.3:
                style = _fg(base_color)
            else:
                style = _fg(theme.muted)

            cx = area.x + x_offset
            start_y = max(cy - heart_height // 2, 0)
            start_x = max(cx - heart_width // 2, 0)
            for row, text in enumerate(_HEART):
                y = start_y + row
                if y >= area.bottom:
                    break
                for col, ch in enumerate(text):
                    x = start_x + col
                    if area.x <= x < area.right and y >= area.y and ch != " ":
                        self._put(buf, x, y, ch, style)

    def _spiral(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        energy = self.energy()
        time = self.frame * 0.1
        configs = (
            (area.width // 6, theme.accent, 1.0),
            (area.width // 2, theme.primary, -1.0),
            (area.width * 5 // 6, theme.secondary, 1.0),
        )
        last_char = len(_SPIRAL_CHARS) - 1

        for x_offset, color, direction in configs:
            cx = area.x + float(x_offset)
            cy = area.y + area.height / 2.0
            max_radius = min(area.width / 3.0, float(area.height))
            for arm in range(3):
                arm_offset = arm / 3.0 * _TAU
                for i in range(40):
                    t = i / 40.0
                    radius = t * max_radius * (0.5 + energy * 0.5)
                    angle = t * math.pi * 4.0 + time * direction * (1.0 + energy) + arm_offset
                    x = _to_u16(cx + math.cos(angle) * radius * 0.8)
                    y = _to_u16(cy + math.sin(angle) * radius * 0.4)
                    if not area.contains(x, y):
                        continue
                    char_idx = min(int(t * 4.0), last_char)
                    point_color = theme.highlight if t > 0.7 else color
                    self._put(buf, x, y, _SPIRAL_CHARS[char_idx], _fg(point_color))

    def _rain(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        energy = self.energy()
        time = self.frame
        num_drops = int(15.0 + energy * 25.0)
        if energy > 0.6:
            drop_len = 4
        elif energy > 0.3:
            drop_len = 3
        else:
            drop_len = 2
        trail_colors = (theme.highlight, theme.accent, theme.primary)

        for i in range(num_drops):
            seed = (i * 7919) % 10000
            x = area.x + _to_u16(seed / 10000.0 * area.width)
            base_speed = 0.02 + energy * 0.04 + (seed % 100) / 2000.0
            y_offset = _to_u16(
                math.fmod(time * base_speed + seed * 0.02, area.height + 10.0)
            )
            if y_offset >= area.height:
                continue
            y = area.y + y_offset
            for d in range(drop_len):
                dy = max(y - d, 0)
                if area.y <= dy < area.bottom and x < area.right:
                    color = trail_colors[d] if d < len(trail_colors) else theme.muted
                    self._put(buf, x, dy, _RAIN_CHARS[d % len(_RAIN_CHARS)], _fg(color))

        if energy > 0.2:
            splash_y = area.bottom - 1
            for i in range(int(energy * 8.0)):
                seed = (i * 13 + time // 3) % 1000
                x = area.x + seed % area.width
                self._put(buf, x, splash_y, "∙", _fg(theme.accent))

    def render(self, buf: Buffer, area: Rect) -> None:
        theme = self.theme
        inner = draw_block(
            buf,
            area,
            border_style=theme.border_style(),
            title=" Visualizer ",
            title_style=theme.title_style(),
        )
        if inner.width < 4 or inner.height < 1:
            return

        if self.is_playing and not self.is_paused:
            painters = {
                VisualizationMode.SPIROGRAPH: self._spirograph,
                VisualizationMode.PULSE: self._pulse,
                VisualizationMode.WAVE: self._wave,
                VisualizationMode.BOUNCE: self._bounce,
                VisualizationMode.STARFIELD: self._starfield,
                VisualizationMode.HEART: self._heart,
                VisualizationMode.SPIRAL: self._spiral,
                VisualizationMode.RAIN: self._rain,
            }
            painters[self.mode](buf, inner)

        mid_y = inner.y + inner.height // 2
        if self.is_paused and inner.width > 10:
            msg = "PAUSED"
            x = inner.x + (inner.width - len(msg)) // 2
            for i, ch in enumerate(msg):
                self._put(buf, x + i, mid_y, ch, theme.paused_style())

        if not self.is_playing and inner.width > 20:
            msg = "Select a station to play"
            x = inner.x + max(inner.width - len(msg), 0) // 2
            for i, ch in enumerate(msg):
                if x + i < inner.right:
                    self._put(buf, x + i, mid_y, ch, theme.muted_style())