"""Station artwork drawn with half-block characters."""

from __future__ import annotations

from PIL import Image

from vibecast.ui.canvas import Buffer, Rect
from vibecast.ui.theme import Color, Style

_HALF_BLOCK = "▀"


class ArtworkState:
    """The image currently shown, resized on demand to the drawing area."""

    def __init__(self) -> None:
        self._image: Image.Image | None = None
        self._url: str | None = None
        self._fitted: tuple[tuple[int, int], Image.Image] | None = None

    @property
    def current_url(self) -> str | None:
        return self._url

    def set_image(self, image: Image.Image, url: str) -> None:
        self._image = image.convert("RGB")
        self._url = url
        self._fitted = None

    def clear(self) -> None:
        self._image = None
        self._url = None
        self._fitted = None

    def has_image(self) -> bool:
        return self._image is not None

    def _fit(self, width: int, height: int) -> Image.Image:
        key = (width, height)
        if self._fitted is not None and self._fitted[0] == key:
            return self._fitted[1]
        assert self._image is not None
        src_w, src_h = self._image.size
        scale = min(width / src_w, height / src_h)
        size = (
            min(max(round(src_w * scale), 1), width),
            min(max(round(src_h * scale), 1), height),
        )
        fitted = self._image.resize(size, Image.Resampling.LANCZOS)
        self._fitted = (key, fitted)
        return fitted

    def render(self, buf: Buffer, area: Rect) -> None:
        """Draw the image to fit the area, two pixel rows per cell row."""
        if self._image is None or area.width <= 0 or area.height <= 0:
            return
        image = self._fit(area.width, area.height * 2)
        width, height = image.size
        pixels = image.load()
        for row in range((height + 1) // 2):
            top_y = row * 2
            for col in range(width):
                cell = buf.cell(area.x + col, area.y + row)
                if cell is None:
                    continue
                style = Style(fg=Color(*pixels[col, top_y][:3]))
                if top_y + 1 < height:
                    style = style.bg_color(Color(*pixels[col, top_y + 1][:3]))
                cell.set(_HALF_BLOCK, style)