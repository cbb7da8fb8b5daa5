"""A cell buffer with the layout and text primitives the widgets draw with."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Sequence, Union

from wcwidth import wcwidth

from vibecast.ui.theme import Style


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def inner(self, margin: int = 1) -> "Rect":
        """The area left after removing `margin` cells from every side."""
        return Rect(
            self.x + margin,
            self.y + margin,
            max(self.width - 2 * margin, 0),
            max(self.height - 2 * margin, 0),
        )

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom


@dataclass
class Cell:
    char: str = " "
    style: Style = field(default_factory=Style)

    def set(self, char: str | None = None, style: Style | None = None) -> "Cell":
        """Replace the symbol and patch the style over the current one."""
        if char is not None:
            self.char = char
        if style is not None:
            self.style = Style(
                fg=style.fg if style.fg is not None else self.style.fg,
                bg=style.bg if style.bg is not None else self.style.bg,
                modifiers=self.style.modifiers | style.modifiers,
            )
        return self


def _char_width(ch: str) -> int:
    return max(wcwidth(ch), 0)


@dataclass
class Span:
    content: str
    style: Style = field(default_factory=Style)

    def width(self) -> int:
        return sum(_char_width(ch) for ch in self.content)


class Alignment(enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


LineItem = Union[Span, str]


@dataclass
class Line:
    """A row of styled spans; a plain string or a single span is accepted too."""

    spans: Union[Sequence[LineItem], LineItem] = ()
    alignment: Alignment | None = None

    def __post_init__(self) -> None:
        items: Iterable[LineItem]
        if isinstance(self.spans, (str, Span)):
            items = [self.spans]
        else:
            items = self.spans
        self.spans = [item if isinstance(item, Span) else Span(item) for item in items]

    def width(self) -> int:
        return sum(span.width() for span in self.spans)


class Buffer:
    """A grid of cells with its origin at (0, 0)."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("buffer dimensions must not be negative")
        self.area = Rect(0, 0, width, height)
        self._rows = [[Cell() for _ in range(width)] for _ in range(height)]

    def cell(self, x: int, y: int) -> Cell | None:
        """The cell at (x, y), or None when outside the buffer."""
        if not self.area.contains(x, y):
            return None
        return self._rows[y][x]

    def set_string(
        self,
        x: int,
        y: int,
        text: str,
        style: Style | None = None,
        max_width: int | None = None,
    ) -> int:
        """Write text from (x, y) without passing max_width; return the next x."""
        if not 0 <= y < self.area.height:
            return x
        limit = self.area.width if max_width is None else min(x + max(max_width, 0), self.area.width)
        for ch in text:
            width = _char_width(ch)
            if width == 0:
                continue
            if x + width > limit:
                break
            if x >= 0:
                self._rows[y][x].set(ch, style)
                for extra in range(1, width):
                    self._rows[y][x + extra].set("", style)
            x += width
        return x

    def set_line(self, x: int, y: int, line: Line, max_width: int | None = None) -> int:
        """Write every span of a line; return the next x."""
        remaining = max_width
        for span in line.spans:
            if remaining is not None and remaining <= 0:
                break
            end = self.set_string(x, y, span.content, span.style, remaining)
            if remaining is not None:
                remaining -= end - x
            x = end
        return x

    def clear(self, area: Rect) -> None:
        """Reset every cell of the area to a blank, unstyled cell."""
        for y in range(max(area.y, 0), min(area.bottom, self.area.height)):
            row = self._rows[y]
            for x in range(max(area.x, 0), min(area.right, self.area.width)):
                row[x] = Cell()

    def text_rows(self) -> list[str]:
        return ["".join(cell.char for cell in row) for row in self._rows]


class Direction(enum.Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class Constraint:
    kind: str
    value: int

    @classmethod
    def length(cls, value: int) -> "Constraint":
        return cls("length", value)

    @classmethod
    def percentage(cls, value: int) -> "Constraint":
        return cls("percentage", value)

    @classmethod
    def min(cls, value: int) -> "Constraint":
        return cls("min", value)


def split(
    area: Rect,
    constraints: Sequence[Constraint],
    direction: Direction = Direction.VERTICAL,
) -> list[Rect]:
    """Divide an area along one axis; spare space goes to Min constraints, else the last."""
    if not constraints:
        return []
    total = area.height if direction is Direction.VERTICAL else area.width
    sizes = []
    for constraint in constraints:
        if constraint.kind == "percentage":
            sizes.append(total * constraint.value // 100)
        else:
            sizes.append(max(constraint.value, 0))

    spare = total - sum(sizes)
    if spare > 0:
        growable = [i for i, c in enumerate(constraints) if c.kind == "min"]
        if not growable:
            growable = [len(constraints) - 1]
        share, rest = divmod(spare, len(growable))
        for i in growable:
            sizes[i] += share
        sizes[growable[-1]] += rest
    elif spare < 0:
        excess = -spare
        for i in reversed(range(len(sizes))):
            cut = min(sizes[i], excess)
            sizes[i] -= cut
            excess -= cut
            if excess == 0:
                break

    rects = []
    offset = 0
    for size in sizes:
        if direction is Direction.VERTICAL:
            rects.append(Rect(area.x, area.y + offset, area.width, size))
        else:
            rects.append(Rect(area.x + offset, area.y, size, area.height))
        offset += size
    return rects


def draw_block(
    buf: Buffer,
    area: Rect,
    border_style: Style | None = None,
    title: str | None = None,
    title_style: Style | None = None,
    background: Style | None = None,
) -> Rect:
    """Draw a bordered box with an optional title; return the area inside it."""
    if area.width <= 0 or area.height <= 0:
        return area.inner(1)
    if background is not None:
        for y in range(area.y, area.bottom):
            for x in range(area.x, area.right):
                cell = buf.cell(x, y)
                if cell is not None:
                    cell.set(style=background)

    def put(x: int, y: int, ch: str) -> None:
        cell = buf.cell(x, y)
        if cell is not None:
            cell.set(ch, border_style)

    last_x, last_y = area.right - 1, area.bottom - 1
    for x in range(area.x, area.right):
        put(x, area.y, "─")
        put(x, last_y, "─")
    for y in range(area.y, area.bottom):
        put(area.x, y, "│")
        put(last_x, y, "│")
    put(area.x, area.y, "┌")
    put(last_x, area.y, "┐")
    put(area.x, last_y, "└")
    put(last_x, last_y, "┘")

    if title and area.width > 2:
        buf.set_string(area.x + 1, area.y, title, title_style, area.width - 2)
    return area.inner(1)


def render_paragraph(
    buf: Buffer,
    area: Rect,
    lines: Sequence[Union[Line, Span, str]],
    alignment: Alignment = Alignment.LEFT,
) -> None:
    """Draw one line per row, cut at the area's width."""
    for row, item in zip(range(area.height), lines):
        line = item if isinstance(item, Line) else Line(item)
        align = line.alignment or alignment
        width = min(line.width(), area.width)
        if align is Alignment.RIGHT:
            offset = area.width - width
        elif align is Alignment.CENTER:
            offset = (area.width - width) // 2
        else:
            offset = 0
        buf.set_line(area.x + offset, area.y + row, line, area.width - offset)