"""A character grid that the views draw on, with simple layout helpers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """Foreground colours used by the views."""

    WHITE = "white"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    CYAN = "cyan"
    GRAY = "gray"


@dataclass(frozen=True)
class Rect:
    """A rectangular area of the screen."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """The first column past the area."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """The first row past the area."""
        return self.y + self.height

    def inner(self, margin: int = 1) -> Rect:
        """Shrink by ``margin`` cells on every side; too small an area becomes empty."""
        if self.width < 2 * margin or self.height < 2 * margin:
            return Rect(self.x, self.y, 0, 0)
        return Rect(
            self.x + margin,
            self.y + margin,
            self.width - 2 * margin,
            self.height - 2 * margin,
        )


_CONSTRAINT_KINDS = ("length", "min")


def split_vertical(
    area: Rect, constraints: Sequence[tuple[str, int]], margin: int = 0
) -> list[Rect]:
    """Split ``area`` into stacked rows.

    Each constraint is ``("length", n)`` for exactly ``n`` rows or ``("min", n)``
    for at least ``n`` rows; spare rows go to the ``min`` constraints. Rows that do
    not fit are cut from the bottom.
    """
    inner = area.inner(margin) if margin else area
    sizes = []
    for kind, value in constraints:
        if kind not in _CONSTRAINT_KINDS:
            raise ValueError(f"unknown constraint kind: {kind!r}")
        if value < 0:
            raise ValueError(f"constraint size must not be negative: {value}")
        sizes.append(value)

    spare = inner.height - sum(sizes)
    flexible = [i for i, (kind, _) in enumerate(constraints) if kind == "min"]
    if spare > 0 and flexible:
        share, extra = divmod(spare, len(flexible))
        for position, index in enumerate(flexible):
            sizes[index] += share + (1 if position < extra else 0)

    rects = []
    y = inner.y
    for size in sizes:
        height = max(0, min(size, inner.bottom - y))
        rects.append(Rect(inner.x, y, inner.width, height))
        y += height
    return rects


class Canvas:
    """A grid of characters, each with an optional colour."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("canvas size must not be negative")
        self.width = width
        self.height = height
        self.chars: list[list[str]] = [[" "] * width for _ in range(height)]
        self.colors: list[list[Color | None]] = [[None] * width for _ in range(height)]

    @property
    def area(self) -> Rect:
        """The whole canvas as a rectangle."""
        return Rect(0, 0, self.width, self.height)

    def write(self, x: int, y: int, text: str, color: Color | None = None) -> int:
        """Write ``text`` from ``(x, y)`` rightwards, clipped to the canvas.

        Returns the number of cells written.
        """
        if not 0 <= y < self.height:
            return 0
        written = 0
        for offset, char in enumerate(text):
            column = x + offset
            if column >= self.width:
                break
            if column < 0:
                continue
            self.chars[y][column] = char
            self.colors[y][column] = color
            written += 1
        return written

    def draw_box(self, rect: Rect, title: str | None = None, color: Color | None = None) -> None:
        """Draw a border around ``rect`` with an optional title on its top edge."""
        if rect.width < 2 or rect.height < 2:
            return
        span = "─" * (rect.width - 2)
        self.write(rect.x, rect.y, f"┌{span}┐", color)
        self.write(rect.x, rect.bottom - 1, f"└{span}┘", color)
        for y in range(rect.y + 1, rect.bottom - 1):
            self.write(rect.x, y, "│", color)
            self.write(rect.right - 1, y, "│", color)
        if title:
            self.write(rect.x + 1, rect.y, title[: rect.width - 2])

    def row_text(self, y: int) -> str:
        """The characters of row ``y`` as a string."""
        return "".join(self.chars[y])

    def lines(self) -> list[str]:
        """Every row of the canvas as a string."""
        return [self.row_text(y) for y in range(self.height)]