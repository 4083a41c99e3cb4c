"""A character-cell screen buffer with rectangles, layouts and bordered blocks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag

from confdeck.styles import Style


@dataclass(frozen=True)
class Rect:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def inner(self) -> Rect:
        """The area inside a one-cell border on every side."""
        return Rect(
            min(self.x + 1, self.right),
            min(self.y + 1, self.bottom),
            max(self.width - 2, 0),
            max(self.height - 2, 0),
        )

    def intersection(self, other: Rect) -> Rect:
        x, y = max(self.x, other.x), max(self.y, other.y)
        right, bottom = min(self.right, other.right), min(self.bottom, other.bottom)
        return Rect(x, y, max(right - x, 0), max(bottom - y, 0))


class ConstraintKind(Enum):
    LENGTH = "length"
    MIN = "min"
    FILL = "fill"


@dataclass(frozen=True)
class Constraint:
    """A size rule for one segment of a layout."""

    kind: ConstraintKind
    value: int = 0

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("constraint value cannot be negative")

    @classmethod
    def length(cls, value: int) -> Constraint:
        return cls(ConstraintKind.LENGTH, value)

    @classmethod
    def min(cls, value: int) -> Constraint:
        return cls(ConstraintKind.MIN, value)

    @classmethod
    def fill(cls, weight: int = 1) -> Constraint:
        return cls(ConstraintKind.FILL, weight)


class Borders(Flag):
    NONE = 0
    TOP = 1
    RIGHT = 2
    BOTTOM = 4
    LEFT = 8
    ALL = TOP | RIGHT | BOTTOM | LEFT


def _share(amount: int, weights: list[int]) -> list[int]:
    total = sum(weights)
    if total == 0:
        weights = [1] * len(weights)
        total = len(weights)
    shares = [amount * weight // total for weight in weights]
    remainder = amount - sum(shares)
    for position, weight in enumerate(weights):
        if remainder == 0:
            break
        if weight > 0:
            shares[position] += 1
            remainder -= 1
    return shares


def _sizes(total: int, constraints: list[Constraint]) -> list[int]:
    sizes: list[int] = []
    remaining = total
    for constraint in constraints:
        wanted = 0 if constraint.kind is ConstraintKind.FILL else constraint.value
        size = min(wanted, remaining)
        sizes.append(size)
        remaining -= size

    fills = [i for i, c in enumerate(constraints) if c.kind is ConstraintKind.FILL]
    growers = fills or [i for i, c in enumerate(constraints) if c.kind is ConstraintKind.MIN]
    if growers and remaining > 0:
        weights = [constraints[i].value if fills else 1 for i in growers]
        for position, extra in zip(growers, _share(remaining, weights)):
            sizes[position] += extra
    return sizes


def vertical(area: Rect, constraints: list[Constraint]) -> list[Rect]:
    """Split an area into rows; spare space goes to Fill, else Min segments."""
    rects = []
    y = area.y
    for size in _sizes(area.height, list(constraints)):
        rects.append(Rect(area.x, y, area.width, size))
        y += size
    return rects


def horizontal(area: Rect, constraints: list[Constraint]) -> list[Rect]:
    """Split an area into columns; spare space goes to Fill, else Min segments."""
    rects = []
    x = area.x
    for size in _sizes(area.width, list(constraints)):
        rects.append(Rect(x, area.y, size, area.height))
        x += size
    return rects


@dataclass(frozen=True)
class Cell:
    symbol: str = " "
    style: Style = Style()


class Frame:
    """A grid of styled cells that components draw into, with an optional cursor."""

    def __init__(self, width: int, height: int) -> None:
        self.area = Rect(0, 0, width, height)
        self._cells = [[Cell() for _ in range(width)] for _ in range(height)]
        self.cursor_position: tuple[int, int] | None = None

    def _put(self, x: int, y: int, symbol: str, style: Style) -> None:
        if 0 <= x < self.area.width and 0 <= y < self.area.height:
            self._cells[y][x] = Cell(symbol, style)

    def set_string(self, x: int, y: int, text: str, style: Style | None = None) -> None:
        """Write text starting at (x, y); what falls outside the frame is dropped."""
        style = style or Style()
        for offset, char in enumerate(text):
            self._put(x + offset, y, char, style)

    def draw_block(
        self,
        area: Rect,
        title: str = "",
        border_style: Style | None = None,
        borders: Borders = Borders.ALL,
    ) -> None:
        """Draw the chosen borders around an area, with the title on its top row."""
        style = border_style or Style()
        area = area.intersection(self.area)
        if area.width == 0 or area.height == 0:
            return
        left, right = area.x, area.right - 1
        top, bottom = area.y, area.bottom - 1
        if Borders.TOP in borders:
            for x in range(left, right + 1):
                self._put(x, top, "─", style)
        if Borders.BOTTOM in borders:
            for x in range(left, right + 1):
                self._put(x, bottom, "─", style)
        if Borders.LEFT in borders:
            for y in range(top, bottom + 1):
                self._put(left, y, "│", style)
        if Borders.RIGHT in borders:
            for y in range(top, bottom + 1):
                self._put(right, y, "│", style)
        for flags, x, y, symbol in (
            (Borders.TOP | Borders.LEFT, left, top, "┌"),
            (Borders.TOP | Borders.RIGHT, right, top, "┐"),
            (Borders.BOTTOM | Borders.LEFT, left, bottom, "└"),
            (Borders.BOTTOM | Borders.RIGHT, right, bottom, "┘"),
        ):
            if flags in borders:
                self._put(x, y, symbol, style)
        if title:
            start = left + (1 if Borders.LEFT in borders else 0)
            end = right + (0 if Borders.RIGHT in borders else 1)
            self.set_string(start, top, title[: max(end - start, 0)])

    def set_cursor_position(self, x: int, y: int) -> None:
        self.cursor_position = (x, y)

    def cell(self, x: int, y: int) -> Cell:
        if not (0 <= x < self.area.width and 0 <= y < self.area.height):
            raise IndexError(f"cell ({x}, {y}) is outside the frame")
        return self._cells[y][x]

    def lines(self) -> list[str]:
        """The frame's text, one string per row."""
        return ["".join(cell.symbol for cell in row) for row in self._cells]