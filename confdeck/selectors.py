"""Cyclic selection over a list and over rows of varying length."""

from __future__ import annotations


class Selector:
    """An index into a sequence of fixed length that wraps at both ends."""

    def __init__(self, length: int, start_from: int = 0) -> None:
        if start_from >= length:
            raise ValueError("Start index cannot be greater than length.")
        self._length = length
        self.index = start_from

    def prev(self) -> None:
        if self._length > 1:
            self.index = (self.index - 1) % self._length

    def next(self) -> None:
        if self._length > 1:
            self.index = (self.index + 1) % self._length


class Selector2D:
    """A (row, column) cursor over rows of different lengths, wrapping in both directions."""

    def __init__(self, row_lengths: list[int]) -> None:
        self._row_lengths = list(row_lengths)
        self._row = 0
        self._col = 0

    def move_left(self) -> None:
        length = self._row_lengths[self._row]
        if length > 1:
            self._col = (self._col - 1) % length

    def move_right(self) -> None:
        length = self._row_lengths[self._row]
        if length > 1:
            self._col = (self._col + 1) % length

    def move_up(self) -> None:
        rows = len(self._row_lengths)
        if rows > 1:
            self._row = (self._row - 1) % rows
            self._clamp_column()

    def move_down(self) -> None:
        rows = len(self._row_lengths)
        if rows > 1:
            self._row = (self._row + 1) % rows
            self._clamp_column()

    def selected(self) -> tuple[int, int]:
        return (self._row, self._col)

    def _clamp_column(self) -> None:
        length = self._row_lengths[self._row]
        if self._col >= length:
            self._col = max(length - 1, 0)