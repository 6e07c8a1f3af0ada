"""Grid buffer holding one frame of the animation."""

from __future__ import annotations

from typing import List

import numpy as np
from numpy.typing import NDArray


BLANK = " "

Cells = NDArray[np.str_]


def create_empty_grid(rows: int, cols: int) -> Cells:
    """Return a ``(rows, cols)`` array of blank cells.

    Negative dimensions are treated as zero so a collapsed terminal still gets
    a (zero-cell) buffer.
    """

    return np.full((max(0, rows), max(0, cols)), BLANK, dtype="<U1")


class GridBuffer:
    """Character matrix sized to the terminal."""

    def __init__(self, rows: int = 0, cols: int = 0) -> None:
        self.cells: Cells = create_empty_grid(rows, cols)

    @classmethod
    def initialize(cls, rows: int, cols: int) -> "GridBuffer":
        return cls(rows, cols)

    @property
    def rows(self) -> int:
        return int(self.cells.shape[0])

    @property
    def cols(self) -> int:
        return int(self.cells.shape[1])

    @property
    def size(self) -> int:
        return int(self.cells.size)

    def get_cell(self, row: int, col: int) -> str:
        """Return the character at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return str(self.cells[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, char: str) -> None:
        """Set the character at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """
        if 0 <= row < self.rows and 0 <= col < self.cols:
            self.cells[row, col] = char
        else:
            raise IndexError("Cell out of bounds")

    def is_blank(self, row: int, col: int) -> bool:
        return self.get_cell(row, col) == BLANK

    def is_empty(self) -> bool:
        """Return ``True`` if every cell is blank."""

        return bool(np.all(self.cells == BLANK))

    def rows_as_text(self) -> List[str]:
        """Return each row joined into a plain string."""

        return ["".join(row) for row in self.cells.tolist()]


def resize_if_changed(current: GridBuffer, new_rows: int, new_cols: int) -> GridBuffer:
    """Return a buffer sized ``new_rows`` x ``new_cols``.

    ``current`` is returned untouched when the size already matches.
    Otherwise a fresh blank buffer is allocated: content is not carried over,
    so a resize restarts the animation.
    """

    if (max(0, new_rows), max(0, new_cols)) == (current.rows, current.cols):
        return current
    return GridBuffer(new_rows, new_cols)


__all__ = ["BLANK", "GridBuffer", "create_empty_grid", "resize_if_changed"]
