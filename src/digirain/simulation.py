"""Falling-character simulation.

One call to :func:`step` advances the grid by a single frame.  Rows are
visited from the bottom up so a character moved into row ``r + 1`` has already
had its turn by the time row ``r`` is processed and cannot fall twice in the
same frame.  Columns never interact, which lets each row be handled as one
vectorised numpy operation.

The last row is a sink: nothing moves out of it, so characters that land
there stay until the grid is reallocated.
"""

from __future__ import annotations

from .alphabet import CharacterSource
from .grid import BLANK, GridBuffer


# Chance that a top-row cell receives a new character on a given frame.
SPAWN_PROBABILITY = 0.2


def fall(grid: GridBuffer, row: int) -> None:
    """Move every non-blank cell of ``row`` one row down.

    Whatever was in the destination cell is overwritten.  The last row never
    falls.
    """

    if row >= grid.rows - 1:
        return
    cells = grid.cells
    falling = cells[row] != BLANK
    cells[row + 1, falling] = cells[row, falling]
    cells[row, falling] = BLANK


def spawn(grid: GridBuffer, source: CharacterSource, probability: float = SPAWN_PROBABILITY) -> int:
    """Seed new characters into the top row and return how many were placed."""

    if grid.rows == 0 or grid.cols == 0:
        return 0
    chosen = source.chance(grid.cols, probability)
    placed = int(chosen.sum())
    if placed:
        grid.cells[0, chosen] = source.draw_many(placed)
    return placed


def step(grid: GridBuffer, source: CharacterSource, spawn_probability: float = SPAWN_PROBABILITY) -> None:
    """Advance ``grid`` by one frame in place."""

    for row in range(grid.rows - 1, -1, -1):
        fall(grid, row)
        if row == 0:
            # Spawning after the fall may refill a cell that just dropped its
            # character.
            spawn(grid, source, spawn_probability)


__all__ = ["SPAWN_PROBABILITY", "fall", "spawn", "step"]
