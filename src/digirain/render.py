"""Serialise the grid to the terminal."""

from __future__ import annotations

from .grid import BLANK, GridBuffer
from .terminal import ACCENT_COLOR, Terminal, styled_cell


def frame_text(grid: GridBuffer, accent: str = ACCENT_COLOR) -> str:
    """Return the full frame as text.

    Non-blank cells are wrapped in the accent colour, blank cells are plain
    spaces.  Rows are separated by newlines with none after the last row, so
    drawing a full-height frame never scrolls the terminal.
    """

    if grid.size == 0:
        return ""
    lines = []
    for row in grid.cells.tolist():
        lines.append("".join(styled_cell(char, char != BLANK, accent) for char in row))
    return "\n".join(lines)


def render_frame(grid: GridBuffer, terminal: Terminal) -> None:
    """Redraw every cell of ``grid`` starting from the top-left corner."""

    terminal.move_cursor_home()
    terminal.write(frame_text(grid, terminal.accent))
    terminal.flush()


__all__ = ["frame_text", "render_frame"]
