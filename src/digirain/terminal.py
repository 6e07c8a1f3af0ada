"""Terminal surface used by the animator.

Everything the animator sends to the screen goes through :class:`Terminal`:
raw ANSI control sequences, styled cells and whole frames.  The class wraps a
text stream (``sys.stdout`` by default) so tests can hand it an in-memory
buffer instead of a real terminal.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO


LOGGER = logging.getLogger(__name__)

ESC = "\x1b"
HIDE_CURSOR = f"{ESC}[?25l"
SHOW_CURSOR = f"{ESC}[?25h"
CLEAR_SCREEN = f"{ESC}[2J"
CURSOR_HOME = f"{ESC}[H"
RESET_STYLE = f"{ESC}[0m"

# Bright green foreground.
ACCENT_COLOR = f"{ESC}[92m"


class DigiRainError(Exception):
    """Base class for errors raised by the animator."""


class TerminalQueryError(DigiRainError):
    """Raised when the terminal dimensions cannot be determined."""


@dataclass(frozen=True)
class TerminalDimensions:
    """Visible size of the terminal in character cells."""

    rows: int
    cols: int


def styled_cell(char: str, styled: bool, accent: str = ACCENT_COLOR) -> str:
    """Return ``char`` wrapped in the accent colour when ``styled`` is set."""

    if styled:
        return f"{accent}{char}{RESET_STYLE}"
    return char


class Terminal:
    """Thin wrapper around an output stream that speaks ANSI."""

    def __init__(self, stream: Optional[TextIO] = None, *, accent: str = ACCENT_COLOR) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.accent = accent

    def query_dimensions(self) -> TerminalDimensions:
        """Return the current ``(rows, cols)`` of the terminal.

        Raises:
            TerminalQueryError: If the stream is not attached to a terminal or
                the operating system refuses to report its size.
        """

        try:
            fd = self.stream.fileno()
        except (AttributeError, OSError, ValueError) as exc:
            raise TerminalQueryError(f"output stream has no file descriptor: {exc}") from exc
        if not os.isatty(fd):
            raise TerminalQueryError("output stream is not a terminal")
        try:
            size = os.get_terminal_size(fd)
        except (OSError, ValueError) as exc:
            raise TerminalQueryError(str(exc)) from exc
        return TerminalDimensions(rows=size.lines, cols=size.columns)

    def write(self, text: str) -> None:
        """Write ``text`` to the stream, ignoring a closed or broken stream."""

        try:
            self.stream.write(text)
        except (OSError, ValueError) as exc:
            LOGGER.debug("Terminal write failed: %s", exc)

    def flush(self) -> None:
        try:
            self.stream.flush()
        except (OSError, ValueError) as exc:
            LOGGER.debug("Terminal flush failed: %s", exc)

    def _control(self, sequence: str) -> None:
        self.write(sequence)
        self.flush()

    def hide_cursor(self) -> None:
        self._control(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._control(SHOW_CURSOR)

    def clear_screen(self) -> None:
        """Clear the whole screen and park the cursor top-left."""

        self._control(CLEAR_SCREEN + CURSOR_HOME)

    def move_cursor_home(self) -> None:
        self._control(CURSOR_HOME)

    def write_styled_cell(self, char: str, styled: bool) -> None:
        """Write a single cell, coloured with the accent when ``styled``.

        The render step does not call this per cell: it builds the whole frame
        with :func:`styled_cell` and writes it in one go.
        """

        self.write(styled_cell(char, styled, self.accent))


__all__ = [
    "ACCENT_COLOR",
    "DigiRainError",
    "Terminal",
    "TerminalDimensions",
    "TerminalQueryError",
    "styled_cell",
]
