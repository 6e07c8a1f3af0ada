import io
import os

import pytest

from digirain.terminal import (
    DigiRainError,
    Terminal,
    TerminalDimensions,
    TerminalQueryError,
)


class FakeTTY(io.StringIO):
    def fileno(self) -> int:
        return 42


def test_query_dimensions_rejects_non_terminal_stream():
    terminal = Terminal(io.StringIO())
    with pytest.raises(TerminalQueryError):
        terminal.query_dimensions()


def test_query_dimensions_rejects_non_tty_descriptor(monkeypatch):
    monkeypatch.setattr("digirain.terminal.os.isatty", lambda fd: False)
    with pytest.raises(TerminalQueryError, match="not a terminal"):
        Terminal(FakeTTY()).query_dimensions()


def test_query_dimensions_wraps_os_error(monkeypatch):
    def broken(fd):
        raise OSError("Inappropriate ioctl for device")

    monkeypatch.setattr("digirain.terminal.os.isatty", lambda fd: True)
    monkeypatch.setattr("digirain.terminal.os.get_terminal_size", broken)
    with pytest.raises(TerminalQueryError) as info:
        Terminal(FakeTTY()).query_dimensions()
    assert isinstance(info.value, DigiRainError)
    assert isinstance(info.value.__cause__, OSError)


def test_query_dimensions_reads_os_size(monkeypatch):
    monkeypatch.setattr("digirain.terminal.os.isatty", lambda fd: True)
    monkeypatch.setattr("digirain.terminal.os.get_terminal_size", lambda fd: os.terminal_size((80, 24)))
    assert Terminal(FakeTTY()).query_dimensions() == TerminalDimensions(rows=24, cols=80)


def test_control_sequences():
    stream = io.StringIO()
    terminal = Terminal(stream)
    terminal.hide_cursor()
    terminal.clear_screen()
    terminal.move_cursor_home()
    terminal.show_cursor()
    assert stream.getvalue() == "\x1b[?25l" "\x1b[2J\x1b[H" "\x1b[H" "\x1b[?25h"


def test_styled_and_plain_cells():
    stream = io.StringIO()
    terminal = Terminal(stream)
    terminal.write_styled_cell("k", True)
    terminal.write_styled_cell(" ", False)
    assert stream.getvalue() == "\x1b[92mk\x1b[0m "


def test_writes_to_closed_stream_are_ignored():
    stream = io.StringIO()
    stream.close()
    terminal = Terminal(stream)
    terminal.show_cursor()
    terminal.write_styled_cell("a", True)
