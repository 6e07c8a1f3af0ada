"""Falling-character ("digital rain") animation for the terminal."""

from .alphabet import ALPHABET, CharacterSource
from .grid import BLANK, GridBuffer, create_empty_grid, resize_if_changed
from .terminal import DigiRainError, Terminal, TerminalDimensions, TerminalQueryError
from .simulation import SPAWN_PROBABILITY, step
from .render import frame_text, render_frame
from .perf import FrameProfiler, FrameStat
from .scheduler import FRAME_INTERVAL_S, FrameScheduler, StopRequest
from .lifecycle import LifecycleState, Session

__all__ = [
    "ALPHABET",
    "BLANK",
    "CharacterSource",
    "DigiRainError",
    "FRAME_INTERVAL_S",
    "FrameProfiler",
    "FrameScheduler",
    "FrameStat",
    "GridBuffer",
    "LifecycleState",
    "SPAWN_PROBABILITY",
    "Session",
    "StopRequest",
    "Terminal",
    "TerminalDimensions",
    "TerminalQueryError",
    "create_empty_grid",
    "frame_text",
    "render_frame",
    "resize_if_changed",
    "step",
]
