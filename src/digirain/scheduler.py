"""Fixed-rate frame scheduler.

Each tick runs, in order: dimension query, resize check, simulation step and
render.  Ticks never overlap.  When a tick runs over the interval the next
one starts right away; missed frames are not made up.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .alphabet import CharacterSource
from .grid import GridBuffer, resize_if_changed
from .perf import FrameProfiler
from .render import render_frame
from .simulation import SPAWN_PROBABILITY, step
from .terminal import Terminal, TerminalQueryError


LOGGER = logging.getLogger(__name__)

# 66 ms between frames, roughly 15 frames per second.
FRAME_INTERVAL_S = 0.066


class StopRequest:
    """Stop flag that is safe to set from a signal handler.

    Setting it takes no lock, so a handler that interrupts :meth:`wait` on
    the same thread cannot deadlock.  The wait is a plain sleep: a signal
    stops the loop at the end of the current frame interval at the latest.
    """

    def __init__(self, sleep: Optional[Callable[[float], None]] = None) -> None:
        self._sleep = sleep or time.sleep
        self._requested = False

    def set(self) -> None:
        self._requested = True

    def is_set(self) -> bool:
        return self._requested

    def wait(self, timeout: float) -> bool:
        """Sleep for ``timeout`` seconds unless a stop was already requested."""

        if not self._requested:
            self._sleep(timeout)
        return self._requested


class FrameScheduler:
    """Drive the simulation and render steps at a fixed interval."""

    def __init__(
        self,
        terminal: Terminal,
        source: CharacterSource,
        grid: Optional[GridBuffer] = None,
        *,
        interval: float = FRAME_INTERVAL_S,
        spawn_probability: float = SPAWN_PROBABILITY,
        profiler: Optional[FrameProfiler] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.terminal = terminal
        self.source = source
        self.grid = grid if grid is not None else GridBuffer()
        self.interval = interval
        self.spawn_probability = spawn_probability
        self.profiler = profiler if profiler is not None else FrameProfiler(enabled=False)
        self._clock = clock or time.monotonic
        self.frames = 0

    def check_resize(self) -> bool:
        """Reallocate the grid if the terminal changed size.

        Returns ``True`` when a new grid was allocated.

        Raises:
            TerminalQueryError: If the terminal size cannot be read.
        """

        dims = self.terminal.query_dimensions()
        resized = resize_if_changed(self.grid, dims.rows, dims.cols)
        if resized is self.grid:
            return False
        LOGGER.debug("Terminal resized to %dx%d, resetting grid", dims.cols, dims.rows)
        self.grid = resized
        return True

    def tick(self) -> None:
        """Run one complete frame."""

        with self.profiler.section("tick"):
            with self.profiler.section("resize"):
                self.check_resize()
            with self.profiler.section("simulate"):
                step(self.grid, self.source, self.spawn_probability)
            with self.profiler.section("render"):
                render_frame(self.grid, self.terminal)
        self.frames += 1

    def run(self, stop: StopRequest, max_frames: Optional[int] = None) -> Optional[TerminalQueryError]:
        """Tick until ``stop`` is set, ``max_frames`` ran or the terminal fails.

        The stop request is checked between ticks only.  Returns the error
        that ended the loop, or ``None`` for a requested stop.
        """

        while not stop.is_set():
            if max_frames is not None and self.frames >= max_frames:
                break
            started = self._clock()
            try:
                self.tick()
            except TerminalQueryError as exc:
                LOGGER.error("Error resizing terminal: %s", exc)
                return exc
            remaining = self.interval - (self._clock() - started)
            if remaining > 0:
                stop.wait(remaining)
        return None


__all__ = ["FRAME_INTERVAL_S", "FrameScheduler", "StopRequest"]
