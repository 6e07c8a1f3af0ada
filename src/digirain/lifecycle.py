"""Session lifecycle: start-up, signal handling and terminal restoration.

A :class:`Session` moves through ``STARTING -> RUNNING -> SHUTTING_DOWN ->
TERMINATED``.  SIGINT and SIGTERM do not tear anything down themselves; the
handler only sets the session's stop flag.  The main loop notices the flag
between ticks and calls :meth:`Session.shutdown`, which restores the terminal
at most once no matter how many paths ask for it (loop exit, signal, atexit).
Nothing in here ends the process; :func:`digirain.app.main` returns the exit
status to its caller.
"""

from __future__ import annotations

import atexit
import logging
import signal
import threading
from enum import Enum
from typing import Dict, Optional

from .alphabet import CharacterSource
from .grid import GridBuffer
from .perf import FrameProfiler, format_summary
from .scheduler import FRAME_INTERVAL_S, FrameScheduler, StopRequest
from .simulation import SPAWN_PROBABILITY
from .terminal import Terminal, TerminalQueryError


LOGGER = logging.getLogger(__name__)

FAREWELL = "Exiting..."

# Every shutdown path exits cleanly, including the terminal-error path.
EXIT_OK = 0

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class LifecycleState(str, Enum):
    """Phases of a :class:`Session`."""

    STARTING = "starting"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class Session:
    """Own the terminal, the grid and the scheduler for one run."""

    def __init__(
        self,
        terminal: Optional[Terminal] = None,
        source: Optional[CharacterSource] = None,
        *,
        interval: float = FRAME_INTERVAL_S,
        spawn_probability: float = SPAWN_PROBABILITY,
        profiler: Optional[FrameProfiler] = None,
        install_signals: bool = True,
        farewell: str = FAREWELL,
    ) -> None:
        self.terminal = terminal if terminal is not None else Terminal()
        self.source = source
        self.interval = interval
        self.spawn_probability = spawn_probability
        self.profiler = profiler
        self.install_signals = install_signals
        self.farewell = farewell
        self.state = LifecycleState.STARTING
        self.scheduler: Optional[FrameScheduler] = None
        self.error: Optional[TerminalQueryError] = None
        self.stop_event = StopRequest()
        self.received_signal: Optional[int] = None
        self._shutdown_lock = threading.Lock()
        self._shutdown_done = False
        self._terminal_prepared = False
        self._previous_handlers: Dict[int, object] = {}

    @property
    def shut_down(self) -> bool:
        return self._shutdown_done

    def start(self) -> FrameScheduler:
        """Prepare the terminal and build the scheduler.

        Raises:
            TerminalQueryError: If the initial terminal size cannot be read.
                The terminal is left untouched in that case.
        """

        if self.source is None:
            self.source = CharacterSource()
        dims = self.terminal.query_dimensions()
        if self.profiler is None:
            self.profiler = FrameProfiler(budget=self.interval, enabled=LOGGER.isEnabledFor(logging.DEBUG))
        self.scheduler = FrameScheduler(
            self.terminal,
            self.source,
            GridBuffer.initialize(dims.rows, dims.cols),
            interval=self.interval,
            spawn_probability=self.spawn_probability,
            profiler=self.profiler,
        )

        self.terminal.hide_cursor()
        self.terminal.clear_screen()
        self._terminal_prepared = True
        atexit.register(self.shutdown)
        if self.install_signals:
            self._install_signal_handlers()

        self.state = LifecycleState.RUNNING
        LOGGER.debug("Session running at %dx%d", dims.cols, dims.rows)
        return self.scheduler

    def _install_signal_handlers(self) -> None:
        for signum in HANDLED_SIGNALS:
            try:
                self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)
            except ValueError:
                # signal.signal only works from the main thread
                LOGGER.debug("Cannot install handler for %s outside the main thread", signum)

    def _restore_signal_handlers(self) -> None:
        for signum, handler in self._previous_handlers.items():
            try:
                signal.signal(signum, handler)
            except ValueError:
                LOGGER.debug("Cannot restore handler for %s outside the main thread", signum)
        self._previous_handlers.clear()

    def _handle_signal(self, signum, frame) -> None:
        # Runs between bytecodes of the main thread: no locks, no logging.
        self.received_signal = signum
        self.request_shutdown()

    def request_shutdown(self) -> None:
        """Ask the running loop to stop after the current tick."""

        self.stop_event.set()

    def shutdown(self) -> bool:
        """Restore the terminal and say goodbye.

        Only the first call does anything; later or concurrent calls return
        ``False`` straight away.
        """

        with self._shutdown_lock:
            if self._shutdown_done:
                return False
            self._shutdown_done = True

        self.state = LifecycleState.SHUTTING_DOWN
        if self.received_signal is not None:
            LOGGER.debug("Received %s, stopping", signal.Signals(self.received_signal).name)
        self.stop_event.set()
        try:
            # Our handlers stay installed until the terminal is restored, so a
            # signal arriving now only sets the stop flag again.
            if self._terminal_prepared:
                self.terminal.show_cursor()
                self.terminal.clear_screen()
                self.terminal.write(self.farewell + "\n")
                self.terminal.flush()
                atexit.unregister(self.shutdown)
        finally:
            self._restore_signal_handlers()
        if self.profiler is not None and self.profiler.enabled:
            LOGGER.debug("Frame timings: %s", format_summary(self.profiler.summary()))
        self.state = LifecycleState.TERMINATED
        return True

    def run(self) -> int:
        """Run the animation until interrupted and return the exit status."""

        try:
            try:
                scheduler = self.start()
            except TerminalQueryError as exc:
                LOGGER.error("Error initializing terminal: %s", exc)
                self.error = exc
            else:
                self.error = scheduler.run(self.stop_event)
        except KeyboardInterrupt:
            # Ctrl-C before the handlers were installed.
            pass
        finally:
            self.shutdown()
        return EXIT_OK


__all__ = ["EXIT_OK", "FAREWELL", "LifecycleState", "Session"]
