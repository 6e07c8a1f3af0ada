"""Profile the simulate/render pipeline using :mod:`digirain.perf`.

Run with::

    PYTHONPATH=src python examples/profile_frames.py

Frames are rendered into an in-memory buffer, so no terminal is needed.  Pass
``--help`` to see options for the grid size and the number of frames.
"""

from __future__ import annotations

import argparse
import io
import logging

from digirain.alphabet import CharacterSource
from digirain.grid import GridBuffer
from digirain.perf import FrameProfiler, format_summary
from digirain.render import render_frame
from digirain.scheduler import FRAME_INTERVAL_S
from digirain.simulation import step
from digirain.terminal import Terminal


LOGGER = logging.getLogger(__name__)


def run_frames(frames: int, rows: int, cols: int, seed: int, profiler: FrameProfiler) -> GridBuffer:
    grid = GridBuffer.initialize(rows, cols)
    source = CharacterSource(seed)
    terminal = Terminal(io.StringIO())
    for _ in range(frames):
        with profiler.section("tick"):
            with profiler.section("simulate"):
                step(grid, source)
            with profiler.section("render"):
                render_frame(grid, terminal)
        # Keep the buffer from growing across the whole run.
        terminal.stream.seek(0)
        terminal.stream.truncate()
    return grid


def print_summary(profiler: FrameProfiler, limit: int = 10) -> None:
    summary = profiler.summary(sort_by="total")
    if not summary:
        print("No timings recorded.")
        return
    width = max(len(row["name"]) for row in summary[:limit])
    header = f"{'Section':<{width}}  Total (ms)  Count  Avg (ms)  Max (ms)"
    print(header)
    print("-" * len(header))
    for row in summary[:limit]:
        print(
            f"{row['name']:<{width}}  {row['total'] * 1000.0:10.3f}"
            f"  {int(row['count']):5d}  {row['average'] * 1000.0:8.3f}  {row['max'] * 1000.0:8.3f}"
        )
    print(f"Frames over the {FRAME_INTERVAL_S * 1000.0:.0f}ms budget: {profiler.overruns}")


def log_summary(profiler: FrameProfiler, *, limit: int) -> list[dict[str, float | int]]:
    summary = profiler.summary(sort_by="total")
    limit = max(0, limit)
    limited_summary = summary[:limit] if limit else []
    LOGGER.info(
        "Frame performance (%d overruns): %s",
        profiler.overruns,
        format_summary(limited_summary, limit=limit),
    )
    return limited_summary


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--frames", type=int, default=300, help="Number of frames to simulate.")
    parser.add_argument("--rows", type=int, default=50, help="Grid height in cells.")
    parser.add_argument("--cols", type=int, default=200, help="Grid width in cells.")
    parser.add_argument("--seed", type=int, default=42, help="Seed for the character source.")
    parser.add_argument(
        "--summary-limit",
        type=int,
        default=10,
        help="Maximum number of sections to include in summaries.",
    )
    parser.add_argument(
        "--no-table",
        dest="print_table",
        action="store_false",
        help="Skip printing the final tabular summary (logging only).",
    )
    parser.set_defaults(print_table=True)
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    profiler = FrameProfiler(budget=FRAME_INTERVAL_S)
    run_frames(args.frames, args.rows, args.cols, args.seed, profiler)
    log_summary(profiler, limit=args.summary_limit)
    if args.print_table:
        print_summary(profiler, limit=args.summary_limit)


if __name__ == "__main__":
    main()
