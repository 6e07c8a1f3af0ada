import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from examples.profile_frames import log_summary, run_frames
from digirain.perf import FrameProfiler


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def test_log_summary_limits_rows_and_output(caplog):
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock)
    with profiler.section("render"):
        clock.advance(0.5)
    with profiler.section("simulate"):
        clock.advance(0.1)

    with caplog.at_level(logging.INFO, logger="examples.profile_frames"):
        summary = log_summary(profiler, limit=1)

    assert len(summary) == 1
    assert summary[0]["name"] == "render"
    message = "".join(caplog.messages)
    assert "render" in message
    assert "simulate" not in message


def test_run_frames_records_every_frame():
    profiler = FrameProfiler()
    grid = run_frames(frames=12, rows=6, cols=9, seed=3, profiler=profiler)
    stats = profiler.snapshot()
    assert stats["tick"].count == 12
    assert stats["render"].count == 12
    assert (grid.rows, grid.cols) == (6, 9)
    assert not grid.is_empty()
