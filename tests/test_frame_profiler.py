import pytest

from digirain.perf import FrameProfiler, format_summary


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def test_profiler_records_basic_stats():
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock)
    with profiler.section("render"):
        clock.advance(0.5)
    summary = profiler.summary()
    assert len(summary) == 1
    row = summary[0]
    assert row["name"] == "render"
    assert row["count"] == 1
    assert row["total"] == pytest.approx(0.5)
    assert row["average"] == pytest.approx(0.5)
    assert row["min"] == pytest.approx(0.5)
    assert row["max"] == pytest.approx(0.5)


def test_overruns_count_only_slow_ticks():
    clock = FakeClock()
    profiler = FrameProfiler(budget=0.066, clock=clock)
    for delta in (0.01, 0.1, 0.05, 0.2):
        with profiler.section("tick"):
            clock.advance(delta)
    with profiler.section("render"):
        clock.advance(1.0)
    assert profiler.overruns == 2


def test_summary_sorting_and_errors():
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock)
    with profiler.section("a"):
        clock.advance(0.1)
    with profiler.section("b"):
        clock.advance(0.3)
    assert [row["name"] for row in profiler.summary(sort_by="total")] == ["b", "a"]
    assert profiler.summary(sort_by="max", descending=False)[0]["name"] == "a"
    with pytest.raises(ValueError):
        profiler.summary(sort_by="unknown")


def test_disable_enable_and_reset():
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock, budget=0.0)
    profiler.disable()
    with profiler.section("tick"):
        clock.advance(0.4)
    assert profiler.summary() == []
    assert profiler.overruns == 0
    profiler.enable()
    with profiler.section("tick"):
        clock.advance(0.2)
    assert profiler.summary()[0]["name"] == "tick"
    profiler.reset()
    assert profiler.summary() == []
    assert profiler.overruns == 0


def test_format_summary():
    assert format_summary([]) == "No timings recorded."
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock)
    with profiler.section("simulate"):
        clock.advance(0.002)
    text = format_summary(profiler.summary())
    assert text.startswith("simulate: total=2.000ms")
