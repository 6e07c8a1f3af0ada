"""Frame timing statistics for the animation loop."""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional


@dataclass
class FrameStat:
    """Aggregated timings for one section of the frame pipeline."""

    count: int = 0
    total: float = 0.0
    min_time: Optional[float] = None
    max_time: float = 0.0

    def add(self, elapsed: float) -> None:
        self.count += 1
        self.total += elapsed
        if self.min_time is None or elapsed < self.min_time:
            self.min_time = elapsed
        if elapsed > self.max_time:
            self.max_time = elapsed

    @property
    def average(self) -> float:
        """Return the average time in seconds."""

        return self.total / self.count if self.count else 0.0


class _Section:
    """Context manager timing one named section."""

    __slots__ = ("_profiler", "_name", "_start")

    def __init__(self, profiler: "FrameProfiler", name: str) -> None:
        self._profiler = profiler
        self._name = name
        self._start: Optional[float] = None

    def __enter__(self) -> "_Section":
        if self._profiler.enabled:
            self._start = self._profiler._clock()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self._profiler.record(self._name, self._profiler._clock() - self._start)
            self._start = None
        return False


class FrameProfiler:
    """Collect per-section frame timings and count interval overruns.

    ``budget`` is the frame interval in seconds; any ``tick`` section that
    takes longer is counted in :attr:`overruns`.
    """

    def __init__(
        self,
        *,
        budget: Optional[float] = None,
        clock: Optional[Callable[[], float]] = None,
        enabled: bool = True,
    ) -> None:
        self._clock = clock or time.perf_counter
        self.budget = budget
        self.enabled = enabled
        self.overruns = 0
        self._stats: Dict[str, FrameStat] = {}

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def reset(self) -> None:
        """Drop all collected statistics."""

        self._stats.clear()
        self.overruns = 0

    def record(self, name: str, elapsed: float) -> None:
        if not self.enabled:
            return
        stat = self._stats.get(name)
        if stat is None:
            stat = FrameStat()
            self._stats[name] = stat
        stat.add(elapsed)
        if name == "tick" and self.budget is not None and elapsed > self.budget:
            self.overruns += 1

    def section(self, name: str) -> _Section:
        """Return a context manager tracking ``name``'s runtime."""

        return _Section(self, name)

    def snapshot(self) -> Dict[str, FrameStat]:
        return {name: replace(stat) for name, stat in self._stats.items()}

    def summary(self, *, sort_by: str = "total", descending: bool = True) -> List[Dict[str, float | int]]:
        """Return one row per section, sorted by ``sort_by``.

        Raises:
            ValueError: If ``sort_by`` is not a known column.
        """

        key_map = {
            "total": lambda item: item[1].total,
            "count": lambda item: item[1].count,
            "average": lambda item: item[1].average,
            "max": lambda item: item[1].max_time,
            "min": lambda item: item[1].min_time if item[1].min_time is not None else 0.0,
        }
        if sort_by not in key_map:
            raise ValueError(f"Unknown sort key: {sort_by}")
        items = sorted(self._stats.items(), key=key_map[sort_by], reverse=descending)
        return [
            {
                "name": name,
                "count": stat.count,
                "total": stat.total,
                "average": stat.average,
                "min": stat.min_time if stat.min_time is not None else 0.0,
                "max": stat.max_time,
            }
            for name, stat in items
        ]


def format_summary(summary: List[Dict[str, float | int]], limit: int = 10) -> str:
    """Render ``summary`` rows as a single log-friendly line."""

    if not summary:
        return "No timings recorded."
    parts: List[str] = []
    for row in summary[:limit]:
        parts.append(
            f"{row['name']}: total={row['total'] * 1000.0:.3f}ms, "
            f"count={int(row['count'])}, avg={row['average'] * 1000.0:.3f}ms, "
            f"max={row['max'] * 1000.0:.3f}ms"
        )
    return "; ".join(parts)


__all__ = ["FrameProfiler", "FrameStat", "format_summary"]
