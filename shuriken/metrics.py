"""Timing statistics for the "-d stats" debug mode."""

from __future__ import annotations

import math
import sys
import time
from dataclasses import dataclass, field
from typing import TextIO


def _now_micros() -> int:
    return time.perf_counter_ns() // 1000


@dataclass
class Metric:
    """A single tracked code path: how often it ran and for how long."""

    name: str
    count: int = 0
    sum: int = 0  # total microseconds


class ScopedMetric:
    """Context manager adding the time spent in its body to a metric."""

    def __init__(self, metric: Metric | None) -> None:
        self.metric = metric
        self._start = 0

    def __enter__(self) -> ScopedMetric:
        if self.metric is not None:
            self._start = _now_micros()
        return self

    def __exit__(self, *args: object) -> None:
        if self.metric is None:
            return
        self.metric.count += 1
        self.metric.sum += _now_micros() - self._start


@dataclass
class Metrics:
    """Holds all metrics and prints the summary report."""

    metrics: list[Metric] = field(default_factory=list)

    def new_metric(self, name: str) -> Metric:
        metric = Metric(name)
        self.metrics.append(metric)
        return metric

    def record(self, name: str) -> ScopedMetric:
        """Time a block under ``name``, creating the metric on first use."""
        for metric in self.metrics:
            if metric.name == name:
                return ScopedMetric(metric)
        return ScopedMetric(self.new_metric(name))

    def report(self, file: TextIO | None = None) -> None:
        """Print a summary table to ``file`` (stdout by default)."""
        out = file if file is not None else sys.stdout
        width = max((len(m.name) for m in self.metrics), default=0)
        out.write(f"{'metric':<{width}}\t{'count':<6}\t{'avg (us)':<9}\t{'total (ms)'}\n")
        for metric in self.metrics:
            total = metric.sum / 1000
            if metric.count:
                avg = metric.sum / metric.count
            else:
                avg = math.nan if metric.sum == 0 else math.copysign(math.inf, metric.sum)
            out.write(
                f"{metric.name:<{width}}\t{metric.count:<6d}\t{avg:<8.1f}\t{total:.1f}\n"
            )


class Stopwatch:
    """Measures seconds since the last :meth:`restart`."""

    def __init__(self) -> None:
        self._started = 0

    def restart(self) -> None:
        self._started = _now_micros()

    def elapsed(self) -> float:
        return 1e-6 * (_now_micros() - self._started)


def get_time_millis() -> int:
    """Current time in milliseconds relative to an arbitrary epoch."""
    return _now_micros() // 1000