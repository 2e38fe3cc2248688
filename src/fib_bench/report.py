"""Repeated benchmark runs and their summary."""

from __future__ import annotations

import json
import logging
import os
import statistics
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List

from .calculator import compute
from .errors import BenchmarkError
from .timing import measure

logger = logging.getLogger(__name__)

__all__ = ["BenchmarkReport", "run_benchmark"]


@dataclass
class BenchmarkReport:
    """Outcome of timing ``compute(n)`` one or more times."""

    n: int
    value: int
    timings: List[float] = field(default_factory=list)
    warmup: int = 0
    started_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def runs(self) -> int:
        return len(self.timings)

    @property
    def best(self) -> float:
        return min(self.timings)

    @property
    def worst(self) -> float:
        return max(self.timings)

    @property
    def mean(self) -> float:
        return statistics.mean(self.timings)

    @property
    def stdev(self) -> float:
        if len(self.timings) < 2:
            return 0.0
        return statistics.stdev(self.timings)

    @property
    def total(self) -> float:
        return sum(self.timings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.started_at,
            "n": self.n,
            "value": self.value,
            "warmup": self.warmup,
            "summary": {
                "runs": self.runs,
                "best_seconds": self.best,
                "mean_seconds": self.mean,
                "worst_seconds": self.worst,
                "stdev_seconds": self.stdev,
                "total_seconds": self.total,
            },
            "timings_seconds": list(self.timings),
        }

    def save(self, path: str) -> str:
        """Write the report as indented JSON and return the path written."""
        output_dir = os.path.dirname(path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info({"event": "report_write", "status": "success", "destination": path})
        return path


def run_benchmark(
    n: int,
    repeat: int = 1,
    warmup: int = 0,
    clock: Callable[[], float] = time.perf_counter,
) -> BenchmarkReport:
    """Time ``compute(n)`` ``repeat`` times after ``warmup`` untimed calls.

    Raises
    ------
    BenchmarkError
        If ``repeat < 1``, ``warmup < 0``, or two runs return different
        values.
    """
    if repeat < 1:
        raise BenchmarkError(f"repeat must be at least 1, got {repeat}")
    if warmup < 0:
        raise BenchmarkError(f"warmup must be non-negative, got {warmup}")

    started_at = datetime.now().isoformat()
    logger.info({"event": "benchmark_start", "n": n, "repeat": repeat, "warmup": warmup})
    for _ in range(warmup):
        compute(n)

    report = None
    for run in range(repeat):
        value, elapsed = measure(compute, n, clock=clock)
        if report is None:
            report = BenchmarkReport(n=n, value=value, warmup=warmup, started_at=started_at)
        elif value != report.value:
            raise BenchmarkError(f"run {run} returned {value}, expected {report.value}")
        report.timings.append(elapsed)
        logger.debug({"event": "benchmark_run", "run": run, "elapsed_seconds": elapsed})

    logger.info({"event": "benchmark_end", "n": n, "runs": report.runs,
                 "best_seconds": report.best, "mean_seconds": report.mean})
    return report
