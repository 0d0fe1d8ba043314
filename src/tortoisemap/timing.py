"""Elapsed-time measurement for map operations.

Measurement is a side effect only: a failure while recording or reporting a
timing is logged and swallowed so the measured operation always completes.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from tortoisemap.stats import TimingStats, compute_stats, format_duration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationTiming:
    """One measured operation.

    Attributes:
        label: Operation description, e.g. "find by key in HashMap".
        elapsed_ns: Wall-clock duration in nanoseconds.
    """

    label: str
    elapsed_ns: int


class PerformanceTracker:
    """Records and reports how long each operation took."""

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns) -> None:
        self.clock = clock
        self.timings: list[OperationTiming] = []

    def now(self) -> int:
        return self.clock()

    def display_operation_time(self, start_ns: int, label: str) -> None:
        """Record and log the time elapsed since ``start_ns``."""
        try:
            elapsed = self.clock() - start_ns
            self.timings.append(OperationTiming(label, elapsed))
            logger.info("%s: %s", label, format_duration(elapsed))
        except Exception:
            logger.warning("Could not measure '%s'", label, exc_info=True)

    @contextmanager
    def measure(self, label: str) -> Iterator[None]:
        """Time the enclosed block.

        Example:
            with tracker.measure("sort HashMap by key"):
                operations.sort_by_key()
        """
        try:
            start = self.clock()
        except Exception:
            logger.warning("Clock unavailable for '%s'", label, exc_info=True)
            yield
            return
        yield
        self.display_operation_time(start, label)

    def reset(self) -> None:
        self.timings.clear()

    def summary(self) -> dict[str, TimingStats]:
        """Per-label statistics over everything recorded so far."""
        grouped: dict[str, list[float]] = defaultdict(list)
        for timing in self.timings:
            grouped[timing.label].append(float(timing.elapsed_ns))
        return {label: compute_stats(times) for label, times in grouped.items()}
