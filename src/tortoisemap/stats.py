"""Statistics over repeated operation timings.

Timings are collected in nanoseconds by ``PerformanceTracker``. This module
summarises them:
- IQR-based outlier detection
- Coefficient of Variation (CV) for judging stability
- Repeating a runner until the CV target is reached
"""

from __future__ import annotations

import statistics
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TimingStats:
    """Statistical summary of repeated timings of one operation.

    Attributes:
        times: Raw timings in nanoseconds.
        mean: Arithmetic mean of the retained timings.
        median: Median of the retained timings.
        stddev: Sample standard deviation.
        cv: Coefficient of variation (stddev/mean).
        min: Fastest retained timing.
        max: Slowest retained timing.
        iqr: Interquartile range.
        outliers: Timings excluded as outliers.
        runs: Number of measurements taken.
    """

    times: tuple[float, ...]
    mean: float
    median: float
    stddev: float
    cv: float
    min: float
    max: float
    iqr: float
    outliers: tuple[float, ...] = field(default_factory=tuple)
    runs: int = 0


EMPTY_STATS = TimingStats(
    times=(), mean=0.0, median=0.0, stddev=0.0, cv=0.0, min=0.0, max=0.0, iqr=0.0
)


def compute_quartiles(data: list[float]) -> tuple[float, float, float]:
    """Return (Q1, median, Q3); with fewer than 4 values all three are the median."""
    if len(data) < 4:
        med = statistics.median(data)
        return med, med, med

    ordered = sorted(data)
    half = len(ordered) // 2
    lower = ordered[:half]
    upper = ordered[half + len(ordered) % 2 :]
    return statistics.median(lower), statistics.median(ordered), statistics.median(upper)


def detect_outliers(data: list[float], factor: float = 1.5) -> list[float]:
    """Values outside [Q1 - factor*IQR, Q3 + factor*IQR]."""
    if len(data) < 4:
        return []

    q1, _, q3 = compute_quartiles(data)
    spread = factor * (q3 - q1)
    return [x for x in data if x < q1 - spread or x > q3 + spread]


def compute_stats(times: list[float], remove_outliers: bool = True) -> TimingStats:
    """Summarise timing measurements.

    Args:
        times: Timings in nanoseconds.
        remove_outliers: Exclude IQR outliers from the summary figures.

    Returns:
        TimingStats; all zeros when ``times`` is empty.
    """
    if not times:
        return EMPTY_STATS

    outliers = detect_outliers(times)
    kept = times
    if remove_outliers and outliers:
        excluded = set(outliers)
        kept = [t for t in times if t not in excluded]
        # Too few left to say anything useful
        if len(kept) < 2:
            kept = times

    mean = statistics.mean(kept)
    stddev = statistics.stdev(kept) if len(kept) > 1 else 0.0
    q1, median, q3 = compute_quartiles(kept)

    return TimingStats(
        times=tuple(times),
        mean=mean,
        median=median,
        stddev=stddev,
        cv=stddev / mean if mean > 0 else 0.0,
        min=min(kept),
        max=max(kept),
        iqr=q3 - q1,
        outliers=tuple(outliers),
        runs=len(times),
    )


def run_until_stable(
    runner: Callable[[], float],
    min_runs: int = 5,
    max_runs: int = 50,
    target_cv: float = 0.05,
    warmup: int = 1,
) -> TimingStats:
    """Call ``runner`` until its timings settle.

    Warmup calls are discarded. After ``min_runs`` measurements, runs continue
    one at a time until the CV drops to ``target_cv`` or ``max_runs`` is hit.

    Args:
        runner: Callable returning one timing in nanoseconds.
        min_runs: Measurements taken before the CV is checked.
        max_runs: Upper bound on measurements.
        target_cv: CV at which to stop.
        warmup: Discarded initial calls.
    """
    for _ in range(warmup):
        runner()

    times = [runner() for _ in range(min_runs)]
    while len(times) < max_runs:
        mean = statistics.mean(times)
        if mean > 0 and len(times) > 1 and statistics.stdev(times) / mean <= target_cv:
            break
        times.append(runner())

    return compute_stats(times)


def format_duration(nanoseconds: float) -> str:
    """Human-readable duration, e.g. ``"850ns"``, ``"12.3us"``, ``"4.56ms"``."""
    if nanoseconds < 1_000:
        return f"{nanoseconds:.0f}ns"
    if nanoseconds < 1_000_000:
        return f"{nanoseconds / 1_000:.1f}us"
    return f"{nanoseconds / 1_000_000:.2f}ms"


def format_stats(stats: TimingStats) -> str:
    """One-line summary like ``"12.3us +/- 1.1us (CV=8.94%, 20 runs)"``."""
    return (
        f"{format_duration(stats.mean)} +/- {format_duration(stats.stddev)} "
        f"(CV={stats.cv * 100:.2f}%, {stats.runs} runs)"
    )
