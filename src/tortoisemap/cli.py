"""Command-line interface.

Provides the `tortoisemap` command with subcommands for:
- Running the map demonstration
- Timing repeated demonstrations
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tortoisemap.config import DEFAULT_SCENARIO, Scenario, load_scenario_config
from tortoisemap.demo import Demonstration
from tortoisemap.logging_config import setup_logging
from tortoisemap.stats import format_stats, run_until_stable
from tortoisemap.timing import PerformanceTracker

VARIANT_CHOICES = {
    "hash": ("hash",),
    "linked": ("linked",),
    "all": ("hash", "linked"),
}


def _load_scenario(args: argparse.Namespace) -> Scenario | None:
    if not args.scenario:
        return DEFAULT_SCENARIO

    scenario_path = Path(args.scenario)
    if not scenario_path.exists():
        print(f"Error: Scenario file not found: {scenario_path}")
        return None

    try:
        return load_scenario_config(scenario_path)
    except (ValueError, OSError) as e:
        print(f"Error loading scenario: {e}")
        return None


def cmd_run(args: argparse.Namespace) -> int:
    """Run the demonstration once and print every outcome."""
    scenario = _load_scenario(args)
    if scenario is None:
        return 1

    demo = Demonstration.from_scenario(
        scenario,
        variants=VARIANT_CHOICES[args.variant],
        sort_by_value=args.sort_by_value,
    )
    report = demo.execute_data_operations()

    for line in report.lines():
        print(line)
    return 0


def cmd_bench(args: argparse.Namespace) -> int:
    """Repeat the demonstration on fresh maps and print timing statistics."""
    scenario = _load_scenario(args)
    if scenario is None:
        return 1

    if args.min_runs < 1 or args.max_runs < args.min_runs:
        print("Error: need 1 <= --min-runs <= --max-runs")
        return 1

    tracker = PerformanceTracker()

    # Per-operation timings go to the tracker; the runner reports the total
    def runner() -> float:
        start = tracker.now()
        Demonstration.from_scenario(scenario, tracker=tracker).execute_data_operations()
        return float(tracker.now() - start)

    # Per-operation INFO lines would drown the table
    timing_logger = logging.getLogger("tortoisemap.timing")
    previous_level = timing_logger.level
    timing_logger.setLevel(logging.WARNING)
    try:
        total = run_until_stable(
            runner,
            min_runs=args.min_runs,
            max_runs=args.max_runs,
            target_cv=args.cv_target,
            warmup=0,
        )
    finally:
        timing_logger.setLevel(previous_level)

    print(f"Scenario: {scenario.name}")
    print("=" * 80)
    print(f"{'Operation':<45} Timing")
    print("-" * 80)
    for label, stats in sorted(tracker.summary().items()):
        print(f"{label:<45} {format_stats(stats)}")
    print("-" * 80)
    print(f"{'whole demonstration':<45} {format_stats(total)}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tortoisemap",
        description="Find, add, remove and sort operations over tortoise maps",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    parser.add_argument(
        "--log-file",
        help="Also write log output to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Run the map demonstration")
    run_parser.add_argument(
        "--scenario",
        help="Path to a scenario YAML file (default: built-in tortoises)",
    )
    run_parser.add_argument(
        "--variant",
        choices=sorted(VARIANT_CHOICES),
        default="all",
        help="Map variant(s) to exercise (default: all)",
    )
    run_parser.add_argument(
        "--sort-by-value",
        action="store_true",
        help="Also sort each map by owner after sorting by key",
    )
    run_parser.set_defaults(func=cmd_run)

    # bench command
    bench_parser = subparsers.add_parser("bench", help="Time repeated demonstrations")
    bench_parser.add_argument(
        "--scenario",
        help="Path to a scenario YAML file (default: built-in tortoises)",
    )
    bench_parser.add_argument(
        "--min-runs",
        type=int,
        default=5,
        help="Minimum number of timed runs (default: 5)",
    )
    bench_parser.add_argument(
        "--max-runs",
        type=int,
        default=50,
        help="Maximum number of timed runs (default: 50)",
    )
    bench_parser.add_argument(
        "--cv-target",
        type=float,
        default=0.05,
        help="Target coefficient of variation (default: 0.05 = 5%%)",
    )
    bench_parser.set_defaults(func=cmd_bench)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    setup_logging(level, args.log_file)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
