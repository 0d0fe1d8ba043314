"""Runs the fixed sequence of map operations on each map variant."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from tortoisemap.config import DEFAULT_SCENARIO, Probes, Scenario
from tortoisemap.operations import (
    AddResult,
    LookupResult,
    MapOperations,
    RemovalResult,
)
from tortoisemap.store import MAP_VARIANTS, TortoiseMap
from tortoisemap.timing import PerformanceTracker

logger = logging.getLogger(__name__)

StepResult = LookupResult | AddResult | RemovalResult | list | None

# record(step, message, result=None)
Recorder = Callable[..., None]


@dataclass(frozen=True)
class StepOutcome:
    """One executed step.

    Attributes:
        step: Step name ("find_by_key", "sort_by_key", ...).
        message: Human-readable description of what happened.
        size: Map size after the step.
        result: Structured result of the step, when it has one.
    """

    step: str
    message: str
    size: int
    result: StepResult = None


@dataclass
class VariantReport:
    """Outcomes for one map variant, in execution order."""

    kind: str
    initial_size: int
    steps: list[StepOutcome] = field(default_factory=list)

    @property
    def final_size(self) -> int:
        return self.steps[-1].size if self.steps else self.initial_size

    def outcomes(self, step: str) -> list[StepOutcome]:
        return [s for s in self.steps if s.step == step]

    def lines(self) -> list[str]:
        lines = [f"========= Operations on {self.kind} ========="]
        lines.append(f"Initial size of {self.kind}: {self.initial_size}")
        lines.extend(s.message for s in self.steps)
        lines.append(f"Final size of {self.kind}: {self.final_size}")
        return lines


@dataclass
class DemonstrationReport:
    variants: list[VariantReport] = field(default_factory=list)

    def variant(self, kind: str) -> VariantReport:
        for report in self.variants:
            if report.kind == kind:
                return report
        raise KeyError(kind)

    def lines(self) -> list[str]:
        lines: list[str] = []
        for i, report in enumerate(self.variants):
            if i:
                lines.append("")
            lines.extend(report.lines())
        return lines


class Demonstration:
    """Drives the demonstration over a set of pre-seeded maps.

    Every map runs the same sequence: find by key, find by value, print,
    sort by key, print, find by key, find by value, add, remove by key,
    remove by value.
    """

    def __init__(
        self,
        maps: Sequence[TortoiseMap],
        probes: Probes = DEFAULT_SCENARIO.probes,
        tracker: PerformanceTracker | None = None,
        sort_by_value: bool = False,
    ) -> None:
        self.tracker = tracker or PerformanceTracker()
        self.operations = [MapOperations(m, self.tracker) for m in maps]
        self.probes = probes
        self.sort_by_value = sort_by_value

    @classmethod
    def from_scenario(
        cls,
        scenario: Scenario = DEFAULT_SCENARIO,
        variants: Sequence[str] = ("hash", "linked"),
        tracker: PerformanceTracker | None = None,
        sort_by_value: bool = False,
    ) -> Demonstration:
        """Seed one fresh map per variant name ("hash", "linked")."""
        maps = []
        for name in variants:
            if name not in MAP_VARIANTS:
                raise ValueError(f"Unknown map variant: {name}")
            maps.append(scenario.seed(MAP_VARIANTS[name]))
        return cls(maps, scenario.probes, tracker, sort_by_value)

    def execute_data_operations(self) -> DemonstrationReport:
        report = DemonstrationReport()
        for ops in self.operations:
            logger.info("Running operations on %s (%d entries)", ops.kind, len(ops))
            report.variants.append(self._run_variant(ops))
        return report

    def _run_variant(self, ops: MapOperations) -> VariantReport:
        report = VariantReport(kind=ops.kind, initial_size=len(ops))

        def record(step: str, message: str, result: StepResult = None) -> None:
            report.steps.append(StepOutcome(step, message, len(ops), result))

        self._find_by_key(ops, record)
        self._find_by_value(ops, record)

        self._print(ops, record)
        ops.sort_by_key()
        record("sort_by_key", f"Sorted {ops.kind} by key")
        self._print(ops, record)

        if self.sort_by_value:
            ops.sort_by_value()
            record("sort_by_value", f"Sorted {ops.kind} by value")
            self._print(ops, record)

        self._find_by_key(ops, record)
        self._find_by_value(ops, record)

        probes = self.probes
        added = ops.add(probes.key_to_add, probes.value_to_add)
        message = f"Added entry: {added.key} -> {added.owner}"
        if added.replaced:
            message += f" (replaced {added.previous_owner})"
        record("add", message, added)

        removed = ops.remove_by_key(probes.key_to_find)
        if removed.found:
            message = (
                f"Removed entry with key '{probes.key_to_find}'. "
                f"Owner was: {removed.removed[0][1]}"
            )
        else:
            message = f"Key '{probes.key_to_find}' not found for removal."
        record("remove_by_key", message, removed)

        removed = ops.remove_by_value(probes.value_to_find)
        record(
            "remove_by_value",
            f"Removed {removed.count} entries with owner '{probes.value_to_find}'",
            removed,
        )
        return report

    def _find_by_key(self, ops: MapOperations, record: Recorder) -> None:
        key = self.probes.key_to_find
        found = ops.find_by_key(key)
        if found.found:
            message = f"Entry with key '{key}' found. Owner: {found.owner}"
        else:
            message = f"Entry with key '{key}' is absent from {ops.kind}."
        record("find_by_key", message, found)

    def _find_by_value(self, ops: MapOperations, record: Recorder) -> None:
        owner = self.probes.value_to_find
        found = ops.find_by_value(owner)
        if found.found:
            message = f"Owner '{owner}' found. Tortoise: {found.key}"
        else:
            message = f"Owner '{owner}' is absent from {ops.kind}."
        record("find_by_value", message, found)

    def _print(self, ops: MapOperations, record: Recorder) -> None:
        entries = ops.entries()
        lines = [f"=== Key-value pairs in {ops.kind} ==="]
        lines.extend(f"  {key} -> {owner}" for key, owner in entries)
        record("print", "\n".join(lines), entries)
