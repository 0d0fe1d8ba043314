"""tortoisemap: find, add, remove and sort operations over tortoise-keyed maps."""

from __future__ import annotations

from tortoisemap.config import DEFAULT_SCENARIO, Scenario, load_scenario_config
from tortoisemap.demo import Demonstration, DemonstrationReport
from tortoisemap.operations import MapOperations
from tortoisemap.store import HashTortoiseMap, LinkedTortoiseMap, TortoiseMap
from tortoisemap.timing import PerformanceTracker
from tortoisemap.tortoise import Tortoise, compare_tortoises

__all__ = [
    "DEFAULT_SCENARIO",
    "Demonstration",
    "DemonstrationReport",
    "HashTortoiseMap",
    "LinkedTortoiseMap",
    "MapOperations",
    "PerformanceTracker",
    "Scenario",
    "Tortoise",
    "TortoiseMap",
    "compare_tortoises",
    "load_scenario_config",
]
