"""Demonstration scenarios: seed data plus the keys and owners to probe.

A scenario can come from ``DEFAULT_SCENARIO`` or be loaded from YAML::

    name: tortoises
    entries:
      - {nickname: Атлант, descriptor: "shellThickness=2.5", owner: Руслан}
    probes:
      key_to_find: {nickname: Броня, descriptor: "shellThickness=3.1"}
      key_to_add: {nickname: Казка, descriptor: "shellThickness=3.3"}
      value_to_find: Микола
      value_to_add: Аркадій
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from tortoisemap.store import TortoiseMap
from tortoisemap.tortoise import Tortoise


@dataclass(frozen=True)
class Probes:
    """Keys and owners the demonstration looks up, adds and removes.

    Attributes:
        key_to_find: Key searched for, then removed.
        key_to_add: Key inserted by the add step.
        value_to_find: Owner searched for, then removed.
        value_to_add: Owner of ``key_to_add``.
    """

    key_to_find: Tortoise
    key_to_add: Tortoise
    value_to_find: str | None
    value_to_add: str | None


@dataclass(frozen=True)
class Scenario:
    """Seed entries and probes for one demonstration run."""

    name: str
    entries: tuple[tuple[Tortoise, str | None], ...]
    probes: Probes

    def seed(self, map_type: type[TortoiseMap]) -> TortoiseMap:
        """Build a fresh map of ``map_type`` holding the seed entries."""
        return map_type(self.entries)


DEFAULT_PROBES = Probes(
    key_to_find=Tortoise("Броня", "shellThickness=3.1"),
    key_to_add=Tortoise("Казка", "shellThickness=3.3"),
    value_to_find="Микола",
    value_to_add="Аркадій",
)

DEFAULT_SCENARIO = Scenario(
    name="tortoises",
    entries=(
        (Tortoise("Атлант", "shellThickness=2.5"), "Руслан"),
        (Tortoise("Броня", "shellThickness=3.1"), "Олеся"),
        (Tortoise("Вічність", "shellThickness=4.2"), "Микола"),
        (Tortoise("Гном", "shellThickness=1.8"), "Аліна"),
        (Tortoise("Броня", "shellThickness=2.9"), "Тимур"),
        (Tortoise("Дзвін", "shellThickness=3.7"), "Микола"),
        (Tortoise("Еон", "shellThickness=4.5"), "Софія"),
        (Tortoise("Жук", "shellThickness=2.2"), "Віталій"),
        (Tortoise("Зевс", "shellThickness=3.9"), "Олеся"),
        (Tortoise("Ікар", "shellThickness=2.7"), "Надія"),
    ),
    probes=DEFAULT_PROBES,
)


def _optional_str(value: Any, where: str, field: str) -> str | None:
    # YAML turns bare 42, 4.5 or yes into int, float and bool
    if value is not None and not isinstance(value, str):
        raise ValueError(
            f"{where}: '{field}' must be a string, got {type(value).__name__}"
        )
    return value


def _parse_tortoise(data: Any, where: str) -> Tortoise:
    if not isinstance(data, dict):
        raise ValueError(f"{where}: expected a mapping, got {type(data).__name__}")
    if "nickname" not in data:
        raise ValueError(f"{where}: missing 'nickname'")
    return Tortoise(
        _optional_str(data["nickname"], where, "nickname"),
        _optional_str(data.get("descriptor"), where, "descriptor"),
    )


def parse_scenario(data: Any) -> Scenario:
    """Build a Scenario from already-parsed YAML data.

    Raises:
        ValueError: If the data is not a mapping with an ``entries`` list, or
            an entry/probe is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError("Scenario must be a mapping")

    raw_entries = data.get("entries")
    if not isinstance(raw_entries, list):
        raise ValueError("Scenario needs an 'entries' list")

    entries = []
    for i, item in enumerate(raw_entries):
        key = _parse_tortoise(item, f"entries[{i}]")
        owner = _optional_str(item.get("owner"), f"entries[{i}]", "owner")
        entries.append((key, owner))

    # Missing probes fall back to the defaults one by one
    raw_probes = data.get("probes") or {}
    if not isinstance(raw_probes, dict):
        raise ValueError("'probes' must be a mapping")

    probes = Probes(
        key_to_find=(
            _parse_tortoise(raw_probes["key_to_find"], "probes.key_to_find")
            if "key_to_find" in raw_probes
            else DEFAULT_PROBES.key_to_find
        ),
        key_to_add=(
            _parse_tortoise(raw_probes["key_to_add"], "probes.key_to_add")
            if "key_to_add" in raw_probes
            else DEFAULT_PROBES.key_to_add
        ),
        value_to_find=_optional_str(
            raw_probes.get("value_to_find", DEFAULT_PROBES.value_to_find),
            "probes",
            "value_to_find",
        ),
        value_to_add=_optional_str(
            raw_probes.get("value_to_add", DEFAULT_PROBES.value_to_add),
            "probes",
            "value_to_add",
        ),
    )

    return Scenario(
        name=data.get("name", "scenario"),
        entries=tuple(entries),
        probes=probes,
    )


def load_scenario_config(config_path: Path | str) -> Scenario:
    """Load a scenario from a YAML file.

    Args:
        config_path: Path to the scenario file.

    Returns:
        The parsed Scenario.

    Raises:
        ValueError: If the file is not valid YAML or not a valid scenario.
    """
    with Path(config_path).open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
    return parse_scenario(data)
