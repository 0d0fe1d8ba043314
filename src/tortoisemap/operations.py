"""Find, add, remove and sort operations over a tortoise map.

``MapOperations`` works the same way on every ``TortoiseMap`` variant. Each
operation is timed through a ``PerformanceTracker`` and returns a result
record; misses are reported through ``found`` rather than raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tortoisemap.store import TortoiseMap
from tortoisemap.timing import PerformanceTracker
from tortoisemap.tortoise import Tortoise
from tortoisemap.values import search_by_value, sort_entries_by_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a find operation.

    Attributes:
        found: Whether a matching entry exists.
        key: Matching key (None when not found).
        owner: Owner of the matching entry (None when not found).
    """

    found: bool
    key: Tortoise | None = None
    owner: str | None = None


@dataclass(frozen=True)
class AddResult:
    """Outcome of an add; ``replaced`` is set when an equal key was overwritten."""

    key: Tortoise
    owner: str | None
    replaced: bool = False
    previous_owner: str | None = None


@dataclass(frozen=True)
class RemovalResult:
    """Outcome of a remove operation.

    Attributes:
        removed: Removed (key, owner) pairs, in removal order.
    """

    removed: tuple[tuple[Tortoise, str | None], ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.removed)

    @property
    def count(self) -> int:
        return len(self.removed)


class MapOperations:
    """Operations over one tortoise map.

    The map is mutated in place, so callers holding a reference to it see
    every change, including the reordering done by the sort operations.
    """

    def __init__(
        self, store: TortoiseMap, tracker: PerformanceTracker | None = None
    ) -> None:
        self.store = store
        self.tracker = tracker or PerformanceTracker()

    @property
    def kind(self) -> str:
        return self.store.kind

    def __len__(self) -> int:
        return len(self.store)

    def find_by_key(self, key: Tortoise) -> LookupResult:
        with self.tracker.measure(f"find by key in {self.kind}"):
            found = key in self.store
            owner = self.store[key] if found else None

        if not found:
            return LookupResult(found=False)
        return LookupResult(found=True, key=key, owner=owner)

    def find_by_value(self, owner: str | None) -> LookupResult:
        """Find a key by owner via sort + binary search.

        When several entries share the owner, the first one in owner order is
        returned; ties keep the map's iteration order.
        """
        with self.tracker.measure(f"binary search by value in {self.kind}"):
            entries = sort_entries_by_value(self.store.items())
            pos = search_by_value(entries, owner)

        if pos < 0:
            return LookupResult(found=False)
        key, value = entries[pos]
        return LookupResult(found=True, key=key, owner=value)

    def add(self, key: Tortoise, owner: str | None) -> AddResult:
        """Put ``key`` -> ``owner``, silently overwriting an equal key."""
        with self.tracker.measure(f"add entry to {self.kind}"):
            replaced = key in self.store
            previous = self.store.get(key)
            self.store[key] = owner

        if replaced:
            logger.debug("Overwrote %s in %s (was %r)", key, self.kind, previous)
        return AddResult(
            key=key,
            owner=owner,
            replaced=replaced,
            previous_owner=previous if replaced else None,
        )

    def remove_by_key(self, key: Tortoise) -> RemovalResult:
        with self.tracker.measure(f"remove by key from {self.kind}"):
            if key not in self.store:
                return RemovalResult()
            owner = self.store.pop(key)

        return RemovalResult(removed=((key, owner),))

    def remove_by_value(self, owner: str | None) -> RemovalResult:
        """Remove every entry whose owner equals ``owner``."""
        with self.tracker.measure(f"remove by value from {self.kind}"):
            matches = [(k, v) for k, v in self.store.items() if v == owner]
            for key, _ in matches:
                del self.store[key]

        return RemovalResult(removed=tuple(matches))

    def sort_by_key(self) -> None:
        """Reinsert entries in natural key order.

        The order holds only until the next add or remove.
        """
        with self.tracker.measure(f"sort {self.kind} by key"):
            self.store.rebuild(sorted(self.store))

    def sort_by_value(self) -> None:
        """Reinsert entries in owner order (stable for equal owners)."""
        with self.tracker.measure(f"sort {self.kind} by value"):
            entries = sort_entries_by_value(self.store.items())
            self.store.rebuild(key for key, _ in entries)

    def entries(self) -> list[tuple[Tortoise, str | None]]:
        """Snapshot of the entries in current iteration order."""
        with self.tracker.measure(f"list key-value pairs in {self.kind}"):
            return list(self.store.items())
