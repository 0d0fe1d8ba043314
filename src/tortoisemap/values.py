"""Owner-value ordering and binary search over map entries."""

from __future__ import annotations

import bisect
from collections.abc import Iterable

from tortoisemap.tortoise import Tortoise

# (key, owner) pair as yielded by ``dict.items()``
Entry = tuple[Tortoise, str | None]


def owner_key(owner: str | None) -> tuple[bool, str]:
    """Sort key for owner values: absent owners first, then lexicographic."""
    return owner is not None, owner or ""


def entry_value_key(entry: Entry) -> tuple[bool, str]:
    """Sort key ordering ``(key, owner)`` entries by owner."""
    return owner_key(entry[1])


def compare_owners(left: str | None, right: str | None) -> int:
    """Three-way comparison of two owner values (``None`` sorts first)."""
    lk, rk = owner_key(left), owner_key(right)
    return (lk > rk) - (lk < rk)


def sort_entries_by_value(entries: Iterable[Entry]) -> list[Entry]:
    """Return entries sorted by owner; equal owners keep their input order."""
    return sorted(entries, key=entry_value_key)


def search_by_value(sorted_entries: list[Entry], owner: str | None) -> int:
    """Binary-search entries already sorted by owner.

    The target owner is compared directly against each entry's sort key, so
    no placeholder entry has to be built for the search.

    Args:
        sorted_entries: Output of ``sort_entries_by_value``.
        owner: Owner value to look for.

    Returns:
        Index of the leftmost entry with that owner, or -1 when absent.
    """
    target = owner_key(owner)
    pos = bisect.bisect_left(sorted_entries, target, key=entry_value_key)
    if pos < len(sorted_entries) and entry_value_key(sorted_entries[pos]) == target:
        return pos
    return -1
