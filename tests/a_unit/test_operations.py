"""Unit tests for tortoisemap.operations module."""

from __future__ import annotations

import pytest

from tortoisemap.config import DEFAULT_SCENARIO
from tortoisemap.operations import MapOperations
from tortoisemap.store import MAP_VARIANTS, LinkedTortoiseMap
from tortoisemap.timing import PerformanceTracker
from tortoisemap.tortoise import Tortoise

BRONYA_THICK = Tortoise("Броня", "shellThickness=3.1")
BRONYA_THIN = Tortoise("Броня", "shellThickness=2.9")
KAZKA = Tortoise("Казка", "shellThickness=3.3")


@pytest.fixture(params=sorted(MAP_VARIANTS))
def ops(request: pytest.FixtureRequest) -> MapOperations:
    store = DEFAULT_SCENARIO.seed(MAP_VARIANTS[request.param])
    return MapOperations(store, PerformanceTracker())


class TestFindByKey:
    """Tests for MapOperations.find_by_key."""

    def test_found(self, ops: MapOperations) -> None:
        result = ops.find_by_key(BRONYA_THICK)

        assert result.found
        assert result.key == BRONYA_THICK
        assert result.owner == "Олеся"

    def test_not_found(self, ops: MapOperations) -> None:
        result = ops.find_by_key(KAZKA)

        assert not result.found
        assert result.key is None
        assert result.owner is None

    def test_add_round_trip(self, ops: MapOperations) -> None:
        ops.add(KAZKA, "Аркадій")
        assert ops.find_by_key(KAZKA).owner == "Аркадій"


class TestFindByValue:
    """Tests for MapOperations.find_by_value."""

    def test_found(self, ops: MapOperations) -> None:
        result = ops.find_by_value("Микола")

        assert result.found
        assert result.owner == "Микола"
        assert result.key in {
            Tortoise("Вічність", "shellThickness=4.2"),
            Tortoise("Дзвін", "shellThickness=3.7"),
        }

    def test_not_found(self, ops: MapOperations) -> None:
        result = ops.find_by_value("Аркадій")
        assert not result.found
        assert result.key is None

    def test_found_iff_present(self, ops: MapOperations) -> None:
        present = set(ops.store.values())
        for owner in [*present, "Аркадій", "Яна", None]:
            assert ops.find_by_value(owner).found is (owner in present)

    def test_after_sort(self, ops: MapOperations) -> None:
        ops.sort_by_key()
        assert ops.find_by_value("Надія").key == Tortoise("Ікар", "shellThickness=2.7")

    def test_does_not_mutate(self, ops: MapOperations) -> None:
        before = list(ops.store.items())
        ops.find_by_value("Микола")
        assert list(ops.store.items()) == before


class TestAdd:
    """Tests for MapOperations.add."""

    def test_fresh_insert(self, ops: MapOperations) -> None:
        result = ops.add(KAZKA, "Аркадій")

        assert not result.replaced
        assert result.previous_owner is None
        assert len(ops) == 11

    def test_overwrite_is_silent(self, ops: MapOperations) -> None:
        result = ops.add(BRONYA_THICK, "Аркадій")

        assert result.replaced
        assert result.previous_owner == "Олеся"
        assert ops.store[BRONYA_THICK] == "Аркадій"
        assert len(ops) == 10


class TestRemoveByKey:
    """Tests for MapOperations.remove_by_key."""

    def test_removes(self, ops: MapOperations) -> None:
        result = ops.remove_by_key(BRONYA_THICK)

        assert result.found
        assert result.count == 1
        assert result.removed == ((BRONYA_THICK, "Олеся"),)
        assert len(ops) == 9
        assert BRONYA_THIN in ops.store

    def test_second_removal_not_found(self, ops: MapOperations) -> None:
        ops.remove_by_key(BRONYA_THICK)
        result = ops.remove_by_key(BRONYA_THICK)

        assert not result.found
        assert result.count == 0
        assert len(ops) == 9


class TestRemoveByValue:
    """Tests for MapOperations.remove_by_value."""

    def test_removes_all_matches(self, ops: MapOperations) -> None:
        result = ops.remove_by_value("Микола")

        assert result.count == 2
        assert len(ops) == 8
        assert "Микола" not in ops.store.values()

    def test_no_match(self, ops: MapOperations) -> None:
        result = ops.remove_by_value("Аркадій")

        assert result.count == 0
        assert not result.found
        assert len(ops) == 10

    def test_none_owner(self, ops: MapOperations) -> None:
        ops.add(KAZKA, None)
        result = ops.remove_by_value(None)

        assert result.removed == ((KAZKA, None),)
        assert len(ops) == 10


class TestSorting:
    """Tests for sort_by_key and sort_by_value."""

    def test_sort_by_key(self, ops: MapOperations) -> None:
        ops.sort_by_key()
        keys = list(ops.store)

        assert keys == sorted(keys)
        assert keys.index(BRONYA_THIN) + 1 == keys.index(BRONYA_THICK)
        assert len(ops) == 10

    def test_sort_by_key_idempotent(self, ops: MapOperations) -> None:
        ops.sort_by_key()
        first = list(ops.store.items())
        ops.sort_by_key()
        assert list(ops.store.items()) == first

    def test_sort_by_value(self, ops: MapOperations) -> None:
        ops.sort_by_value()
        owners = list(ops.store.values())
        assert owners == sorted(owners)

    def test_linked_map_order_lost_after_add(self) -> None:
        ops = MapOperations(DEFAULT_SCENARIO.seed(LinkedTortoiseMap))
        ops.sort_by_key()
        ops.add(Tortoise("Іван"), "Софія")

        keys = list(ops.store)
        assert keys != sorted(keys)


class TestTiming:
    """Every operation is reported to the tracker."""

    def test_labels_recorded(self) -> None:
        tracker = PerformanceTracker()
        ops = MapOperations(DEFAULT_SCENARIO.seed(LinkedTortoiseMap), tracker)

        ops.find_by_key(BRONYA_THICK)
        ops.find_by_value("Микола")
        ops.sort_by_key()
        ops.entries()
        ops.add(KAZKA, "Аркадій")
        ops.remove_by_key(KAZKA)
        ops.remove_by_key(KAZKA)
        ops.remove_by_value("Микола")

        labels = [t.label for t in tracker.timings]
        assert labels == [
            "find by key in LinkedHashMap",
            "binary search by value in LinkedHashMap",
            "sort LinkedHashMap by key",
            "list key-value pairs in LinkedHashMap",
            "add entry to LinkedHashMap",
            "remove by key from LinkedHashMap",
            "remove by key from LinkedHashMap",
            "remove by value from LinkedHashMap",
        ]
        assert all(t.elapsed_ns >= 0 for t in tracker.timings)
