"""Hash-based tortoise→owner maps.

Both variants are plain hash maps keyed by ``Tortoise``; they differ only in
the iteration-order contract they advertise:

- ``HashTortoiseMap`` makes no promise about iteration order.
- ``LinkedTortoiseMap`` iterates in insertion order until it is rebuilt.

Neither keeps itself sorted. ``rebuild`` reinserts the entries in a caller
supplied key order; any later insertion or removal may break that order.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Iterable, Iterator, MutableMapping

from tortoisemap.tortoise import Tortoise

logger = logging.getLogger(__name__)


class TortoiseMap(MutableMapping[Tortoise, str | None]):
    """Capability set shared by both map variants."""

    kind = "TortoiseMap"
    preserves_order = False

    def __init__(
        self, entries: Iterable[tuple[Tortoise, str | None]] | None = None
    ) -> None:
        self._data: dict[Tortoise, str | None] = self._new_container()
        if entries is not None:
            for key, owner in entries:
                self._data[key] = owner

    def _new_container(self) -> dict[Tortoise, str | None]:
        return {}

    def __getitem__(self, key: Tortoise) -> str | None:
        return self._data[key]

    def __setitem__(self, key: Tortoise, owner: str | None) -> None:
        self._data[key] = owner

    def __delitem__(self, key: Tortoise) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[Tortoise]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._data.items())!r})"

    def rebuild(self, ordered_keys: Iterable[Tortoise]) -> None:
        """Replace the backing container, reinserting keys in the given order.

        Args:
            ordered_keys: Every key currently in the map, in the desired order.

        Raises:
            ValueError: If ``ordered_keys`` is not a permutation of the keys.
        """
        rebuilt = self._new_container()
        for key in ordered_keys:
            if key not in self._data:
                raise ValueError(f"Rebuild of {self.kind} got unknown key {key}")
            rebuilt[key] = self._data[key]
        if len(rebuilt) != len(self._data):
            raise ValueError(
                f"Rebuild of {self.kind} lost entries "
                f"({len(rebuilt)} of {len(self._data)})"
            )
        self._data = rebuilt
        logger.debug("Rebuilt %s with %d entries", self.kind, len(rebuilt))


class HashTortoiseMap(TortoiseMap):
    """Unordered map; rebuilding it is cosmetic."""

    kind = "HashMap"


class LinkedTortoiseMap(TortoiseMap):
    """Insertion-ordered map."""

    kind = "LinkedHashMap"
    preserves_order = True

    def _new_container(self) -> dict[Tortoise, str | None]:
        return OrderedDict()


MAP_VARIANTS: dict[str, type[TortoiseMap]] = {
    "hash": HashTortoiseMap,
    "linked": LinkedTortoiseMap,
}
