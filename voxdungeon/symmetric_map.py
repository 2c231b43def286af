"""Mapping keyed by unordered pairs of indices."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class SymmetricMap(Generic[T]):
    """Dict where ``(i, j)`` and ``(j, i)`` name the same entry.

    Used to attach per-edge data (door extents) to an undirected graph
    without storing it once per direction.
    """

    _map: dict[tuple[int, int], T] = field(default_factory=dict)

    @staticmethod
    def order_indices(i1: int, i2: int) -> tuple[int, int]:
        return (i2, i1) if i1 > i2 else (i1, i2)

    def get(self, i1: int, i2: int) -> T:
        """Return the value for the pair; raises KeyError if missing."""
        return self._map[self.order_indices(i1, i2)]

    def insert(self, i1: int, i2: int, value: T) -> None:
        self._map[self.order_indices(i1, i2)] = value

    def contains(self, i1: int, i2: int) -> bool:
        return self.order_indices(i1, i2) in self._map

    def items(self) -> Iterator[tuple[tuple[int, int], T]]:
        """Iterate ``((low, high), value)`` in insertion order."""
        return iter(self._map.items())

    def __len__(self) -> int:
        return len(self._map)
