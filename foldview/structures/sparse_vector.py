"""Sparse per-position overlay.

Only positions holding a value occupy storage; every other position reads as
``None``. Inserting or deleting positions shifts the stored entries with them.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class SparseVector(Generic[T]):
    """Mapping from positions in ``[0, length())`` to optional values."""

    def __init__(self) -> None:
        self._length = 0
        self._positions: list[int] = []
        self._values: list[T] = []

    def length(self) -> int:
        return self._length

    def elements(self) -> int:
        """Return how many positions currently hold a value."""
        return len(self._positions)

    def _index_of(self, position: int) -> int | None:
        idx = bisect_left(self._positions, position)
        if idx < len(self._positions) and self._positions[idx] == position:
            return idx
        return None

    def value_at(self, position: int) -> T | None:
        idx = self._index_of(position)
        return None if idx is None else self._values[idx]

    def set_value_at(self, position: int, value: T | None) -> None:
        """Store ``value`` at ``position``; ``None`` removes any stored entry."""
        if position < 0 or position >= self._length:
            raise ValueError(f"position {position} outside vector of length {self._length}")
        idx = bisect_left(self._positions, position)
        present = idx < len(self._positions) and self._positions[idx] == position
        if value is None:
            if present:
                del self._positions[idx]
                del self._values[idx]
        elif present:
            self._values[idx] = value
        else:
            self._positions.insert(idx, position)
            self._values.insert(idx, value)

    def insert_space(self, position: int, length: int) -> None:
        """Insert ``length`` empty positions before ``position``."""
        if length <= 0:
            return
        if position < 0 or position > self._length:
            raise ValueError(f"position {position} outside vector of length {self._length}")
        start = bisect_left(self._positions, position)
        for idx in range(start, len(self._positions)):
            self._positions[idx] += length
        self._length += length

    def delete_position(self, position: int) -> None:
        """Remove ``position`` and its entry, shifting later entries down by one."""
        if position < 0 or position >= self._length:
            raise ValueError(f"position {position} outside vector of length {self._length}")
        start = bisect_left(self._positions, position)
        if start < len(self._positions) and self._positions[start] == position:
            del self._positions[start]
            del self._values[start]
        for idx in range(start, len(self._positions)):
            self._positions[idx] -= 1
        self._length -= 1

    def delete_all(self) -> None:
        self._length = 0
        self._positions.clear()
        self._values.clear()

    def items(self) -> Iterator[tuple[int, T]]:
        """Yield ``(position, value)`` pairs in position order."""
        return iter(list(zip(self._positions, self._values)))

    def __len__(self) -> int:
        return self._length
