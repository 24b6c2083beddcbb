"""Run-length coded attribute array.

Stores one value per position as runs of identical values, so long stretches of
the same attribute cost one entry regardless of their length.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from .partitioning import Partitioning

T = TypeVar("T")


class RunStyles(Generic[T]):
    """Array of ``length()`` values held as runs over a ``Partitioning``.

    Run ``i`` covers ``[start(i), start(i + 1))`` and holds ``_values[i]``.
    Adjacent runs never share a value, and the only empty run is the single
    run of an empty array. Positions outside the array read as ``default``.
    """

    def __init__(self, default: T) -> None:
        self.default = default
        self._starts = Partitioning()
        self._values: list[T] = [default]

    def length(self) -> int:
        return self._starts.length()

    def runs(self) -> int:
        return self._starts.partitions()

    def _run_at(self, position: int) -> int:
        return self._starts.partition_from_position(position)

    def _split(self, position: int) -> int:
        """Ensure a run starts at ``position`` and return its index.

        ``position == length()`` returns ``runs()``, one past the last run.
        """
        if position <= 0:
            return 0
        if position >= self.length():
            return self.runs()
        run = self._run_at(position)
        if self._starts.position_from_partition(run) == position:
            return run
        self._starts.insert_partition(run + 1, position)
        self._values.insert(run + 1, self._values[run])
        return run + 1

    def _remove_boundary(self, run: int) -> None:
        """Merge ``run`` into the run before it, keeping the earlier value."""
        self._starts.remove_partition(run)
        del self._values[run]

    def _merge_with_previous(self, run: int) -> None:
        if 0 < run < self.runs() and self._values[run - 1] == self._values[run]:
            self._remove_boundary(run)

    def _check_range(self, position: int, length: int) -> None:
        if position < 0 or length < 0 or position + length > self.length():
            raise ValueError(
                f"range [{position}, {position + length}) outside array of length {self.length()}"
            )

    def value_at(self, position: int) -> T:
        """Return the value at ``position``, or ``default`` outside the array."""
        if position < 0 or position >= self.length():
            return self.default
        return self._values[self._run_at(position)]

    def start_run(self, position: int) -> int:
        """Return the first position of the run containing ``position``."""
        return self._starts.position_from_partition(self._run_at(position))

    def end_run(self, position: int) -> int:
        """Return the position just past the run containing ``position``."""
        return self._starts.position_from_partition(self._run_at(position) + 1)

    def find_next_change(self, position: int, end: int) -> int:
        """Return the next position after ``position`` where the value changes.

        Returns ``end`` when the run continues past ``end`` and ``end + 1`` when
        ``position`` is already at or past ``end``.
        """
        run = self._run_at(position)
        if run < self.runs():
            run_start = self._starts.position_from_partition(run)
            if run_start > position:
                return run_start
            next_change = self._starts.position_from_partition(run + 1)
            if next_change > position:
                return next_change
            if position < end:
                return end
        return end + 1

    def fill_range(self, position: int, value: T, length: int) -> bool:
        """Set ``length`` positions starting at ``position`` to ``value``.

        Returns whether any stored value changed.
        """
        if length <= 0:
            return False
        self._check_range(position, length)
        end = position + length
        run = self._run_at(position)
        if self._values[run] == value and self._starts.position_from_partition(run + 1) >= end:
            return False

        first = self._split(position)
        last = self._split(end)
        for _ in range(last - first - 1):
            self._remove_boundary(first + 1)
        self._values[first] = value
        self._merge_with_previous(first + 1)
        self._merge_with_previous(first)
        return True

    def set_value_at(self, position: int, value: T) -> bool:
        return self.fill_range(position, value, 1)

    def insert_space(self, position: int, length: int, value: T | None = None) -> None:
        """Insert ``length`` positions at ``position`` holding ``value`` (or ``default``)."""
        if length <= 0:
            return
        self._check_range(position, 0)
        # Grow the run containing the insertion point, then paint the new span.
        self._starts.insert_text(self._run_at(position), length)
        self.fill_range(position, self.default if value is None else value, length)

    def delete_range(self, position: int, length: int) -> None:
        """Remove ``length`` positions starting at ``position``."""
        if length <= 0:
            return
        self._check_range(position, length)
        first = self._split(position)
        last = self._split(position + length)
        for _ in range(last - first - 1):
            self._remove_boundary(first + 1)
        self._starts.insert_text(first, -length)
        if self.runs() <= 1:
            self._values[0] = self.default
            return
        if first == 0:
            # Drop the now-empty leading run but keep the value that follows it.
            self._starts.remove_partition(1)
            del self._values[0]
        else:
            self._starts.remove_partition(first)
            del self._values[first]
            self._merge_with_previous(first)

    def delete_all(self) -> None:
        self._starts.delete_all()
        self._values = [self.default]

    def all_same(self) -> bool:
        """Return whether every position holds the same value."""
        return self.runs() == 1

    def all_same_as(self, value: T) -> bool:
        """Return whether every position holds ``value``."""
        return self.all_same() and self._values[0] == value

    def __len__(self) -> int:
        return self.length()

    def __repr__(self) -> str:
        starts = self._starts
        spans = [
            (
                starts.position_from_partition(run),
                starts.position_from_partition(run + 1),
                self._values[run],
            )
            for run in range(self.runs())
        ]
        return f"RunStyles({spans!r})"
