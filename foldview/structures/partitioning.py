"""Cumulative partition index with a lazily applied shift.

Partition ``i`` covers positions ``[start(i), start(i + 1))``. Shifting every
boundary after one partition is recorded as a pending step and only folded into
the stored boundaries when a lookup or edit needs them.
"""

from __future__ import annotations


class Partitioning:
    """Ordered partition boundaries over a position space.

    There is always at least one partition; a fresh index holds a single empty
    partition. ``_body`` keeps ``partitions() + 1`` boundaries, the first of
    which is always 0. Boundaries with an index above ``_step_partition`` still
    owe ``_step_length``.
    """

    def __init__(self) -> None:
        self._body: list[int] = [0, 0]
        self._step_partition = 0
        self._step_length = 0

    def _apply_step(self, partition_up_to: int) -> None:
        """Fold the pending step into boundaries up to ``partition_up_to``."""
        if self._step_length != 0:
            body = self._body
            for idx in range(self._step_partition + 1, min(partition_up_to + 1, len(body))):
                body[idx] += self._step_length
        self._step_partition = partition_up_to
        if self._step_partition >= len(self._body) - 1:
            self._step_partition = len(self._body) - 1
            self._step_length = 0

    def _back_step(self, partition_down_to: int) -> None:
        """Move the step boundary backwards, un-applying it from skipped entries."""
        if self._step_length != 0:
            body = self._body
            for idx in range(partition_down_to + 1, self._step_partition + 1):
                body[idx] -= self._step_length
        self._step_partition = partition_down_to

    def partitions(self) -> int:
        """Return the number of partitions (always at least 1)."""
        return len(self._body) - 1

    def length(self) -> int:
        """Return the position just past the last partition."""
        return self.position_from_partition(self.partitions())

    def insert_partition(self, partition: int, position: int) -> None:
        """Insert a boundary so a new partition starts at ``position``."""
        if not 0 <= partition <= self.partitions():
            raise ValueError(f"partition {partition} out of range for insertion")
        if self._step_partition < partition:
            self._apply_step(partition)
        self._body.insert(partition, position)
        self._step_partition += 1

    def remove_partition(self, partition: int) -> None:
        """Remove the boundary at ``partition``, merging it into its predecessor.

        Removing boundary 0 is only meaningful once partition 0 is empty, so
        the next boundary becomes the new origin.
        """
        if self.partitions() <= 1 or not 0 <= partition <= self.partitions():
            raise ValueError(f"partition {partition} out of range for removal")
        if partition > self._step_partition:
            self._apply_step(partition)
        self._step_partition -= 1
        del self._body[partition]

    def insert_text(self, partition: int, delta: int) -> None:
        """Grow (or shrink) ``partition`` by ``delta``, shifting every later boundary."""
        if delta == 0:
            return
        if self._step_length != 0:
            if partition >= self._step_partition:
                # Forward from the current step: fold the step up to here.
                self._apply_step(partition)
                self._step_length += delta
            elif partition >= self._step_partition - len(self._body) // 10:
                # Close behind the current step: undo the step back to here.
                self._back_step(partition)
                self._step_length += delta
            else:
                self._apply_step(len(self._body) - 1)
                self._step_partition = partition
                self._step_length = delta
        else:
            self._step_partition = partition
            self._step_length = delta

    def set_partition_start_position(self, partition: int, position: int) -> None:
        """Move the start of ``partition`` without shifting any other boundary."""
        if partition < 0 or partition >= len(self._body):
            return
        if partition > self._step_partition:
            self._apply_step(partition)
        self._body[partition] = position

    def position_from_partition(self, partition: int) -> int:
        """Return the start position of ``partition``; 0 when out of range."""
        if partition < 0 or partition >= len(self._body):
            return 0
        position = self._body[partition]
        if partition > self._step_partition:
            position += self._step_length
        return position

    def partition_from_position(self, position: int) -> int:
        """Return the rightmost partition whose start is at or before ``position``.

        Positions at or past the end resolve to the last partition; negative
        positions resolve to partition 0.
        """
        if len(self._body) <= 1:
            return 0
        if position >= self.position_from_partition(self.partitions()):
            return self.partitions() - 1
        lower = 0
        upper = self.partitions()
        while lower < upper:
            middle = (upper + lower + 1) // 2
            if position < self.position_from_partition(middle):
                upper = middle - 1
            else:
                lower = middle
        return lower

    def delete_all(self) -> None:
        """Reset to a single empty partition."""
        self._body = [0, 0]
        self._step_partition = 0
        self._step_length = 0

    def __repr__(self) -> str:
        starts = [self.position_from_partition(idx) for idx in range(len(self._body))]
        return f"Partitioning({starts!r})"
