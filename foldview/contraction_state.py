"""Document-line to display-line projection for folded and wrapped text.

While every line is visible, expanded, and one row tall only a line count is
kept. The first non-default attribute materializes per-line run-coded arrays
and a partition index that maps document lines to display rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .errors import ContractionInvariantError
from .structures import Partitioning, RunStyles, SparseVector

logger = logging.getLogger(__name__)


@dataclass
class ProjectedData:
    """Per-line attributes plus the display partition index.

    Every array holds one entry per document line. ``display_lines`` holds one
    partition per document line and a trailing zero-span sentinel partition.
    """

    visible: RunStyles[bool] = field(default_factory=lambda: RunStyles(True))
    expanded: RunStyles[bool] = field(default_factory=lambda: RunStyles(True))
    heights: RunStyles[int] = field(default_factory=lambda: RunStyles(1))
    fold_display_texts: SparseVector[str] = field(default_factory=SparseVector)
    display_lines: Partitioning = field(default_factory=Partitioning)


class ContractionState:
    """Visibility, expansion, and height of each document line.

    Out-of-range arguments are clamped or ignored rather than raising. Every
    mutation returns whether anything observable changed so callers can skip
    redundant relayout.
    """

    def __init__(self, check_correctness: bool = False) -> None:
        """Create an empty one-line state.

        When ``check_correctness`` is set the consistency pass runs after every
        mutation.
        """
        self.check_correctness = check_correctness
        self._data: ProjectedData | None = None
        self._lines_in_document = 1

    # Mode control

    def is_one_to_one(self) -> bool:
        """Return whether each document line is exactly one display line."""
        return self._data is None

    def ensure_data(self) -> None:
        """Switch to projected mode, replaying the current line count as insertions."""
        if self._data is not None:
            return
        lines = self._lines_in_document
        logger.debug("materializing contraction data for %d lines", lines)
        self._data = ProjectedData()
        self.insert_lines(0, lines)

    def clear(self) -> None:
        """Drop all projected data and reset to a single visible line."""
        self._data = None
        self._lines_in_document = 1

    def show_all(self) -> None:
        """Make every line visible, expanded, one row tall, and unlabelled."""
        lines = self.lines_in_doc()
        if self._data is not None:
            logger.debug("discarding contraction data for %d lines", lines)
        self.clear()
        self._lines_in_document = lines

    # Structural edits

    def _insert_line(self, data: ProjectedData, line_doc: int) -> None:
        data.visible.insert_space(line_doc, 1, True)
        data.expanded.insert_space(line_doc, 1, True)
        data.heights.insert_space(line_doc, 1, 1)
        data.fold_display_texts.insert_space(line_doc, 1)
        line_display = self.display_from_doc(line_doc)
        data.display_lines.insert_partition(line_doc, line_display)
        data.display_lines.insert_text(line_doc, 1)

    def _delete_line(self, data: ProjectedData, line_doc: int) -> None:
        # Collapse the span while the line still exists, then drop its entries.
        if self.get_visible(line_doc):
            data.display_lines.insert_text(line_doc, -data.heights.value_at(line_doc))
        data.display_lines.remove_partition(line_doc)
        data.visible.delete_range(line_doc, 1)
        data.expanded.delete_range(line_doc, 1)
        data.heights.delete_range(line_doc, 1)
        data.fold_display_texts.delete_position(line_doc)

    def insert_lines(self, line_doc: int, line_count: int) -> None:
        """Insert ``line_count`` default lines before ``line_doc``.

        ``line_doc`` is clamped to ``[0, lines_in_doc()]`` so inserting at the
        end appends.
        """
        if line_count <= 0:
            return
        line_doc = max(0, min(line_doc, self.lines_in_doc()))
        data = self._data
        if data is None:
            self._lines_in_document += line_count
            return
        for offset in range(line_count):
            self._insert_line(data, line_doc + offset)
        self._check()

    def delete_lines(self, line_doc: int, line_count: int) -> None:
        """Remove up to ``line_count`` lines starting at ``line_doc``."""
        lines = self.lines_in_doc()
        if line_doc < 0 or line_doc >= lines:
            return
        line_count = min(line_count, lines - line_doc)
        if line_count <= 0:
            return
        data = self._data
        if data is None:
            self._lines_in_document -= line_count
            return
        for _ in range(line_count):
            self._delete_line(data, line_doc)
        self._check()

    # Translation

    def lines_in_doc(self) -> int:
        if self._data is None:
            return self._lines_in_document
        return self._data.display_lines.partitions() - 1

    def lines_displayed(self) -> int:
        if self._data is None:
            return self._lines_in_document
        return self._data.display_lines.position_from_partition(self.lines_in_doc())

    def display_from_doc(self, line_doc: int) -> int:
        """Return the first display row of ``line_doc``.

        Lines at or past the end map to ``lines_displayed()``.
        """
        if self._data is None:
            return max(0, min(line_doc, self._lines_in_document))
        display_lines = self._data.display_lines
        return display_lines.position_from_partition(min(line_doc, display_lines.partitions()))

    def display_last_from_doc(self, line_doc: int) -> int:
        """Return the last display row occupied by ``line_doc``."""
        return self.display_from_doc(line_doc) + self.get_height(line_doc) - 1

    def doc_from_display(self, line_display: int) -> int:
        """Return the document line owning display row ``line_display``.

        Rows before the start map to line 0; rows past the end map to the line
        owning the terminal offset.
        """
        if self._data is None:
            return max(0, min(line_display, self._lines_in_document))
        if line_display <= 0:
            return 0
        display_lines = self._data.display_lines
        lines_displayed = self.lines_displayed()
        if line_display > lines_displayed:
            return display_lines.partition_from_position(lines_displayed)
        line_doc = display_lines.partition_from_position(line_display)
        self._assert(
            self.get_visible(line_doc),
            f"display line {line_display} resolved to hidden document line {line_doc}",
        )
        return line_doc

    # Visibility

    def get_visible(self, line_doc: int) -> bool:
        if self._data is None:
            return True
        visible = self._data.visible
        if line_doc >= visible.length():
            return True
        return visible.value_at(line_doc)

    def set_visible(self, line_doc_start: int, line_doc_end: int, is_visible: bool) -> bool:
        """Show or hide the inclusive range ``[line_doc_start, line_doc_end]``.

        Returns whether any line's visibility flag changed. Invalid ranges are
        ignored.
        """
        if self._data is None and is_visible:
            return False
        if not 0 <= line_doc_start <= line_doc_end < self.lines_in_doc():
            return False
        self.ensure_data()
        data = self._data
        assert data is not None
        self._check()
        changed = False
        for line in range(line_doc_start, line_doc_end + 1):
            if data.visible.value_at(line) == is_visible:
                continue
            height = data.heights.value_at(line)
            data.display_lines.insert_text(line, height if is_visible else -height)
            changed = True
        if changed:
            data.visible.fill_range(line_doc_start, is_visible, line_doc_end - line_doc_start + 1)
        self._check()
        return changed

    def hidden_lines(self) -> bool:
        """Return whether at least one document line is hidden."""
        if self._data is None:
            return False
        return not self._data.visible.all_same_as(True)

    # Fold labels and expansion

    def get_fold_display_text(self, line_doc: int) -> str | None:
        if self._data is None:
            return None
        return self._data.fold_display_texts.value_at(line_doc)

    def get_fold_display_text_shown(self, line_doc: int) -> bool:
        """Return whether ``line_doc`` is collapsed and has a label to show instead."""
        return not self.get_expanded(line_doc) and bool(self.get_fold_display_text(line_doc))

    def set_fold_display_text(self, line_doc: int, text: str | None) -> bool:
        """Attach a fold label to ``line_doc``; ``None`` or ``""`` removes it.

        Returns whether the stored label changed.
        """
        text = str(text) if text else None
        if not 0 <= line_doc < self.lines_in_doc():
            return False
        if self._data is None and text is None:
            return False
        self.ensure_data()
        data = self._data
        assert data is not None
        fold_display_texts = data.fold_display_texts
        if fold_display_texts.value_at(line_doc) == text:
            self._check()
            return False
        fold_display_texts.set_value_at(line_doc, text)
        self._check()
        return True

    def get_expanded(self, line_doc: int) -> bool:
        if self._data is None:
            return True
        return self._data.expanded.value_at(line_doc)

    def set_expanded(self, line_doc: int, is_expanded: bool) -> bool:
        """Mark ``line_doc`` as an expanded or collapsed fold header."""
        if self._data is None and is_expanded:
            return False
        if not 0 <= line_doc < self.lines_in_doc():
            return False
        self.ensure_data()
        data = self._data
        assert data is not None
        changed = data.expanded.set_value_at(line_doc, is_expanded)
        self._check()
        return changed

    def contracted_next(self, line_doc_start: int) -> int | None:
        """Return the first collapsed line at or after ``line_doc_start``, if any."""
        if self._data is None:
            return None
        if not 0 <= line_doc_start < self.lines_in_doc():
            return None
        expanded = self._data.expanded
        if not expanded.value_at(line_doc_start):
            return line_doc_start
        line_doc_next_change = expanded.end_run(line_doc_start)
        if line_doc_next_change < self.lines_in_doc():
            return line_doc_next_change
        return None

    # Heights

    def get_height(self, line_doc: int) -> int:
        if self._data is None:
            return 1
        return self._data.heights.value_at(line_doc)

    def set_height(self, line_doc: int, height: int) -> bool:
        """Set how many display rows ``line_doc`` needs when visible.

        Returns whether the stored height changed. Heights below 1 are ignored.
        """
        if height < 1:
            return False
        if self._data is None and height == 1:
            return False
        if not 0 <= line_doc < self.lines_in_doc():
            return False
        self.ensure_data()
        data = self._data
        assert data is not None
        previous = data.heights.value_at(line_doc)
        if previous == height:
            self._check()
            return False
        if self.get_visible(line_doc):
            data.display_lines.insert_text(line_doc, height - previous)
        data.heights.set_value_at(line_doc, height)
        self._check()
        return True

    # Diagnostics

    def _assert(self, condition: bool, message: str) -> None:
        if condition:
            return
        if self.check_correctness:
            raise ContractionInvariantError(message)
        logger.warning("contraction state inconsistent: %s", message)

    def _check(self) -> None:
        if self.check_correctness:
            self.check()

    def check(self) -> None:
        """Verify the display mapping against the stored line attributes.

        Walks every display row and every document line, so it is linear in
        document size. Raises ``ContractionInvariantError`` on the first
        violation.
        """
        data = self._data
        if data is None:
            return
        lines = self.lines_in_doc()
        for name, length in (
            ("visible", data.visible.length()),
            ("expanded", data.expanded.length()),
            ("heights", data.heights.length()),
            ("fold_display_texts", data.fold_display_texts.length()),
        ):
            if length != lines:
                raise ContractionInvariantError(f"{name} tracks {length} lines, document has {lines}")
        for line_display in range(self.lines_displayed()):
            line_doc = data.display_lines.partition_from_position(line_display)
            if not self.get_visible(line_doc):
                raise ContractionInvariantError(
                    f"display line {line_display} resolved to hidden document line {line_doc}"
                )
        for line_doc in range(lines):
            span = self.display_from_doc(line_doc + 1) - self.display_from_doc(line_doc)
            expected = self.get_height(line_doc) if self.get_visible(line_doc) else 0
            if span != expected:
                raise ContractionInvariantError(
                    f"document line {line_doc} spans {span} display lines, expected {expected}"
                )
