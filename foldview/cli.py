"""Command-line front door for foldview.

Builds a contraction state from folding/height options and prints the
resulting document-to-display mapping. Meant for inspecting fold layouts.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import load_check_correctness
from .contraction_state import ContractionState
from .errors import ContractionInvariantError


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for zero-based line numbers."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _line_range(value: str) -> tuple[int, int]:
    """argparse type for ``START:END`` (inclusive) or a single ``LINE``."""
    start_text, sep, end_text = value.partition(":")
    start = _nonnegative_int(start_text)
    end = _nonnegative_int(end_text) if sep else start
    if end < start:
        raise argparse.ArgumentTypeError(f"range end precedes start: {value!r}")
    return start, end


def _height_assignment(value: str) -> tuple[int, int]:
    """argparse type for ``LINE=ROWS``."""
    line_text, sep, rows_text = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected LINE=ROWS, got {value!r}")
    return _nonnegative_int(line_text), _positive_int(rows_text)


def _label_assignment(value: str) -> tuple[int, str]:
    """argparse type for ``LINE=TEXT``."""
    line_text, sep, label = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected LINE=TEXT, got {value!r}")
    return _nonnegative_int(line_text), label


def build_state(
    lines: int,
    hidden: list[tuple[int, int]],
    heights: list[tuple[int, int]],
    labels: list[tuple[int, str]],
    collapsed: list[int],
    check_correctness: bool | None = None,
) -> ContractionState:
    """Create a ``lines``-line state and apply the requested attributes in order.

    ``check_correctness=None`` defers to the environment and config file.
    """
    if check_correctness is None:
        check_correctness = load_check_correctness()
    state = ContractionState(check_correctness=check_correctness)
    state.insert_lines(state.lines_in_doc(), lines - state.lines_in_doc())
    for line_doc, rows in heights:
        state.set_height(line_doc, rows)
    for line_doc, label in labels:
        state.set_fold_display_text(line_doc, label)
    for line_doc in collapsed:
        state.set_expanded(line_doc, False)
    for start, end in hidden:
        state.set_visible(start, end, False)
    return state


def format_mapping(state: ContractionState) -> str:
    """Render one row per document line followed by the totals."""
    out = [f"{'doc':>5} {'display':>8} {'rows':>5}  {'visible':<8}{'expanded':<9}label"]
    for line_doc in range(state.lines_in_doc()):
        visible = state.get_visible(line_doc)
        rows = state.get_height(line_doc) if visible else 0
        label = state.get_fold_display_text(line_doc) or ""
        out.append(
            f"{line_doc:>5} {state.display_from_doc(line_doc):>8} {rows:>5}  "
            f"{'yes' if visible else 'no':<8}{'yes' if state.get_expanded(line_doc) else 'no':<9}{label}".rstrip()
        )
    out.append(f"lines_in_doc={state.lines_in_doc()} lines_displayed={state.lines_displayed()}")
    return "\n".join(out) + "\n"


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, build the requested fold layout, and print its mapping."""
    parser = argparse.ArgumentParser(
        description="Print how document lines map to display rows under folding and wrapping."
    )
    parser.add_argument("--lines", type=_positive_int, default=1, help="Number of document lines (default: 1).")
    parser.add_argument(
        "--hide",
        type=_line_range,
        action="append",
        default=[],
        metavar="START[:END]",
        help="Hide an inclusive range of lines. Repeatable.",
    )
    parser.add_argument(
        "--height",
        type=_height_assignment,
        action="append",
        default=[],
        metavar="LINE=ROWS",
        help="Set the display-row count of a line. Repeatable.",
    )
    parser.add_argument(
        "--label",
        type=_label_assignment,
        action="append",
        default=[],
        metavar="LINE=TEXT",
        help="Attach a fold label to a line. Repeatable.",
    )
    parser.add_argument(
        "--collapse",
        type=_nonnegative_int,
        action="append",
        default=[],
        metavar="LINE",
        help="Mark a fold header line as collapsed. Repeatable.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        default=None,
        help="Verify the mapping after every change (overrides config).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log mode transitions to stderr.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        state = build_state(
            args.lines,
            args.hide,
            args.height,
            args.label,
            args.collapse,
            check_correctness=args.check,
        )
    except ContractionInvariantError as exc:
        raise SystemExit(f"Inconsistent fold layout: {exc}") from exc
    sys.stdout.write(format_mapping(state))


if __name__ == "__main__":
    main()
