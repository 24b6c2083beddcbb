"""CLI argument parsing and mapping-table output tests.

Verifies how ``foldview.cli.main`` turns options into a contraction state.
"""

from __future__ import annotations

import argparse
import contextlib
import io
import os
import unittest
from unittest import mock

from foldview import cli


def _run(argv: list[str]) -> list[str]:
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        cli.main(argv)
    return out.getvalue().splitlines()


class CliParsingTests(unittest.TestCase):
    def test_line_range_accepts_single_line_and_inclusive_range(self) -> None:
        self.assertEqual(cli._line_range("3"), (3, 3))
        self.assertEqual(cli._line_range("2:5"), (2, 5))

    def test_line_range_rejects_reversed_or_negative_ranges(self) -> None:
        with self.assertRaises(argparse.ArgumentTypeError):
            cli._line_range("4:2")
        with self.assertRaises(argparse.ArgumentTypeError):
            cli._line_range("-1:2")

    def test_assignments_require_separator(self) -> None:
        self.assertEqual(cli._height_assignment("2=3"), (2, 3))
        self.assertEqual(cli._label_assignment("1={...}"), (1, "{...}"))
        with self.assertRaises(argparse.ArgumentTypeError):
            cli._height_assignment("2")
        with self.assertRaises(argparse.ArgumentTypeError):
            cli._height_assignment("2=0")
        with self.assertRaises(argparse.ArgumentTypeError):
            cli._label_assignment("label")

    def test_invalid_arguments_exit_through_argparse(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            cli.main(["--lines", "0"])


class CliOutputTests(unittest.TestCase):
    def test_hidden_range_shrinks_displayed_total(self) -> None:
        rows = _run(["--lines", "5", "--hide", "1:2", "--check"])

        self.assertEqual(rows[-1], "lines_in_doc=5 lines_displayed=3")
        self.assertEqual(rows[2].split(), ["1", "1", "0", "no", "yes"])
        self.assertEqual(rows[4].split(), ["3", "1", "1", "yes", "yes"])

    def test_heights_labels_and_collapsed_headers_are_listed(self) -> None:
        rows = _run(
            ["--lines", "4", "--height", "1=3", "--label", "0=...", "--collapse", "0", "--hide", "2", "--check"]
        )

        self.assertEqual(rows[1].split(), ["0", "0", "1", "yes", "no", "..."])
        self.assertEqual(rows[2].split(), ["1", "1", "3", "yes", "yes"])
        self.assertEqual(rows[3].split(), ["2", "4", "0", "no", "yes"])
        self.assertEqual(rows[-1], "lines_in_doc=4 lines_displayed=5")

    def test_build_state_without_options_stays_one_to_one(self) -> None:
        state = cli.build_state(6, [], [], [], [], check_correctness=True)

        self.assertTrue(state.is_one_to_one())
        self.assertEqual(state.lines_in_doc(), 6)

    def test_build_state_defers_diagnostics_to_environment(self) -> None:
        with mock.patch.dict(os.environ, {"FOLDVIEW_CHECK_CORRECTNESS": "1"}):
            self.assertTrue(cli.build_state(3, [], [], [], []).check_correctness)
            self.assertFalse(cli.build_state(3, [], [], [], [], check_correctness=False).check_correctness)
        with mock.patch.dict(os.environ, {"FOLDVIEW_CHECK_CORRECTNESS": "off"}):
            self.assertFalse(cli.build_state(3, [], [], [], []).check_correctness)


if __name__ == "__main__":
    unittest.main()
