"""Exception types raised by foldview."""

from __future__ import annotations


class ContractionInvariantError(AssertionError):
    """The doc/display mapping no longer agrees with the stored line attributes.

    Signals a caller contract violation (for example malformed structural edits),
    never a recoverable runtime condition.
    """
