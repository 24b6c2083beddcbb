"""Public package surface for foldview.

Exports ``ContractionState`` and its backing structures, plus ``main`` for
programmatic CLI invocation.
"""

from __future__ import annotations

from .contraction_state import ContractionState
from .errors import ContractionInvariantError
from .structures import Partitioning, RunStyles, SparseVector


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "ContractionInvariantError",
    "ContractionState",
    "Partitioning",
    "RunStyles",
    "SparseVector",
    "main",
]
