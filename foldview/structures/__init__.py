"""Backing structures for the contraction state.

Defines the cumulative ``Partitioning`` index, run-coded ``RunStyles`` arrays,
and the ``SparseVector`` overlay. Each is usable and testable on its own.
"""

from __future__ import annotations

from .partitioning import Partitioning
from .run_styles import RunStyles
from .sparse_vector import SparseVector

__all__ = [
    "Partitioning",
    "RunStyles",
    "SparseVector",
]
