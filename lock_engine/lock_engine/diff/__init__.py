"""Deterministic diff engine for lock-file comparison."""

from lock_engine.diff.difference import Difference, DifferenceKind, diff, diff_opt, diff_set
from lock_engine.diff.lockfile_diff import DiffSummary, LockfileDiff
from lock_engine.diff.package_diff import PackageDiff

__all__ = [
    "DiffSummary",
    "Difference",
    "DifferenceKind",
    "LockfileDiff",
    "PackageDiff",
    "diff",
    "diff_opt",
    "diff_set",
]
