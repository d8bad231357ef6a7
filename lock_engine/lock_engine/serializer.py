"""Deterministic JSON serialization for lock-file diffs.

The serialised form is byte-identical for identical inputs (sorted keys,
stable indentation) so reports can be compared and stored as artefacts.
"""

from __future__ import annotations

import json
from typing import Any

from lock_engine.diff.difference import Difference
from lock_engine.diff.lockfile_diff import LockfileDiff
from lock_engine.diff.package_diff import PackageDiff


def difference_to_dict(difference: Difference[Any]) -> dict[str, Any]:
    """Convert a difference to ``{"kind": ..., "old": ..., "new": ...}``.

    Sides without a value are omitted, so ``EMPTY`` becomes ``{"kind": "empty"}``.
    """
    raw: dict[str, Any] = {"kind": difference.kind.value}
    if difference.old is not None:
        raw["old"] = difference.old
    if difference.new is not None:
        raw["new"] = difference.new
    return raw


def package_diff_to_dict(package: PackageDiff) -> dict[str, Any]:
    return {
        "name": package.name,
        "version": difference_to_dict(package.version),
        "source": difference_to_dict(package.source),
        "checksum": difference_to_dict(package.checksum),
        "dependencies": [difference_to_dict(dep) for dep in package.dependencies],
        "changed": not package.is_equal_or_empty(),
    }


def lockfile_diff_to_dict(lockfile_diff: LockfileDiff) -> dict[str, Any]:
    summary = lockfile_diff.summary()
    return {
        "version": difference_to_dict(lockfile_diff.version),
        "packages": [package_diff_to_dict(package) for package in lockfile_diff.packages],
        "summary": {
            "added": summary.added,
            "removed": summary.removed,
            "modified": summary.modified,
            "unchanged": summary.unchanged,
        },
    }


def serialize_diff(lockfile_diff: LockfileDiff, *, changed_only: bool = False) -> str:
    """Serialize a lock-file diff to a deterministic JSON string.

    Parameters
    ----------
    lockfile_diff:
        The diff to serialize.
    changed_only:
        Drop packages for which nothing changed.  The summary still counts
        every package.

    Returns
    -------
    str
        A pretty-printed JSON string with sorted keys.
    """
    raw = lockfile_diff_to_dict(lockfile_diff)
    if changed_only:
        raw["packages"] = [package for package in raw["packages"] if package["changed"]]
    return json.dumps(raw, indent=2, sort_keys=True, ensure_ascii=False)
