"""Aggregate diff between two lock files.

Packages are matched across the two lock files by name.  Matched pairs are
compared field by field; packages found on one side only become one-sided
diffs.  The resulting list is sorted by package name so identical inputs
always produce an identical report, independent of file order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lock_engine.diff.difference import Difference, DifferenceKind, diff
from lock_engine.diff.package_diff import PackageDiff
from lock_engine.errors import DuplicatePackageError
from lock_engine.models.lockfile import Lockfile, Package

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DiffSummary:
    """Package counts per change category."""

    added: int = 0
    removed: int = 0
    modified: int = 0
    unchanged: int = 0

    @property
    def total(self) -> int:
        return self.added + self.removed + self.modified + self.unchanged

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.modified)


def _index_packages(lockfile: Lockfile, side: str, strict: bool) -> dict[str, Package]:
    """Key packages by name.  A repeated name replaces the earlier entry."""
    index: dict[str, Package] = {}
    for package in lockfile.packages:
        previous = index.get(package.name)
        if previous is not None:
            if strict:
                raise DuplicatePackageError(
                    f"Package '{package.name}' appears more than once in the {side} lock file "
                    f"(versions {previous.version} and {package.version})."
                )
            logger.warning(
                "Duplicate package '%s' in %s lock file: keeping version %s, dropping %s.",
                package.name,
                side,
                package.version,
                previous.version,
            )
        index[package.name] = package
    return index


@dataclass(frozen=True, slots=True)
class LockfileDiff:
    """Lock-format version difference plus one :class:`PackageDiff` per package name."""

    version: Difference[int]
    packages: tuple[PackageDiff, ...] = ()

    @classmethod
    def difference(
        cls,
        old: Lockfile,
        new: Lockfile,
        *,
        strict_duplicates: bool = False,
    ) -> LockfileDiff:
        """Compare two lock files.

        Parameters
        ----------
        old:
            The base lock file.
        new:
            The target lock file.
        strict_duplicates:
            When ``True``, a package name listed twice in one lock file raises
            :class:`DuplicatePackageError`.  By default the last entry wins
            and a warning is logged.

        Returns
        -------
        LockfileDiff
            Package diffs sorted by name.
        """
        version = diff(old.version, new.version)

        old_index = _index_packages(old, "old", strict_duplicates)
        new_index = _index_packages(new, "new", strict_duplicates)

        packages: list[PackageDiff] = []
        for name, old_package in old_index.items():
            new_package = new_index.get(name)
            if new_package is not None:
                packages.append(PackageDiff.diff(old_package, new_package))
            else:
                packages.append(PackageDiff.removed(old_package))

        for name, new_package in new_index.items():
            if name not in old_index:
                packages.append(PackageDiff.added(new_package))

        packages.sort()

        logger.debug(
            "Compared %d old and %d new package(s) into %d package diff(s).",
            len(old_index),
            len(new_index),
            len(packages),
        )
        return cls(version=version, packages=tuple(packages))

    def changed_packages(self) -> list[PackageDiff]:
        """Return the package diffs that carry at least one change, in name order."""
        return [package for package in self.packages if not package.is_equal_or_empty()]

    @property
    def has_changes(self) -> bool:
        """True when the lock-format version or any package changed."""
        return not self.version.is_equal() or any(not package.is_equal_or_empty() for package in self.packages)

    def summary(self) -> DiffSummary:
        """Count packages per change category.

        A package is *added* or *removed* when its version difference is
        one-sided, *unchanged* when it is equal-or-empty, and *modified*
        otherwise.
        """
        added = removed = modified = unchanged = 0
        for package in self.packages:
            if package.version.kind is DifferenceKind.ADDED:
                added += 1
            elif package.version.kind is DifferenceKind.REMOVED:
                removed += 1
            elif package.is_equal_or_empty():
                unchanged += 1
            else:
                modified += 1
        return DiffSummary(added=added, removed=removed, modified=modified, unchanged=unchanged)
