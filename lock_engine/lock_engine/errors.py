"""Exceptions raised by the lock-file diff engine."""

from __future__ import annotations


class LockfileLoadError(Exception):
    """Raised when a lock file cannot be read, decoded, or validated."""


class PackageMismatchError(Exception):
    """Raised when two packages with different names are diffed together.

    This signals a bug in the caller: a package diff is only defined between
    two versions of the *same* package.
    """


class DuplicatePackageError(Exception):
    """Raised in strict mode when a lock file lists a package name twice."""


class UnexpectedDifferenceError(Exception):
    """Raised when a difference variant appears where it can never occur.

    For example, the lock-format version is present in every lock file, so
    it can only ever be ``EQUAL`` or ``MODIFIED``.
    """
