"""Difference algebra for comparing two versions of a single value.

A :class:`Difference` describes how a value in one identity slot (a package's
version, its checksum, one of its dependency names...) relates between the
*old* and *new* side of a comparison.  The variant set is closed:

* ``EMPTY``    -- absent on both sides (optional fields only)
* ``EQUAL``    -- present and identical on both sides
* ``REMOVED``  -- present on the old side only
* ``MODIFIED`` -- present on both sides with different values
* ``ADDED``    -- present on the new side only

Differences carry a canonical total order so that any collection of them can
be sorted into a byte-identical report regardless of input order::

    EMPTY < REMOVED < EQUAL < MODIFIED < ADDED

Ties between two differences of the same kind are broken by the wrapped
value(s); ``MODIFIED`` compares ``old`` first, then ``new``.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class DifferenceKind(str, Enum):
    """The variant of a :class:`Difference`."""

    EMPTY = "empty"
    EQUAL = "equal"
    REMOVED = "removed"
    MODIFIED = "modified"
    ADDED = "added"


# Position of each kind in the canonical order.  Removals sort ahead of the
# unchanged entries so a dependency block reads: what went away, what stayed,
# what changed, what arrived.
_KIND_RANK: dict[DifferenceKind, int] = {
    DifferenceKind.EMPTY: 0,
    DifferenceKind.REMOVED: 1,
    DifferenceKind.EQUAL: 2,
    DifferenceKind.MODIFIED: 3,
    DifferenceKind.ADDED: 4,
}


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Difference(Generic[T]):
    """Relationship between a value on the old side and on the new side.

    Prefer the named constructors (:meth:`equal`, :meth:`added`, ...) or the
    :func:`diff` / :func:`diff_opt` operators over calling the class
    directly.  ``old`` holds the old-side value and ``new`` the new-side
    value; a side that has no value holds ``None``.
    """

    kind: DifferenceKind
    old: T | None = None
    new: T | None = None

    def __post_init__(self) -> None:
        has_old = self.old is not None
        has_new = self.new is not None
        if self.kind is DifferenceKind.EMPTY:
            valid = not has_old and not has_new
        elif self.kind is DifferenceKind.EQUAL:
            valid = has_old and has_new and self.old == self.new
        elif self.kind is DifferenceKind.REMOVED:
            valid = has_old and not has_new
        elif self.kind is DifferenceKind.ADDED:
            valid = has_new and not has_old
        else:
            valid = has_old and has_new and self.old != self.new
        if not valid:
            raise ValueError(f"Invalid {self.kind.value} difference: old={self.old!r}, new={self.new!r}")

    # -- Named constructors -------------------------------------------------

    @classmethod
    def empty(cls) -> Difference[Any]:
        return cls(DifferenceKind.EMPTY)

    @classmethod
    def equal(cls, value: T) -> Difference[T]:
        return cls(DifferenceKind.EQUAL, value, value)

    @classmethod
    def removed(cls, value: T) -> Difference[T]:
        return cls(DifferenceKind.REMOVED, old=value)

    @classmethod
    def modified(cls, old: T, new: T) -> Difference[T]:
        return cls(DifferenceKind.MODIFIED, old, new)

    @classmethod
    def added(cls, value: T) -> Difference[T]:
        return cls(DifferenceKind.ADDED, new=value)

    # -- Predicates ---------------------------------------------------------

    def is_equal(self) -> bool:
        """Return ``True`` only for the ``EQUAL`` variant."""
        return self.kind is DifferenceKind.EQUAL

    def is_empty(self) -> bool:
        """Return ``True`` only for the ``EMPTY`` variant."""
        return self.kind is DifferenceKind.EMPTY

    @property
    def value(self) -> T:
        """The single wrapped value of an ``EQUAL``, ``REMOVED`` or ``ADDED`` difference.

        Raises
        ------
        ValueError
            For ``EMPTY`` (no value) and ``MODIFIED`` (two values).
        """
        if self.kind in (DifferenceKind.EQUAL, DifferenceKind.REMOVED):
            return self.old  # type: ignore[return-value]
        if self.kind is DifferenceKind.ADDED:
            return self.new  # type: ignore[return-value]
        raise ValueError(f"A {self.kind.value} difference does not wrap a single value.")

    # -- Canonical order ----------------------------------------------------

    def sort_key(self) -> tuple[Any, ...]:
        """Return the key that realises the canonical total order."""
        rank = _KIND_RANK[self.kind]
        if self.kind is DifferenceKind.EMPTY:
            return (rank,)
        if self.kind is DifferenceKind.MODIFIED:
            return (rank, self.old, self.new)
        return (rank, self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Difference):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __repr__(self) -> str:
        if self.kind is DifferenceKind.EMPTY:
            return "Empty"
        if self.kind is DifferenceKind.MODIFIED:
            return f"Modified(old={self.old!r}, new={self.new!r})"
        return f"{self.kind.value.capitalize()}({self.value!r})"


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


def diff(a: T, b: T) -> Difference[T]:
    """Compare two values that are present on both sides.

    Returns ``EQUAL(a)`` when ``a == b`` and ``MODIFIED(a, b)`` otherwise.
    The result encodes direction: ``diff(b, a)`` is ``MODIFIED(b, a)``.
    """
    if a == b:
        return Difference.equal(a)
    return Difference.modified(a, b)


def diff_opt(a: T | None, b: T | None) -> Difference[T]:
    """Compare two optional values, covering every presence combination."""
    if a is None and b is None:
        return Difference.empty()
    if a is None:
        return Difference.added(b)
    if b is None:
        return Difference.removed(a)
    return diff(a, b)


def diff_set(a: Iterable[T], b: Iterable[T]) -> list[Difference[T]]:
    """Compare two unordered collections of hashable, orderable values.

    Element order and duplicates in the inputs carry no meaning: both sides
    are collapsed into sets first.  Every element of ``A ∪ B`` appears
    exactly once in the result -- ``EQUAL`` for shared elements, ``REMOVED``
    for old-only and ``ADDED`` for new-only -- sorted by the canonical order.
    """
    old = set(a)
    new = set(b)

    result: list[Difference[T]] = [Difference.equal(v) for v in old & new]
    result.extend(Difference.removed(v) for v in old - new)
    result.extend(Difference.added(v) for v in new - old)
    result.sort()
    return result
