"""Per-package diff composition.

A :class:`PackageDiff` holds one :class:`Difference` per scalar field of a
:class:`~lock_engine.models.lockfile.Package` plus the set difference of its
dependency names.  It is built either from two versions of the same package
(:meth:`PackageDiff.diff`) or from a package that exists on one side only
(:meth:`PackageDiff.added`, :meth:`PackageDiff.removed`).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from lock_engine.diff.difference import Difference, diff, diff_opt, diff_set
from lock_engine.errors import PackageMismatchError
from lock_engine.models.lockfile import Package


def _equal_or_empty(difference: Difference[str]) -> bool:
    return difference.is_equal() or difference.is_empty()


@dataclass(frozen=True, slots=True)
class PackageDiff:
    """Field-by-field difference between two versions of one package."""

    name: str
    version: Difference[str]
    source: Difference[str]
    checksum: Difference[str]
    dependencies: tuple[Difference[str], ...] = ()

    @classmethod
    def diff(cls, old: Package, new: Package) -> PackageDiff:
        """Compare two versions of the same package.

        Raises
        ------
        PackageMismatchError
            If ``old.name != new.name``.  Diffing unrelated packages has no
            meaning and indicates a bug in the caller.
        """
        if old.name != new.name:
            raise PackageMismatchError(
                f"Cannot diff different packages: '{old.name}' and '{new.name}'."
            )
        return cls(
            name=old.name,
            version=diff(old.version, new.version),
            source=diff_opt(old.source, new.source),
            checksum=diff_opt(old.checksum, new.checksum),
            dependencies=tuple(diff_set(old.dependencies, new.dependencies)),
        )

    @classmethod
    def added(cls, package: Package) -> PackageDiff:
        """Describe a package that only exists in the new lock file."""
        return cls._one_sided(package, Difference.added)

    @classmethod
    def removed(cls, package: Package) -> PackageDiff:
        """Describe a package that only exists in the old lock file."""
        return cls._one_sided(package, Difference.removed)

    @classmethod
    def _one_sided(
        cls,
        package: Package,
        wrap: Callable[[str], Difference[str]],
    ) -> PackageDiff:
        def wrap_opt(value: str | None) -> Difference[str]:
            return Difference.empty() if value is None else wrap(value)

        return cls(
            name=package.name,
            version=wrap(package.version),
            source=wrap_opt(package.source),
            checksum=wrap_opt(package.checksum),
            dependencies=tuple(sorted(wrap(dep) for dep in set(package.dependencies))),
        )

    def is_equal_or_empty(self) -> bool:
        """Return ``True`` when nothing about this package changed.

        Used by renderers to skip no-op package blocks.
        """
        return (
            self.version.is_equal()
            and _equal_or_empty(self.source)
            and _equal_or_empty(self.checksum)
            and all(_equal_or_empty(dep) for dep in self.dependencies)
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PackageDiff):
            return NotImplemented
        return self.name < other.name
