"""Unit tests for lock_engine.diff.lockfile_diff."""

from __future__ import annotations

import logging

import pytest

from lock_engine.diff.difference import Difference
from lock_engine.diff.lockfile_diff import DiffSummary, LockfileDiff
from lock_engine.diff.package_diff import PackageDiff
from lock_engine.errors import DuplicatePackageError
from lock_engine.models.lockfile import Lockfile, Package


def _pkg(name: str, version: str = "1.0.0", dependencies: tuple[str, ...] = ()) -> Package:
    return Package(name=name, version=version, dependencies=dependencies)


def _lock(*packages: Package, version: int = 3) -> Lockfile:
    return Lockfile(version=version, packages=packages)


# ---------------------------------------------------------------------------
# LockfileDiff.difference
# ---------------------------------------------------------------------------


class TestLockfileDifference:
    def test_single_package_upgrade(self, tokio_1_15_0, tokio_1_34_0):
        result = LockfileDiff.difference(_lock(tokio_1_15_0), _lock(tokio_1_34_0))
        assert result == LockfileDiff(
            version=Difference.equal(3),
            packages=(PackageDiff.diff(tokio_1_15_0, tokio_1_34_0),),
        )
        package = result.packages[0]
        assert package.version == Difference.modified("1.15.0", "1.34.0")
        assert package.source.is_equal()
        assert package.dependencies[0] == Difference.removed("memchr")
        assert package.dependencies[-1] == Difference.added("windows-sys 0.48.0")

    def test_format_version_modified(self):
        result = LockfileDiff.difference(_lock(version=3), _lock(version=4))
        assert result.version == Difference.modified(3, 4)
        assert result.packages == ()

    def test_added_removed_and_matched(self):
        old = _lock(_pkg("anyhow"), _pkg("serde", "1.0.0"))
        new = _lock(_pkg("serde", "1.0.1"), _pkg("tokio"))
        result = LockfileDiff.difference(old, new)
        assert [p.name for p in result.packages] == ["anyhow", "serde", "tokio"]
        assert result.packages[0] == PackageDiff.removed(_pkg("anyhow"))
        assert result.packages[1].version == Difference.modified("1.0.0", "1.0.1")
        assert result.packages[2] == PackageDiff.added(_pkg("tokio"))

    def test_sorted_regardless_of_input_order(self):
        packages = [_pkg("zstd"), _pkg("bytes"), _pkg("mio"), _pkg("anyhow")]
        forward = LockfileDiff.difference(_lock(*packages), _lock(*packages[:2]))
        backward = LockfileDiff.difference(_lock(*reversed(packages)), _lock(*reversed(packages[:2])))
        assert forward == backward
        assert [p.name for p in forward.packages] == ["anyhow", "bytes", "mio", "zstd"]

    def test_identical_lockfiles(self, tokio_1_34_0):
        lock = _lock(tokio_1_34_0, _pkg("bytes"))
        result = LockfileDiff.difference(lock, lock)
        assert result.version.is_equal()
        assert all(p.is_equal_or_empty() for p in result.packages)
        assert result.changed_packages() == []

    def test_empty_lockfiles(self):
        result = LockfileDiff.difference(_lock(), _lock())
        assert result == LockfileDiff(version=Difference.equal(3), packages=())

    def test_inputs_not_mutated(self, tokio_1_15_0, tokio_1_34_0):
        old = _lock(tokio_1_15_0)
        new = _lock(tokio_1_34_0)
        LockfileDiff.difference(old, new)
        assert old.packages == (tokio_1_15_0,)
        assert new.packages == (tokio_1_34_0,)


# ---------------------------------------------------------------------------
# Duplicate package names
# ---------------------------------------------------------------------------


class TestDuplicatePackages:
    def test_last_entry_wins(self, caplog):
        old = _lock(_pkg("windows-sys", "0.48.0"), _pkg("windows-sys", "0.52.0"))
        new = _lock(_pkg("windows-sys", "0.52.0"))
        with caplog.at_level(logging.WARNING, logger="lock_engine.diff.lockfile_diff"):
            result = LockfileDiff.difference(old, new)
        assert len(result.packages) == 1
        assert result.packages[0].version == Difference.equal("0.52.0")
        assert "Duplicate package 'windows-sys' in old lock file" in caplog.text

    def test_strict_mode_raises(self):
        old = _lock(_pkg("windows-sys", "0.48.0"), _pkg("windows-sys", "0.52.0"))
        with pytest.raises(DuplicatePackageError, match="windows-sys"):
            LockfileDiff.difference(old, _lock(), strict_duplicates=True)

    def test_strict_mode_checks_new_side(self):
        new = _lock(_pkg("a"), _pkg("a", "2.0.0"))
        with pytest.raises(DuplicatePackageError, match="new lock file"):
            LockfileDiff.difference(_lock(), new, strict_duplicates=True)


# ---------------------------------------------------------------------------
# changed_packages & summary
# ---------------------------------------------------------------------------


class TestLockfileDiffSummary:
    def _mixed(self) -> LockfileDiff:
        old = _lock(_pkg("anyhow"), _pkg("bytes"), _pkg("log", dependencies=("cfg-if",)), _pkg("serde"))
        new = _lock(_pkg("bytes"), _pkg("log", dependencies=("value-bag",)), _pkg("serde", "2.0.0"), _pkg("tokio"))
        return LockfileDiff.difference(old, new)

    def test_changed_packages(self):
        assert [p.name for p in self._mixed().changed_packages()] == ["anyhow", "log", "serde", "tokio"]

    def test_summary_counts(self):
        summary = self._mixed().summary()
        assert summary == DiffSummary(added=1, removed=1, modified=2, unchanged=1)
        assert summary.total == 5
        assert summary.has_changes

    def test_summary_without_changes(self):
        lock = _lock(_pkg("bytes"))
        summary = LockfileDiff.difference(lock, lock).summary()
        assert summary == DiffSummary(unchanged=1)
        assert not summary.has_changes


class TestLockfileDiffHasChanges:
    def test_identical_lock_files(self):
        lock = _lock(_pkg("bytes"))
        assert not LockfileDiff.difference(lock, lock).has_changes

    def test_package_change(self):
        assert LockfileDiff.difference(_lock(_pkg("bytes")), _lock(_pkg("bytes", "1.1.0"))).has_changes

    def test_format_version_change_alone(self):
        result = LockfileDiff.difference(_lock(_pkg("bytes"), version=3), _lock(_pkg("bytes"), version=4))
        assert result.changed_packages() == []
        assert not result.summary().has_changes
        assert result.has_changes
