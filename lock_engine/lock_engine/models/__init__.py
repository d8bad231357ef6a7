"""Domain models for the lock-file diff engine."""

from lock_engine.models.lockfile import Lockfile, Package

__all__ = [
    "Lockfile",
    "Package",
]
