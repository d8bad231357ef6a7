"""Lock-file loading."""

from lock_engine.errors import LockfileLoadError
from lock_engine.loader.lockfile_loader import load_lockfile, parse_lockfile

__all__ = [
    "LockfileLoadError",
    "load_lockfile",
    "parse_lockfile",
]
