"""Load ``Cargo.lock`` files from disk into :class:`Lockfile` snapshots.

Typical usage::

    old = load_lockfile(Path("Cargo.lock.orig"))
    new = load_lockfile(Path("Cargo.lock"))

Every failure -- unreadable path, invalid TOML, or a document that does not
match the lock-file schema -- surfaces as :class:`LockfileLoadError` so the
caller has a single exception to handle.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from lock_engine.errors import LockfileLoadError
from lock_engine.models.lockfile import Lockfile

logger = logging.getLogger(__name__)


def _format_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``location: message`` fragments."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def parse_lockfile(text: str, origin: str = "<string>") -> Lockfile:
    """Parse lock-file TOML text into a :class:`Lockfile`.

    Parameters
    ----------
    text:
        The TOML document.
    origin:
        Label used in error messages, usually the file path.

    Raises
    ------
    LockfileLoadError
        If the text is not valid TOML or does not match the schema.
    """
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise LockfileLoadError(f"Invalid TOML in '{origin}': {exc}") from exc

    try:
        lockfile = Lockfile.model_validate(document)
    except ValidationError as exc:
        raise LockfileLoadError(f"Invalid lock file '{origin}': {_format_validation_error(exc)}") from exc

    logger.debug(
        "Parsed '%s': format version %d, %d package(s).",
        origin,
        lockfile.version,
        len(lockfile.packages),
    )
    return lockfile


def load_lockfile(path: Path) -> Lockfile:
    """Read and parse the lock file at *path*.

    Raises
    ------
    LockfileLoadError
        If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LockfileLoadError(f"Failed to read lock file '{path}': {exc}") from exc

    return parse_lockfile(text, origin=str(path))
