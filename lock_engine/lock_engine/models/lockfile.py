"""Lock-file schema: the resolved dependency graph at one point in time.

A :class:`Lockfile` is a snapshot of a ``Cargo.lock`` file: a lock-format
version plus the ordered list of ``[[package]]`` entries.  Both models are
frozen; the diff engine only ever reads them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Package(BaseModel):
    """One resolved package entry (``[[package]]`` table)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Package name; the identity key used to match packages across lock files.",
    )
    version: str = Field(
        ...,
        min_length=1,
        description="Resolved version, e.g. '1.34.0'.",
    )
    source: str | None = Field(
        default=None,
        description="Provenance, e.g. 'registry+https://github.com/rust-lang/crates.io-index'. "
        "Absent for path and workspace packages.",
    )
    checksum: str | None = Field(
        default=None,
        description="SHA-256 integrity checksum of the package archive, when known.",
    )
    dependencies: tuple[str, ...] = Field(
        default=(),
        description="Names of direct dependencies.  Order and duplicates carry no meaning.",
    )


class Lockfile(BaseModel):
    """A fully-loaded lock file.

    ``packages`` is populated from the TOML ``package`` array.  Unknown
    top-level tables such as ``[metadata]`` or ``[patch]`` are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: int = Field(
        default=1,
        ge=1,
        description="Lock-format version.  Files written before the key existed are version 1.",
    )
    packages: tuple[Package, ...] = Field(
        default=(),
        alias="package",
        description="Package entries in file order.",
    )
