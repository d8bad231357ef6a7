"""Shared fixtures for lock-engine tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from lock_engine.models.lockfile import Package

CRATES_IO = "registry+https://github.com/rust-lang/crates.io-index"

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep LOCKDIFF_* variables and any ``.env`` file out of engine tests."""
    for key in list(os.environ):
        if key.startswith("LOCKDIFF_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture()
def tokio_1_15_0() -> Package:
    return Package(
        name="tokio",
        version="1.15.0",
        source=CRATES_IO,
        checksum="fbbf1c778ec206785635ce8ad57fe52b3009ae9e0c9f574a728f3049d3e55838",
        dependencies=(
            "bytes",
            "libc",
            "memchr",
            "mio",
            "num_cpus",
            "once_cell",
            "parking_lot",
            "pin-project-lite",
            "signal-hook-registry",
            "tokio-macros",
            "winapi",
        ),
    )


@pytest.fixture()
def tokio_1_34_0() -> Package:
    return Package(
        name="tokio",
        version="1.34.0",
        source=CRATES_IO,
        checksum="d0c014766411e834f7af5b8f4cf46257aab4036ca95e9d2c144a10f59ad6f5b9",
        dependencies=(
            "backtrace",
            "bytes",
            "libc",
            "mio",
            "num_cpus",
            "parking_lot",
            "pin-project-lite",
            "signal-hook-registry",
            "socket2",
            "tokio-macros",
            "windows-sys 0.48.0",
        ),
    )
