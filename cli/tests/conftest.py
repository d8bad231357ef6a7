"""Shared fixtures for CLI tests: small lock files written to a temp directory."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

CRATES_IO = "registry+https://github.com/rust-lang/crates.io-index"

OLD_LOCK = f"""\
version = 3

[[package]]
name = "bytes"
version = "1.1.0"
source = "{CRATES_IO}"
checksum = "c4872d67bab6358e59559027aa3b9157c53d9358c51423c17554809a8858e0f8"

[[package]]
name = "memchr"
version = "2.4.1"
source = "{CRATES_IO}"
checksum = "308cc39be01b73d0d18f82a0e7b2a3df85245f84af96fdddc5d202d27e47b86a"

[[package]]
name = "tokio"
version = "1.15.0"
source = "{CRATES_IO}"
checksum = "fbbf1c778ec206785635ce8ad57fe52b3009ae9e0c9f574a728f3049d3e55838"
dependencies = [
 "bytes",
 "memchr",
]
"""

NEW_LOCK = f"""\
version = 3

[[package]]
name = "bytes"
version = "1.1.0"
source = "{CRATES_IO}"
checksum = "c4872d67bab6358e59559027aa3b9157c53d9358c51423c17554809a8858e0f8"

[[package]]
name = "socket2"
version = "0.5.5"
source = "{CRATES_IO}"
checksum = "7b5fac59a5cb5dd637972e5fca70daf0523c9067fcdc4842f053dae04a18f8e9"

[[package]]
name = "tokio"
version = "1.34.0"
source = "{CRATES_IO}"
checksum = "d0c014766411e834f7af5b8f4cf46257aab4036ca95e9d2c144a10f59ad6f5b9"
dependencies = [
 "bytes",
 "socket2",
]
"""


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep LOCKDIFF_* variables and any ``.env`` file out of CLI tests."""
    for key in list(os.environ):
        if key.startswith("LOCKDIFF_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def old_lock(tmp_path: Path) -> Path:
    path = tmp_path / "Cargo.old.lock"
    path.write_text(OLD_LOCK, encoding="utf-8")
    return path


@pytest.fixture()
def new_lock(tmp_path: Path) -> Path:
    path = tmp_path / "Cargo.new.lock"
    path.write_text(NEW_LOCK, encoding="utf-8")
    return path
