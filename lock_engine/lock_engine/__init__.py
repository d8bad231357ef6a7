"""Structural diff engine for Cargo-style dependency lock files."""

__version__ = "0.3.0"
