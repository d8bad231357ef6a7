"""Command-line interface for the lock-file diff engine."""
