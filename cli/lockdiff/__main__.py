"""Entry point for `python -m lockdiff` and `lockdiff` console script."""

from __future__ import annotations

from lockdiff.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
