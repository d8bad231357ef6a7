"""lockdiff CLI application -- Typer-based developer interface.

Compares two ``Cargo.lock`` files and prints what changed: package
versions, sources, checksums and direct dependency sets.  The report goes to
*stdout* (or a pager); errors and log records go to *stderr* so that the
report can be redirected cleanly.
"""

from __future__ import annotations

import logging
import sys
from contextlib import nullcontext
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from lockdiff.display import (
    RenderOptions,
    display_lockfile_diff,
    display_summary,
    make_console,
)

# ---------------------------------------------------------------------------
# App & global state
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="lockdiff",
    help="lockdiff - structural diff for Cargo.lock files",
    no_args_is_help=True,
)
console = Console(stderr=True)

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

# Exit codes.
EXIT_OK = 0
EXIT_DIFFERENCES = 1
EXIT_ERROR = 3


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _configure_logging(level: int) -> None:
    """Send log records to the current stderr; never onto the report stream.

    Handlers left by an earlier invocation are replaced, since they may be
    bound to a stream that is now closed.
    """
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr, force=True)


def _resolve(flag: bool | None, default: bool) -> bool:
    """A flag given on the command line wins over the setting."""
    return default if flag is None else flag


# ---------------------------------------------------------------------------
# diff
# ---------------------------------------------------------------------------


@app.command()
def diff(
    old: Path = typer.Argument(
        ...,
        help="Path to the old (base) lock file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    new: Path = typer.Argument(
        ...,
        help="Path to the new (target) lock file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    color: bool | None = typer.Option(
        None,
        "--color/--no-color",
        help="Colour removed lines red and added lines green.  [env: LOCKDIFF_COLOR]",
        show_default=False,
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose/--quiet",
        "-v",
        help="List unchanged dependencies too.  [env: LOCKDIFF_VERBOSE]",
        show_default=False,
    ),
    pager: bool | None = typer.Option(
        None,
        "--pager/--no-pager",
        help="Page the report through the system pager.  [env: LOCKDIFF_PAGER]",
        show_default=False,
    ),
    strict_duplicates: bool | None = typer.Option(
        None,
        "--strict-duplicates/--allow-duplicates",
        help="Fail when a lock file lists the same package name twice.  [env: LOCKDIFF_STRICT_DUPLICATES]",
        show_default=False,
    ),
    stat: bool = typer.Option(
        False,
        "--stat",
        help="Append a table counting added, removed, modified and unchanged packages.",
    ),
    json_mode: bool = typer.Option(
        False,
        "--json",
        help="Emit structured JSON to stdout instead of the text report.",
    ),
    exit_code: bool = typer.Option(
        False,
        "--exit-code",
        help="Exit with status 1 when the lock-format version or any package changed.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging on stderr.",
    ),
) -> None:
    """Show the differences between two lock files."""
    from lock_engine.config import load_settings
    from lock_engine.diff import LockfileDiff
    from lock_engine.errors import DuplicatePackageError, LockfileLoadError
    from lock_engine.loader import load_lockfile
    from lock_engine.serializer import serialize_diff

    try:
        settings = load_settings(**({"debug": True} if debug else {}))
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration: {escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(code=EXIT_ERROR) from exc

    _configure_logging(settings.effective_log_level())

    options = RenderOptions(
        verbose=_resolve(verbose, settings.verbose),
        color=_resolve(color, settings.color),
        force_color=color is True,
    )

    try:
        old_lock = load_lockfile(old)
        new_lock = load_lockfile(new)
        lockfile_diff = LockfileDiff.difference(
            old_lock,
            new_lock,
            strict_duplicates=_resolve(strict_duplicates, settings.strict_duplicates),
        )
    except (LockfileLoadError, DuplicatePackageError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(code=EXIT_ERROR) from exc

    summary = lockfile_diff.summary()

    if json_mode:
        sys.stdout.write(serialize_diff(lockfile_diff, changed_only=not options.verbose) + "\n")
    else:
        report = make_console(options)
        paging = report.pager(styles=options.color) if _resolve(pager, settings.pager) else nullcontext()
        with paging:
            display_lockfile_diff(report, lockfile_diff, options)
            if stat:
                report.print()
                display_summary(report, summary)

    if exit_code and lockfile_diff.has_changes:
        raise typer.Exit(code=EXIT_DIFFERENCES)
    raise typer.Exit(code=EXIT_OK)
