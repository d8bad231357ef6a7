"""Rich output formatting for the lockdiff CLI.

The report mirrors the layout of a ``Cargo.lock`` file, prefixed like a
unified diff: ``-`` (red) for old-side lines, ``+`` (green) for new-side
lines and a space for unchanged context.  Rendering state (verbosity,
colour) is passed in explicitly through :class:`RenderOptions`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from lock_engine.diff.difference import DifferenceKind
from lock_engine.errors import UnexpectedDifferenceError

if TYPE_CHECKING:
    from lock_engine.diff.difference import Difference
    from lock_engine.diff.lockfile_diff import DiffSummary, LockfileDiff
    from lock_engine.diff.package_diff import PackageDiff


# ---------------------------------------------------------------------------
# Options & styles
# ---------------------------------------------------------------------------

_REMOVED_STYLE = "red"
_ADDED_STYLE = "green"


@dataclass(frozen=True)
class RenderOptions:
    """Explicit rendering configuration."""

    verbose: bool = False
    color: bool = True
    force_color: bool = False


def make_console(options: RenderOptions, file: IO[str] | None = None) -> Console:
    """Build a console for the report honouring ``options.color``.

    With ``force_color`` the output is coloured even when it is not a
    terminal; otherwise Rich's terminal detection decides.  Highlighting is
    disabled so that only the diff markers are coloured.
    """
    forced = options.color and options.force_color
    if not options.color:
        color_system = None
    elif forced:
        color_system = "standard"
    else:
        color_system = "auto"
    return Console(
        file=file,
        no_color=not options.color,
        color_system=color_system,
        force_terminal=True if forced else None,
        highlight=False,
    )


def _removed(line: str) -> Text:
    return Text(line, style=_REMOVED_STYLE)


def _added(line: str) -> Text:
    return Text(line, style=_ADDED_STYLE)


# ---------------------------------------------------------------------------
# Line formatting
# ---------------------------------------------------------------------------


def _field_lines(field: str, difference: Difference[Any], *, quoted: bool = True, required: bool = False) -> list[Text]:
    """Format a ``field = value`` difference as zero, one or two lines."""

    def fmt(marker: str, value: Any) -> str:
        rendered = f'"{value}"' if quoted else str(value)
        return f"{marker}{field} = {rendered}"

    kind = difference.kind
    if kind is DifferenceKind.EQUAL:
        return [Text(fmt(" ", difference.value))]
    if kind is DifferenceKind.REMOVED:
        return [_removed(fmt("-", difference.value))]
    if kind is DifferenceKind.ADDED:
        return [_added(fmt("+", difference.value))]
    if kind is DifferenceKind.MODIFIED:
        return [_removed(fmt("-", difference.old)), _added(fmt("+", difference.new))]
    if required:
        raise UnexpectedDifferenceError(f"Field '{field}' is always present but its difference is {kind.value}.")
    return []


def _dependency_lines(dependencies: tuple[Difference[str], ...], verbose: bool) -> list[Text]:
    lines = [Text(" dependencies = [")]
    for dep in dependencies:
        kind = dep.kind
        if kind is DifferenceKind.REMOVED:
            lines.append(_removed(f'- "{dep.value}",'))
        elif kind is DifferenceKind.ADDED:
            lines.append(_added(f'+ "{dep.value}",'))
        elif kind is DifferenceKind.MODIFIED:
            lines.append(_removed(f'- "{dep.old}",'))
            lines.append(_added(f'+ "{dep.new}",'))
        elif kind is DifferenceKind.EQUAL and verbose:
            lines.append(Text(f'  "{dep.value}",'))
    lines.append(Text(" ]"))
    return lines


def format_package_diff(package: PackageDiff, verbose: bool = False) -> list[Text]:
    """Format one ``[[package]]`` block."""
    lines = [Text(" [[package]]"), Text(f' name = "{package.name}"')]
    lines.extend(_field_lines("version", package.version, required=True))
    lines.extend(_field_lines("source", package.source))
    lines.extend(_field_lines("checksum", package.checksum))
    lines.extend(_dependency_lines(package.dependencies, verbose))
    return lines


def format_lockfile_diff(lockfile_diff: LockfileDiff, verbose: bool = False) -> list[Text]:
    """Format the whole report: format-version line, then changed package blocks.

    Packages for which nothing changed are skipped; blocks are separated by
    a blank line.
    """
    if lockfile_diff.version.kind not in (DifferenceKind.EQUAL, DifferenceKind.MODIFIED):
        raise UnexpectedDifferenceError(
            f"The lock-format version is present in every lock file, got {lockfile_diff.version!r}."
        )
    lines = _field_lines("version", lockfile_diff.version, quoted=False)

    for package in lockfile_diff.changed_packages():
        lines.append(Text(""))
        lines.extend(format_package_diff(package, verbose))
    return lines


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------


def display_lockfile_diff(console: Console, lockfile_diff: LockfileDiff, options: RenderOptions) -> None:
    """Print the diff report.

    Parameters
    ----------
    console:
        Rich console to write to (typically stdout).
    lockfile_diff:
        The diff to render.
    options:
        Verbosity controls whether unchanged dependencies are listed.
    """
    for line in format_lockfile_diff(lockfile_diff, options.verbose):
        console.print(line, soft_wrap=True)


def display_summary(console: Console, summary: DiffSummary) -> None:
    """Render package counts per change category as a table."""
    table = Table(
        title="Package Changes",
        show_lines=False,
        pad_edge=True,
        expand=False,
    )
    table.add_column("Change", style="bold")
    table.add_column("Packages", justify="right")

    table.add_row(f"[{_ADDED_STYLE}]added[/{_ADDED_STYLE}]", str(summary.added))
    table.add_row(f"[{_REMOVED_STYLE}]removed[/{_REMOVED_STYLE}]", str(summary.removed))
    table.add_row("[yellow]modified[/yellow]", str(summary.modified))
    table.add_row("[dim]unchanged[/dim]", str(summary.unchanged))

    console.print(table)
    if not summary.has_changes:
        console.print("[dim]No package changes.[/dim]")
