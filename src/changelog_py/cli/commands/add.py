"""Implementation of the 'add' command.

The add command writes a new entry at the top of the changelog,
taking a backup first and splitting the file if it grows too large.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from changelog_py.cli.commands import load_project_config
from changelog_py.core.changelog import add_entry
from changelog_py.exceptions import ChangelogPyError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from rich.console import Console


def run_add(
    root: Path,
    category: str,
    description: str,
    details: Sequence[str],
    files: Sequence[str],
    bump: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the add command.

    Args:
        root: Project root directory
        category: Entry category (e.g. "Added", "Fixed")
        description: Main description of the change
        details: Detail bullet points
        files: Changed files
        bump: Version bump type, defaults to patch
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_project_config(root, err_console)

    try:
        result = add_entry(config, root, category, description, details, files, bump)
    except (ChangelogPyError, OSError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if result.backup_created:
        console.print("  [green]✓[/] Created backup")
    console.print(
        f"  [green]✓[/] Added [cyan]{escape(category)}[/] entry to {escape(str(result.path))}"
    )

    if result.split is not None:
        console.print(
            f"  [green]✓[/] Auto-split: moved {result.split.entries_moved} entries to "
            f"[cyan]{escape(result.split.archive_path.name)}[/], kept {result.split.entries_kept}"
        )

    for warning in result.warnings:
        err_console.print(f"[yellow]Warning:[/] {escape(warning)}")

    console.print(
        Panel(
            f"[green]Version {escape(config.versioning.prefix)}{result.version}[/]\n"
            f"Category: {escape(category)}\n"
            f"File: {escape(str(result.path))}",
            title="[green]Entry Added[/]",
            border_style="green",
        )
    )
