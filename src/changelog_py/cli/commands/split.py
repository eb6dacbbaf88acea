"""Implementation of the 'split' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.cli.commands import load_project_config
from changelog_py.core.changelog import split
from changelog_py.exceptions import ChangelogPyError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_split(root: Path, console: Console, err_console: Console) -> None:
    """Move the older half of the changelog into an archive file."""
    config = load_project_config(root, err_console)

    try:
        result = split(config, root)
    except (ChangelogPyError, OSError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(
        f"  [green]✓[/] Moved {result.entries_moved} entries to "
        f"[cyan]{escape(str(result.archive_path))}[/], kept {result.entries_kept}"
    )
