"""Implementation of the 'preview' command (dry-run of 'add')."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from changelog_py.cli.commands import load_project_config
from changelog_py.core.changelog import preview_entry
from changelog_py.exceptions import ChangelogPyError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from rich.console import Console


def run_preview(
    root: Path,
    category: str,
    description: str,
    details: Sequence[str],
    files: Sequence[str],
    bump: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Show the entry that 'add' would write."""
    config = load_project_config(root, err_console)

    try:
        preview = preview_entry(config, root, category, description, details, files, bump)
    except (ChangelogPyError, OSError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(
        Panel(
            Syntax(preview.entry, "markdown", theme="ansi_dark", word_wrap=True),
            title="[yellow]Preview[/]",
            border_style="yellow",
        )
    )
    console.print(
        f"Version: [cyan]{preview.current_version}[/] → [green]{preview.next_version}[/] "
        f"({preview.bump})"
    )
    console.print("\n[dim]Run [cyan]changelog-py add[/] to write this entry.[/]")
