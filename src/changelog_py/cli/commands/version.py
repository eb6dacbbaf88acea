"""Implementation of the 'version' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.cli.commands import load_project_config
from changelog_py.core.changelog import compute_next_version
from changelog_py.core.version import FALLBACK_VERSION, get_initial_version
from changelog_py.exceptions import ChangelogPyError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_version(
    root: Path,
    show_next: bool,
    bump: str,
    console: Console,
    err_console: Console,
) -> None:
    """Print the current version, and the next one if requested."""
    config = load_project_config(root, err_console)

    try:
        current, next_version = compute_next_version(config, root, bump)
    except (ChangelogPyError, OSError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(f"Current version: [cyan]{current or FALLBACK_VERSION}[/]")

    if show_next:
        console.print(f"Bump: {bump}")
        console.print(f"Next version: [green]{next_version}[/]")
    elif current is None:
        console.print(
            "[yellow]No version found in the changelog.[/] "
            f"The next version will be [green]{get_initial_version(config.versioning)}[/]."
        )
