"""Implementation of the 'search' and 'show' commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.cli.commands import load_project_config
from changelog_py.core.changelog import get_entry, search_changelog, summarize_entry
from changelog_py.exceptions import ChangelogPyError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_search(
    root: Path,
    query: str | None,
    version: str | None,
    category: str | None,
    limit: int,
    console: Console,
    err_console: Console,
) -> None:
    """Print one summary line per matching entry."""
    config = load_project_config(root, err_console)

    try:
        result = search_changelog(
            config, root, query=query, version=version, category=category, limit=limit
        )
    except (ChangelogPyError, OSError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if result.searched == 0:
        console.print("[yellow]No version entries found in the changelog.[/]")
        return

    if result.total == 0:
        filters = [
            f'{name}="{value}"'
            for name, value in (("query", query), ("version", version), ("category", category))
            if value
        ]
        console.print(
            f"[yellow]No matches for {escape(', '.join(filters))}.[/] "
            f"{result.searched} entries searched."
        )
        return

    console.print(f"Matches: {len(result.matches)} of {result.total} (limit: {limit})\n")
    for entry in result.matches:
        for line in summarize_entry(entry, category):
            console.print(escape(line))


def run_show(
    root: Path,
    version: str,
    console: Console,
    err_console: Console,
) -> None:
    """Print the full block of one version."""
    config = load_project_config(root, err_console)

    try:
        entry = get_entry(config, root, version)
    except (ChangelogPyError, OSError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(escape(entry.raw_block))
