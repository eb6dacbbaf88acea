"""Implementation of the 'init' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from changelog_py.config.loader import CONFIG_FILENAMES, load_config
from changelog_py.core.changelog import init_changelog
from changelog_py.exceptions import ChangelogPyError, ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_init(
    root: Path,
    format_name: str | None,
    file_name: str | None,
    write_config: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Create a new changelog, and optionally a config file.

    Args:
        root: Project root directory
        format_name: Format preset, defaults to the configured one
        file_name: Changelog file name, defaults to the configured one
        write_config: Write a config file if the project has none
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        loaded = load_config(root)
    except (ConfigError, OSError) as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    config_path = None
    if write_config and loaded.is_default:
        config_path = root / CONFIG_FILENAMES[0]

    try:
        result = init_changelog(
            loaded.config,
            root,
            format_name=format_name,
            file_name=file_name,
            config_path=config_path,
        )
    except (ChangelogPyError, OSError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    created = [f"  • Changelog: [cyan]{escape(str(result.changelog_path))}[/]"]
    if result.config_path is not None:
        created.append(f"  • Config: [cyan]{escape(str(result.config_path))}[/]")

    console.print(
        Panel(
            f"[bold]Format:[/] {result.format_name}\n"
            f"[bold]Categories:[/] {result.categories}\n\n"
            "Created:\n" + "\n".join(created),
            title="[green]Changelog Initialized[/]",
            border_style="green",
        )
    )
    console.print("\n[dim]Use [cyan]changelog-py add[/] to create the first entry.[/]")
