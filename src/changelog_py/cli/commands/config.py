"""Implementation of the 'config' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.syntax import Syntax

from changelog_py.config.loader import dump_config, load_config
from changelog_py.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_config(root: Path, console: Console, err_console: Console) -> None:
    """Show the active configuration and where it was loaded from."""
    try:
        result = load_config(root)
    except (ConfigError, OSError) as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if result.is_default:
        console.print("[yellow]No configuration file found, using defaults.[/]\n")
    else:
        console.print(f"Config loaded from [cyan]{escape(str(result.config_path))}[/]\n")

    console.print(Syntax(dump_config(result.config), "json", theme="ansi_dark"))
