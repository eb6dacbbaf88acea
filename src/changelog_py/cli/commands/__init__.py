"""Command implementations for the changelog-py CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.config import load_config
from changelog_py.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from changelog_py.config.models import ChangelogPyConfig


def load_project_config(root: Path, err_console: Console) -> ChangelogPyConfig:
    """Load configuration for ``root`` or exit with status 1."""
    try:
        return load_config(root).config
    except (ConfigError, OSError) as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e
