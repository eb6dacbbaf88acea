"""Command-line interface for changelog-py."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from changelog_py import __version__
from changelog_py.formats import available_formats

console = Console()
err_console = Console(stderr=True)

BUMP_CHOICES = click.Choice(["major", "minor", "patch"])


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--root",
    type=click.Path(path_type=Path, exists=True, file_okay=False),
    help="Project root containing the changelog (defaults to the current directory).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="changelog-py")
@click.pass_context
def cli(ctx: click.Context, root: Path | None, verbose: bool) -> None:
    """Maintain a structured, append-only changelog."""
    setup_logging(verbose)
    ctx.obj = CLIContext(root=(root or Path.cwd()).resolve())


def _entry_options(func):
    func = click.option("--bump", type=BUMP_CHOICES, help="Version component to bump.")(func)
    func = click.option(
        "--file", "files", multiple=True, help="Changed file (repeatable)."
    )(func)
    func = click.option(
        "--detail", "details", multiple=True, help="Detail bullet point (repeatable)."
    )(func)
    func = click.argument("description")(func)
    func = click.argument("category")(func)
    return func


@cli.command()
@click.option("--format", "format_name", type=click.Choice(available_formats()), help="Format preset.")
@click.option("--file", "file_name", help="Changelog file name.")
@click.option("--write-config", is_flag=True, help="Also write a config file if none exists.")
@click.pass_obj
def init(obj: CLIContext, format_name: str | None, file_name: str | None, write_config: bool) -> None:
    """Create a new changelog file."""
    from changelog_py.cli.commands.init import run_init

    run_init(obj.root, format_name, file_name, write_config, console, err_console)


@cli.command()
@_entry_options
@click.pass_obj
def add(
    obj: CLIContext,
    category: str,
    description: str,
    details: tuple[str, ...],
    files: tuple[str, ...],
    bump: str | None,
) -> None:
    """Add an entry to the changelog."""
    from changelog_py.cli.commands.add import run_add

    run_add(obj.root, category, description, details, files, bump, console, err_console)


@cli.command()
@_entry_options
@click.pass_obj
def preview(
    obj: CLIContext,
    category: str,
    description: str,
    details: tuple[str, ...],
    files: tuple[str, ...],
    bump: str | None,
) -> None:
    """Show the entry 'add' would write, without writing it."""
    from changelog_py.cli.commands.preview import run_preview

    run_preview(obj.root, category, description, details, files, bump, console, err_console)


@cli.command()
@click.option("--next", "show_next", is_flag=True, help="Also compute the next version.")
@click.option("--bump", type=BUMP_CHOICES, default="patch", show_default=True)
@click.pass_obj
def version(obj: CLIContext, show_next: bool, bump: str) -> None:
    """Show the current (and next) version."""
    from changelog_py.cli.commands.version import run_version

    run_version(obj.root, show_next, bump, console, err_console)


@cli.command()
@click.option("--query", "-q", help="Case-insensitive full-text search.")
@click.option("--version", "version_filter", help="Version prefix, e.g. '1.2'.")
@click.option("--category", "-c", help="Category name.")
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True)
@click.pass_obj
def search(
    obj: CLIContext,
    query: str | None,
    version_filter: str | None,
    category: str | None,
    limit: int,
) -> None:
    """Search changelog entries."""
    from changelog_py.cli.commands.search import run_search

    run_search(obj.root, query, version_filter, category, limit, console, err_console)


@cli.command()
@click.argument("version")
@click.pass_obj
def show(obj: CLIContext, version: str) -> None:
    """Print the full block of one version."""
    from changelog_py.cli.commands.search import run_show

    run_show(obj.root, version, console, err_console)


@cli.command(name="split")
@click.pass_obj
def split_command(obj: CLIContext) -> None:
    """Move older entries into an archive file."""
    from changelog_py.cli.commands.split import run_split

    run_split(obj.root, console, err_console)


@cli.command(name="config")
@click.pass_obj
def config_command(obj: CLIContext) -> None:
    """Show the active configuration."""
    from changelog_py.cli.commands.config import run_config

    run_config(obj.root, console, err_console)


def main() -> None:
    """Entry point for console_scripts."""
    cli()
