"""Resolve a format name to its formatter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changelog_py.exceptions import UnknownFormatError
from changelog_py.formats.conventional import ConventionalFormatter
from changelog_py.formats.dwsm import DwsmFormatter
from changelog_py.formats.keep_a_changelog import KeepAChangelogFormatter

if TYPE_CHECKING:
    from changelog_py.formats.base import ChangelogFormatter

FORMATTERS: dict[str, ChangelogFormatter] = {
    "keep-a-changelog": KeepAChangelogFormatter(),
    "conventional": ConventionalFormatter(),
    "dwsm": DwsmFormatter(),
}


def available_formats() -> list[str]:
    """Names of all registered formats."""
    return list(FORMATTERS)


def get_formatter(name: str) -> ChangelogFormatter:
    """Return the formatter registered under ``name``.

    Raises:
        UnknownFormatError: If no such format exists
    """
    try:
        return FORMATTERS[name]
    except KeyError:
        raise UnknownFormatError(name, available_formats()) from None
