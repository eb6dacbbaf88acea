"""Changelog dialects: Keep a Changelog, Conventional and DWSM."""

from __future__ import annotations

from changelog_py.formats.base import ChangelogFormatter, EntryFields
from changelog_py.formats.registry import available_formats, get_formatter

__all__ = [
    "ChangelogFormatter",
    "EntryFields",
    "available_formats",
    "get_formatter",
]
