"""Conventional Changelog format.

Categories follow the sections conventional-changelog tooling produces
from Conventional Commits (https://www.conventionalcommits.org).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog_py.formats.base import EntryFields

CATEGORIES = ("Features", "Bug Fixes", "Performance", "Reverts", "Breaking Changes")


class ConventionalFormatter:
    """Formatter matching conventional-changelog output (``## 1.2.3 (date)``)."""

    name = "conventional"
    categories = CATEGORIES
    default_file = "CHANGELOG.md"

    def is_valid_category(self, category: str) -> bool:
        return category in CATEGORIES

    def category_list(self) -> str:
        return ", ".join(CATEGORIES)

    def format_entry(self, fields: EntryFields) -> str:
        """Render one version block with ``*`` bullets and bold file paths."""
        # Conventional output leaves a blank line after each section heading
        lines = [
            f"## {fields.version} ({fields.date})",
            "",
            f"### {fields.category}",
            "",
            f"* {fields.description}",
        ]
        lines.extend(f"  * {detail}" for detail in fields.details)

        if fields.files:
            lines.append("")
            lines.append("### Files")
            lines.extend(f"* **{path}**" for path in fields.files)

        lines.append("")
        return "\n".join(lines)

    def format_initial_document(self) -> str:
        return (
            "# Changelog\n"
            "\n"
            "All notable changes to this project will be documented in this file.\n"
            "See [Conventional Commits](https://conventionalcommits.org) for commit guidelines.\n\n"
        )
