"""Keep a Changelog format.

See https://keepachangelog.com
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog_py.formats.base import EntryFields

CATEGORIES = ("Added", "Changed", "Deprecated", "Removed", "Fixed", "Security")


class KeepAChangelogFormatter:
    """Formatter for the Keep a Changelog 1.1.0 layout.

    Headings read ``## [1.2.3] - 2026-01-01``, categories come from a fixed
    vocabulary and items are ``-`` bullets with indented detail bullets.
    """

    name = "keep-a-changelog"
    categories = CATEGORIES
    default_file = "CHANGELOG.md"

    def is_valid_category(self, category: str) -> bool:
        """Whether ``category`` is one of the Keep a Changelog sections."""
        return category in CATEGORIES

    def category_list(self) -> str:
        return ", ".join(CATEGORIES)

    def format_entry(self, fields: EntryFields) -> str:
        """Render one version block.

        Args:
            fields: Version, date, category and items of the entry

        Returns:
            The block, ending with exactly one newline
        """
        lines = [
            f"## [{fields.version}] - {fields.date}",
            "",
            f"### {fields.category}",
            f"- {fields.description}",
        ]
        lines.extend(f"  - {detail}" for detail in fields.details)

        if fields.files:
            lines.append("")
            lines.append("### Files")
            lines.extend(f"- {path}" for path in fields.files)

        lines.append("")
        return "\n".join(lines)

    def format_initial_document(self) -> str:
        """Title and preamble for a new changelog file."""
        return "\n".join(
            [
                "# Changelog",
                "",
                "All notable changes to this project will be documented in this file.",
                "",
                "The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.1.0/),",
                "and this project adheres to "
                "[Semantic Versioning](https://semver.org/spec/v2.0.0.html).",
                "",
                "",
            ]
        )
