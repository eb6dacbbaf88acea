"""DWSM changelog format.

Free-form categories with a fixed ``v{version} ({date})`` heading.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog_py.formats.base import EntryFields

# Shown to users as suggestions; any category is accepted.
RECOMMENDED_CATEGORIES = (
    "Added",
    "Changed",
    "Deprecated",
    "Removed",
    "Fixed",
    "Security",
    "Documentation",
)

HEADER_TEMPLATE = "v{version} ({date})"
CATEGORY_TEMPLATE = "### {category}"
ITEM_TEMPLATE = "- {description}"
DETAIL_TEMPLATE = "  - {detail}"
FILE_TEMPLATE = "  - `{file}`"


class DwsmFormatter:
    """Formatter for ``v1.2.3 (date)`` headings with free-form categories."""

    name = "dwsm"
    categories: tuple[str, ...] = ()
    default_file = "CHANGELOG.md"

    def is_valid_category(self, category: str) -> bool:
        """Any category is accepted."""
        return True

    def category_list(self) -> str:
        return ", ".join(RECOMMENDED_CATEGORIES)

    def format_entry(self, fields: EntryFields) -> str:
        lines = [
            HEADER_TEMPLATE.format(version=fields.version, date=fields.date),
            "",
            CATEGORY_TEMPLATE.format(category=fields.category),
            ITEM_TEMPLATE.format(description=fields.description),
        ]
        lines.extend(DETAIL_TEMPLATE.format(detail=detail) for detail in fields.details)

        if fields.files:
            lines.append("")
            lines.append(CATEGORY_TEMPLATE.format(category="Files"))
            lines.extend(FILE_TEMPLATE.format(file=path) for path in fields.files)

        lines.append("")
        return "\n".join(lines)

    def format_initial_document(self) -> str:
        return "# Changelog\n\n"
