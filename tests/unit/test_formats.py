"""Tests for the changelog formatters."""

from __future__ import annotations

import pytest

from changelog_py.core.parser import find_insert_position, parse_entries
from changelog_py.exceptions import UnknownFormatError
from changelog_py.formats import (
    ChangelogFormatter,
    EntryFields,
    available_formats,
    get_formatter,
)

FIELDS = EntryFields(
    version="1.4.0",
    date="2026-10-18",
    category="Fixed",
    description="Handle empty changelog files",
    details=("Returns an empty list", "No longer raises"),
    files=("src/parser.py",),
)


class TestRegistry:
    """Tests for get_formatter()."""

    @pytest.mark.parametrize("name", ["keep-a-changelog", "conventional", "dwsm"])
    def test_known_formats(self, name: str):
        """Every registered format implements the formatter protocol."""
        formatter = get_formatter(name)

        assert formatter.name == name
        assert isinstance(formatter, ChangelogFormatter)

    def test_unknown_format(self):
        """Unknown names raise UnknownFormatError listing the options."""
        with pytest.raises(UnknownFormatError, match="keep-a-changelog, conventional, dwsm"):
            get_formatter("markdown")

    def test_available_formats(self):
        """All three dialects are available."""
        assert available_formats() == ["keep-a-changelog", "conventional", "dwsm"]


class TestKeepAChangelog:
    """Tests for the Keep a Changelog formatter."""

    def test_format_entry(self):
        """Render heading, category, item, details and files."""
        text = get_formatter("keep-a-changelog").format_entry(FIELDS)

        assert text == (
            "## [1.4.0] - 2026-10-18\n"
            "\n"
            "### Fixed\n"
            "- Handle empty changelog files\n"
            "  - Returns an empty list\n"
            "  - No longer raises\n"
            "\n"
            "### Files\n"
            "- src/parser.py\n"
        )

    def test_categories(self):
        """The vocabulary is fixed."""
        formatter = get_formatter("keep-a-changelog")

        assert formatter.is_valid_category("Security")
        assert not formatter.is_valid_category("Features")
        assert formatter.category_list() == "Added, Changed, Deprecated, Removed, Fixed, Security"

    def test_initial_document(self):
        """The initial document links the standard."""
        text = get_formatter("keep-a-changelog").format_initial_document()

        assert text.startswith("# Changelog\n")
        assert "keepachangelog.com" in text


class TestConventional:
    """Tests for the Conventional formatter."""

    def test_format_entry(self):
        """Blank line after the section heading, asterisk bullets."""
        fields = EntryFields(
            version="2.0.0",
            date="2026-10-18",
            category="Breaking Changes",
            description="Drop Python 3.10",
        )
        text = get_formatter("conventional").format_entry(fields)

        assert text == "## 2.0.0 (2026-10-18)\n\n### Breaking Changes\n\n* Drop Python 3.10\n"

    def test_files_are_bold(self):
        """Files render as bold bullets."""
        text = get_formatter("conventional").format_entry(FIELDS)
        assert "* **src/parser.py**" in text
        assert "  * Returns an empty list" in text

    def test_categories(self):
        """The vocabulary is fixed."""
        formatter = get_formatter("conventional")

        assert formatter.is_valid_category("Bug Fixes")
        assert not formatter.is_valid_category("Fixed")


class TestDwsm:
    """Tests for the DWSM formatter."""

    def test_format_entry(self):
        """Files render as indented inline-code bullets."""
        text = get_formatter("dwsm").format_entry(FIELDS)

        assert text.startswith("v1.4.0 (2026-10-18)\n\n### Fixed\n- Handle empty changelog files\n")
        assert "  - `src/parser.py`" in text

    def test_any_category(self):
        """Every category is accepted; the list is only a recommendation."""
        formatter = get_formatter("dwsm")

        assert formatter.is_valid_category("Whatever I Like")
        assert "Documentation" in formatter.category_list()

    def test_initial_document(self):
        """The initial document is just a title."""
        assert get_formatter("dwsm").format_initial_document() == "# Changelog\n\n"


class TestFormatterContract:
    """Properties every formatter shares."""

    @pytest.mark.parametrize("name", ["keep-a-changelog", "conventional", "dwsm"])
    def test_single_trailing_newline(self, name: str):
        """Entries end with exactly one newline."""
        text = get_formatter(name).format_entry(FIELDS)

        assert text.endswith("\n")
        assert not text.endswith("\n\n")

    @pytest.mark.parametrize(
        ("name", "category"),
        [("keep-a-changelog", "Added"), ("conventional", "Features"), ("dwsm", "Tooling")],
    )
    def test_round_trip(self, name: str, category: str):
        """Parsing a formatted entry recovers version, date and items."""
        fields = EntryFields(
            version="3.1.4",
            date="2026-10-18",
            category=category,
            description="Something new",
            details=("a detail",),
        )
        formatter = get_formatter(name)
        document = formatter.format_initial_document() + formatter.format_entry(fields)

        entries = parse_entries(document)

        assert len(entries) == 1
        assert entries[0].version == "3.1.4"
        assert entries[0].date == "2026-10-18"
        assert entries[0].categories == {category: ["Something new"]}

    @pytest.mark.parametrize("name", ["keep-a-changelog", "conventional", "dwsm"])
    def test_documented(self, name: str):
        """Every formatter class carries a docstring."""
        assert type(get_formatter(name)).__doc__

    @pytest.mark.parametrize("name", ["keep-a-changelog", "conventional", "dwsm"])
    def test_initial_document_has_insertion_point(self, name: str):
        """New documents insert after their header."""
        document = get_formatter(name).format_initial_document()
        assert find_insert_position(document) == len(document)
