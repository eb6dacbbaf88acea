"""Changelog text parsing.

Turns raw changelog text into structured version entries, extracts the
current version, and works out where a new entry has to be inserted.

Three heading dialects are recognized in a single pass:

- Keep a Changelog: ``## [1.2.3] - 2026-01-01``
- Conventional:     ``## 1.2.3 (2026-01-01)``
- DWSM:             ``v1.2.3 (2026-01-01)``
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

_VERSION = r"\d+\.\d+\.\d+"
# Digits separated by "-", "." or "/" so configured date formats still parse
_DATE = r"\d[\d./-]*\d"

# Heading grammars keyed by dialect. Each uses the named groups
# ``version`` and ``date``; they are tagged per dialect when combined.
HEADING_GRAMMARS: dict[str, str] = {
    "keep_a_changelog": rf"## \[(?P<version>{_VERSION})\](?:[ \t]*-[ \t]*(?P<date>{_DATE}))?",
    "conventional": rf"## (?P<version>{_VERSION})(?:[ \t]*\((?P<date>{_DATE})\))?",
    "dwsm": rf"v(?P<version>{_VERSION})[ \t]*\((?P<date>{_DATE})\)",
}


def _combine_grammars(grammars: dict[str, str]) -> re.Pattern[str]:
    alternatives = []
    for tag, grammar in grammars.items():
        tagged = grammar.replace("(?P<version>", f"(?P<{tag}_version>").replace(
            "(?P<date>", f"(?P<{tag}_date>"
        )
        alternatives.append(tagged)
    # The version token must end at whitespace or end of line ("1.2.3.4" is not a heading)
    return re.compile(rf"^(?:{'|'.join(alternatives)})(?=[ \t\r]|$)", re.MULTILINE)


HEADING_PATTERN = _combine_grammars(HEADING_GRAMMARS)

# First version in a heading line, including the legacy "Version: X.Y.Z" form
_CURRENT_VERSION_PATTERN = re.compile(
    rf"^(?:## \[?({_VERSION})\]?|v({_VERSION})\s*\(|Version:\s*({_VERSION}))",
    re.MULTILINE,
)

_CATEGORY_PATTERN = re.compile(r"^### (.+)$")
_ITEM_PATTERN = re.compile(r"^[-*] (.+)$")
_HEADER_BLOCK_PATTERN = re.compile(r"^# .+\n(?:(?!##).*\n)*", re.MULTILINE)


@dataclass(slots=True)
class Entry:
    """A single version block of a changelog."""

    version: str
    date: str
    raw_block: str
    categories: dict[str, list[str]] = field(default_factory=dict)
    start: int = 0
    dialect: str = ""

    @property
    def end(self) -> int:
        """Offset just past the (trimmed) raw block."""
        return self.start + len(self.raw_block)

    @property
    def format_name(self) -> str:
        """Format whose heading grammar matched, e.g. ``keep-a-changelog``."""
        return self.dialect.replace("_", "-")


@dataclass(frozen=True, slots=True)
class Heading:
    """A version heading found in the text."""

    version: str
    date: str
    start: int
    dialect: str


class InsertAnchor(StrEnum):
    """What the insertion point was derived from."""

    HEADING = "heading"
    HEADER = "header"
    END = "end"


@dataclass(frozen=True, slots=True)
class InsertionPoint:
    offset: int
    anchor: InsertAnchor

    @property
    def recognized(self) -> bool:
        """False when the document had neither a heading nor a title block."""
        return self.anchor != InsertAnchor.END


def find_headings(content: str) -> list[Heading]:
    """All version headings in document order."""
    headings = []
    for match in HEADING_PATTERN.finditer(content):
        for tag in HEADING_GRAMMARS:
            version = match.group(f"{tag}_version")
            if version is not None:
                date = match.group(f"{tag}_date") or ""
                headings.append(Heading(version, date, match.start(), tag))
                break
    return headings


def parse_entries(content: str) -> list[Entry]:
    """Parse changelog content into version entries.

    Args:
        content: Full changelog text

    Returns:
        Entries in document order (newest first); empty if no heading
        is found
    """
    headings = find_headings(content)
    entries = []

    for i, heading in enumerate(headings):
        end = headings[i + 1].start if i + 1 < len(headings) else len(content)
        raw_block = content[heading.start : end].rstrip()
        entries.append(
            Entry(
                version=heading.version,
                date=heading.date,
                raw_block=raw_block,
                categories=parse_categories(raw_block),
                start=heading.start,
                dialect=heading.dialect,
            )
        )

    return entries


def parse_categories(block: str) -> dict[str, list[str]]:
    """Extract ``### Category`` sections and their top-level list items.

    Items before the first category heading and indented sub-items are
    not collected.
    """
    categories: dict[str, list[str]] = {}
    current: str | None = None

    for line in block.splitlines():
        category_match = _CATEGORY_PATTERN.match(line)
        if category_match:
            current = category_match.group(1).strip()
            categories.setdefault(current, [])
            continue

        item_match = _ITEM_PATTERN.match(line)
        if item_match and current is not None:
            categories[current].append(item_match.group(1).strip())

    return categories


def extract_version(content: str) -> str | None:
    """First version found in a heading line, or None."""
    match = _CURRENT_VERSION_PATTERN.search(content)
    if not match:
        return None
    return match.group(1) or match.group(2) or match.group(3)


def locate_insert_position(content: str) -> InsertionPoint:
    """Work out where a new entry belongs.

    New entries always go right before the first version heading. Without
    one, they go after the leading ``# Title`` block (title plus any
    preamble lines not starting with ``##``). Failing both, at the end.
    """
    heading = HEADING_PATTERN.search(content)
    if heading:
        return InsertionPoint(heading.start(), InsertAnchor.HEADING)

    header = _HEADER_BLOCK_PATTERN.search(content)
    if header:
        return InsertionPoint(header.end(), InsertAnchor.HEADER)

    return InsertionPoint(len(content), InsertAnchor.END)


def find_insert_position(content: str) -> int:
    """Character offset where a new entry should be inserted."""
    return locate_insert_position(content).offset
