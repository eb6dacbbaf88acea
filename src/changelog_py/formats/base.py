"""Interface shared by all changelog formatters.

Formatters are independent implementations of this protocol; none of
them inherits from another.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class EntryFields:
    """Everything needed to render one changelog entry."""

    version: str
    date: str
    category: str
    description: str
    details: Sequence[str] = ()
    files: Sequence[str] = ()


@runtime_checkable
class ChangelogFormatter(Protocol):
    """Rendering capability of a changelog dialect."""

    name: str
    categories: tuple[str, ...]
    default_file: str

    def is_valid_category(self, category: str) -> bool:
        """Whether ``category`` may be used with this format."""
        ...

    def category_list(self) -> str:
        """Comma-separated list of valid (or recommended) categories."""
        ...

    def format_entry(self, fields: EntryFields) -> str:
        """Render a single entry, terminated by exactly one newline."""
        ...

    def format_initial_document(self) -> str:
        """Header of a brand-new changelog file."""
        ...
