"""Core business logic for changelog-py.

This module contains the fundamental building blocks:
- Changelog parsing and insertion point detection
- Version bump calculation
- Backup rotation and auto-split of oversized files
- The add/preview/search operations composing them
"""

from __future__ import annotations

from changelog_py.core.backup import cleanup_old_backups, create_backup
from changelog_py.core.changelog import (
    AddResult,
    PreviewResult,
    SearchResult,
    add_entry,
    get_current_version,
    get_entry,
    init_changelog,
    preview_entry,
    search_changelog,
)
from changelog_py.core.parser import (
    Entry,
    InsertAnchor,
    extract_version,
    find_insert_position,
    locate_insert_position,
    parse_entries,
)
from changelog_py.core.split import SplitResult, split_changelog
from changelog_py.core.version import (
    FALLBACK_VERSION,
    BumpType,
    Version,
    bump_version,
    get_initial_version,
)

__all__ = [
    # Operations
    "AddResult",
    # Version
    "BumpType",
    # Parser
    "Entry",
    "FALLBACK_VERSION",
    "InsertAnchor",
    "PreviewResult",
    "SearchResult",
    # Split
    "SplitResult",
    "Version",
    "add_entry",
    "bump_version",
    # Backup
    "cleanup_old_backups",
    "create_backup",
    "extract_version",
    "find_insert_position",
    "get_current_version",
    "get_entry",
    "get_initial_version",
    "init_changelog",
    "locate_insert_position",
    "parse_entries",
    "preview_entry",
    "search_changelog",
    "split_changelog",
]
