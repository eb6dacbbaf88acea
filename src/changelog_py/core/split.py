"""Auto-split of oversized changelog files.

The newest half of the entries stays in the main file; the oldest half
moves into a dated archive file next to it. The archive is written
before the main file is replaced, so an interrupted split leaves the
original changelog intact with a redundant archive rather than losing
entries.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from changelog_py.core.parser import Entry, parse_entries
from changelog_py.exceptions import ChangelogNotFoundError, InsufficientEntriesError
from changelog_py.security import assert_not_symlink, validate_path_within_root
from changelog_py.utils.dates import compact_date
from changelog_py.utils.files import read_text, write_text_atomic

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

ARCHIVE_PREFIX = "CHANGELOG-archive-"


@dataclass(frozen=True, slots=True)
class SplitResult:
    archive_path: Path
    entries_moved: int
    entries_kept: int


@dataclass(frozen=True, slots=True)
class SplitPlan:
    """Both halves of a split and the documents built from them."""

    header: str
    kept: list[Entry]
    archived: list[Entry]
    main_content: str
    archive_content: str


def plan_split(content: str, archive_name: str, stamp: str) -> SplitPlan:
    """Partition ``content`` into kept and archived entries.

    Args:
        content: Current changelog text
        archive_name: File name of the archive, referenced from the main file
        stamp: YYYYMMDD stamp used in the archive title

    Raises:
        InsufficientEntriesError: If fewer than 2 entries exist
    """
    entries = parse_entries(content)
    if len(entries) < 2:
        raise InsufficientEntriesError(len(entries))

    split_index = math.ceil(len(entries) / 2)
    kept = entries[:split_index]
    archived = entries[split_index:]

    header = content[: entries[0].start]

    archive_content = (
        f"# Changelog Archive ({stamp})\n\n"
        + "\n\n".join(e.raw_block for e in archived)
        + "\n"
    )
    main_content = (
        header
        + "\n\n".join(e.raw_block for e in kept)
        + "\n\n"
        + f"<!-- Older entries: see {archive_name} -->\n"
    )

    return SplitPlan(
        header=header,
        kept=kept,
        archived=archived,
        main_content=main_content,
        archive_content=archive_content,
    )


def archive_path_for(changelog_path: Path, today: date) -> Path:
    """Archive file next to ``changelog_path`` that does not exist yet."""
    stamp = compact_date(today)
    candidate = changelog_path.with_name(f"{ARCHIVE_PREFIX}{stamp}.md")
    counter = 1
    while candidate.exists():
        candidate = changelog_path.with_name(f"{ARCHIVE_PREFIX}{stamp}-{counter}.md")
        counter += 1
    return candidate


def split_changelog(
    changelog_path: Path,
    *,
    root: Path | None = None,
    encoding: str = "utf-8",
    today: date | None = None,
) -> SplitResult:
    """Move the oldest half of the entries into an archive file.

    Args:
        changelog_path: Absolute path of the changelog file
        root: Project root the files must stay in, defaults to the cwd
        encoding: Text encoding of the changelog
        today: Date used for the archive name, defaults to today

    Returns:
        Where the archive went and how many entries moved

    Raises:
        ChangelogNotFoundError: If the changelog does not exist
        InsufficientEntriesError: If fewer than 2 entries exist
        SecurityError: If a path escapes the root or is a symlink
    """
    changelog_path = validate_path_within_root(changelog_path, root)
    assert_not_symlink(changelog_path)

    content = read_text(changelog_path, encoding)
    if content is None:
        raise ChangelogNotFoundError(changelog_path)

    day = today or date.today()
    archive_path = validate_path_within_root(archive_path_for(changelog_path, day), root)
    assert_not_symlink(archive_path)

    plan = plan_split(content, archive_path.name, compact_date(day))

    # Order matters: archive first, then the main file.
    write_text_atomic(archive_path, plan.archive_content, encoding)
    write_text_atomic(changelog_path, plan.main_content, encoding)

    logger.info(
        "Split %s: moved %d entries to %s, kept %d",
        changelog_path,
        len(plan.archived),
        archive_path,
        len(plan.kept),
    )
    return SplitResult(
        archive_path=archive_path,
        entries_moved=len(plan.archived),
        entries_kept=len(plan.kept),
    )
