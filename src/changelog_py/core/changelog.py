"""Changelog operations.

This module composes the parser, version calculator, formatters,
backup and split managers into the operations the CLI exposes.

Adding an entry follows a fixed safety chain: validate, back up, read,
compute, write, verify, and split if the file grew past the size limit.
Each step gates the next; only a failed backup and a failed post-write
split are downgraded to warnings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from changelog_py.core.backup import create_backup
from changelog_py.core.parser import (
    Entry,
    InsertAnchor,
    extract_version,
    locate_insert_position,
    parse_entries,
)
from changelog_py.core.split import SplitResult, split_changelog
from changelog_py.core.version import (
    FALLBACK_VERSION,
    BumpType,
    bump_version,
    get_initial_version,
)
from changelog_py.exceptions import (
    BackupError,
    ChangelogExistsError,
    ChangelogNotFoundError,
    ChangelogPyError,
    EntryNotFoundError,
    FileTooLargeError,
    InvalidCategoryError,
    SearchCriteriaError,
    SecurityError,
)
from changelog_py.formats import EntryFields, get_formatter
from changelog_py.security import (
    MAX_CHANGELOG_SIZE,
    assert_file_size_within_limit,
    assert_not_symlink,
    validate_filename,
    validate_path_within_root,
)
from changelog_py.utils.dates import format_date
from changelog_py.utils.files import file_size, read_text, write_text_atomic

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from changelog_py.config.models import ChangelogPyConfig
    from changelog_py.formats import ChangelogFormatter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PreviewResult:
    current_version: str
    next_version: str
    bump: BumpType
    entry: str


@dataclass(slots=True)
class AddResult:
    version: str
    category: str
    path: Path
    anchor: InsertAnchor
    backup_created: bool = False
    split: SplitResult | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class InitResult:
    format_name: str
    categories: str
    changelog_path: Path
    config_path: Path | None = None


@dataclass(frozen=True, slots=True)
class SearchResult:
    matches: list[Entry]
    total: int
    searched: int


# Paths


def resolve_changelog_path(config: ChangelogPyConfig, root: Path) -> Path:
    """Absolute changelog path, guaranteed to stay inside ``root``."""
    return validate_path_within_root(root / config.effective_changelog_path, root)


def resolve_backup_path(config: ChangelogPyConfig, root: Path) -> Path:
    """Absolute backup directory, guaranteed to stay inside ``root``."""
    return validate_path_within_root(root / config.effective_backup_path, root)


# Reading


def read_changelog(config: ChangelogPyConfig, root: Path) -> str | None:
    """Read the changelog through the security gate.

    Returns:
        File content, or None if the changelog does not exist

    Raises:
        SymlinkDetectedError: If the changelog is a symlink
        FileTooLargeError: If the changelog exceeds the size limit
    """
    path = resolve_changelog_path(config, root)
    assert_not_symlink(path)
    assert_file_size_within_limit(path)
    return read_text(path, config.changelog.encoding)


def get_current_version(config: ChangelogPyConfig, root: Path) -> str | None:
    """Latest version in the changelog, or None if there is none."""
    content = read_changelog(config, root)
    if content is None:
        return None
    return extract_version(content)


def next_version_for(
    current: str | None, bump: BumpType | str, config: ChangelogPyConfig
) -> str:
    """Version following ``current``; the configured initial version if there is none."""
    if current is None:
        return get_initial_version(config.versioning)
    return bump_version(current, bump, config.versioning)


def compute_next_version(
    config: ChangelogPyConfig,
    root: Path,
    bump: BumpType | str = BumpType.PATCH,
) -> tuple[str | None, str]:
    """Return ``(current, next)`` versions; ``current`` is None without versions."""
    current = get_current_version(config, root)
    return current, next_version_for(current, bump, config)


# Entries


def _validated_formatter(config: ChangelogPyConfig, category: str) -> ChangelogFormatter:
    formatter = get_formatter(config.format)
    if not formatter.is_valid_category(category):
        raise InvalidCategoryError(category, config.format, formatter.category_list())
    return formatter


def preview_entry(
    config: ChangelogPyConfig,
    root: Path,
    category: str,
    description: str,
    details: Sequence[str] = (),
    files: Sequence[str] = (),
    bump: BumpType | str | None = None,
    *,
    today: date | None = None,
) -> PreviewResult:
    """Render the entry ``add_entry`` would write, without writing it."""
    formatter = _validated_formatter(config, category)
    effective_bump = BumpType(bump or BumpType.PATCH)
    current, next_version = compute_next_version(config, root, effective_bump)

    entry = formatter.format_entry(
        EntryFields(
            version=next_version,
            date=format_date(config.date_format, today),
            category=category,
            description=description,
            details=tuple(details),
            files=tuple(files),
        )
    )
    return PreviewResult(
        current_version=current or FALLBACK_VERSION,
        next_version=next_version,
        bump=effective_bump,
        entry=entry,
    )


def insert_entry(content: str, entry: str, entry_spacing: int) -> tuple[str, InsertAnchor]:
    """Insert a formatted entry into ``content``.

    Before a heading or after the title block, the spacing follows the
    entry. When appending to an unrecognized document it precedes the
    entry instead, with at least one newline so the heading starts its
    own line.
    """
    point = locate_insert_position(content)
    spacing = "\n" * entry_spacing
    before = content[: point.offset]
    after = content[point.offset :]

    if point.anchor == InsertAnchor.END:
        if before and not before.endswith("\n"):
            before += "\n"
        if before.strip():
            before += spacing
        return before + entry, point.anchor

    if after.strip():
        return before + entry + spacing + after, point.anchor
    return before + entry + after, point.anchor


def add_entry(
    config: ChangelogPyConfig,
    root: Path,
    category: str,
    description: str,
    details: Sequence[str] = (),
    files: Sequence[str] = (),
    bump: BumpType | str | None = None,
    *,
    today: date | None = None,
) -> AddResult:
    """Add a new entry to the changelog.

    Args:
        config: Active configuration
        root: Project root all paths must stay in
        category: Entry category, validated against the format
        description: Main description line
        details: Optional detail sub-bullets
        files: Optional changed file paths
        bump: Version component to bump, defaults to patch
        today: Entry date, defaults to today

    Returns:
        What was written, plus any non-fatal warnings

    Raises:
        InvalidCategoryError: If the category is not valid for the format
        UnknownFormatError: If the configured format is unknown
        SecurityError: If a path check fails
        InvalidVersionError: If the current version cannot be bumped
    """
    formatter = _validated_formatter(config, category)
    changelog_path = resolve_changelog_path(config, root)
    assert_not_symlink(changelog_path)

    warnings: list[str] = []
    result = AddResult(
        version="",
        category=category,
        path=changelog_path,
        anchor=InsertAnchor.HEADING,
        warnings=warnings,
    )

    if config.backup.enabled and changelog_path.exists():
        try:
            result.backup_created = create_backup(
                changelog_path,
                resolve_backup_path(config, root),
                config.backup.strategy,
                config.backup.max_files,
            )
        except (BackupError, SecurityError) as e:
            message = f"Backup could not be created: {e}"
            logger.warning(message)
            warnings.append(message)

    old_size = file_size(changelog_path)
    try:
        content = read_changelog(config, root)
    except FileTooLargeError as e:
        logger.warning("Changelog exceeds size limit before write, splitting: %s", e.path)
        result.split = split_changelog(
            changelog_path, root=root, encoding=config.changelog.encoding
        )
        warnings.append(
            f"Changelog exceeded the size limit; moved {result.split.entries_moved} entries "
            f"to {result.split.archive_path} before adding."
        )
        old_size = file_size(changelog_path)
        content = read_changelog(config, root)

    if content is None:
        content = formatter.format_initial_document()

    entries = parse_entries(content)
    if entries and entries[0].format_name != config.format:
        message = (
            f"The newest entry uses {entries[0].format_name} headings but the configured "
            f"format is {config.format}; the changelog will mix heading styles."
        )
        logger.warning(message)
        warnings.append(message)

    result.version = next_version_for(
        extract_version(content), bump or BumpType.PATCH, config
    )

    entry = formatter.format_entry(
        EntryFields(
            version=result.version,
            date=format_date(config.date_format, today),
            category=category,
            description=description,
            details=tuple(details),
            files=tuple(files),
        )
    )
    new_content, result.anchor = insert_entry(content, entry, config.changelog.entry_spacing)
    if result.anchor == InsertAnchor.END:
        message = (
            "No version heading or title found in the changelog; "
            "the entry was appended at the end."
        )
        logger.warning(message)
        warnings.append(message)

    write_text_atomic(changelog_path, new_content, config.changelog.encoding)
    logger.info("Added %s entry %s to %s", category, result.version, changelog_path)

    new_size = file_size(changelog_path)
    if old_size > 0 and new_size < old_size:
        message = (
            f"The new file ({new_size} bytes) is smaller than the old one ({old_size} bytes). "
            "This may indicate data loss; check the backup directory."
        )
        logger.warning(message)
        warnings.append(message)

    if new_size > MAX_CHANGELOG_SIZE:
        try:
            result.split = split_changelog(
                changelog_path, root=root, encoding=config.changelog.encoding
            )
        except (OSError, ChangelogPyError) as e:
            message = f"Auto-split failed: {e}"
            logger.warning(message)
            warnings.append(message)

    return result


def init_changelog(
    config: ChangelogPyConfig,
    root: Path,
    *,
    format_name: str | None = None,
    file_name: str | None = None,
    config_path: Path | None = None,
) -> InitResult:
    """Create a new changelog file from the format's template.

    Args:
        config: Active configuration
        root: Project root
        format_name: Format to use instead of the configured one
        file_name: File name to use instead of the configured one
        config_path: If given, also write the effective configuration there

    Raises:
        UnsafeFilenameError: If ``file_name`` is not a plain file name
        ChangelogExistsError: If the changelog already exists
    """
    effective_format = format_name or config.format
    formatter = get_formatter(effective_format)
    effective_file = validate_filename(file_name or config.changelog.file)

    changelog_path = validate_path_within_root(
        root / config.changelog.path / effective_file, root
    )
    assert_not_symlink(changelog_path)
    if changelog_path.exists():
        raise ChangelogExistsError(changelog_path)

    write_text_atomic(
        changelog_path, formatter.format_initial_document(), config.changelog.encoding
    )
    logger.info("Initialized %s changelog at %s", effective_format, changelog_path)

    written_config = None
    if config_path is not None:
        from changelog_py.config.loader import dump_config

        written_config = validate_path_within_root(config_path, root)
        assert_not_symlink(written_config)
        if not written_config.exists():
            effective = config.model_copy(
                update={
                    "format": effective_format,
                    "changelog": config.changelog.model_copy(update={"file": effective_file}),
                }
            )
            write_text_atomic(written_config, dump_config(effective))
        else:
            written_config = None

    return InitResult(
        format_name=effective_format,
        categories=formatter.category_list(),
        changelog_path=changelog_path,
        config_path=written_config,
    )


def _load_entries(config: ChangelogPyConfig, root: Path) -> list[Entry]:
    content = read_changelog(config, root)
    if content is None:
        raise ChangelogNotFoundError(resolve_changelog_path(config, root))
    return parse_entries(content)


def matches_filters(
    entry: Entry,
    query: str | None = None,
    version: str | None = None,
    category: str | None = None,
) -> bool:
    """Whether ``entry`` satisfies every given filter."""
    if query and query.lower() not in entry.raw_block.lower():
        return False
    if version and not entry.version.startswith(version):
        return False
    if category:
        wanted = category.lower()
        if not any(name.lower() == wanted for name in entry.categories):
            return False
    return True


def search_changelog(
    config: ChangelogPyConfig,
    root: Path,
    *,
    query: str | None = None,
    version: str | None = None,
    category: str | None = None,
    limit: int = 10,
) -> SearchResult:
    """Filter changelog entries by text, version prefix and category.

    Raises:
        SearchCriteriaError: If no filter is given
        ChangelogNotFoundError: If the changelog does not exist
    """
    if not (query or version or category):
        raise SearchCriteriaError(
            "At least one search filter is required.",
            hint="Pass a query, a version or a category.",
        )

    entries = _load_entries(config, root)
    matches = [e for e in entries if matches_filters(e, query, version, category)]
    return SearchResult(matches=matches[:limit], total=len(matches), searched=len(entries))


def summarize_entry(entry: Entry, category: str | None = None) -> list[str]:
    """One-line summaries of an entry, one per non-empty category.

    With a category filter only that category is shown; otherwise the
    ``Files`` listing is skipped.
    """
    date_part = f" - {entry.date}" if entry.date else ""
    lines = []
    for name, items in entry.categories.items():
        if not items:
            continue
        if category is not None and name.lower() != category.lower():
            continue
        if category is None and name == "Files":
            continue
        lines.append(f'[{entry.version}]{date_part} | {name}: "{items[0]}"')

    return lines or [f"[{entry.version}]{date_part}"]


def get_entry(config: ChangelogPyConfig, root: Path, version: str) -> Entry:
    """Return the entry for ``version``.

    Raises:
        EntryNotFoundError: If the version is not in the changelog
    """
    entries = _load_entries(config, root)
    for entry in entries:
        if entry.version == version:
            return entry
    raise EntryNotFoundError(version, [e.version for e in entries])


def split(config: ChangelogPyConfig, root: Path, *, today: date | None = None) -> SplitResult:
    """Split the configured changelog on demand."""
    return split_changelog(
        resolve_changelog_path(config, root),
        root=root,
        encoding=config.changelog.encoding,
        today=today,
    )
