"""Backup snapshots of the changelog file.

Strategies:

- ``always``: a new snapshot before every write
- ``daily``: at most one snapshot per calendar day
- ``none``: no snapshots

Snapshot names encode a fixed-width date (and time), so sorting them
lexicographically sorts them chronologically.
"""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from typing import TYPE_CHECKING, Literal

from changelog_py.exceptions import BackupError
from changelog_py.security import assert_not_symlink
from changelog_py.utils.dates import compact_date, compact_time

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "changelog_"


def create_backup(
    changelog_path: Path,
    backup_dir: Path,
    strategy: Literal["always", "daily", "none"],
    max_files: int,
    *,
    now: datetime | None = None,
) -> bool:
    """Snapshot the changelog file into ``backup_dir``.

    Args:
        changelog_path: Absolute path of the changelog file
        backup_dir: Absolute path of the backup directory
        strategy: "always", "daily" or "none"
        max_files: Number of snapshots to retain
        now: Timestamp for the snapshot name, defaults to local time

    Returns:
        True if a snapshot was written, False if skipped

    Raises:
        BackupError: If the snapshot cannot be written
        SymlinkDetectedError: If the backup directory is a symlink
    """
    if strategy == "none":
        return False

    if not changelog_path.is_file():
        return False

    moment = now or datetime.now()

    if strategy == "daily" and not should_create_backup(backup_dir, moment):
        logger.debug("Backup for %s already exists, skipping", compact_date(moment))
        return False

    assert_not_symlink(backup_dir)

    stem = f"{BACKUP_PREFIX}{compact_date(moment)}"
    if strategy == "always":
        stem = f"{stem}_{compact_time(moment)}"

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
        backup_path = _unique_path(backup_dir, stem, changelog_path.suffix)
        shutil.copyfile(changelog_path, backup_path)
    except OSError as e:
        raise BackupError(changelog_path, backup_dir, str(e)) from e
    logger.info("Created backup %s", backup_path)

    cleanup_old_backups(backup_dir, max_files)
    return True


def should_create_backup(backup_dir: Path, now: datetime | None = None) -> bool:
    """True if no snapshot for today's date exists yet."""
    if not backup_dir.is_dir():
        return True

    today = f"{BACKUP_PREFIX}{compact_date(now or datetime.now())}"
    return not any(p.name.startswith(today) for p in backup_dir.iterdir())


def cleanup_old_backups(backup_dir: Path, max_files: int) -> list[Path]:
    """Delete the oldest snapshots beyond ``max_files``.

    Failures are logged, never raised: the snapshot that was just taken
    already succeeded.

    Returns:
        Paths that were deleted
    """
    try:
        backups = sorted(
            p for p in backup_dir.iterdir() if p.is_file() and p.name.startswith(BACKUP_PREFIX)
        )
    except OSError as e:
        logger.warning("Could not list backups in %s: %s", backup_dir, e)
        return []

    excess = len(backups) - max_files
    if excess <= 0:
        return []

    deleted = []
    for path in backups[:excess]:
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Could not delete old backup %s: %s", path, e)
            continue
        logger.debug("Deleted old backup %s", path)
        deleted.append(path)
    return deleted


def _unique_path(directory: Path, stem: str, suffix: str) -> Path:
    candidate = directory / f"{stem}{suffix}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}_{counter}{suffix}"
        counter += 1
    return candidate
