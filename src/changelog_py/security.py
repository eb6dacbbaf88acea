"""Path validation, symlink protection and file size enforcement.

Every path that reaches filesystem I/O goes through root containment
first and the symlink check second. A symlink check on a path that does
not exist succeeds, since there is nothing to protect yet.
"""

from __future__ import annotations

import os
import re
from pathlib import Path, PurePath

from changelog_py.exceptions import (
    FileTooLargeError,
    PathEscapesRootError,
    SymlinkDetectedError,
    UnsafeFilenameError,
)

# 10 MiB
MAX_CHANGELOG_SIZE = 10 * 1024 * 1024


def is_relative_safe_path(value: str) -> bool:
    """Check that a path is relative and has no ``..`` segments."""
    if PurePath(value).is_absolute() or value.startswith(("/", "\\")):
        return False
    return ".." not in re.split(r"[/\\]", value)


def is_safe_filename(name: str) -> bool:
    """Check that a filename is a single, non-empty path component."""
    if not name:
        return False
    return not any(bad in name for bad in ("/", "\\", "..", "\0"))


def validate_filename(name: str) -> str:
    """Raise UnsafeFilenameError unless ``name`` is a safe filename."""
    if not is_safe_filename(name):
        raise UnsafeFilenameError(name)
    return name


def validate_path_within_root(path: Path | str, root: Path | str | None = None) -> Path:
    """Ensure ``path`` resolves to ``root`` or somewhere beneath it.

    Args:
        path: Path to check, relative paths are taken relative to ``root``
        root: Allowed root directory, defaults to the current directory

    Returns:
        The resolved absolute path

    Raises:
        PathEscapesRootError: If the path lies outside the root
    """
    root_path = Path(os.path.abspath(root if root is not None else Path.cwd()))
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = root_path / candidate
    # Lexical normalization only, symlinks are left for assert_not_symlink
    resolved = Path(os.path.normpath(candidate))

    if resolved != root_path and not resolved.is_relative_to(root_path):
        raise PathEscapesRootError(resolved, root_path)
    return resolved


def assert_not_symlink(path: Path) -> None:
    """Raise SymlinkDetectedError if ``path`` exists and is a symlink."""
    if path.is_symlink():
        raise SymlinkDetectedError(path)


def assert_file_size_within_limit(path: Path, max_bytes: int = MAX_CHANGELOG_SIZE) -> None:
    """Raise FileTooLargeError if the file at ``path`` exceeds ``max_bytes``.

    A missing file has no size problem.
    """
    try:
        size = path.lstat().st_size
    except FileNotFoundError:
        return

    if size > max_bytes:
        raise FileTooLargeError(path, size, max_bytes)
