"""Exception hierarchy for changelog-py.

Every error carries a human-readable message and, where the caller can
fix the problem, a hint describing how.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class ChangelogPyError(Exception):
    """Base class for all changelog-py errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


# Configuration


class ConfigError(ChangelogPyError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """An explicitly requested configuration file does not exist."""


class ConfigValidationError(ConfigError):
    """Configuration file is malformed or fails validation."""

    def __init__(
        self,
        message: str,
        *,
        issues: Sequence[str] = (),
        hint: str | None = None,
    ) -> None:
        if issues:
            message = message + "\n" + "\n".join(f"  - {issue}" for issue in issues)
        super().__init__(message, hint=hint)
        self.issues = list(issues)


# Versions and formats


class InvalidVersionError(ChangelogPyError):
    """A version string is not X.Y.Z with non-negative integers."""

    def __init__(self, version: str) -> None:
        super().__init__(
            f'Version "{version}" is not a valid semantic version (expected X.Y.Z, e.g. "1.2.3").',
            hint="Check the changelog headings or set the version manually.",
        )
        self.version = version


class UnknownFormatError(ChangelogPyError):
    """No formatter is registered under the requested name."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        super().__init__(
            f'Unknown changelog format "{name}". Available formats: {", ".join(available)}',
            hint='Check the "format" field of your configuration.',
        )
        self.name = name
        self.available = list(available)


class InvalidCategoryError(ChangelogPyError):
    """Category is not part of the active format's vocabulary."""

    def __init__(self, category: str, format_name: str, allowed: str) -> None:
        super().__init__(
            f'Invalid category "{category}" for format {format_name}. Allowed: {allowed}',
            hint="Use one of the allowed categories.",
        )
        self.category = category
        self.format_name = format_name


# Security gate


class SecurityError(ChangelogPyError):
    """A file operation was refused by the security gate."""


class PathEscapesRootError(SecurityError):
    """Resolved path lies outside the project root."""

    def __init__(self, path: Path, root: Path) -> None:
        super().__init__(
            f"Path escapes the project directory.\nPath: {path}\nAllowed root: {root}",
            hint='Use a relative path without ".." that stays inside the project.',
        )
        self.path = path
        self.root = root


class UnsafeFilenameError(SecurityError):
    """Filename contains separators, traversal sequences or NUL bytes."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            f'Invalid filename "{filename}". Filenames must be non-empty and must not '
            'contain "/", "\\", ".." or NUL bytes.',
            hint='Use a plain filename such as "CHANGELOG.md".',
        )
        self.filename = filename


class SymlinkDetectedError(SecurityError):
    """Target of a file operation is a symbolic link."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Symbolic link detected: {path}. Changelog operations on symlinks are not allowed.",
            hint="Replace the symlink with a regular file.",
        )
        self.path = path


class FileTooLargeError(SecurityError):
    """File exceeds the changelog size limit."""

    def __init__(self, path: Path, size: int, limit: int) -> None:
        mib = 1024 * 1024
        super().__init__(
            f"Changelog file exceeds the size limit.\n"
            f"Size: {size / mib:.2f} MB\nLimit: {limit / mib:.2f} MB\nPath: {path}",
            hint="Run 'changelog-py split' to move older entries to an archive.",
        )
        self.path = path
        self.size = size
        self.limit = limit


# Changelog operations


class ChangelogError(ChangelogPyError):
    """Changelog file operation failed."""


class ChangelogNotFoundError(ChangelogError):
    """Changelog file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"No changelog file found at {path}",
            hint="Create one first with 'changelog-py init'.",
        )
        self.path = path


class ChangelogExistsError(ChangelogError):
    """Refusing to initialize over an existing changelog."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Changelog file already exists: {path}",
            hint="Delete the file manually or use 'changelog-py add' to add entries.",
        )
        self.path = path


class EntryNotFoundError(ChangelogError):
    """Requested version is not present in the changelog."""

    def __init__(self, version: str, available: Sequence[str]) -> None:
        listed = ", ".join(available) or "(none)"
        super().__init__(
            f'Version "{version}" not found in changelog. Available versions: {listed}',
            hint="Use one of the available versions or search with 'changelog-py search'.",
        )
        self.version = version


class SearchCriteriaError(ChangelogError):
    """Search was requested without any filter."""


class BackupError(ChangelogError):
    """Backup snapshot could not be created."""

    def __init__(self, path: Path, backup_dir: Path, reason: str) -> None:
        super().__init__(
            f"Could not back up {path} to {backup_dir}: {reason}",
            hint="Check that the backup directory is writable, or disable backups.",
        )
        self.path = path
        self.backup_dir = backup_dir


class SplitError(ChangelogError):
    """Changelog could not be split."""


class InsufficientEntriesError(SplitError):
    """Too few entries to split the changelog."""

    def __init__(self, count: int) -> None:
        super().__init__(
            f"Cannot split changelog: only {count} entr{'y' if count == 1 else 'ies'} found.",
            hint="At least 2 entries are required to split.",
        )
        self.count = count
