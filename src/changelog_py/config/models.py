"""Configuration models for changelog-py.

The configuration is an immutable value: it is loaded once per
invocation and passed explicitly to every core function. Keys may be
written in snake_case or camelCase (``entry_spacing`` / ``entrySpacing``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from changelog_py.security import is_relative_safe_path, is_safe_filename

FormatName = Literal["keep-a-changelog", "conventional", "dwsm"]
Encoding = Literal["utf-8", "utf-16le", "latin1", "ascii"]
BackupStrategy = Literal["always", "daily", "none"]
VersioningMode = Literal["semver", "patch-only"]


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


def _check_relative_path(value: str) -> str:
    if not is_relative_safe_path(value):
        raise ValueError("path must be relative and must not contain '..' segments")
    return value


class ChangelogFileConfig(_ConfigModel):
    """Location and layout of the changelog file."""

    file: str = "CHANGELOG.md"
    path: str = "./"
    encoding: Encoding = "utf-8"
    entry_spacing: int = Field(default=2, ge=0)

    @field_validator("file")
    @classmethod
    def _check_file(cls, value: str) -> str:
        if not is_safe_filename(value):
            raise ValueError(
                'filename must be non-empty and must not contain "/", "\\", ".." or NUL bytes'
            )
        return value

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return _check_relative_path(value)


class BackupConfig(_ConfigModel):
    """Backup snapshots taken before each write."""

    enabled: bool = True
    path: str = "./changelog-backups"
    strategy: BackupStrategy = "daily"
    max_files: int = Field(default=30, ge=1)

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return _check_relative_path(value)


class VersioningConfig(_ConfigModel):
    """How the next version is derived."""

    mode: VersioningMode = "semver"
    prefix: str = ""
    fixed_major: int | None = Field(default=None, ge=0)
    fixed_minor: int | None = Field(default=None, ge=0)


class ChangelogPyConfig(_ConfigModel):
    """Root configuration."""

    format: FormatName = "keep-a-changelog"
    changelog: ChangelogFileConfig = Field(default_factory=ChangelogFileConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)
    versioning: VersioningConfig = Field(default_factory=VersioningConfig)
    date_format: str = "YYYY-MM-DD"
    language: str = "en"

    @property
    def effective_changelog_path(self) -> Path:
        """Changelog path relative to the project root."""
        return Path(self.changelog.path) / self.changelog.file

    @property
    def effective_backup_path(self) -> Path:
        """Backup directory relative to the project root."""
        return Path(self.backup.path)
