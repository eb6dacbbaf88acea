"""Configuration management for changelog-py."""

from __future__ import annotations

from changelog_py.config.loader import ConfigResult, load_config
from changelog_py.config.models import (
    BackupConfig,
    ChangelogFileConfig,
    ChangelogPyConfig,
    VersioningConfig,
)

__all__ = [
    "BackupConfig",
    "ChangelogFileConfig",
    "ChangelogPyConfig",
    "ConfigResult",
    "VersioningConfig",
    "load_config",
]
