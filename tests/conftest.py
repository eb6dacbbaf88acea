"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from changelog_py.config.models import BackupConfig, ChangelogPyConfig

if TYPE_CHECKING:
    from pathlib import Path

KEEP_A_CHANGELOG_SAMPLE = """\
# Changelog

All notable changes to this project will be documented in this file.

## [1.2.0] - 2026-03-01

### Added
- Search command
  - supports categories

### Fixed
- Crash on empty file

## [1.1.0] - 2026-02-01

### Changed
- Faster parsing

## [1.0.1] - 2026-01-15

### Fixed
- Typo in README

## [1.0.0] - 2026-01-01

### Added
- Initial release
"""


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Never pick up a config path from the developer's environment."""
    monkeypatch.delenv("CHANGELOG_PY_CONFIG", raising=False)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def config() -> ChangelogPyConfig:
    """Default configuration with backups disabled."""
    return ChangelogPyConfig(backup=BackupConfig(enabled=False))


@pytest.fixture
def sample_changelog(project_root: Path) -> Path:
    """A Keep a Changelog file with four entries."""
    path = project_root / "CHANGELOG.md"
    path.write_text(KEEP_A_CHANGELOG_SAMPLE, encoding="utf-8")
    return path
