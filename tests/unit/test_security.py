"""Tests for the security gate."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from changelog_py.exceptions import (
    FileTooLargeError,
    PathEscapesRootError,
    SymlinkDetectedError,
    UnsafeFilenameError,
)
from changelog_py.security import (
    assert_file_size_within_limit,
    assert_not_symlink,
    is_relative_safe_path,
    is_safe_filename,
    validate_filename,
    validate_path_within_root,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestFilenames:
    """Tests for is_safe_filename() and validate_filename()."""

    @pytest.mark.parametrize("name", ["../x", "a/b", "", "a\\b", "..", "bad\0name"])
    def test_rejects_unsafe(self, name: str):
        """Separators, traversal, NUL and empty names are rejected."""
        assert not is_safe_filename(name)

    @pytest.mark.parametrize("name", ["CHANGELOG.md", "HISTORY.rst", ".changes"])
    def test_accepts_plain_names(self, name: str):
        """Plain file names are accepted."""
        assert is_safe_filename(name)

    def test_validate_raises(self):
        """validate_filename raises with the offending name."""
        with pytest.raises(UnsafeFilenameError, match=r"\.\./x"):
            validate_filename("../x")


class TestRelativePaths:
    """Tests for is_relative_safe_path()."""

    @pytest.mark.parametrize("value", ["./", "docs", "docs/changes", "./changelog-backups"])
    def test_accepts(self, value: str):
        """Relative paths without '..' are fine."""
        assert is_relative_safe_path(value)

    @pytest.mark.parametrize("value", ["/etc", "../outside", "docs/../../x", "\\server\\share"])
    def test_rejects(self, value: str):
        """Absolute paths and '..' segments are rejected."""
        assert not is_relative_safe_path(value)


class TestPathWithinRoot:
    """Tests for validate_path_within_root()."""

    def test_nested_path(self, tmp_path: Path):
        """Paths inside the root resolve to absolute paths."""
        resolved = validate_path_within_root("docs/CHANGELOG.md", tmp_path)
        assert resolved == tmp_path / "docs" / "CHANGELOG.md"

    def test_root_itself(self, tmp_path: Path):
        """The root directory itself is allowed."""
        assert validate_path_within_root(tmp_path, tmp_path) == tmp_path

    def test_escape_via_dotdot(self, tmp_path: Path):
        """'..' leading out of the root is refused."""
        with pytest.raises(PathEscapesRootError) as exc_info:
            validate_path_within_root(tmp_path / "a" / ".." / ".." / "x", tmp_path)
        assert exc_info.value.root == tmp_path

    def test_sibling_with_common_prefix(self, tmp_path: Path):
        """A sibling sharing the root's name prefix is outside the root."""
        root = tmp_path / "proj"
        with pytest.raises(PathEscapesRootError):
            validate_path_within_root(tmp_path / "proj-other" / "CHANGELOG.md", root)


class TestSymlinks:
    """Tests for assert_not_symlink()."""

    def test_regular_file(self, tmp_path: Path):
        """Regular files pass."""
        path = tmp_path / "CHANGELOG.md"
        path.write_text("# Changelog\n")
        assert_not_symlink(path)

    def test_missing_file(self, tmp_path: Path):
        """Nonexistent paths pass: nothing to protect yet."""
        assert_not_symlink(tmp_path / "missing.md")

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink(self, tmp_path: Path):
        """Symlinks are refused, even dangling ones."""
        link = tmp_path / "CHANGELOG.md"
        link.symlink_to(tmp_path / "target.md")

        with pytest.raises(SymlinkDetectedError):
            assert_not_symlink(link)


class TestFileSize:
    """Tests for assert_file_size_within_limit()."""

    def test_within_limit(self, tmp_path: Path):
        """Small files pass."""
        path = tmp_path / "CHANGELOG.md"
        path.write_bytes(b"x" * 10)
        assert_file_size_within_limit(path, max_bytes=10)

    def test_over_limit(self, tmp_path: Path):
        """Files above the limit raise with size and limit attached."""
        path = tmp_path / "CHANGELOG.md"
        path.write_bytes(b"x" * 11)

        with pytest.raises(FileTooLargeError) as exc_info:
            assert_file_size_within_limit(path, max_bytes=10)

        assert exc_info.value.size == 11
        assert exc_info.value.limit == 10

    def test_missing_file(self, tmp_path: Path):
        """Missing files have no size problem."""
        assert_file_size_within_limit(tmp_path / "missing.md", max_bytes=0)
