"""Tests for version parsing and bump calculation."""

from __future__ import annotations

import pytest

from changelog_py.config.models import VersioningConfig
from changelog_py.core.version import (
    BumpType,
    Version,
    bump_version,
    get_initial_version,
)
from changelog_py.exceptions import InvalidVersionError


class TestVersion:
    """Tests for the Version value type."""

    def test_parse(self):
        """Parse a plain X.Y.Z string."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_str(self):
        """Render back to X.Y.Z."""
        assert str(Version(10, 0, 7)) == "10.0.7"

    @pytest.mark.parametrize("value", ["1.2", "1.2.3.4", "a.b.c", "1.-2.3", "", "v1.2.3"])
    def test_parse_invalid(self, value: str):
        """Reject anything that is not three non-negative integers."""
        with pytest.raises(InvalidVersionError):
            Version.parse(value)

    def test_ordering(self):
        """Versions compare component-wise."""
        assert Version(1, 10, 0) > Version(1, 9, 9)


class TestBumpVersion:
    """Tests for bump_version()."""

    @pytest.mark.parametrize(
        ("bump", "expected"),
        [("major", "2.0.0"), ("minor", "1.3.0"), ("patch", "1.2.4")],
    )
    def test_semver_bumps(self, bump: str, expected: str):
        """Each bump type resets the lower components."""
        assert bump_version("1.2.3", bump) == expected

    def test_accepts_enum(self):
        """BumpType members work as well as strings."""
        assert bump_version("0.9.9", BumpType.MINOR) == "0.10.0"

    def test_semver_mode_policy(self):
        """An explicit semver policy behaves like no policy."""
        policy = VersioningConfig(mode="semver", fixed_major=5, fixed_minor=5)
        assert bump_version("1.2.3", "major", policy) == "2.0.0"

    def test_patch_only_ignores_bump_type(self):
        """Patch-only mode pins major/minor and advances the patch."""
        policy = VersioningConfig(mode="patch-only", fixed_major=0, fixed_minor=1)
        assert bump_version("0.1.7", "major", policy) == "0.1.8"

    def test_patch_only_overrides_current(self):
        """Fixed values replace the current major/minor."""
        policy = VersioningConfig(mode="patch-only", fixed_major=2, fixed_minor=0)
        assert bump_version("1.4.9", "minor", policy) == "2.0.10"

    def test_patch_only_without_fixed_values(self):
        """Unset fixed values fall back to the current ones."""
        policy = VersioningConfig(mode="patch-only")
        assert bump_version("3.1.4", "major", policy) == "3.1.5"

    def test_invalid_current(self):
        """Malformed current versions raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError, match="not a valid semantic version"):
            bump_version("1.x.3", "patch")


class TestInitialVersion:
    """Tests for get_initial_version()."""

    def test_default(self):
        """Default initial version is 0.1.0."""
        assert get_initial_version() == "0.1.0"
        assert get_initial_version(VersioningConfig()) == "0.1.0"

    def test_fixed_values(self):
        """Fixed major/minor set the initial version."""
        policy = VersioningConfig(mode="patch-only", fixed_major=3, fixed_minor=2)
        assert get_initial_version(policy) == "3.2.0"

    def test_zero_values_are_respected(self):
        """A fixed value of 0 is not treated as unset."""
        policy = VersioningConfig(fixed_major=1, fixed_minor=0)
        assert get_initial_version(policy) == "1.0.0"
