"""Semantic version parsing and bump calculation.

Versions in a changelog are plain ``MAJOR.MINOR.PATCH`` triples. A
"patch-only" versioning policy pins major and minor to configured values
and only ever advances the patch component.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from changelog_py.exceptions import InvalidVersionError

if TYPE_CHECKING:
    from changelog_py.config.models import VersioningConfig

# Shown in place of a version when a changelog holds none yet.
FALLBACK_VERSION = "0.0.0"

_COMPONENT = re.compile(r"^\d+$")


class BumpType(StrEnum):
    """Component of the version to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """An immutable ``MAJOR.MINOR.PATCH`` version."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse ``"X.Y.Z"``.

        Raises:
            InvalidVersionError: Unless the string is exactly three
                non-negative integers joined by dots
        """
        parts = value.strip().split(".")
        if len(parts) != 3 or not all(_COMPONENT.match(p) for p in parts):
            raise InvalidVersionError(value)
        major, minor, patch = (int(p) for p in parts)
        return cls(major, minor, patch)

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version, resetting lower components."""
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def bump_version(
    current: str,
    bump: BumpType | str,
    versioning: VersioningConfig | None = None,
) -> str:
    """Compute the version that follows ``current``.

    In patch-only mode the requested bump type is ignored: major and minor
    come from ``fixed_major``/``fixed_minor`` (or the current values when
    unset) and the patch component is incremented.

    Args:
        current: Current version string (e.g. "1.2.3")
        bump: Component to increment
        versioning: Optional versioning policy

    Returns:
        The next version string

    Raises:
        InvalidVersionError: If ``current`` is not a valid version
    """
    version = Version.parse(current)

    if versioning is not None and versioning.mode == "patch-only":
        major = versioning.fixed_major if versioning.fixed_major is not None else version.major
        minor = versioning.fixed_minor if versioning.fixed_minor is not None else version.minor
        return str(Version(major, minor, version.patch + 1))

    return str(version.bump(BumpType(bump)))


def get_initial_version(versioning: VersioningConfig | None = None) -> str:
    """Version used for the first entry of a changelog without versions."""
    major = 0
    minor = 1
    if versioning is not None:
        if versioning.fixed_major is not None:
            major = versioning.fixed_major
        if versioning.fixed_minor is not None:
            minor = versioning.fixed_minor
    return f"{major}.{minor}.0"
