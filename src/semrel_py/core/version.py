"""Semantic version model.

Versions are immutable: every bump returns a new :class:`Version`.
A bump always increments its component and drops any prerelease
(``1.0.0-rc.1`` bumped by patch is ``1.0.1``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import StrEnum

from semrel_py.exceptions import VersionParseError

VERSION_PATTERN: re.Pattern[str] = re.compile(
    r"^[vV]?"
    r"(?P<major>0|[1-9]\d*)\."
    r"(?P<minor>0|[1-9]\d*)\."
    r"(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


class BumpType(StrEnum):
    """Magnitude of a version change, strongest first."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"


@dataclass(frozen=True)
class Version:
    """A ``MAJOR.MINOR.PATCH[-PRERELEASE]`` version."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise VersionParseError(f"Version components must be non-negative: {self!r}")

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{base}-{self.prerelease}"
        return base

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a version string, accepting an optional leading ``v``.

        Build metadata (``+build.1``) is accepted and discarded.

        Raises:
            VersionParseError: If the string is not a semantic version
        """
        match = VERSION_PATTERN.match(value.strip())
        if not match:
            raise VersionParseError(f"Invalid semantic version: {value!r}")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
        )

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def release(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version incremented by ``bump_type``.

        ``BumpType.NONE`` returns the version unchanged.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        return self

    def covers(self, bump_type: BumpType) -> bool:
        """Whether this prerelease already leads up to a ``bump_type`` release.

        ``1.3.0-rc.0`` covers minor and patch changes but not a major one.
        """
        if not self.is_prerelease:
            return False
        if bump_type == BumpType.MAJOR:
            return self.minor == 0 and self.patch == 0
        if bump_type == BumpType.MINOR:
            return self.patch == 0
        return bump_type == BumpType.PATCH

    def with_prerelease(self, identifier: str) -> Version:
        """Return this release with a fresh ``<identifier>.0`` prerelease."""
        return replace(self, prerelease=f"{identifier}.0")

    def next_prerelease(self, identifier: str) -> Version:
        """Increment the prerelease counter, restarting it on a new identifier.

        >>> str(Version.parse("1.1.0-beta.2").next_prerelease("beta"))
        '1.1.0-beta.3'
        >>> str(Version.parse("1.1.0-beta.2").next_prerelease("rc"))
        '1.1.0-rc.0'
        """
        if self.prerelease:
            name, _, counter = self.prerelease.rpartition(".")
            if name == identifier and counter.isdigit():
                return replace(self, prerelease=f"{identifier}.{int(counter) + 1}")
        return self.with_prerelease(identifier)


def parse_version(value: str) -> Version:
    """Parse a version string. See :meth:`Version.parse`."""
    return Version.parse(value)
