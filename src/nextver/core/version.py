"""Semantic version arithmetic.

Versions are validated and incremented with python-semver. Increments
follow the usual rules: ``major`` resets minor and patch, ``minor``
resets patch, ``patch`` bumps patch only. Pre-release and build suffixes
never survive an increment, and a pre-release of the target release is
promoted to that release (``1.2.3-beta.1`` + patch -> ``1.2.3``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

import semver

from nextver.exceptions import IncrementError, InvalidCurrentVersionError, InvalidReleaseTypeError


class ReleaseType(StrEnum):
    """Release type tokens, weakest first."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


class BumpSeverity(IntEnum):
    """Bump severity; a lower value is a stronger bump."""

    MAJOR = 0
    MINOR = 1
    PATCH = 2

    @property
    def release_type(self) -> ReleaseType:
        return _SEVERITY_RELEASE_TYPES[self]

    def __str__(self) -> str:
        return self.release_type.value


_SEVERITY_RELEASE_TYPES = {
    BumpSeverity.MAJOR: ReleaseType.MAJOR,
    BumpSeverity.MINOR: ReleaseType.MINOR,
    BumpSeverity.PATCH: ReleaseType.PATCH,
}


@dataclass(frozen=True)
class VersionOption:
    """One candidate offered for manual selection."""

    label: str
    value: str
    hint: str


def parse_version(value: str) -> semver.Version:
    """Parse a semantic version string.

    Surrounding whitespace and a single leading ``v`` are accepted.

    Args:
        value: Version string such as ``"1.2.3"`` or ``"v2.0.0-rc.1"``

    Returns:
        Parsed version

    Raises:
        InvalidCurrentVersionError: If the string is not a semantic version
    """
    text = value.strip()
    if text.startswith("v"):
        text = text[1:]

    try:
        return semver.Version.parse(text)
    except (TypeError, ValueError) as e:
        raise InvalidCurrentVersionError(value, str(e)) from e


def as_release_type(bump: BumpSeverity | ReleaseType | str) -> ReleaseType:
    """Normalize a severity or release type token to a ReleaseType."""
    if isinstance(bump, BumpSeverity):
        return bump.release_type
    try:
        return ReleaseType(str(bump).lower())
    except ValueError as e:
        valid = ", ".join(t.value for t in ReleaseType)
        raise InvalidReleaseTypeError(
            f"Invalid release type {bump!r}", hint=f"Expected one of: {valid}"
        ) from e


def next_version(current: str, bump: BumpSeverity | ReleaseType | str) -> str:
    """Compute the next version.

    Args:
        current: Current semantic version
        bump: Severity from commit analysis, or an explicit release type

    Returns:
        The incremented version, without pre-release or build suffixes

    Raises:
        InvalidCurrentVersionError: If current is not a semantic version
        InvalidReleaseTypeError: If bump is not patch, minor or major
        IncrementError: If the result is not greater than current
    """
    release_type = as_release_type(bump)
    version = parse_version(current)

    # Build metadata is not a pre-release; "1.2.3+b1" + patch is "1.2.4".
    incremented = version.replace(build=None).next_version(release_type.value)

    if incremented.compare(version) <= 0:
        raise IncrementError(
            f"Incrementing {current} by {release_type} produced {incremented}, "
            "which is not a greater version"
        )

    return str(incremented)


def incremental_bumps(current: str) -> list[VersionOption]:
    """List the patch, minor and major increments of the current version.

    Args:
        current: Current semantic version

    Returns:
        Options ordered weakest first, labelled ``"{type} ({version})"``
    """
    options = []
    for release_type in ReleaseType:
        version = next_version(current, release_type)
        options.append(
            VersionOption(
                label=f"{release_type} ({version})",
                value=version,
                hint=version,
            )
        )
    return options
