"""Exception hierarchy for nextver.

Every failure raised by nextver derives from :class:`NextverError` so
callers can catch the whole family at the CLI boundary. Operator
cancellation is deliberately absent here: it is an outcome, see
:class:`nextver.core.resolve.SelectionCancelled`.
"""

from __future__ import annotations


class NextverError(Exception):
    """Base class for all nextver errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


# Configuration


class ConfigError(NextverError):
    """Configuration could not be read."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# Project metadata


class ProjectError(NextverError):
    """Project metadata could not be read."""


class VersionNotFoundError(ProjectError):
    """The current version is not declared where it was expected."""


# Versions


class VersionError(NextverError):
    """Version arithmetic failed."""


class InvalidCurrentVersionError(VersionError):
    """The current version is not a valid semantic version."""

    def __init__(self, version: str, reason: str | None = None) -> None:
        message = f"Invalid current version {version!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, hint="Expected MAJOR.MINOR.PATCH[-pre][+build]")
        self.version = version


class InvalidReleaseTypeError(VersionError):
    """The release type is not one of patch, minor or major."""


class IncrementError(VersionError):
    """Incrementing a valid version did not produce a greater version."""


# Commit history


class GitError(NextverError):
    """A git command failed."""

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class CommitSourceError(NextverError):
    """The commit source could not provide commits."""


# Resolution


class SelectorError(NextverError):
    """Interactive resolution was requested without a way to prompt."""
