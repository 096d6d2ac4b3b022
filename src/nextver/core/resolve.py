"""Next version resolution.

A run resolves in exactly one of two modes:

- automatic: fetch the commits since the last release, classify them
  and increment the current version by the recommended bump
- manual: increment by an explicit release type, or let the operator
  pick one of the patch/minor/major candidates

Failures raise :class:`~nextver.exceptions.NextverError` subclasses.
An operator declining the prompt is not a failure; it is returned as
:class:`SelectionCancelled` and no version is produced.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from nextver.config.models import CommitsConfig, NextverConfig
from nextver.core.commits import CommitRecord, Recommendation, classify, group_commits_by_type
from nextver.core.version import ReleaseType, VersionOption, incremental_bumps, next_version
from nextver.exceptions import CommitSourceError, IncrementError, SelectorError

logger = logging.getLogger(__name__)

PROMPT_MESSAGE = "Recommended version bump"


@dataclass(frozen=True)
class VersionContext:
    """Inputs of one resolution run."""

    current: str
    release_type: ReleaseType | None = None


@dataclass(frozen=True)
class ResolvedVersion:
    """The version a run settled on.

    ``reason`` explains an automatic decision and is empty otherwise.
    """

    value: str
    reason: str = ""


@dataclass(frozen=True)
class SelectionCancelled:
    """The operator dismissed the version prompt."""

    message: str = PROMPT_MESSAGE


class Mode(StrEnum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


class CommitSource(Protocol):
    def fetch_commits(self, path: Path, config: CommitsConfig) -> Sequence[CommitRecord]: ...


class Selector(Protocol):
    def select(
        self,
        message: str,
        options: Sequence[VersionOption],
        default: str,
    ) -> str | SelectionCancelled: ...


def select_mode(context: VersionContext, *, interactive: bool = False) -> Mode:
    """Pick the resolution mode for a run."""
    if context.release_type is not None or interactive:
        return Mode.MANUAL
    return Mode.AUTOMATIC


def get_recommendation(
    source: CommitSource,
    path: Path,
    config: CommitsConfig,
) -> Recommendation:
    """Fetch commits and classify them.

    Raises:
        CommitSourceError: If the commits cannot be fetched
    """
    try:
        commits = source.fetch_commits(path, config)
    except CommitSourceError:
        raise
    except Exception as e:
        raise CommitSourceError(f"Failed to get commits: {e}") from e

    if logger.isEnabledFor(logging.DEBUG):
        counts = {t: len(c) for t, c in group_commits_by_type(commits).items()}
        logger.debug("Commit types: %s", counts)

    return classify(commits)


def resolve_recommended_version(
    context: VersionContext,
    source: CommitSource,
    *,
    path: Path,
    config: CommitsConfig | None = None,
) -> ResolvedVersion:
    """Resolve the next version from commit analysis.

    Args:
        context: Current version
        source: Provides the commits since the last release
        path: Project directory handed to the commit source
        config: Commit patterns handed to the commit source

    Returns:
        The incremented version and the reason for the bump

    Raises:
        CommitSourceError: If the commits cannot be fetched
        InvalidCurrentVersionError: If the current version is not semver
    """
    recommendation = get_recommendation(source, path, config or CommitsConfig())

    logger.debug("Received recommendation: %s", recommendation)
    logger.info(
        "Using recommended release type: [cyan]%s[/] ([dim]%s[/])",
        recommendation.release_type,
        recommendation.reason,
    )

    version = next_version(context.current, recommendation.severity)
    return ResolvedVersion(value=version, reason=recommendation.reason)


def resolve_manual_version(
    context: VersionContext,
    selector: Selector | None = None,
) -> ResolvedVersion | SelectionCancelled:
    """Resolve the next version from a release type or the operator.

    An explicit release type on the context wins; the selector is only
    consulted without one.

    Returns:
        The chosen version, or SelectionCancelled if the operator declined

    Raises:
        InvalidCurrentVersionError: If the current version is not semver
        IncrementError: If the selector returned a value that was not offered
        SelectorError: If no release type and no selector were given
    """
    if context.release_type is not None:
        version = next_version(context.current, context.release_type)
        logger.info(
            "Using specified release type: [cyan]%s[/] -> [cyan]%s[/]",
            context.release_type,
            version,
        )
        return ResolvedVersion(value=version)

    if selector is None:
        raise SelectorError("Interactive selection requires a selector")

    options = incremental_bumps(context.current)
    choice = selector.select(PROMPT_MESSAGE, options, default=options[0].value)

    if isinstance(choice, SelectionCancelled):
        logger.debug("Version selection cancelled")
        return choice

    if choice not in {option.value for option in options}:
        raise IncrementError(f"Selected version {choice!r} is not one of the offered versions")

    logger.debug("Selected version bump: %s", choice)
    return ResolvedVersion(value=choice)


def resolve(
    context: VersionContext,
    *,
    path: Path | None = None,
    source: CommitSource | None = None,
    selector: Selector | None = None,
    config: NextverConfig | None = None,
    interactive: bool = False,
) -> ResolvedVersion | SelectionCancelled:
    """Resolve the next version of a project.

    Args:
        context: Current version and optional explicit release type
        path: Project directory (defaults to the working directory)
        source: Commit source for automatic mode (defaults to git)
        selector: Prompt for interactive mode
        config: Loaded configuration (defaults apply when omitted)
        interactive: Let the operator pick the version

    Returns:
        The resolved version, or SelectionCancelled
    """
    config = config or NextverConfig()
    mode = select_mode(context, interactive=interactive)
    logger.debug("Resolving next version of %s in %s mode", context.current, mode)

    if mode is Mode.MANUAL:
        return resolve_manual_version(context, selector)

    if source is None:
        from nextver.vcs import GitCommitSource

        source = GitCommitSource(tag_prefix=config.effective_tag_prefix)

    return resolve_recommended_version(
        context,
        source,
        path=path or Path.cwd(),
        config=config.commits,
    )
