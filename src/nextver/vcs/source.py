"""Commit source backed by the local git history."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nextver.exceptions import CommitSourceError, GitError
from nextver.vcs.git import GitRepository
from nextver.vcs.parser import filter_reverted_commits, parse_commit_message

if TYPE_CHECKING:
    from pathlib import Path

    from nextver.config.models import CommitsConfig
    from nextver.core.commits import CommitRecord

logger = logging.getLogger(__name__)


class GitCommitSource:
    """Reads the commits made since the last release tag.

    Args:
        tag_prefix: Prefix of release tags, e.g. ``"v"`` for ``v1.2.3``
    """

    def __init__(self, tag_prefix: str = "v") -> None:
        self.tag_prefix = tag_prefix

    def fetch_commits(self, path: Path, config: CommitsConfig) -> list[CommitRecord]:
        try:
            repo = GitRepository(path)
            latest_tag = repo.get_latest_tag(f"{self.tag_prefix}*")
            commits = repo.get_commits_since_tag(latest_tag)
        except GitError as e:
            detail = f"\n{e.stderr.strip()}" if e.stderr else ""
            raise CommitSourceError(f"Could not read commits from {path}: {e}{detail}") from e

        if latest_tag:
            logger.debug("Analyzing %d commit(s) since [cyan]%s[/]", len(commits), latest_tag)
        else:
            logger.debug("No release tag found, analyzing all %d commit(s)", len(commits))

        records = [parse_commit_message(c.message, config, sha=c.sha) for c in commits]
        kept = filter_reverted_commits(records)
        if len(kept) != len(records):
            logger.debug("Ignoring %d reverted commit(s)", len(records) - len(kept))
        return kept
