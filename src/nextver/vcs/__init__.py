"""Version control access: reading commit history."""

from __future__ import annotations

from nextver.vcs.git import Commit, GitRepository
from nextver.vcs.parser import filter_reverted_commits, parse_commit_message
from nextver.vcs.source import GitCommitSource

__all__ = [
    "Commit",
    "GitCommitSource",
    "GitRepository",
    "filter_reverted_commits",
    "parse_commit_message",
]
