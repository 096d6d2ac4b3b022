"""Read-only git access via subprocess."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from nextver.exceptions import GitError

logger = logging.getLogger(__name__)

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%an", "%ae", "%aI", "%B"]) + _RECORD_SEP


@dataclass(frozen=True)
class Commit:
    """A raw commit as stored in git."""

    sha: str
    message: str
    author_name: str
    author_email: str
    date: datetime


class GitRepository:
    """A git work tree."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        if not self.path.is_dir():
            raise GitError(f"Not a directory: {self.path}")
        toplevel = self._run("rev-parse", "--show-toplevel")
        self.path = Path(toplevel)

    def _run(self, *args: str, check: bool = True) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=check,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e

        if result.returncode != 0:
            return ""
        return result.stdout.strip()

    def has_commits(self) -> bool:
        return bool(self._run("rev-parse", "--verify", "--quiet", "HEAD", check=False))

    def get_latest_tag(self, pattern: str = "*") -> str | None:
        """Get the most recent tag reachable from HEAD.

        Args:
            pattern: Glob the tag must match (e.g. ``"v*"``)

        Returns:
            Tag name, or None when no matching tag exists
        """
        if not self.has_commits():
            return None
        tag = self._run("describe", "--tags", "--abbrev=0", "--match", pattern, check=False)
        return tag or None

    def get_commits_since_tag(self, tag: str | None) -> list[Commit]:
        """Get commits after a tag, newest first.

        Args:
            tag: Tag to start after; None for the whole history

        Returns:
            Commits reachable from HEAD but not from the tag
        """
        if not self.has_commits():
            return []

        revision = f"{tag}..HEAD" if tag else "HEAD"
        output = self._run("log", f"--format={_LOG_FORMAT}", revision)
        commits = [_parse_log_record(r) for r in output.split(_RECORD_SEP) if r.strip()]

        logger.debug("Found %d commit(s) since %s", len(commits), tag or "the first commit")
        return commits


def _parse_log_record(record: str) -> Commit:
    sha, author_name, author_email, date, message = record.strip("\n").split(_FIELD_SEP, 4)
    return Commit(
        sha=sha,
        message=message.strip(),
        author_name=author_name,
        author_email=author_email,
        date=datetime.fromisoformat(date),
    )
