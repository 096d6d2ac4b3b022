"""Shared test fixtures for nextver."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from nextver.config.models import CommitsConfig
from nextver.core.commits import CommitRecord, Note


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def commits_config() -> CommitsConfig:
    return CommitsConfig()


@pytest.fixture
def feat_record() -> CommitRecord:
    return CommitRecord(
        type="feat",
        subject="add user authentication",
        header="feat: add user authentication",
    )


@pytest.fixture
def fix_record() -> CommitRecord:
    return CommitRecord(
        type="fix",
        scope="core",
        subject="handle null",
        header="fix(core): handle null",
    )


@pytest.fixture
def breaking_record() -> CommitRecord:
    return CommitRecord(
        type="feat",
        subject="redesign API",
        header="feat: redesign API",
        notes=(Note(title="BREAKING CHANGE", text="old endpoints removed"),),
    )


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """Create an empty git repository."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "commit.gpgsign", "false")
    _git(repo, "config", "tag.gpgsign", "false")
    return repo


@pytest.fixture
def commit(temp_git_repo: Path) -> Callable[[str], str]:
    """Return a function that makes an empty commit and returns its sha."""

    def make_commit(message: str) -> str:
        _git(temp_git_repo, "commit", "-q", "--allow-empty", "-m", message)
        return _git(temp_git_repo, "rev-parse", "HEAD")

    return make_commit


@pytest.fixture
def tag(temp_git_repo: Path) -> Callable[[str], None]:
    """Return a function that tags HEAD."""

    def make_tag(name: str) -> None:
        _git(temp_git_repo, "tag", name)

    return make_tag


@pytest.fixture
def temp_git_repo_with_pyproject(temp_git_repo: Path) -> Path:
    """Create a git repository with a pyproject.toml."""
    (temp_git_repo / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.nextver]
tag_prefix = "v"
"""
    )
    return temp_git_repo
