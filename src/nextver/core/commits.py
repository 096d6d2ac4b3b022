"""Commit records and bump classification.

A :class:`CommitRecord` is the structured form of one conventional
commit, as produced by a commit source (see :mod:`nextver.vcs`).
:func:`classify` reduces a sequence of records to a single
:class:`Recommendation`:

- any commit carrying notes (e.g. ``BREAKING CHANGE:``) forces MAJOR
- otherwise any ``feat`` commit raises the bump to MINOR
- everything else leaves the default PATCH bump untouched
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from nextver.core.version import BumpSeverity, ReleaseType

FEATURE_TYPE = "feat"


@dataclass(frozen=True)
class Note:
    """A footer annotation such as a breaking change."""

    title: str
    text: str


@dataclass(frozen=True)
class Reference:
    """An issue or pull request reference found in a commit."""

    raw: str
    issue: str
    action: str | None = None
    owner: str | None = None
    repository: str | None = None
    prefix: str | None = None


@dataclass(frozen=True)
class CommitRecord:
    """A parsed conventional commit.

    ``type``, ``scope`` and ``subject`` hold the usual header captures.
    Captures from a custom header correspondence that have no named
    attribute land in ``fields``.
    """

    type: str | None = None
    scope: str | None = None
    subject: str | None = None
    merge: str | None = None
    revert: Mapping[str, str | None] | None = None
    header: str | None = None
    body: str | None = None
    footer: str | None = None
    notes: tuple[Note, ...] = ()
    mentions: tuple[str, ...] = ()
    references: tuple[Reference, ...] = ()
    hash: str | None = None
    fields: Mapping[str, str | None] = field(default_factory=dict)

    @property
    def is_breaking(self) -> bool:
        return bool(self.notes)

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a header capture by name."""
        if name in _NAMED_FIELDS:
            value = getattr(self, name)
            return default if value is None else value
        return self.fields.get(name, default)


_NAMED_FIELDS = frozenset({"type", "scope", "subject"})


@dataclass(frozen=True)
class Recommendation:
    """Aggregate bump decision for a set of commits."""

    severity: BumpSeverity
    reason: str
    breakings: int = 0
    features: int = 0

    @property
    def release_type(self) -> ReleaseType:
        return self.severity.release_type


def format_reason(breakings: int, features: int) -> str:
    """Build the human-readable justification for a recommendation."""
    if breakings == 1:
        return f"There is {breakings} BREAKING CHANGE and {features} features"
    return f"There are {breakings} BREAKING CHANGES and {features} features"


def classify(commits: Sequence[CommitRecord]) -> Recommendation:
    """Classify commits into a bump severity.

    Args:
        commits: Parsed commits, in any order

    Returns:
        Recommendation with the severity and a reason string
    """
    severity = BumpSeverity.PATCH
    breakings = 0
    features = 0

    for commit in commits:
        if commit.is_breaking:
            breakings += len(commit.notes)
            severity = BumpSeverity.MAJOR
        elif commit.type == FEATURE_TYPE:
            features += 1
            if severity == BumpSeverity.PATCH:
                severity = BumpSeverity.MINOR

    return Recommendation(
        severity=severity,
        reason=format_reason(breakings, features),
        breakings=breakings,
        features=features,
    )


def group_commits_by_type(commits: Sequence[CommitRecord]) -> dict[str, list[CommitRecord]]:
    """Group commits by type; commits without a type go under ``"other"``."""
    groups: dict[str, list[CommitRecord]] = {}
    for commit in commits:
        groups.setdefault(commit.type or "other", []).append(commit)
    return groups
