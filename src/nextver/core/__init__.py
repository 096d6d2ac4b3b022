"""Core business logic for nextver.

This module contains the version resolution engine:
- Commit classification into a bump severity
- Semantic version arithmetic
- Resolution of the next version, automatic or manual
"""

from __future__ import annotations

from nextver.core.commits import CommitRecord, Note, Recommendation, Reference, classify
from nextver.core.resolve import (
    ResolvedVersion,
    SelectionCancelled,
    VersionContext,
    resolve,
    resolve_manual_version,
    resolve_recommended_version,
)
from nextver.core.version import (
    BumpSeverity,
    ReleaseType,
    VersionOption,
    incremental_bumps,
    next_version,
    parse_version,
)

__all__ = [
    # Version
    "BumpSeverity",
    # Commits
    "CommitRecord",
    "Note",
    "Recommendation",
    "Reference",
    "ReleaseType",
    # Resolution
    "ResolvedVersion",
    "SelectionCancelled",
    "VersionContext",
    "VersionOption",
    "classify",
    "incremental_bumps",
    "next_version",
    "parse_version",
    "resolve",
    "resolve_manual_version",
    "resolve_recommended_version",
]
