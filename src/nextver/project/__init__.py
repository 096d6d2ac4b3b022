"""Project metadata: where the current version is declared."""

from __future__ import annotations

from nextver.project.version import get_current_version, get_version_from_file

__all__ = [
    "get_current_version",
    "get_version_from_file",
]
