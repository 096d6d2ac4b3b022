"""Current version discovery.

The current version is read, never written: either from a Python
module declaring ``__version__`` or from pyproject.toml.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from nextver.config.loader import get_project_version
from nextver.exceptions import ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

    from nextver.config.models import NextverConfig

VERSION_PATTERNS = (
    r'^__version__\s*=\s*["\']([^"\']+)["\']',
    r'^VERSION\s*=\s*["\']([^"\']+)["\']',
    r'^version\s*=\s*["\']([^"\']+)["\']',
)


def get_version_from_file(file_path: Path, pattern: str | None = None) -> str:
    """Read a version declared in a Python file.

    Args:
        file_path: File such as ``__init__.py`` or ``_version.py``
        pattern: Regex with one capture group for the version;
            ``__version__``, ``VERSION`` and ``version`` assignments
            are tried when omitted

    Returns:
        Version string

    Raises:
        ProjectError: If the file does not exist
        VersionNotFoundError: If no pattern matches
    """
    if not file_path.is_file():
        raise ProjectError(f"Version file not found: {file_path}")

    content = file_path.read_text()
    patterns = (pattern,) if pattern else VERSION_PATTERNS

    for pat in patterns:
        match = re.search(pat, content, re.MULTILINE)
        if match:
            return match.group(1)

    raise VersionNotFoundError(f"Could not find a version declaration in {file_path}")


def get_current_version(project_path: Path, config: NextverConfig) -> str:
    """Get the current version of a project.

    ``[tool.nextver.version].version_file`` wins when configured,
    otherwise the static version in pyproject.toml is used.

    Args:
        project_path: Project root directory
        config: Loaded configuration

    Returns:
        Current version string (not yet validated as semver)
    """
    if config.version.version_file is not None:
        return get_version_from_file(project_path / config.version.version_file)
    return get_project_version(project_path)
