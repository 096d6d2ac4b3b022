"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nextver.config.models import NextverConfig
from nextver.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError

TOOL_SECTION = "nextver"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in start or one of its parents.

    Args:
        start: Directory to start from (defaults to the working directory)

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the root
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(
        f"No pyproject.toml found in {current} or any parent directory",
    )


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def extract_nextver_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Get the ``[tool.nextver]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_SECTION, {})


def load_config(path: Path | None = None) -> NextverConfig:
    """Load nextver configuration for a project.

    Defaults are used when there is no pyproject.toml or it has no
    ``[tool.nextver]`` table.

    Args:
        path: Project directory or pyproject.toml path

    Returns:
        Validated configuration

    Raises:
        ConfigError: If pyproject.toml cannot be parsed
        ConfigValidationError: If the configuration values are invalid
    """
    try:
        pyproject_path = _resolve_pyproject(path)
    except ConfigNotFoundError:
        return NextverConfig()

    data = extract_nextver_config(load_pyproject_toml(pyproject_path))

    try:
        return NextverConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid [tool.{TOOL_SECTION}] configuration in {pyproject_path}:\n{e}"
        ) from e


def get_project_version(path: Path | None = None) -> str:
    """Get the static project version from pyproject.toml.

    ``[project].version`` (PEP 621) is preferred over
    ``[tool.poetry].version``.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If the project has no static version
    """
    pyproject_path = _resolve_pyproject(path)
    data = load_pyproject_toml(pyproject_path)

    version = data.get("project", {}).get("version")
    if not version:
        version = data.get("tool", {}).get("poetry", {}).get("version")
    if not version:
        raise ConfigValidationError(
            f"No [project].version or [tool.poetry].version in {pyproject_path}",
            hint="Pass --current or set [tool.nextver.version].version_file",
        )
    return str(version)


def _resolve_pyproject(path: Path | None) -> Path:
    if path is not None and path.is_file():
        return path
    return find_pyproject_toml(path)
