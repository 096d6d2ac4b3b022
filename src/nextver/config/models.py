"""Configuration models for nextver.

Configuration lives under ``[tool.nextver]`` in pyproject.toml::

    [tool.nextver]
    tag_prefix = "v"

    [tool.nextver.commits]
    note_keywords = ["BREAKING CHANGE", "BREAKING-CHANGE"]

    [tool.nextver.version]
    version_file = "src/mypkg/__init__.py"
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_HEADER_PATTERN = r"^(\w*)(?:\((.*)\))?: (.*)$"
DEFAULT_BREAKING_HEADER_PATTERN = r"^(\w*)(?:\((.*)\))?!: (.*)$"
DEFAULT_REVERT_PATTERN = r'^(?:Revert|revert:)\s"?([\s\S]+?)"?\s*This reverts commit (\w*)\.'


class CommitsConfig(BaseModel):
    """How commit messages are turned into commit records."""

    model_config = ConfigDict(extra="forbid")

    header_pattern: str = DEFAULT_HEADER_PATTERN
    header_correspondence: list[str] = Field(
        default_factory=lambda: ["type", "scope", "subject"],
    )
    breaking_header_pattern: str | None = DEFAULT_BREAKING_HEADER_PATTERN
    note_keywords: list[str] = Field(
        default_factory=lambda: ["BREAKING CHANGE"],
    )
    revert_pattern: str = DEFAULT_REVERT_PATTERN
    revert_correspondence: list[str] = Field(
        default_factory=lambda: ["header", "hash"],
    )
    issue_prefixes: list[str] = Field(default_factory=lambda: ["#"])

    @field_validator("header_pattern", "breaking_header_pattern", "revert_pattern")
    @classmethod
    def _check_pattern(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value

    @field_validator("note_keywords")
    @classmethod
    def _check_keywords(cls, value: list[str]) -> list[str]:
        if any(not keyword.strip() for keyword in value):
            raise ValueError("note keywords must not be blank")
        return value

    @property
    def header_regex(self) -> re.Pattern[str]:
        return re.compile(self.header_pattern)

    @property
    def breaking_header_regex(self) -> re.Pattern[str] | None:
        if self.breaking_header_pattern is None:
            return None
        return re.compile(self.breaking_header_pattern)

    @property
    def revert_regex(self) -> re.Pattern[str]:
        return re.compile(self.revert_pattern, re.IGNORECASE)


class VersionConfig(BaseModel):
    """Where the current version comes from and how releases are tagged."""

    model_config = ConfigDict(extra="forbid")

    tag_prefix: str | None = None
    version_file: Path | None = None


class NextverConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    tag_prefix: str = "v"
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)

    @property
    def effective_tag_prefix(self) -> str:
        """Tag prefix, with ``[tool.nextver.version]`` taking precedence."""
        if self.version.tag_prefix is not None:
            return self.version.tag_prefix
        return self.tag_prefix
