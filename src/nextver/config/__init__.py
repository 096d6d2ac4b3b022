"""Configuration management for nextver."""

from __future__ import annotations

from nextver.config.loader import load_config
from nextver.config.models import CommitsConfig, NextverConfig, VersionConfig

__all__ = [
    "CommitsConfig",
    "NextverConfig",
    "VersionConfig",
    "load_config",
]
