"""Command line interface for nextver."""

from __future__ import annotations

from nextver.cli.main import app

__all__ = ["app"]
