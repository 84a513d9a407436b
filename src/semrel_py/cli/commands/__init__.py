"""Command implementations."""

from __future__ import annotations

from semrel_py.cli.commands.preview import run_preview

__all__ = ["run_preview"]
