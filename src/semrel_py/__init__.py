"""semrel-py: conventional commits in, semantic version and changelog out."""

from __future__ import annotations

__version__ = "0.1.0"
