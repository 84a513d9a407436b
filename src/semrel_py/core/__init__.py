"""Core business logic for semrel-py.

This module contains the fundamental building blocks:
- Semantic version parsing and bumping
- Conventional commit parsing
- Type registry and classification into changelog sections
- Changelog rendering and release orchestration
"""

from __future__ import annotations

from semrel_py.core.bump import calculate_bump, next_version
from semrel_py.core.changelog import (
    ChangelogRenderer,
    ChangelogSection,
    prepend_to_changelog,
    render_changelog,
)
from semrel_py.core.classifier import classify
from semrel_py.core.commits import (
    CommitRecord,
    ParseResult,
    RawCommit,
    filter_skip_release_commits,
    parse_commit,
    parse_commits,
)
from semrel_py.core.diagnostics import Diagnostic, DiagnosticKind
from semrel_py.core.registry import TypeDescriptor, TypeRegistry
from semrel_py.core.release import (
    ReleaseContext,
    ReleasePlan,
    ReleaseStatus,
    compose_release_message,
    prepare_release,
)
from semrel_py.core.version import BumpType, Version, parse_version

__all__ = [
    # Version
    "BumpType",
    # Changelog
    "ChangelogRenderer",
    "ChangelogSection",
    # Commits
    "CommitRecord",
    "Diagnostic",
    "DiagnosticKind",
    "ParseResult",
    "RawCommit",
    # Release
    "ReleaseContext",
    "ReleasePlan",
    "ReleaseStatus",
    # Registry
    "TypeDescriptor",
    "TypeRegistry",
    "Version",
    "calculate_bump",
    "classify",
    "compose_release_message",
    "filter_skip_release_commits",
    "next_version",
    "parse_commit",
    "parse_commits",
    "parse_version",
    "prepare_release",
    "prepend_to_changelog",
    "render_changelog",
]
