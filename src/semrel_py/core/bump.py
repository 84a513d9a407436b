"""Next-version calculation.

The bump is decided by the strongest change among visible commits, in
strict priority order:

1. any breaking change: major (minor while the version is still ``0.x``)
2. any ``feature`` severity: minor
3. any other non-``none`` severity: patch
4. nothing qualifies: no release
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from semrel_py.config.models import Severity
from semrel_py.core.classifier import visible_commits
from semrel_py.core.commits import CommitRecord
from semrel_py.core.registry import TypeRegistry
from semrel_py.core.version import BumpType, Version

logger = logging.getLogger(__name__)


def calculate_bump(
    current: Version,
    commits: Iterable[CommitRecord],
    registry: TypeRegistry,
) -> BumpType:
    """Determine the bump type for ``commits`` on top of ``current``."""
    candidates = visible_commits(commits, registry)

    if any(c.breaking_change for c in candidates):
        if current.major == 0:
            logger.debug("Breaking change before 1.0.0, bumping minor")
            return BumpType.MINOR
        return BumpType.MAJOR

    severities = {registry.resolve(c.type_tag).severity for c in candidates}
    if Severity.FEATURE in severities:
        return BumpType.MINOR
    if any(s.rank > 0 for s in severities):
        return BumpType.PATCH
    return BumpType.NONE


def next_version(
    current: Version,
    commits: Iterable[CommitRecord],
    registry: TypeRegistry,
    *,
    prerelease: str | None = None,
) -> Version | None:
    """Compute the version that follows ``current``.

    Returns ``None`` when no commit qualifies for a release, so callers can
    skip the release step instead of re-tagging ``current``.

    With ``prerelease`` the result is a prerelease of the computed version.
    If ``current`` is a prerelease that already covers the bump, only its
    counter moves (``1.1.0-beta.0`` to ``1.1.0-beta.1``).
    """
    bump_type = calculate_bump(current, commits, registry)
    if bump_type == BumpType.NONE:
        logger.info("No qualifying changes since %s", current)
        return None

    if prerelease and current.covers(bump_type):
        target = current.next_prerelease(prerelease)
    elif prerelease:
        target = current.bump(bump_type).with_prerelease(prerelease)
    else:
        target = current.bump(bump_type)

    logger.info("Next version: %s -> %s (%s)", current, target, bump_type)
    return target
