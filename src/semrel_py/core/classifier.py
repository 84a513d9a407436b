"""Group parsed commits into changelog sections."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from semrel_py.core.commits import CommitRecord
from semrel_py.core.diagnostics import Diagnostic, DiagnosticKind
from semrel_py.core.registry import TypeRegistry

logger = logging.getLogger(__name__)


def classify(
    commits: Iterable[CommitRecord],
    registry: TypeRegistry,
    diagnostics: list[Diagnostic] | None = None,
) -> dict[str, list[CommitRecord]]:
    """Bucket visible commits by section label.

    Commits keep their arrival order inside a bucket. Buckets are ordered by
    :meth:`TypeRegistry.ordered_visible_sections` and empty ones are left
    out. Hidden and unknown types are dropped; unknown types are reported to
    ``diagnostics`` when a list is given.
    """
    buckets: dict[str, list[CommitRecord]] = {}
    for commit in commits:
        if not registry.is_known(commit.type_tag):
            logger.debug("Unknown commit type %r in %s", commit.type_tag, commit.short_hash)
            if diagnostics is not None:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.UNKNOWN_TYPE,
                        hash=commit.hash,
                        message=f"Unknown commit type {commit.type_tag!r}",
                    )
                )

        descriptor = registry.resolve(commit.type_tag)
        if not descriptor.is_visible:
            continue
        buckets.setdefault(descriptor.section, []).append(commit)  # type: ignore[arg-type]

    return {
        label: buckets[label] for label in registry.ordered_visible_sections() if label in buckets
    }


def visible_commits(
    commits: Iterable[CommitRecord],
    registry: TypeRegistry,
) -> list[CommitRecord]:
    """Return the commits whose type is visible, in original order."""
    return [c for c in commits if registry.resolve(c.type_tag).is_visible]
