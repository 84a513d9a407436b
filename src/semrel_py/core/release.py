"""Release orchestration.

Ties the pieces together for one release computation::

    raw commits -> parse -> classify -> next version -> render -> compose

Nothing here touches git or the filesystem. The returned
:class:`ReleasePlan` holds everything a version-control sink needs to create
the release commit, the tag and the changelog.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from semrel_py.core.bump import calculate_bump, next_version
from semrel_py.core.changelog import ChangelogRenderer, ChangelogSection
from semrel_py.core.classifier import classify
from semrel_py.core.commits import (
    CommitRecord,
    RawCommit,
    filter_skip_release_commits,
    parse_commits,
)
from semrel_py.core.registry import TypeRegistry
from semrel_py.core.templates import substitute
from semrel_py.core.version import BumpType, Version
from semrel_py.exceptions import EmptyCommitHistoryError

if TYPE_CHECKING:
    from datetime import date

    from semrel_py.config.models import SemrelConfig, UrlTemplates
    from semrel_py.core.diagnostics import Diagnostic

logger = logging.getLogger(__name__)


class ReleaseStatus(StrEnum):
    RELEASE = "release"
    NO_QUALIFYING_CHANGES = "no_qualifying_changes"


@dataclass
class ReleaseContext:
    """Inputs of a single release computation."""

    current_version: Version
    commits: list[CommitRecord]
    registry: TypeRegistry
    url_templates: UrlTemplates


@dataclass(frozen=True)
class ReleasePlan:
    """Outcome of :func:`prepare_release`."""

    status: ReleaseStatus
    current_version: Version
    bump: BumpType
    next_version: Version | None = None
    commits: list[CommitRecord] = field(default_factory=list)
    sections: list[ChangelogSection] = field(default_factory=list)
    changelog: str = ""
    document: str = ""
    release_message: str | None = None
    current_tag: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def should_release(self) -> bool:
        return self.status == ReleaseStatus.RELEASE


def compose_release_message(version: Version | str, template: str) -> str:
    """Fill ``{{currentTag}}`` in the release commit message template.

    Raises:
        TemplateSubstitutionError: If the template references another placeholder
    """
    return substitute(template, {"currentTag": str(version)})


def prepare_release(
    raw_commits: Iterable[RawCommit],
    current_version: Version | str,
    config: SemrelConfig,
    *,
    previous_tag: str | None = None,
    prerelease: str | None = None,
    release_date: date | None = None,
) -> ReleasePlan:
    """Compute the next release from a commit history.

    Args:
        raw_commits: Commits since the previous release, oldest first
        current_version: Version of the previous release
        config: Loaded configuration
        previous_tag: Tag of the previous release, ``None`` on a first release
        prerelease: Prerelease identifier such as ``"rc"``
        release_date: Date shown in the changelog heading

    Returns:
        The release plan. Its status is ``NO_QUALIFYING_CHANGES`` when no
        commit warrants a release.

    Raises:
        EmptyCommitHistoryError: If ``raw_commits`` is empty
        VersionParseError: If ``current_version`` is not a semantic version
        TemplateSubstitutionError: If the release message template is unusable
    """
    raw_commits = list(raw_commits)
    if not raw_commits:
        raise EmptyCommitHistoryError("No commits to release")

    if isinstance(current_version, str):
        current_version = Version.parse(current_version)

    registry = TypeRegistry.from_config(config.types)
    kept = filter_skip_release_commits(raw_commits, config.skip_release_patterns)
    parsed = parse_commits(kept)
    diagnostics = list(parsed.diagnostics)

    context = ReleaseContext(
        current_version=current_version,
        commits=parsed.commits,
        registry=registry,
        url_templates=config.url_templates,
    )
    grouped = classify(context.commits, context.registry, diagnostics)
    bump = calculate_bump(context.current_version, context.commits, context.registry)
    new_version = next_version(
        context.current_version,
        context.commits,
        context.registry,
        prerelease=prerelease,
    )

    if new_version is None:
        return ReleasePlan(
            status=ReleaseStatus.NO_QUALIFYING_CHANGES,
            current_version=current_version,
            bump=bump,
            commits=context.commits,
            diagnostics=diagnostics,
        )

    current_tag = f"{config.tag_prefix}{new_version}"
    renderer = ChangelogRenderer(context.registry, context.url_templates, header=config.header)
    fragment = renderer.render(
        grouped,
        previous_tag,
        current_tag,
        version=str(new_version),
        release_date=release_date,
    )

    logger.info("Prepared release %s with %d commits", current_tag, len(context.commits))
    return ReleasePlan(
        status=ReleaseStatus.RELEASE,
        current_version=current_version,
        bump=bump,
        next_version=new_version,
        commits=context.commits,
        sections=renderer.build_sections(grouped),
        changelog=fragment,
        document=renderer.render_document(fragment),
        release_message=compose_release_message(new_version, config.release_commit_message_format),
        current_tag=current_tag,
        diagnostics=diagnostics,
    )
