"""Markdown changelog rendering.

Rendering is a pure function of its inputs: no clock, no randomness. The
same sections, templates and tags always produce byte-identical text, so a
release date only appears when the caller passes one.

Output shape::

    ## [1.3.0](https://host/compare/v1.2.3...v1.3.0) (2024-05-01)

    ### ⚠ BREAKING CHANGES

    * **api:** drop the v1 endpoints

    ### ✨ Features

    * **api:** add X ([abc1234](https://host/commit/abc1234...)), closes [#12](...)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from semrel_py.core.templates import substitute
from semrel_py.exceptions import TemplateSubstitutionError

if TYPE_CHECKING:
    from datetime import date

    from semrel_py.config.models import UrlTemplates
    from semrel_py.core.commits import CommitRecord
    from semrel_py.core.registry import TypeRegistry

logger = logging.getLogger(__name__)

DEFAULT_HEADER = "# Changelog\n"
BREAKING_SECTION = "⚠ BREAKING CHANGES"


@dataclass
class ChangelogSection:
    """One labeled block of rendered entry lines."""

    label: str
    entries: list[str] = field(default_factory=list)

    def render(self) -> list[str]:
        return [f"### {self.label}", "", *self.entries, ""]


class ChangelogRenderer:
    """Render classified commits into a changelog fragment.

    Args:
        registry: Decides section order and visibility
        url_templates: Link templates; any of them may be absent
        header: Document header, ``# Changelog`` when not configured
    """

    def __init__(
        self,
        registry: TypeRegistry,
        url_templates: UrlTemplates,
        header: str | None = None,
    ) -> None:
        self.registry = registry
        self.url_templates = url_templates
        self.header = header

    def build_sections(
        self,
        sections: Mapping[str, Sequence[CommitRecord]],
    ) -> list[ChangelogSection]:
        """Turn classified commits into rendered sections.

        Labels follow registry declaration order. Labels the registry does
        not list as visible, and empty buckets, are skipped.
        """
        labels = [
            label for label in self.registry.ordered_visible_sections() if sections.get(label)
        ]
        built = []

        breaking = [c for label in labels for c in sections[label] if c.breaking_change]
        if breaking:
            built.append(
                ChangelogSection(
                    label=BREAKING_SECTION,
                    entries=[self._breaking_line(c) for c in breaking],
                )
            )

        for label in labels:
            entries = [self._entry_line(c) for c in sections[label]]
            built.append(ChangelogSection(label=label, entries=entries))
        return built

    def render(
        self,
        sections: Mapping[str, Sequence[CommitRecord]],
        previous_tag: str | None,
        current_tag: str,
        *,
        version: str | None = None,
        release_date: date | None = None,
    ) -> str:
        """Render the changelog fragment for one release.

        Args:
            sections: Output of :func:`~semrel_py.core.classifier.classify`
            previous_tag: Tag of the previous release, ``None`` for the first one
            current_tag: Tag of the release being rendered
            version: Heading text, defaults to ``current_tag``
            release_date: Date appended to the heading, omitted when ``None``

        Returns:
            Markdown text ending with a newline
        """
        lines = [self._heading(previous_tag, current_tag, version, release_date), ""]
        for section in self.build_sections(sections):
            lines.extend(section.render())
        return "\n".join(lines).rstrip("\n") + "\n"

    def render_document(self, fragment: str) -> str:
        """Prepend the configured header (or the default title) to ``fragment``."""
        header = self.header if self.header is not None else DEFAULT_HEADER
        if not header:
            return fragment
        separator = "\n" if header.endswith("\n") else "\n\n"
        return f"{header}{separator}{fragment}"

    # -------------------------------------------------------------------------
    # Pieces
    # -------------------------------------------------------------------------

    def _heading(
        self,
        previous_tag: str | None,
        current_tag: str,
        version: str | None,
        release_date: date | None,
    ) -> str:
        title = version or current_tag
        compare_url = self._link(
            self.url_templates.compare_url_format,
            previousTag=previous_tag,
            currentTag=current_tag,
        )
        heading = f"## [{title}]({compare_url})" if compare_url else f"## {title}"
        if release_date is not None:
            heading += f" ({release_date.isoformat()})"
        return heading

    def _entry_line(self, commit: CommitRecord) -> str:
        line = f"* {self._scope_prefix(commit)}{commit.subject}"

        commit_url = self._link(self.url_templates.commit_url_format, hash=commit.hash)
        if commit_url:
            line += f" ([{commit.short_hash}]({commit_url}))"

        if commit.footer_references:
            line += ", closes " + " ".join(self._reference(r) for r in commit.footer_references)

        user_url = self._link(self.url_templates.user_url_format, user=commit.author)
        if user_url:
            line += f" by [@{commit.author}]({user_url})"
        return line

    def _breaking_line(self, commit: CommitRecord) -> str:
        note = "\n  ".join(commit.breaking_notes) if commit.breaking_notes else commit.subject
        return f"* {self._scope_prefix(commit)}{note}"

    def _reference(self, reference: str) -> str:
        repo, _, number = reference.rpartition("#")
        if repo:
            return reference
        issue_url = self._link(self.url_templates.issue_url_format, id=number)
        return f"[{reference}]({issue_url})" if issue_url else reference

    @staticmethod
    def _scope_prefix(commit: CommitRecord) -> str:
        return f"**{commit.scope}:** " if commit.scope else ""

    @staticmethod
    def _link(template: str | None, **values: str | None) -> str | None:
        """Substitute a link template, or return ``None`` when it cannot be built."""
        if not template:
            return None
        try:
            return substitute(template, values)
        except TemplateSubstitutionError as e:
            logger.debug("Omitting link: %s", e)
            return None


def render_changelog(
    sections: Mapping[str, Sequence[CommitRecord]],
    url_templates: UrlTemplates,
    previous_tag: str | None,
    current_tag: str,
    *,
    registry: TypeRegistry,
    header: str | None = None,
    version: str | None = None,
    release_date: date | None = None,
) -> str:
    """Render a changelog fragment. See :meth:`ChangelogRenderer.render`."""
    renderer = ChangelogRenderer(registry, url_templates, header=header)
    return renderer.render(
        sections,
        previous_tag,
        current_tag,
        version=version,
        release_date=release_date,
    )


def prepend_to_changelog(existing: str, fragment: str, header: str | None = None) -> str:
    """Insert ``fragment`` above the previous releases in ``existing``.

    When ``existing`` starts with the header, the fragment goes right below
    it. Otherwise the header and fragment are placed above the old text.
    """
    header = header if header is not None else DEFAULT_HEADER
    separator = "\n" if header.endswith("\n") else "\n\n"

    rest = existing
    if header and existing.startswith(header):
        rest = existing[len(header) :]
    rest = rest.lstrip("\n")

    document = f"{header}{separator}{fragment}" if header else fragment
    if not rest:
        return document
    return f"{document}\n{rest}"
