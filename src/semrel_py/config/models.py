"""Configuration models for semrel-py.

The models mirror the ``.versionrc`` schema. Keys are accepted in camelCase
(``commitUrlFormat``) as written in ``.versionrc`` files, or in snake_case
(``commit_url_format``) as written in ``pyproject.toml``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Severity(StrEnum):
    """How much a commit type moves the version.

    ``none`` never triggers a release, ``fix`` and ``performance`` trigger a
    patch bump and ``feature`` a minor bump. Breaking changes are tracked on
    the commit itself and outrank every severity.
    """

    NONE = "none"
    FIX = "fix"
    PERFORMANCE = "performance"
    FEATURE = "feature"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.NONE: 0,
    Severity.FIX: 1,
    Severity.PERFORMANCE: 1,
    Severity.FEATURE: 2,
}


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class TypeConfig(_ConfigModel):
    """One entry of the ``types`` list."""

    type: str = Field(min_length=1)
    section: str | None = None
    hidden: bool = False
    severity: Severity | None = None

    @field_validator("type")
    @classmethod
    def _normalize_type(cls, value: str) -> str:
        return value.strip().lower()


def default_types() -> list[TypeConfig]:
    return [
        TypeConfig(type="feat", section="✨ Features"),
        TypeConfig(type="fix", section="🐛 Bug Fixes"),
        TypeConfig(type="perf", section="⚡ Performance"),
        TypeConfig(type="deps", section="📦 Dependencies"),
        TypeConfig(type="revert", section="⏪ Reverts"),
        TypeConfig(type="test", section="✅ Tests"),
        TypeConfig(type="ci", section="🤖 Continuous Integration"),
        TypeConfig(type="build", section="🏗️ Build System"),
        TypeConfig(type="style", hidden=True),
        TypeConfig(type="refactor", hidden=True),
        TypeConfig(type="chore", hidden=True),
        TypeConfig(type="docs", hidden=True),
    ]


def default_skip_release_patterns() -> list[str]:
    return ["[skip release]", "[release skip]", "[no release]"]


class UrlTemplates(_ConfigModel):
    """Link templates used while rendering the changelog.

    Placeholders: ``{{hash}}`` for commits, ``{{previousTag}}`` and
    ``{{currentTag}}`` for comparisons, ``{{user}}`` for author mentions and
    ``{{id}}`` for issue references.
    """

    commit_url_format: str | None = None
    compare_url_format: str | None = None
    user_url_format: str | None = None
    issue_url_format: str | None = None


class SemrelConfig(_ConfigModel):
    """Root configuration for semrel-py.

    Unknown keys are ignored so an existing ``.versionrc`` carrying options
    for other tools still loads.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    types: list[TypeConfig] = Field(default_factory=default_types)
    commit_url_format: str | None = None
    compare_url_format: str | None = None
    user_url_format: str | None = None
    issue_url_format: str | None = None
    release_commit_message_format: str = "chore(release): {{currentTag}} [skip ci]"
    header: str | None = None
    tag_prefix: str = "v"
    skip_release_patterns: list[str] = Field(default_factory=default_skip_release_patterns)

    @field_validator("types")
    @classmethod
    def _unique_types(cls, value: list[TypeConfig]) -> list[TypeConfig]:
        seen: set[str] = set()
        for entry in value:
            if entry.type in seen:
                raise ValueError(f"duplicate commit type {entry.type!r}")
            seen.add(entry.type)
        return value

    @property
    def url_templates(self) -> UrlTemplates:
        return UrlTemplates(
            commit_url_format=self.commit_url_format,
            compare_url_format=self.compare_url_format,
            user_url_format=self.user_url_format,
            issue_url_format=self.issue_url_format,
        )
