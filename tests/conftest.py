"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from semrel_py.config.models import SemrelConfig
from semrel_py.core.commits import RawCommit
from semrel_py.core.registry import TypeRegistry

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

REPO_URL = "https://github.com/acme/widgets"


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo handlers installed by the console command."""
    package_logger = logging.getLogger("semrel_py")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def config() -> SemrelConfig:
    """Default taxonomy with GitHub link templates."""
    return SemrelConfig(
        commit_url_format=f"{REPO_URL}/commit/{{{{hash}}}}",
        compare_url_format=f"{REPO_URL}/compare/{{{{previousTag}}}}...{{{{currentTag}}}}",
        release_commit_message_format="chore(release): v{{currentTag}} [skip ci]",
    )


@pytest.fixture
def registry(config: SemrelConfig) -> TypeRegistry:
    return TypeRegistry.from_config(config.types)


@pytest.fixture
def feat_commit() -> RawCommit:
    return RawCommit(hash="feat1234567890", message="feat: add user authentication")


@pytest.fixture
def fix_commit() -> RawCommit:
    return RawCommit(hash="fix1234567890", message="fix(core): resolve memory leak")


@pytest.fixture
def breaking_commit() -> RawCommit:
    return RawCommit(
        hash="break123456789",
        message="feat(api)!: redesign endpoints\n\nBREAKING CHANGE: /v1 routes are removed",
    )


@pytest.fixture
def sample_commits(feat_commit: RawCommit, fix_commit: RawCommit) -> list[RawCommit]:
    """A realistic history: visible, hidden, breaking and malformed commits."""
    return [
        feat_commit,
        fix_commit,
        RawCommit(hash="docs123456789", message="docs: update README"),
        RawCommit(hash="chore12345678", message="chore: bump tooling"),
        RawCommit(hash="perf123456789", message="perf(db): batch inserts\n\nCloses #42"),
        RawCommit(hash="merge12345678", message="Merge branch 'main' into feature"),
    ]


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    """A project directory whose pyproject.toml carries a [tool.semrel-py] table."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.semrel-py]
tag_prefix = "release-"
commit_url_format = "https://example.com/commit/{{hash}}"

[[tool.semrel-py.types]]
type = "feat"
section = "Features"

[[tool.semrel-py.types]]
type = "fix"
section = "Bug Fixes"

[[tool.semrel-py.types]]
type = "chore"
hidden = true
""",
        encoding="utf-8",
    )
    return tmp_path
